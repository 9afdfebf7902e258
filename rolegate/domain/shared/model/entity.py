from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for mutable domain entities identified by ``id``."""

    model_config = ConfigDict(validate_assignment=True)
