from dishka import Provider as DishkaProvider


class Provider(DishkaProvider):
    """Base for all RoleGate DI providers."""
