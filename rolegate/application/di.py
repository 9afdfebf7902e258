from dishka import AsyncContainer, from_context, make_async_container

from rolegate.config import Config
from rolegate.domain.auth.util.di import AuthProvider
from rolegate.domain.organization.util.di import OrganizationProvider
from rolegate.domain.profile.util.di import ProfileProvider
from rolegate.infrastructure.persistence import PersistenceProvider
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        AuthProvider(),
        OrganizationProvider(),
        ProfileProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
