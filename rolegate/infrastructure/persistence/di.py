from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rolegate.config import Config
from rolegate.domain.organization.port.repository import DepartmentRepository, RoleRepository
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from rolegate.infrastructure.persistence.repository.organization import (
    SQLAlchemyDepartmentRepository,
    SQLAlchemyRoleRepository,
)
from rolegate.infrastructure.persistence.repository.profile import (
    SQLAlchemyProfileRepository,
)
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    department_repo = provide(
        SQLAlchemyDepartmentRepository, scope=Scope.UOW, provides=DepartmentRepository
    )
    role_repo = provide(SQLAlchemyRoleRepository, scope=Scope.UOW, provides=RoleRepository)
    profile_repo = provide(
        SQLAlchemyProfileRepository, scope=Scope.UOW, provides=ProfileRepository
    )
