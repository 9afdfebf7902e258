"""Repository ports for departments and roles."""

from abc import abstractmethod
from typing import Protocol

from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role
from rolegate.domain.shared.port import Port


class DepartmentRepository(Port, Protocol):
    @abstractmethod
    async def list_all(self) -> list[Department]:
        """All departments ordered by name."""
        ...

    @abstractmethod
    async def get(self, department_id: int) -> Department | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Department | None: ...

    @abstractmethod
    async def add(self, name: str) -> Department:
        """Insert a department. Raises ConflictError on a duplicate name."""
        ...

    @abstractmethod
    async def rename(self, department_id: int, name: str) -> Department | None:
        """Rename; returns None if the department does not exist."""
        ...

    @abstractmethod
    async def delete(self, department_id: int) -> bool:
        """Delete. Returns True if deleted, False if not found."""
        ...


class RoleRepository(Port, Protocol):
    @abstractmethod
    async def list_all(self) -> list[Role]:
        """All roles with their department, ordered by name."""
        ...

    @abstractmethod
    async def get(self, role_id: int) -> Role | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Role | None: ...

    @abstractmethod
    async def add(self, name: str, level: int, department_id: int) -> Role:
        """Insert a role. Raises ConflictError on a duplicate name."""
        ...

    @abstractmethod
    async def update(self, role: Role) -> None:
        """Write name, level and department of an existing role."""
        ...

    @abstractmethod
    async def delete(self, role_id: int) -> bool:
        """Delete. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def count_by_department(self, department_id: int) -> int:
        """Number of roles belonging to a department."""
        ...
