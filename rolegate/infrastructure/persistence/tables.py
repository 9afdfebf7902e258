"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# DEPARTMENTS TABLE
# ============================================================================
departments_table = Table(
    "departments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
)


# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
    Column("level", Integer, nullable=False),  # RoleLevel value, gaps allowed
    Column("department_id", Integer, ForeignKey("departments.id"), nullable=False),
)

Index("idx_roles_department_id", roles_table.c.department_id)


# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, nullable=False, unique=True),  # Identity provider subject
    Column("name", String(255), nullable=True),
    Column("department_id", Integer, ForeignKey("departments.id"), nullable=True),
    Column("role_id", Integer, ForeignKey("roles.id"), nullable=True),
    Column("approved", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("idx_profiles_department_id", profiles_table.c.department_id)
Index("idx_profiles_role_id", profiles_table.c.role_id)
