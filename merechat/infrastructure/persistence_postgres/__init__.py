"""Merechat PostgreSQL Persistence Layer."""

from merechat.infrastructure.persistence_postgres.registry import (
    mapper_registry,
    metadata,
)
from merechat.infrastructure.persistence_postgres.session import (
    create_engine,
    create_session_factory,
)

__all__ = [
    "mapper_registry",
    "metadata",
    "create_engine",
    "create_session_factory",
]
