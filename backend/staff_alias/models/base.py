"""Base model class that exposes the `objects` query manager."""

from __future__ import annotations

from typing import Any, ClassVar

from sqlmodel import SQLModel

from staff_alias.db.query_manager import ModelManager


class ManagerDescriptor:
    """Class-level descriptor building a manager bound to the owning model."""

    def __get__(self, instance: object, owner: type[Any]) -> ModelManager[Any]:
        return ModelManager(owner)


class QueryModel(SQLModel, table=False):
    """SQLModel base with a chainable `objects` manager."""

    objects: ClassVar[ManagerDescriptor] = ManagerDescriptor()
