"""Chainable query manager exposed as `Model.objects` on table models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlmodel import SQLModel, col, select

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


@dataclass(frozen=True)
class ModelQuery(Generic[ModelT]):
    """Immutable query builder; each call returns a narrowed copy."""

    model: type[ModelT]
    clauses: tuple[Any, ...] = ()
    ordering: tuple[Any, ...] = ()
    limit_value: int | None = None
    offset_value: int | None = None

    def _copy(self, **changes: Any) -> ModelQuery[ModelT]:
        values = {
            "model": self.model,
            "clauses": self.clauses,
            "ordering": self.ordering,
            "limit_value": self.limit_value,
            "offset_value": self.offset_value,
        }
        values.update(changes)
        return ModelQuery(**values)

    def filter(self, *clauses: Any) -> ModelQuery[ModelT]:
        return self._copy(clauses=(*self.clauses, *clauses))

    def filter_by(self, **kwargs: Any) -> ModelQuery[ModelT]:
        clauses = tuple(
            col(getattr(self.model, name)) == value for name, value in kwargs.items()
        )
        return self.filter(*clauses)

    def order_by(self, *ordering: Any) -> ModelQuery[ModelT]:
        return self._copy(ordering=(*self.ordering, *ordering))

    def limit(self, value: int) -> ModelQuery[ModelT]:
        return self._copy(limit_value=value)

    def offset(self, value: int) -> ModelQuery[ModelT]:
        return self._copy(offset_value=value)

    def statement(self) -> Any:
        stmt = select(self.model)
        if self.clauses:
            stmt = stmt.where(*self.clauses)
        if self.ordering:
            stmt = stmt.order_by(*self.ordering)
        if self.offset_value is not None:
            stmt = stmt.offset(self.offset_value)
        if self.limit_value is not None:
            stmt = stmt.limit(self.limit_value)
        return stmt

    async def all(self, session: AsyncSession) -> list[ModelT]:
        return list(await session.exec(self.statement()))

    async def first(self, session: AsyncSession) -> ModelT | None:
        return (await session.exec(self.statement())).first()

    async def exists(self, session: AsyncSession) -> bool:
        return await self.limit(1).first(session) is not None


class ModelManager(Generic[ModelT]):
    """Entry point for building queries against one model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def all(self) -> ModelQuery[ModelT]:
        return ModelQuery(self.model)

    def by_id(self, obj_id: UUID) -> ModelQuery[ModelT]:
        return self.filter_by(id=obj_id)

    def filter(self, *clauses: Any) -> ModelQuery[ModelT]:
        return self.all().filter(*clauses)

    def filter_by(self, **kwargs: Any) -> ModelQuery[ModelT]:
        return self.all().filter_by(**kwargs)
