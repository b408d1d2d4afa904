"""Base repository for the session-bound CRUD seam."""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic repository bound to one model and one session.

    Attributes:
        model: SQLAlchemy model class
        session: Database session
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    @property
    def dialect_name(self) -> str:
        """Name of the bound database dialect (postgresql, sqlite, ...)."""
        bind = self.session.bind
        if bind is None:
            raise RuntimeError("Repository session is not bound to an engine")
        return str(bind.dialect.name)

    async def list_all(self) -> list[ModelType]:
        """Retrieve every record in primary key order.

        Returns:
            List of model instances
        """
        stmt = select(self.model).order_by(*self.model.__mapper__.primary_key)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
