"""Async repository over a single ORM model.

Repositories share the request's ``AsyncSession``; each write method commits
before returning so the change is durable when the caller continues.
"""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from passx.core.logging_config import get_logger
from passx.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = get_logger(__name__)


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_one_by(self, **criteria: Any) -> Optional[ModelT]:
        """
        Fetch the row matching every ``column=value`` pair.

        Returns:
            The entity, or None when nothing matches.
        """
        result = await self.session.execute(select(self.model).filter_by(**criteria))
        return result.scalar_one_or_none()

    async def update(self, criteria: dict[str, Any], values: dict[str, Any], *conditions: Any) -> int:
        """
        Apply ``values`` to every row matching ``criteria`` and any extra ``conditions``.

        The match and the write happen in one UPDATE statement, so conditions
        hold against concurrent writers.

        Returns:
            Number of rows affected.
        """
        result = await self.session.execute(
            update(self.model).filter_by(**criteria).where(*conditions).values(**values)
        )
        await self.session.commit()
        logger.debug(f"Updated {result.rowcount} {self.model.__tablename__} row(s) matching {list(criteria)}")
        return result.rowcount

    async def save(self, entity: ModelT) -> ModelT:
        """Insert or update ``entity`` and return it refreshed from the database."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity
