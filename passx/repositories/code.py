from typing import Any

from sqlalchemy.exc import IntegrityError

from passx.models.code import Code, CodeType
from passx.repositories.base import Repository


class CodeRepository(Repository[Code]):
    model = Code

    async def upsert(self, key: str, type: CodeType, values: dict[str, Any]) -> None:
        """Overwrite the (key, type) row with ``values``, inserting it if missing."""
        if await self.update({"key": key, "type": type}, values):
            return

        self.session.add(Code(key=key, type=type, **values))
        try:
            await self.session.commit()
        except IntegrityError:
            # Inserted by a concurrent request in the meantime
            await self.session.rollback()
            await self.update({"key": key, "type": type}, values)

    async def increment_try_count(self, key: str, type: CodeType, max_try_count: int) -> int:
        """Count one wrong guess unless the limit is already reached. Returns rows affected."""
        return await self.update(
            {"key": key, "type": type, "is_verified": False},
            {"try_count": Code.try_count + 1},
            Code.try_count < max_try_count,
        )

    async def mark_verified(self, key: str, type: CodeType, max_try_count: int) -> int:
        """Consume an unused code still under the try limit. Returns rows affected."""
        return await self.update(
            {"key": key, "type": type, "is_verified": False},
            {"is_verified": True},
            Code.try_count < max_try_count,
        )
