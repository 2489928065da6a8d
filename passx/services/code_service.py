"""One-time codes keyed by (key, type).

A code is valid until it expires, is verified once, or collects
``CODE_MAX_TRY_COUNT`` wrong guesses.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from passx.core.config import settings
from passx.core.exceptions import (
    CodeExpiredException,
    CodeNotFoundException,
    CodeTryCountExceededException,
    InvalidCodeException,
)
from passx.core.logging_config import get_logger
from passx.models.code import CodeType
from passx.repositories.code import CodeRepository

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CodeService:
    def __init__(
        self,
        code_repository: CodeRepository,
        expire_minutes: Optional[int] = None,
        max_try_count: Optional[int] = None,
    ):
        self.code_repository = code_repository
        self.expire_minutes = expire_minutes if expire_minutes is not None else settings.CODE_EXPIRE_MINUTES
        self.max_try_count = max_try_count if max_try_count is not None else settings.CODE_MAX_TRY_COUNT

    @staticmethod
    def create_code() -> str:
        """Generate a 6-digit numeric code."""
        return str(secrets.randbelow(900000) + 100000)

    async def set_code(self, key: str, type: CodeType) -> str:
        """Issue a fresh code for ``key``, replacing any previous one of the same type."""
        code = self.create_code()
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)

        await self.code_repository.upsert(
            key=key,
            type=type,
            values={"code": code, "is_verified": False, "try_count": 0, "expires_at": expires_at},
        )
        return code

    async def verify_code(self, key: str, type: CodeType, code: str) -> None:
        entity = await self.code_repository.find_one_by(key=key, type=type)
        if entity is None or entity.is_verified:
            raise CodeNotFoundException()

        if entity.expires_at is not None and _as_utc(entity.expires_at) < datetime.now(timezone.utc):
            raise CodeExpiredException()

        try_count = entity.try_count or 0
        if try_count >= self.max_try_count:
            raise CodeTryCountExceededException()

        # Both writes re-check the row state, so concurrent guesses can neither
        # exceed the try limit nor consume the same code twice.
        if not secrets.compare_digest(entity.code.encode(), code.encode()):
            counted = await self.code_repository.increment_try_count(
                key=key, type=type, max_try_count=self.max_try_count
            )
            if not counted:
                raise CodeTryCountExceededException()
            logger.info(f"Invalid {type.value} code attempt ({try_count + 1}/{self.max_try_count})")
            raise InvalidCodeException()

        verified = await self.code_repository.mark_verified(key=key, type=type, max_try_count=self.max_try_count)
        if not verified:
            raise CodeNotFoundException()

    async def check_verified(self, key: str, type: CodeType) -> bool:
        entity = await self.code_repository.find_one_by(key=key, type=type)
        return bool(entity and entity.is_verified)
