"""
Service dependencies.

Wires repositories and services per request on top of the request's
database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from passx.core.email_utils import email_manager
from passx.db.database import get_async_session
from passx.repositories.code import CodeRepository
from passx.repositories.user import UserRepository
from passx.services.code_service import CodeService
from passx.services.mailing import ResetPasswordMailingService
from passx.services.user_password import UserPasswordService


def get_user_repository(db: AsyncSession = Depends(get_async_session)) -> UserRepository:
    return UserRepository(db)


def get_code_repository(db: AsyncSession = Depends(get_async_session)) -> CodeRepository:
    return CodeRepository(db)


def get_code_service(code_repository: CodeRepository = Depends(get_code_repository)) -> CodeService:
    return CodeService(code_repository)


def get_reset_password_mailing_service() -> ResetPasswordMailingService:
    return ResetPasswordMailingService(email_manager)


def get_user_password_service(
    user_repository: UserRepository = Depends(get_user_repository),
    code_service: CodeService = Depends(get_code_service),
    mailing_service: ResetPasswordMailingService = Depends(get_reset_password_mailing_service),
) -> UserPasswordService:
    return UserPasswordService(user_repository, code_service, mailing_service)


UserPasswordServiceDep = Annotated[UserPasswordService, Depends(get_user_password_service)]
