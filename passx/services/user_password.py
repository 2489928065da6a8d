"""Password lifecycle for existing users.

Covers the reset-password email, resetting with a one-time code, the
authenticated change, and hashing.
"""

from passx.core.exceptions import InvalidPasswordException, UserNotFoundException
from passx.core.logging_config import get_logger
from passx.core.security import get_password_hash, verify_password
from passx.models.code import CodeType
from passx.models.user import User
from passx.repositories.user import UserRepository
from passx.schemas.password import ChangePasswordRequest, ResetPasswordRequest
from passx.services.code_service import CodeService
from passx.services.mailing import ResetPasswordMailingService
from passx.utils.helpers import mask_email

logger = get_logger(__name__)


class UserPasswordService:
    def __init__(
        self,
        user_repository: UserRepository,
        code_service: CodeService,
        reset_password_mailing_service: ResetPasswordMailingService,
    ):
        self.user_repository = user_repository
        self.code_service = code_service
        self.reset_password_mailing_service = reset_password_mailing_service

    async def send_reset_password_mail(self, email: str) -> None:
        """
        Issue a reset-password code for ``email`` and mail it.

        Raises:
            UserNotFoundException: no user has this email; nothing is sent.
        """
        user = await self.user_repository.find_one_by(email=email)
        if not user:
            logger.info(f"Reset password requested for unknown email {mask_email(email)}")
            raise UserNotFoundException()

        code = await self.code_service.set_code(key=email, type=CodeType.RESET_PASSWORD)
        await self.reset_password_mailing_service.send(email=email, code=code)
        logger.info(f"Reset password mail issued for user {user.id}")

    async def reset_password(self, dto: ResetPasswordRequest) -> None:
        """
        Replace the password of the user owning ``dto.email`` once ``dto.code`` checks out.

        Raises:
            UserNotFoundException: no user has this email.
            CodeNotFoundException, CodeExpiredException, InvalidCodeException,
            CodeTryCountExceededException: the code was rejected.
        """
        user = await self.user_repository.find_one_by(email=dto.email)
        if not user:
            raise UserNotFoundException()

        await self.code_service.verify_code(
            key=dto.email,
            type=CodeType.RESET_PASSWORD,
            code=dto.code,
        )
        await self._update_password(user.id, dto.password)
        logger.info(f"Password reset for user {user.id}")

    async def change_password(self, dto: ChangePasswordRequest) -> None:
        """
        Replace the password of ``dto.user_id`` after checking the current one.

        Raises:
            UserNotFoundException: the user does not exist.
            InvalidPasswordException: ``dto.password`` does not match the stored hash.
        """
        user: User = await self.user_repository.find_one_by(id=dto.user_id)
        if not user:
            raise UserNotFoundException()

        if not verify_password(dto.password, user.hashed_password):
            logger.info(f"Password change rejected for user {dto.user_id}: current password mismatch")
            raise InvalidPasswordException()

        await self._update_password(dto.user_id, dto.new_password)
        logger.info(f"Password changed for user {dto.user_id}")

    async def create_hash_password(self, password: str) -> str:
        return get_password_hash(password)

    async def _update_password(self, user_id: int, password: str) -> None:
        await self.user_repository.update(
            {"id": user_id},
            {"id": user_id, "hashed_password": await self.create_hash_password(password)},
        )
