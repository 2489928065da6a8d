"""Unit tests for UserPasswordService with mocked repositories."""

from datetime import datetime, timedelta, timezone
from unittest.mock import ANY, AsyncMock

import bcrypt
import pytest

from passx.core.exceptions import (
    CodeNotFoundException,
    InvalidCodeException,
    InvalidPasswordException,
    UserNotFoundException,
)
from passx.core.security import verify_password
from passx.models import Code, CodeType, User
from passx.repositories.code import CodeRepository
from passx.repositories.user import UserRepository
from passx.schemas.password import ChangePasswordRequest, ResetPasswordRequest
from passx.services.code_service import CodeService
from passx.services.mailing import ResetPasswordMailingService
from passx.services.user_password import UserPasswordService


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def code_repo() -> AsyncMock:
    return AsyncMock(spec=CodeRepository)


@pytest.fixture
def mailing_service() -> AsyncMock:
    return AsyncMock(spec=ResetPasswordMailingService)


@pytest.fixture
def service(user_repo, code_repo, mailing_service) -> UserPasswordService:
    return UserPasswordService(user_repo, CodeService(code_repo), mailing_service)


class TestSendResetPasswordMail:
    @pytest.mark.asyncio
    async def test_sends_mail_for_existing_user(self, service, user_repo, code_repo, mailing_service):
        email = "jane@example.com"
        user_repo.find_one_by.return_value = User(id=7, email=email)

        await service.send_reset_password_mail(email)

        user_repo.find_one_by.assert_awaited_once_with(email=email)
        code_repo.upsert.assert_awaited_once()
        issued = code_repo.upsert.await_args.kwargs
        assert issued["key"] == email
        assert issued["type"] == CodeType.RESET_PASSWORD
        mailing_service.send.assert_awaited_once_with(email=email, code=issued["values"]["code"])

    @pytest.mark.asyncio
    async def test_unknown_email_sends_nothing(self, service, user_repo, code_repo, mailing_service):
        email = "ghost@example.com"
        user_repo.find_one_by.return_value = None

        with pytest.raises(UserNotFoundException):
            await service.send_reset_password_mail(email)

        user_repo.find_one_by.assert_awaited_once_with(email=email)
        code_repo.upsert.assert_not_awaited()
        mailing_service.send.assert_not_awaited()


class TestResetPassword:
    @pytest.mark.asyncio
    async def test_reset_with_matching_code_updates_hash_once(self, service, user_repo, code_repo):
        dto = ResetPasswordRequest(email="jane@example.com", code="123456", password="NewPassword1!")
        user_repo.find_one_by.return_value = User(id=7, email=dto.email)
        code_repo.find_one_by.return_value = Code(
            key=dto.email,
            type=CodeType.RESET_PASSWORD,
            code=dto.code,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=5),
        )
        code_repo.mark_verified.return_value = 1

        await service.reset_password(dto)

        user_repo.find_one_by.assert_awaited_once_with(email=dto.email)
        code_repo.find_one_by.assert_awaited_once_with(key=dto.email, type=CodeType.RESET_PASSWORD)
        user_repo.update.assert_awaited_once_with({"id": 7}, {"id": 7, "hashed_password": ANY})
        new_hash = user_repo.update.await_args.args[1]["hashed_password"]
        assert verify_password(dto.password, new_hash)

    @pytest.mark.asyncio
    async def test_reset_with_unknown_email(self, service, user_repo, code_repo):
        dto = ResetPasswordRequest(email="ghost@example.com", code="123456", password="NewPassword1!")
        user_repo.find_one_by.return_value = None

        with pytest.raises(UserNotFoundException):
            await service.reset_password(dto)

        user_repo.find_one_by.assert_awaited_once_with(email=dto.email)
        code_repo.find_one_by.assert_not_awaited()
        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset_with_wrong_code_keeps_hash(self, service, user_repo, code_repo):
        dto = ResetPasswordRequest(email="jane@example.com", code="000000", password="NewPassword1!")
        user_repo.find_one_by.return_value = User(id=7, email=dto.email)
        code_repo.find_one_by.return_value = Code(
            key=dto.email,
            type=CodeType.RESET_PASSWORD,
            code="123456",
            try_count=0,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=5),
        )
        code_repo.increment_try_count.return_value = 1

        with pytest.raises(InvalidCodeException):
            await service.reset_password(dto)

        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset_without_issued_code(self, service, user_repo, code_repo):
        dto = ResetPasswordRequest(email="jane@example.com", code="123456", password="NewPassword1!")
        user_repo.find_one_by.return_value = User(id=7, email=dto.email)
        code_repo.find_one_by.return_value = None

        with pytest.raises(CodeNotFoundException):
            await service.reset_password(dto)

        user_repo.update.assert_not_awaited()


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_change_with_valid_current_password(self, service, user_repo):
        dto = ChangePasswordRequest(user_id=7, password="OldPassword1!", new_password="NewPassword1!")
        user_repo.find_one_by.return_value = User(
            id=7, hashed_password=await service.create_hash_password(dto.password)
        )

        await service.change_password(dto)

        user_repo.find_one_by.assert_awaited_once_with(id=dto.user_id)
        user_repo.update.assert_awaited_once_with(
            {"id": dto.user_id}, {"id": dto.user_id, "hashed_password": ANY}
        )
        new_hash = user_repo.update.await_args.args[1]["hashed_password"]
        assert verify_password(dto.new_password, new_hash)

    @pytest.mark.asyncio
    async def test_change_with_invalid_current_password(self, service, user_repo):
        dto = ChangePasswordRequest(user_id=7, password="OldPassword1!", new_password="NewPassword1!")
        user_repo.find_one_by.return_value = User(
            id=7, hashed_password=await service.create_hash_password("SomethingElse1!")
        )

        with pytest.raises(InvalidPasswordException):
            await service.change_password(dto)

        user_repo.find_one_by.assert_awaited_once_with(id=dto.user_id)
        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_change_for_user_without_password(self, service, user_repo):
        dto = ChangePasswordRequest(user_id=7, password="OldPassword1!", new_password="NewPassword1!")
        user_repo.find_one_by.return_value = User(id=7, hashed_password=None)

        with pytest.raises(InvalidPasswordException):
            await service.change_password(dto)

        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_change_for_unknown_user(self, service, user_repo):
        dto = ChangePasswordRequest(user_id=404, password="OldPassword1!", new_password="NewPassword1!")
        user_repo.find_one_by.return_value = None

        with pytest.raises(UserNotFoundException):
            await service.change_password(dto)

        user_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_hash_password(service):
    password = "CorrectHorse9!"

    hashed = await service.create_hash_password(password)

    assert hashed != password
    assert bcrypt.checkpw(password.encode(), hashed.encode())
    assert not bcrypt.checkpw(b"wrong-password", hashed.encode())
