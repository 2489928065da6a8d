"""Domain exceptions raised by the PassX services.

Each exception carries the HTTP status and detail message the API layer
answers with; see ``passx.exception_handlers``.
"""

from typing import Optional

from fastapi import status


class PassXException(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Bad request"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class UserNotFoundException(PassXException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


class InvalidPasswordException(PassXException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid password"


class CodeNotFoundException(PassXException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Code not found"


class CodeExpiredException(PassXException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Code expired"


class InvalidCodeException(PassXException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid code"


class CodeTryCountExceededException(PassXException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Code try count exceeded"
