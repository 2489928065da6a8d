# Models module
from .user import User
from .code import Code, CodeType

__all__ = [
    "User",
    "Code",
    "CodeType",
]
