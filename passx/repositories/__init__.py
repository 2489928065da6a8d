from .base import Repository
from .code import CodeRepository
from .user import UserRepository

__all__ = [
    "Repository",
    "CodeRepository",
    "UserRepository",
]
