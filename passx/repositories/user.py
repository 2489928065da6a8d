from passx.models.user import User
from passx.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
