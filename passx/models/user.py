from sqlalchemy import Column, Integer, String

from passx.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=True)  # Nullable for invited users

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
