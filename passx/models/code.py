import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, UniqueConstraint

from passx.models.base import Base, TimestampMixin


class CodeType(str, enum.Enum):
    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    RESET_PASSWORD = "RESET_PASSWORD"
    USER_INVITATION = "USER_INVITATION"


class Code(TimestampMixin, Base):
    """A one-time code, keyed by (key, type). For password resets the key is the email."""

    __tablename__ = "codes"
    __table_args__ = (UniqueConstraint("key", "type", name="uq_codes_key_type"),)

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(255), nullable=False)
    type = Column(Enum(CodeType, name="code_type"), nullable=False)
    code = Column(String(10), nullable=False)

    # Status
    is_verified = Column(Boolean, default=False, nullable=False)
    try_count = Column(Integer, default=0, nullable=False)

    expires_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Code(id={self.id}, key='{self.key}', type='{self.type}')>"
