from pydantic import BaseModel, EmailStr, Field


# Request schemas
class ResetPasswordCodeRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=10)
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")


class ChangePasswordBody(BaseModel):
    password: str
    new_password: str = Field(..., min_length=8)


class ChangePasswordRequest(BaseModel):
    """Change-password input as seen by the service; ``user_id`` comes from the access token."""
    user_id: int
    password: str
    new_password: str = Field(..., min_length=8)


# Response schemas
class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    detail: str
