"""Auth schemas."""
from pydantic import BaseModel, EmailStr, field_validator
from app.models.user import UserRole


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole
    name: str | None = None
    id_number: str | None = None
    phone: str | None = None
    invite_code: str | None = None  # caretakers only

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("Email and password are required")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    id: int
    email: str
    role: UserRole
    ref_id: int | None = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    role: UserRole
    user: UserResponse | None = None


class ForgotPasswordRequest(BaseModel):
    email: str


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_url: str | None = None  # only when no mail transport is configured


class ResetPasswordRequest(BaseModel):
    email: str = ""
    token: str = ""
    password: str = ""


class MessageResponse(BaseModel):
    message: str
