"""Schemas for authentication and verification endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserRegister(BaseModel):
    """Schema for user registration."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)
    role: str | None = None
    phone: str | None = Field(None, max_length=32)


class UserLogin(BaseModel):
    """Schema for user login.

    Both fields are optional here so a missing value reaches the service
    and yields its own message.
    """

    email: str | None = None
    password: str | None = None


class UserInfo(BaseModel):
    """Schema for user info in responses. Never includes secrets."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    phone: str | None = None
    is_verified: bool = False
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Schema for token response."""

    success: bool = True
    token: str


class UpdateDetailsRequest(BaseModel):
    """Whitelisted profile fields. Absent fields keep their stored value."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None


class UpdatePasswordRequest(BaseModel):
    """Schema for changing password while logged in."""

    current_password: str
    new_password: str = Field(min_length=6, max_length=100)


class ForgotPasswordRequest(BaseModel):
    """Schema for requesting password reset."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema for resetting password; the token comes from the URL path."""

    password: str = Field(min_length=6, max_length=100)


class BvnRequest(BaseModel):
    """Schema for starting BVN verification."""

    bvn: str = Field(min_length=11, max_length=11, pattern=r"^\d{11}$")


class BvnVerifyRequest(BaseModel):
    """Schema for submitting the BVN verification code."""

    bvn_code: str = Field(min_length=1, max_length=12)


class BvnIdentityInfo(BaseModel):
    """Identity attributes resolved for a BVN."""

    first_name: str
    last_name: str
    mobile: str

    model_config = {"from_attributes": True}
