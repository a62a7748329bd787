"""Pydantic schemas for API validation."""

from authcore.schemas.auth import (
    BvnIdentityInfo,
    BvnRequest,
    BvnVerifyRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserInfo,
    UserLogin,
    UserRegister,
)
from authcore.schemas.common import DataResponse, ErrorDetail, ErrorResponse

__all__ = [
    "BvnIdentityInfo",
    "BvnRequest",
    "BvnVerifyRequest",
    "DataResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "TokenResponse",
    "UpdateDetailsRequest",
    "UpdatePasswordRequest",
    "UserInfo",
    "UserLogin",
    "UserRegister",
]
