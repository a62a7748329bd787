"""Authentication and BVN verification router."""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from authcore.config import Settings, get_settings
from authcore.dependencies.auth import SESSION_COOKIE, get_current_user
from authcore.dependencies.services import get_bvn_service, get_password_service
from authcore.models.user import User
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
from authcore.schemas.common import DataResponse
from authcore.services.bvn_service import BvnVerificationService
from authcore.services.password_service import PasswordService
from authcore.services.token_service import SessionToken

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_response(session: SessionToken, settings: Settings) -> JSONResponse:
    """Return the token in the body and as an httpOnly cookie."""
    response = JSONResponse(TokenResponse(token=session.token).model_dump())
    response.set_cookie(
        SESSION_COOKIE,
        session.token,
        expires=datetime.now(UTC) + timedelta(days=settings.jwt_cookie_expire_days),
        httponly=True,
        secure=settings.is_production,
    )
    return response


@router.post("/register", response_model=TokenResponse)
def register(
    data: UserRegister,
    service: PasswordService = Depends(get_password_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Register user."""
    _, session = service.register(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=data.password,
        role=data.role,
        phone=data.phone,
    )
    return _token_response(session, settings)


@router.post("/login", response_model=TokenResponse)
def login(
    data: UserLogin,
    service: PasswordService = Depends(get_password_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Login user."""
    _, session = service.login(data.email, data.password)
    return _token_response(session, settings)


@router.get("/logout", response_model=DataResponse[dict])
def logout(response: Response) -> dict:
    """Log user out by overwriting the cookie. The token itself stays valid until it expires."""
    logger.debug("Session cookie cleared")
    response.set_cookie(
        SESSION_COOKIE,
        "none",
        expires=datetime.now(UTC) + timedelta(seconds=10),
        httponly=True,
    )
    return {"success": True, "data": {}}


@router.get("/me", response_model=DataResponse[UserInfo])
def get_me(current_user: User = Depends(get_current_user)) -> dict:
    """Get current logged in user."""
    return {"success": True, "data": UserInfo.model_validate(current_user)}


@router.put("/updatedetails", response_model=DataResponse[UserInfo])
def update_details(
    data: UpdateDetailsRequest,
    current_user: User = Depends(get_current_user),
    service: PasswordService = Depends(get_password_service),
) -> dict:
    """Update user details."""
    user = service.update_details(
        current_user.id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
    )
    return {"success": True, "data": UserInfo.model_validate(user)}


@router.put("/updatepassword", response_model=TokenResponse)
def update_password(
    data: UpdatePasswordRequest,
    current_user: User = Depends(get_current_user),
    service: PasswordService = Depends(get_password_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Update password."""
    _, session = service.change_password(current_user.id, data.current_password, data.new_password)
    return _token_response(session, settings)


@router.post("/forgotpassword", response_model=DataResponse[str])
def forgot_password(
    request: Request,
    data: ForgotPasswordRequest,
    service: PasswordService = Depends(get_password_service),
) -> dict:
    """Email a reset link containing a single-use token."""
    reset_url_base = str(request.url_for("reset_password", resettoken="token")).rsplit("/", 1)[0]
    service.forgot_password(data.email, reset_url_base)
    return {"success": True, "data": "Email sent"}


@router.put("/resetpassword/{resettoken}", response_model=TokenResponse)
def reset_password(
    resettoken: str,
    data: ResetPasswordRequest,
    service: PasswordService = Depends(get_password_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Reset password."""
    _, session = service.reset_password(resettoken, data.password)
    return _token_response(session, settings)


@router.post("/bvn", response_model=DataResponse[BvnIdentityInfo])
def send_bvn_verification(
    data: BvnRequest,
    current_user: User = Depends(get_current_user),
    service: BvnVerificationService = Depends(get_bvn_service),
) -> dict:
    """Resolve a BVN and text a verification code to the registered mobile."""
    identity = service.request_verification(current_user.id, data.bvn)
    return {"success": True, "data": BvnIdentityInfo.model_validate(identity)}


@router.post("/verifybvn", response_model=DataResponse[str])
def verify_bvn(
    data: BvnVerifyRequest,
    current_user: User = Depends(get_current_user),
    service: BvnVerificationService = Depends(get_bvn_service),
) -> dict:
    """Submit the BVN verification code."""
    service.submit_verification(current_user.id, data.bvn_code)
    return {"success": True, "data": "User is verified"}
