"""Authentication dependencies for protected routes."""

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authcore.dependencies.services import get_token_service, get_user_repository
from authcore.models.user import User
from authcore.services.repositories.user_repository import UserRepository
from authcore.services.token_service import TokenService

SESSION_COOKIE = "token"

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_cookie: str | None = Cookie(None, alias=SESSION_COOKIE),
    tokens: TokenService = Depends(get_token_service),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Get current authenticated user from the bearer header or the session cookie.

    Usage:
        @router.get("/protected")
        def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = credentials.credentials if credentials else token_cookie
    if not token or token == "none":
        raise _unauthorized("Not authorized to access this route")

    payload = tokens.decode_session_token(token)
    if not payload:
        raise _unauthorized("Invalid or expired token")

    user = users.find_by_id(payload["sub"])
    if not user:
        raise _unauthorized("User not found")

    return user
