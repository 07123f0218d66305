from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from weddingsite.auth.dtos import UserDTO
from weddingsite.auth.models import SqlUserReadModel, UserReadModel
from weddingsite.auth.security import InvalidCredentialsError, decode_access_token
from weddingsite.config.settings import settings

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_read_model() -> UserReadModel:
    """Dependency to get user read model instance."""
    return SqlUserReadModel()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_access_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Bearer header first, then the login cookie."""
    if credentials is not None:
        return credentials.credentials
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise _unauthorized("Not authenticated")
    return token


async def require_admin(
    token: str = Depends(get_access_token),
    read_model: UserReadModel = Depends(get_user_read_model),
) -> UserDTO:
    try:
        claims = decode_access_token(token)
        user_id = UUID(claims["sub"])
    except (InvalidCredentialsError, ValueError) as e:
        raise _unauthorized("Invalid or expired token") from e

    user = await read_model.get_user(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user
