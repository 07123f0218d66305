from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import EmailStr

from weddingsite.auth.dependencies import require_admin
from weddingsite.auth.dtos import UserDTO
from weddingsite.auth.models import SqlUserWriteModel, UserWriteModel
from weddingsite.auth.security import create_access_token
from weddingsite.auth.urls import LOGIN_URL, LOGOUT_URL, ME_URL, VERIFY_URL
from weddingsite.config.settings import settings
from weddingsite.schemas import CamelModel, MessageResponse

router = APIRouter()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: UUID
    email: str
    role: str
    last_login_at: datetime | None = None

    @classmethod
    def from_dto(cls, user: UserDTO) -> "UserResponse":
        return cls(id=user.id, email=user.email, role=user.role, last_login_at=user.last_login_at)


class LoginResponse(CamelModel):
    token: str
    expires_at: datetime
    user: UserResponse


class VerifyResponse(CamelModel):
    valid: bool
    user: UserResponse


def get_user_write_model() -> UserWriteModel:
    """Dependency to get user write model instance."""
    return SqlUserWriteModel()


@router.post(LOGIN_URL, response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    write_model: UserWriteModel = Depends(get_user_write_model),
) -> LoginResponse:
    """Exchange admin credentials for a bearer token, also set as an HTTP-only cookie."""
    user = await write_model.authenticate(credentials.email, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
        )

    access_token = create_access_token(user)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=access_token.token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return LoginResponse(
        token=access_token.token,
        expires_at=access_token.expires_at,
        user=UserResponse.from_dto(user),
    )


@router.post(LOGOUT_URL, response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(settings.auth_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get(ME_URL, response_model=UserResponse)
async def me(user: UserDTO = Depends(require_admin)) -> UserResponse:
    return UserResponse.from_dto(user)


@router.get(VERIFY_URL, response_model=VerifyResponse)
async def verify(user: UserDTO = Depends(require_admin)) -> VerifyResponse:
    return VerifyResponse(valid=True, user=UserResponse.from_dto(user))
