"""Password hashing and admin access tokens."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from weddingsite.auth.dtos import AccessTokenDTO, UserDTO
from weddingsite.config.settings import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidCredentialsError(Exception):
    """Missing, malformed or expired admin credentials."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: UserDTO, expires_delta: timedelta | None = None) -> AccessTokenDTO:
    issued_at = datetime.now(UTC)
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)
    return AccessTokenDTO(token=token, expires_at=expires_at, user=user)


def decode_access_token(token: str) -> dict:
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        raise InvalidCredentialsError("Invalid or expired token") from e
    if not claims.get("sub"):
        raise InvalidCredentialsError("Token has no subject")
    return claims
