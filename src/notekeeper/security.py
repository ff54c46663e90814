from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .errors import ForbiddenError
from .models import User

ALGO = "HS256"
MIN_SECRET_LENGTH = 16

pwd_ctx = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=settings.argon2_time_cost,
    argon2__memory_cost=settings.argon2_memory_cost,
    argon2__parallelism=settings.argon2_parallelism,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_ctx.verify(password, hashed)
    except ValueError:
        # stored value is not a recognised hash
        return False


def dummy_verify() -> None:
    """Burn roughly one verification worth of time for unknown usernames."""
    pwd_ctx.dummy_verify()


def _secret() -> str:
    secret = settings.jwt_secret
    if not secret or len(secret) < MIN_SECRET_LENGTH:
        raise RuntimeError(
            f"JWT_SECRET must be set and at least {MIN_SECRET_LENGTH} characters long"
        )
    return secret


def create_access_token(
    sub: str,
    ttl_seconds: int | None = None,
    extra_claims: dict[str, Any] | None = None,
    kid: str | None = None,
) -> str:
    now = datetime.now(tz=UTC)
    ttl = settings.jwt_ttl_seconds if ttl_seconds is None else ttl_seconds
    claims: dict[str, Any] = {
        "sub": sub,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    if extra_claims:
        claims.update(extra_claims)

    headers = {"typ": "JWT", "alg": ALGO}
    if kid:
        headers["kid"] = kid

    return jwt.encode(claims, _secret(), algorithm=ALGO, headers=headers)


def decode_access_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, _secret(), algorithms=[ALGO])


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "UNAUTHORIZED", "message": message, "details": {}},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _forbidden(message: str) -> ForbiddenError:
    return ForbiddenError(message)


def get_current_user(
    db: Session = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise _unauthorized("Authentication required")
    try:
        payload = decode_access_token(token)
        sub = payload.get("sub")
        user_id = int(sub) if sub is not None else None
    except (JWTError, ValueError):
        raise _unauthorized("Invalid or expired token") from None
    if user_id is None:
        raise _unauthorized("Invalid or expired token")
    user = db.get(User, user_id)
    if not user:
        raise _unauthorized("Invalid or expired token")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise _forbidden("Admin only")
    return user


def ensure_can_act_as(user: User, author_id: int) -> None:
    """Only admins may write on behalf of another user."""
    if user.id != author_id and not user.is_admin:
        raise _forbidden("You may only act as yourself")


def ensure_owner_or_admin(user: User, owner_id: int) -> None:
    if user.id != owner_id and not user.is_admin:
        raise _forbidden("Only the author or an admin may change this note")
