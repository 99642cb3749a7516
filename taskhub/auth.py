from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.hash import bcrypt

from . import config, schemas
from .exceptions import ForbiddenError, UnauthorizedError

ADMIN_ROLE = "admin"
USER_ROLE = "user"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def hash_password(plain_password: str) -> str:
    return bcrypt.using(rounds=config.BCRYPT_ROUNDS).hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def create_access_token(user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "email": email, "role": role, "iat": now, "exp": expire}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> schemas.CurrentUser:
    """Verify signature and expiry and return the embedded claims.

    Raises ``UnauthorizedError`` for expired, tampered or malformed tokens.
    """
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")

    sub = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if sub is None or email is None or role not in (ADMIN_ROLE, USER_ROLE):
        raise UnauthorizedError("Invalid or expired token")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid or expired token")
    return schemas.CurrentUser(user_id=user_id, email=email, role=role)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> schemas.CurrentUser:
    if not token:
        raise UnauthorizedError("Not authenticated")
    return decode_access_token(token)


def check_role(current_user: schemas.CurrentUser, role: str) -> schemas.CurrentUser:
    if current_user.role != role:
        raise ForbiddenError(f"Only {role}s can perform this action")
    return current_user


def require_role(role: str):
    def _role_dependency(current_user: schemas.CurrentUser = Depends(get_current_user)) -> schemas.CurrentUser:
        return check_role(current_user, role)

    return _role_dependency


require_admin = require_role(ADMIN_ROLE)
require_user = require_role(USER_ROLE)
