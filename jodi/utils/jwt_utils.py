import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status, Depends, Cookie
from fastapi.security import OAuth2PasswordBearer
from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError

from jodi.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from jodi.models.user import UserResponse

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def _secret_key() -> str:
    if not SECRET_KEY:
        logger.error("❌ SECRET_KEY not configured in environment variables")
        raise HTTPException(status_code=500, detail="Server configuration error")
    return SECRET_KEY


def create_access_token(user_id: str, email: str, name: str = None, is_admin: bool = False, expires_delta: timedelta = None) -> str:
    payload = {
        "sub": email,
        "id": user_id,
        "name": name,
        "is_admin": is_admin,
    }
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload["exp"] = datetime.now(timezone.utc) + expires_delta

    return jwt.encode(payload, _secret_key(), algorithm=ALGORITHM)


# Dependency to get user from the bearer header, falling back to the cookie
def get_current_user(
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(None),
) -> UserResponse:
    token = bearer_token or access_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except JWTError:
        raise HTTPException(status_code=401, detail="Could not validate credentials")

    email: str = payload.get("sub")
    user_id: str = payload.get("id")
    if email is None or user_id is None:
        raise HTTPException(status_code=401, detail="Could not validate credentials")
    return UserResponse(
        id=user_id,
        email=email,
        name=payload.get("name"),
        is_admin=bool(payload.get("is_admin", False)),
    )


def require_admin(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
    if not current_user.is_admin:
        logger.info("Access denied - user is not admin: %s", current_user.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Administrator privileges required.",
        )
    return current_user
