import datetime
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from topthought.schemas.auth import AdminIdentity
from topthought.settings import Settings, settings

bearer_scheme = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(identity: AdminIdentity, current_settings: Settings) -> str:
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(
        days=current_settings.JWT_EXPIRES_DAYS
    )
    payload = {"id": identity.id, "username": identity.username, "exp": expire}
    return jwt.encode(
        payload, current_settings.JWT_SECRET, algorithm=current_settings.JWT_ALGORITHM
    )


def decode_access_token(
    token: str, current_settings: Settings
) -> Optional[AdminIdentity]:
    try:
        payload = jwt.decode(
            token,
            current_settings.JWT_SECRET,
            algorithms=[current_settings.JWT_ALGORITHM],
        )
    except jwt.PyJWTError:
        return None

    if not payload.get("id") or not payload.get("username"):
        return None
    return AdminIdentity(id=str(payload["id"]), username=payload["username"])


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    current_settings: Settings = Depends(get_settings),
) -> AdminIdentity:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Access token required",
        )

    identity = decode_access_token(credentials.credentials, current_settings)
    if identity is None:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    return identity
