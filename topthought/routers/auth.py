import logging

from fastapi import APIRouter, Depends, HTTPException

from topthought import dependencies as deps
from topthought.errors import INTERNAL_ERROR_MESSAGE
from topthought.schemas.auth import LoginRequest, LoginResponse
from topthought.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    service: AuthService = Depends(deps.get_auth_service),
):
    """Exchange admin credentials for a bearer token."""
    try:
        result = service.login(credentials.username, credentials.password)
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

    if result is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return result
