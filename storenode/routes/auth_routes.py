"""Store login route."""

from fastapi import APIRouter

from storenode.schemas.auth import LoginRequest, LoginResponse
from storenode.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Exchange store credentials for a session key. Each login replaces the
    user's previous key.

    Raises:
        - 401 INVALID_CREDENTIALS: Unknown user or wrong password
    """
    return LoginResponse(api_key=AuthService().login_user(request.username, request.password))
