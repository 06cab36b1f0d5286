from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.auth_controller import get_me, login
from app.core.database import get_db
from app.core.dependencies import (
    bearer,
    get_current_admin,
    get_current_faculty,
    get_current_student,
)
from app.core.security import decode_access_token
from app.schemas.auth import LoginRequest, LoginResponse, MeResponse

router = APIRouter(prefix="/auth", tags=["Auth"])

_GUARDS = {
    "admin": get_current_admin,
    "faculty": get_current_faculty,
    "student": get_current_student,
}


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="""
Authenticate with email + password + role (admin / faculty / student).
Returns a JWT Bearer token to use in all other requests.

**How to use the token:**
Add to request headers: `Authorization: Bearer <your_token>`
    """,
)
async def account_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    return await login(payload, db)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get Current Account",
    description="Returns the authenticated account's profile. Requires Bearer token in header.",
)
async def me(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> MeResponse:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing token")
    try:
        role = decode_access_token(credentials.credentials).get("role")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing token")

    guard = _GUARDS.get(role)
    if guard is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing token")

    account = await guard(credentials=credentials, db=db)
    return await get_me(account, role)
