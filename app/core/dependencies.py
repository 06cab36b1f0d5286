from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.security import decode_access_token
from app.models.admin import Admin
from app.models.faculty import Faculty
from app.models.student import Student

bearer = HTTPBearer(auto_error=False)


def _not_authenticated_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _load_account(
    credentials: HTTPAuthorizationCredentials | None,
    db: AsyncSession,
    model: type,
    role: str,
):
    """
    Shared guard logic for all three account tables.

    Token must be an access token; when a role claim is present it has to
    match the guarded role, otherwise 403.
    """
    not_authenticated = _not_authenticated_exception()

    if not credentials:
        raise not_authenticated

    try:
        payload = decode_access_token(credentials.credentials)
        account_id = int(payload["sub"])

        if payload.get("type") != "access":
            raise not_authenticated

    except (JWTError, KeyError, ValueError):
        raise not_authenticated

    token_role = payload.get("role")
    if token_role and token_role != role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized as {role}",
        )

    result = await db.execute(select(model).where(model.id == account_id))
    account = result.scalar_one_or_none()

    if account is None:
        raise not_authenticated

    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"This {role} account has been deactivated",
        )

    return account


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> Admin:
    return await _load_account(credentials, db, Admin, "admin")


async def get_current_faculty(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> Faculty:
    return await _load_account(credentials, db, Faculty, "faculty")


async def get_current_student(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> Student:
    return await _load_account(credentials, db, Student, "student")
