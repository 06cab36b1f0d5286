from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import create_access_token, verify_password
from app.models.admin import Admin
from app.models.faculty import Faculty
from app.models.student import Student
from app.schemas.auth import AccountInfo, LoginRequest, LoginResponse, MeResponse

_ACCOUNT_MODELS = {
    "admin": Admin,
    "faculty": Faculty,
    "student": Student,
}


async def login(payload: LoginRequest, db: AsyncSession) -> LoginResponse:
    """
    Login for all three roles - business logic lives here, not in the route.

    Security measures:
    ─────────────────
    1. Always runs verify_password even when the account is not found
       → timing does not reveal whether an email exists
    2. Same error for wrong email AND wrong password
    3. Checks is_active AFTER the password check
    4. Updates last_login_at on success
    """
    model = _ACCOUNT_MODELS[payload.role]

    # Step 1 - Find account by email
    result = await db.execute(
        select(model).where(model.email == str(payload.email).strip().lower())
    )
    account = result.scalar_one_or_none()

    # Step 2 - Always verify password (timing-safe)
    password_ok = verify_password(
        payload.password,
        account.password_hash if account else None,
    )

    # Step 3 - Single generic error for not found OR wrong password
    if not account or not password_ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    # Step 4 - Check account is active
    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Contact support.",
        )

    # Step 5 - Record login timestamp
    account.last_login_at = datetime.now(timezone.utc)
    await db.flush()

    # Step 6 - Issue JWT
    token = create_access_token(account.id, account.email, payload.role)

    return LoginResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        account=AccountInfo(
            id=account.id,
            name=account.display_name,
            email=account.email,
            role=payload.role,
        ),
    )


async def get_me(account, role: str) -> MeResponse:
    """Current account profile. Already loaded by the auth dependency."""
    return MeResponse(
        id=account.id,
        name=account.display_name,
        email=account.email,
        role=role,
        is_active=account.is_active,
        last_login_at=account.last_login_at,
    )
