from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "faculty", "student"]


# ── Request Body ──────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Role = "student"

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "student@school.example",
                "password": "YourPassword123",
                "role": "student",
            }
        }
    }


# ── Response Bodies ───────────────────────────────────────────────────
class AccountInfo(BaseModel):
    """
    Safe account info sent to the frontend after login.
    password_hash is never included here.
    """
    id: int
    name: str
    email: str
    role: Role


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds - frontend uses this to know when token expires
    account: AccountInfo


class MeResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    is_active: bool
    last_login_at: datetime | None
