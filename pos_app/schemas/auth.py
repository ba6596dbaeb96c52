# pos_app/schemas/auth.py
from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field


class Credentials(SQLModel):
    """
    Email/password payload for login and sign-up.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v


class AuthSession(SQLModel):
    """
    Tokens returned by Supabase Auth.

    `access_token` is None after sign-up when the project requires email
    confirmation before the first login.
    """

    user_id: str | None = None
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
