# pos_app/routers/auth.py
from fastapi import APIRouter, status

from pos_app.core.supabase_client import supabase_public
from pos_app.schemas.auth import AuthSession, Credentials
from pos_app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

service = AuthService(supabase_public)


@router.post("/login", response_model=AuthSession)
def login(payload: Credentials):
    """
    Exchange email/password for a Supabase session.

    Send the returned access_token as `Authorization: Bearer <token>`.
    """
    return service.login(payload)


@router.post(
    "/signup",
    response_model=AuthSession,
    status_code=status.HTTP_201_CREATED,
)
def signup(payload: Credentials):
    return service.signup(payload)
