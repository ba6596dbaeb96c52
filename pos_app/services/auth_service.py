# pos_app/services/auth_service.py
import logging
from typing import Callable

from fastapi import HTTPException, status
from supabase import AuthApiError, Client

from pos_app.schemas.auth import AuthSession, Credentials

logger = logging.getLogger(__name__)


class AuthService:
    """
    Thin passthrough to Supabase Auth for the login and sign-up screens.

    Passwords never touch our own storage; Supabase owns them.
    """

    def __init__(self, client_factory: Callable[[], Client]):
        self.client_factory = client_factory

    @staticmethod
    def _to_session(response) -> AuthSession:
        user = response.user
        session = response.session
        return AuthSession(
            user_id=str(user.id) if user else None,
            email=user.email if user else None,
            access_token=session.access_token if session else None,
            refresh_token=session.refresh_token if session else None,
            expires_in=session.expires_in if session else None,
        )

    def login(self, payload: Credentials) -> AuthSession:
        try:
            response = self.client_factory().auth.sign_in_with_password(
                {"email": payload.email, "password": payload.password}
            )
        except AuthApiError as exc:
            logger.info("Login rejected for %s: %s", payload.email, exc.message)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )
        return self._to_session(response)

    def signup(self, payload: Credentials) -> AuthSession:
        try:
            response = self.client_factory().auth.sign_up(
                {"email": payload.email, "password": payload.password}
            )
        except AuthApiError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=exc.message,
            )
        logger.info("Signed up %s", payload.email)
        return self._to_session(response)
