"""Sign-in / sign-up flows against the external auth backend.

Validation runs locally and short-circuits before any request. The token
returned by sign-in is kept in a per-session store under config.AUTH_TOKEN_KEY.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

from . import config, settings
from .integrations.auth_client import AuthClient, AuthClientError

logger = logging.getLogger("pagegen.auth.service")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NETWORK_ERROR_MESSAGE = "Network error. Please try again."


@dataclass
class AuthResult:
    success: bool
    message: str
    token: Optional[str] = None
    # "" on success, else "validation" | "rejected" | "network"
    error_kind: str = ""


def validate_credentials(email: str, password: str) -> Optional[str]:
    """Return an inline error message, or None when the fields are usable."""
    if not email or not email.strip():
        return "Please input your email!"
    if not _EMAIL_RE.match(email.strip()):
        return "Please enter a valid email!"
    if not password:
        return "Please input your password!"
    return None


def validate_signup(email: str, password: str, confirm_password: str) -> Optional[str]:
    error = validate_credentials(email, password)
    if error:
        return error
    if password != confirm_password:
        return "Passwords do not match"
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        return (
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} "
            "characters long"
        )
    return None


class AuthService:
    """Session-scoped authentication state.

    Args:
        client: Auth backend client. Defaults to one pointed at config.API_BASE_URL.
    """

    def __init__(self, client: Optional[AuthClient] = None):
        self._client = client or AuthClient()
        self._store: Dict[str, str] = {}
        self.user_email: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._store.get(config.AUTH_TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def signin(self, email: str, password: str) -> AuthResult:
        error = validate_credentials(email, password)
        if error:
            return AuthResult(success=False, message=error, error_kind="validation")

        try:
            resp = await self._client.signin(email.strip(), password)
        except AuthClientError as e:
            logger.error(f"Sign in error: {e}")
            return AuthResult(success=False, message=NETWORK_ERROR_MESSAGE, error_kind="network")

        if not resp.ok:
            return AuthResult(
                success=False,
                message=resp.data.get("message") or "Sign in failed",
                error_kind="rejected",
            )

        token = resp.data.get("token")
        if token:
            self._store[config.AUTH_TOKEN_KEY] = token
        self.user_email = email.strip()
        logger.info(f"Signed in: {self.user_email}")
        return AuthResult(success=True, message="Sign in successful!", token=token)

    async def signup(
        self,
        email: str,
        password: str,
        confirm_password: str,
    ) -> AuthResult:
        error = validate_signup(email, password, confirm_password)
        if error:
            return AuthResult(success=False, message=error, error_kind="validation")

        try:
            resp = await self._client.signup(email.strip(), password)
        except AuthClientError as e:
            logger.error(f"Sign up error: {e}")
            return AuthResult(success=False, message=NETWORK_ERROR_MESSAGE, error_kind="network")

        if not resp.ok:
            return AuthResult(
                success=False,
                message=resp.data.get("message") or "Sign up failed",
                error_kind="rejected",
            )

        logger.info(f"Signed up: {email.strip()}")
        return AuthResult(success=True, message="Sign up successful! Please sign in.")

    def logout(self) -> None:
        self._store.pop(config.AUTH_TOKEN_KEY, None)
        self.user_email = None

    async def close(self) -> None:
        await self._client.close()
