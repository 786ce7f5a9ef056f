# fantasy_squad/auth.py
from __future__ import annotations

import logging

from .schemas import AuthResponse, User

logger = logging.getLogger("fantasy_squad.auth")


class NotAuthenticated(Exception):
    """Raised when a call needs a token and no session is held."""


class AuthSession:
    """
    Process-wide login state: bearer token plus the cached user.
    Filled on login/register, emptied on logout.
    """

    def __init__(self, token: str | None = None, user: User | None = None):
        self.token = token
        self.user = user

    def save(self, auth: AuthResponse) -> None:
        self.token = auth.token
        self.user = auth.user
        logger.info("session started for %s", auth.user.username)

    def clear(self) -> None:
        if self.user is not None:
            logger.info("session cleared for %s", self.user.username)
        self.token = None
        self.user = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def full_name(self) -> str | None:
        return self.user.full_name if self.user else None

    def require_token(self) -> str:
        if not self.token:
            raise NotAuthenticated("Log in first")
        return self.token
