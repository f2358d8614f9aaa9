from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Optional, Protocol

from ..common.validators import require_email, require_non_empty
from ..core.constants import DEFAULT_PROFILE
from ..core.exceptions import AuthenticationError
from .model import User
from .preferences import DisplaySettings
from .repository import UserRepository

log = logging.getLogger(__name__)


class SessionCanceller(Protocol):
    def stop(self) -> None: ...


def local_user_id(email: str) -> str:
    """Stable id for an email on this machine (same email, same records)."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.strip().lower()}").hex


class AuthService:
    """Use case: sign in/out.

    There is no credential check: signing in assigns a local identity built
    from the default profile and the given email.
    """

    def __init__(
        self,
        users: UserRepository,
        settings: DisplaySettings,
        *,
        session_monitor: Optional[SessionCanceller] = None,
    ):
        self._users = users
        self._settings = settings
        self._monitor = session_monitor

    def login(self, email: str) -> User:
        email = require_email(email)
        user_id = local_user_id(email)

        existing = self._users.get_user()
        if existing and existing.id == user_id:
            base = existing
        else:
            base = User(id=user_id, email=email, **DEFAULT_PROFILE)

        user = replace(
            base,
            email=email,
            theme_color=self._settings.theme_color,
            is_dark_mode=self._settings.is_dark_mode,
        )
        self._users.save_user(user)
        log.info("Signed in user=%s", user.id)
        return user

    def logout(self) -> None:
        if self._monitor is not None:
            self._monitor.stop()
        user = self._users.get_user()
        self._users.clear_session()
        self._settings.save()
        log.info("Signed out user=%s", user.id if user else None)


class UserService:
    def __init__(self, users: UserRepository, settings: DisplaySettings):
        self._users = users
        self._settings = settings

    @property
    def settings(self) -> DisplaySettings:
        return self._settings

    def current_user(self) -> Optional[User]:
        return self._users.get_user()

    def require_user(self) -> User:
        user = self._users.get_user()
        if not user:
            raise AuthenticationError("Please sign in to continue")
        return user

    def set_theme(self, theme_color: str) -> None:
        theme_color = require_non_empty(theme_color, "Theme")
        self._settings.set_theme(theme_color)
        user = self._users.get_user()
        if user:
            self._users.save_user(replace(user, theme_color=theme_color))

    def set_dark_mode(self, is_dark: bool) -> None:
        self._settings.set_dark_mode(is_dark)
        user = self._users.get_user()
        if user:
            self._users.save_user(replace(user, is_dark_mode=bool(is_dark)))
