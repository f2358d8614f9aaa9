from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_THEME
from .model import User
from .repository import UserRepository

log = logging.getLogger(__name__)


@dataclass
class DisplaySettings:
    """Machine-wide display preferences.

    They outlive sign-outs: the next user to sign in on this machine starts
    from them. Loaded once at start, saved on every change.
    """

    theme_color: str = DEFAULT_THEME
    is_dark_mode: bool = False
    _store: Optional[UserRepository] = field(default=None, repr=False, compare=False)

    @classmethod
    def load(cls, store: UserRepository) -> "DisplaySettings":
        return cls(theme_color=store.get_theme(), is_dark_mode=store.get_dark_mode(), _store=store)

    def set_theme(self, theme_color: str) -> None:
        self.theme_color = theme_color
        if self._store is not None:
            self._store.save_theme(theme_color)

    def set_dark_mode(self, is_dark: bool) -> None:
        self.is_dark_mode = bool(is_dark)
        if self._store is not None:
            self._store.save_dark_mode(self.is_dark_mode)

    def apply_user(self, user: User) -> None:
        """Copy the user's own overrides down into the machine settings."""
        if user.theme_color:
            self.set_theme(user.theme_color)
        if user.is_dark_mode is not None:
            self.set_dark_mode(user.is_dark_mode)

    def save(self) -> None:
        if self._store is None:
            return
        self._store.save_theme(self.theme_color)
        self._store.save_dark_mode(self.is_dark_mode)
        log.debug("Saved display settings theme=%s dark=%s", self.theme_color, self.is_dark_mode)

    def as_dict(self) -> dict:
        return {"theme_color": self.theme_color, "is_dark_mode": self.is_dark_mode}
