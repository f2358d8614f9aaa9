from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for the signed-in user and display preferences.

    Note (DIP): services depend on this interface, not on the concrete store.
    """

    def get_user(self) -> Optional[User]:
        raise NotImplementedError

    def save_user(self, user: User) -> None:
        raise NotImplementedError

    def clear_session(self) -> None:
        """Forget the signed-in user and the session pointer only."""

        raise NotImplementedError

    def get_theme(self) -> str:
        raise NotImplementedError

    def save_theme(self, theme: str) -> None:
        raise NotImplementedError

    def get_dark_mode(self) -> bool:
        raise NotImplementedError

    def save_dark_mode(self, is_dark: bool) -> None:
        raise NotImplementedError
