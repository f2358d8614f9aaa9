from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: the signed-in employee.

    Note: Plain data object (no storage access). Display preferences are
    optional per-user overrides of the machine-wide settings.
    """

    id: str
    name: str
    email: str
    phone: str
    department: str
    position: str
    avatar_url: Optional[str] = None
    theme_color: Optional[str] = None
    is_dark_mode: Optional[bool] = None
