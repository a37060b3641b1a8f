from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(key: str) -> bool:
    return os.getenv(key, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Environment-driven defaults for builders that do not choose explicitly."""

    # Reject nodes without a menu, prompt or action from build() instead of at run time.
    eager_validation: bool = field(default_factory=lambda: _flag("MENUTREE_EAGER_VALIDATION"))


def get_settings() -> Settings:
    return Settings()
