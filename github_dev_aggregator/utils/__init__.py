"""Utility modules for shared functionality."""

from .constants import (
    ACCOUNT_CACHE_KEY_PREFIX,
    DEVELOPERS_CACHE_KEY,
    GITHUB_USERNAME_PATTERN,
    SANITIZED_ERROR_MESSAGE,
)
from .helpers import gather_or_raise
from .pacing import FixedIntervalPacer

__all__ = [
    "GITHUB_USERNAME_PATTERN",
    "DEVELOPERS_CACHE_KEY",
    "ACCOUNT_CACHE_KEY_PREFIX",
    "SANITIZED_ERROR_MESSAGE",
    "gather_or_raise",
    "FixedIntervalPacer",
]
