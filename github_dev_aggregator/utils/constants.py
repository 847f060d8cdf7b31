"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# GitHub Constants
# ----------------

GITHUB_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")
"""Pattern a string must match to possibly be a GitHub login (alphanumerics and hyphens, at most 39 characters)."""

# Cache Constants
# ---------------

DEVELOPERS_CACHE_KEY = "developers"
"""Cache key of the bulk developer listing."""

ACCOUNT_CACHE_KEY_PREFIX = "user-"
"""Prefix of per-account cache keys; the lowercased login follows."""

# HTTP Error Constants
# --------------------

SANITIZED_ERROR_MESSAGE = "An unexpected error occurred while aggregating GitHub data."
"""Message returned to clients in place of details of unexpected internal failures."""
