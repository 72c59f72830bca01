# -*- coding: utf-8 -*-
"""Username rules for onboarding."""

from __future__ import annotations

import re
from typing import Optional

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
RESERVED_USERNAMES = frozenset({"admin", "user", "test", "guest", "null", "undefined", "anonymous"})

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_\s]+$")
_SPACES_OR_UNDERSCORES = re.compile(r"[\s_]")

VALID_MESSAGE = "Username is valid"


def username_validation_error(username: Optional[str]) -> Optional[str]:
    """Return the first rule ``username`` breaks, or None when it is acceptable."""
    trimmed = (username or "").strip()
    if not trimmed:
        return "Please enter a username"
    if len(trimmed) < USERNAME_MIN_LENGTH:
        return f"Username must be at least {USERNAME_MIN_LENGTH} characters"
    if len(trimmed) > USERNAME_MAX_LENGTH:
        return f"Username must be less than {USERNAME_MAX_LENGTH} characters"
    if not _USERNAME_PATTERN.match(trimmed):
        return "Username can only contain letters, numbers, spaces, and underscores"
    if trimmed.lower() in RESERVED_USERNAMES:
        return "This username is not available"
    if not _SPACES_OR_UNDERSCORES.sub("", trimmed):
        return "Username must contain at least one letter or number"
    return None


def is_username_valid(username: Optional[str]) -> bool:
    return username_validation_error(username) is None


def username_validation_message(username: Optional[str]) -> str:
    return username_validation_error(username) or VALID_MESSAGE


def sanitize_username(username: Optional[str]) -> str:
    if username is None:
        return ""
    cleaned = re.sub(r"\s+", " ", username.strip())
    return re.sub(r"_{2,}", "_", cleaned)
