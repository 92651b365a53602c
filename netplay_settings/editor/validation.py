"""Username normalization and commit-time checks."""
from __future__ import annotations

import re

from netplay_settings.models import MAX_LENGTH_USERNAME, MIN_LENGTH_USERNAME

# ASCII word characters only: letters, digits, underscore
_NON_WORD = re.compile(r"\W", re.ASCII)

MISSING_USERNAME_MESSAGE = "You must set a username"
USERNAME_TOO_SHORT_MESSAGE = "Your username is too short"


class SettingsValidationError(ValueError):
    """Draft cannot be committed; str(error) is the user-facing message."""


class UsernameTooShortError(SettingsValidationError):
    def __init__(self, username: str):
        super().__init__(USERNAME_TOO_SHORT_MESSAGE)
        self.username = username


def strip_non_word(raw: str) -> str:
    return _NON_WORD.sub("", str(raw or ""))


def normalize_username(raw: str) -> str:
    """Drop non-word characters and cut to MAX_LENGTH_USERNAME."""
    return strip_non_word(raw)[:MAX_LENGTH_USERNAME]


def seed_message(username: str) -> str:
    return "" if username else MISSING_USERNAME_MESSAGE


def validate_username(username: str) -> str:
    """Return the committable username or raise UsernameTooShortError."""
    normalized = strip_non_word(username)
    if len(normalized) < MIN_LENGTH_USERNAME:
        raise UsernameTooShortError(normalized)
    return normalized
