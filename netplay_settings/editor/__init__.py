from netplay_settings.editor.draft import SAVED_MESSAGE, SettingsEditor
from netplay_settings.editor.validation import (
    MISSING_USERNAME_MESSAGE,
    USERNAME_TOO_SHORT_MESSAGE,
    SettingsValidationError,
    UsernameTooShortError,
)

__all__ = [
    "MISSING_USERNAME_MESSAGE",
    "SAVED_MESSAGE",
    "USERNAME_TOO_SHORT_MESSAGE",
    "SettingsEditor",
    "SettingsValidationError",
    "UsernameTooShortError",
]
