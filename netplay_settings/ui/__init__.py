from netplay_settings.ui.settings_view import SettingsView

__all__ = ["SettingsView"]
