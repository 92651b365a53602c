from netplay_settings.devices.gamepads import Gamepad, GamepadManager, GamepadWatcher

__all__ = ["Gamepad", "GamepadManager", "GamepadWatcher"]
