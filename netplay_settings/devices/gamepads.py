"""Gamepad discovery and selection via pygame.joystick.

GamepadManager answers "which gamepads are connected" and remembers the active one.
GamepadWatcher polls it on the GUI thread and emits connect/disconnect signals.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import pygame
from PyQt6.QtCore import QObject, QTimer, pyqtSignal

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 1000


@dataclass(frozen=True)
class Gamepad:
    id: str
    index: int


class GamepadManager:
    """Device provider for the settings editor."""

    def __init__(self) -> None:
        self._selected: Optional[Gamepad] = None
        self._known_ids: set[str] = set()
        self._initialized = False

    def _ensure_init(self) -> None:
        if self._initialized:
            return
        pygame.init()
        pygame.joystick.init()
        self._initialized = True

    @property
    def selected(self) -> Optional[Gamepad]:
        return self._selected

    def connected_devices(self) -> list[Optional[Gamepad]]:
        """One entry per joystick slot; None where the device could not be opened."""
        self._ensure_init()
        pygame.event.pump()
        devices: list[Optional[Gamepad]] = []
        for i in range(pygame.joystick.get_count()):
            try:
                js = pygame.joystick.Joystick(i)
                devices.append(Gamepad(id=js.get_name() or f"Gamepad {i}", index=i))
            except pygame.error as e:
                logger.debug(f"Gamepad {i} unavailable: {e}")
                devices.append(None)
        return devices

    def set_active_device(self, device: Optional[Gamepad]) -> None:
        self._selected = device
        logger.info(f"Active gamepad: {device.id if device else 'none'}")

    def poll(self) -> tuple[set[str], set[str]]:
        """Return (connected, disconnected) ids since the previous poll."""
        ids = {d.id for d in self.connected_devices() if d is not None}
        connected = ids - self._known_ids
        disconnected = self._known_ids - ids
        self._known_ids = ids
        return connected, disconnected


class GamepadWatcher(QObject):
    """Polls the manager on a timer; signals carry the device id."""

    gamepad_connected = pyqtSignal(str)
    gamepad_disconnected = pyqtSignal(str)

    def __init__(self, manager: GamepadManager, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._manager = manager
        self._timer = QTimer(self)
        self._timer.setInterval(POLL_INTERVAL_MS)
        self._timer.timeout.connect(self._on_poll)

    def start(self) -> None:
        self._manager.poll()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _on_poll(self) -> None:
        try:
            connected, disconnected = self._manager.poll()
        except pygame.error as e:
            logger.error(f"Gamepad poll failed: {e}")
            return
        for gid in sorted(connected):
            logger.info(f"Gamepad connected: {gid}")
            self.gamepad_connected.emit(gid)
        for gid in sorted(disconnected):
            logger.info(f"Gamepad disconnected: {gid}")
            self.gamepad_disconnected.emit(gid)
