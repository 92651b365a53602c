import sys
import types
import unittest
from unittest.mock import patch

from netplay_settings.automation.global_hotkey import _ListenerThread
from netplay_settings.models import HotkeyShortcut, empty_hotkey_bindings


def _fake_keyboard() -> types.ModuleType:
    kb = types.ModuleType("keyboard")
    kb.KEY_DOWN = "down"
    kb.KEY_UP = "up"
    kb.hooks = []

    def hook(callback):
        kb.hooks.append(callback)
        return callback

    def unhook(callback):
        kb.hooks.remove(callback)

    kb.hook = hook
    kb.unhook = unhook
    return kb


def _press(kb, name: str) -> None:
    for callback in list(kb.hooks):
        callback(types.SimpleNamespace(name=name, event_type=kb.KEY_DOWN))
    for callback in list(kb.hooks):
        callback(types.SimpleNamespace(name=name, event_type=kb.KEY_UP))


class ListenerThreadTests(unittest.TestCase):
    """run() is driven on the test thread; each poll of the settings advances one step."""

    def _run(self, steps):
        kb = _fake_keyboard()
        bindings = empty_hotkey_bindings()
        bindings[HotkeyShortcut.MARIO] = ["f"]
        state = {"enabled": True, "bindings": bindings, "poll": 0}
        fired = []
        hooks_seen = []

        def is_enabled():
            poll = state["poll"]
            state["poll"] += 1
            hooks_seen.append(len(kb.hooks))
            if poll < len(steps):
                steps[poll](kb, state, thread)
            else:
                thread.stop()
            return state["enabled"]

        thread = _ListenerThread(lambda: state["bindings"], is_enabled)
        thread.triggered.connect(lambda value: fired.append(value))
        with patch.dict(sys.modules, {"keyboard": kb}):
            thread.run()
        return kb, fired, hooks_seen

    def test_bound_key_fires_while_enabled(self) -> None:
        def press_f(kb, state, thread):
            _press(kb, "f")

        kb, fired, _ = self._run([lambda *a: None, press_f])
        self.assertEqual(fired, ["0"])
        self.assertEqual(kb.hooks, [])

    def test_disabling_releases_the_hook(self) -> None:
        def disable(kb, state, thread):
            state["enabled"] = False

        def press_f_then_stop(kb, state, thread):
            _press(kb, "f")
            thread.stop()

        kb, fired, hooks_seen = self._run(
            [lambda *a: None, disable, lambda *a: None, press_f_then_stop]
        )
        self.assertEqual(hooks_seen[1], 1)
        self.assertEqual(hooks_seen[3], 0)
        self.assertEqual(fired, [])

    def test_unbind_all_releases_the_hook(self) -> None:
        def unbind_all(kb, state, thread):
            state["bindings"] = empty_hotkey_bindings()

        def press_f_then_stop(kb, state, thread):
            _press(kb, "f")
            thread.stop()

        kb, fired, hooks_seen = self._run(
            [lambda *a: None, unbind_all, lambda *a: None, press_f_then_stop]
        )
        self.assertEqual(hooks_seen[3], 0)
        self.assertEqual(fired, [])
        self.assertEqual(kb.hooks, [])


if __name__ == "__main__":
    unittest.main()
