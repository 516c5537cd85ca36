"""Docked-window placement tests, including layout-change re-entrancy."""

from __future__ import annotations

import unittest
from dataclasses import replace
from pathlib import Path

from fakes import FakeHost
from lazyside.config import SidePanelConfig
from lazyside.events import HostEvents
from lazyside.placement import WindowPlacementStrategy
from lazyside.session import DockSpec, Session


class WindowPlacementTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events = HostEvents()
        self.host = FakeHost(self.events, editor_windows=2)
        self.docked: list[object] = []
        self.config = SidePanelConfig(side="right", slot=2, width=0.25, window_options={"dedicated": True})
        self.placement = WindowPlacementStrategy(
            self.config,
            self.host.deps(),
            find_docked_window=lambda: self.docked[0] if self.docked else None,
        )
        self.events.layout_changed.subscribe(self.placement.reassert_width)

    def _open(self) -> object:
        window = self.placement.open_docked()
        window.session = Session(root_path=Path("/tmp"))
        self.docked.append(window)
        return window

    def test_open_docked_applies_spec_options_and_focus(self) -> None:
        window = self._open()

        self.assertEqual(window.dock, DockSpec(side="right", slot=2, width=0.25))
        self.assertEqual(window.options, {"dedicated": True})
        self.assertIs(self.host.selected_window(), window)

    def test_open_docked_ignores_its_own_layout_change(self) -> None:
        self._open()

        self.assertEqual(self.host.width_calls, [])
        self.assertFalse(self.placement.mutating)

    def test_reassert_width_restores_configured_fraction(self) -> None:
        window = self._open()
        self.host.select_window(self.host.windows[0])
        window.width = 0.5

        self.events.layout_changed.emit()

        self.assertEqual(window.width, 0.25)
        self.assertEqual(self.host.width_calls, [(window, 0.25)])

    def test_reassert_width_ignores_layout_change_fired_by_its_own_resize(self) -> None:
        window = self._open()
        self.host.select_window(self.host.windows[0])
        self.events.layout_changed.unsubscribe(self.placement.reassert_width)
        nested_results: list[bool] = []

        def set_width_and_notify(target, fraction) -> None:
            self.host.width_calls.append((target, fraction))
            nested_results.append(placement.reassert_width())
            self.events.layout_changed.emit()

        placement = WindowPlacementStrategy(
            self.config,
            replace(self.host.deps(), set_window_width=set_width_and_notify),
            find_docked_window=lambda: window,
        )
        self.events.layout_changed.subscribe(placement.reassert_width)

        self.assertTrue(placement.reassert_width())

        self.assertEqual(len(self.host.width_calls), 1)
        self.assertEqual(nested_results, [False])
        self.assertFalse(placement.mutating)

    def test_reassert_width_skips_when_docked_window_is_selected(self) -> None:
        self._open()

        self.assertFalse(self.placement.reassert_width())
        self.assertEqual(self.host.width_calls, [])

    def test_reassert_width_without_docked_window_is_noop(self) -> None:
        self.assertFalse(self.placement.reassert_width())

    def test_window_for_file_prefers_configured_selector(self) -> None:
        target = self.host.windows[1]
        placement = WindowPlacementStrategy(
            SidePanelConfig(open_file_window_selector=lambda: target),
            self.host.deps(),
            find_docked_window=lambda: None,
        )

        self.assertIs(placement.window_for_file(Path("/tmp/a.py")), target)

    def test_window_for_file_falls_back_to_mru_and_never_returns_docked(self) -> None:
        window = self._open()
        self.host.select_window(self.host.windows[0])
        self.host.select_window(window)

        self.assertIs(self.placement.window_for_file(Path("/tmp/a.py")), self.host.windows[0])

        placement = WindowPlacementStrategy(
            SidePanelConfig(open_file_window_selector=lambda: window),
            self.host.deps(),
            find_docked_window=lambda: window,
        )
        self.assertIsNone(placement.window_for_file(Path("/tmp/a.py")))


if __name__ == "__main__":
    unittest.main()
