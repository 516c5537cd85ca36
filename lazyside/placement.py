"""Docked-window placement and width upkeep for the side panel.

The host fires layout-changed notifications for every window mutation,
including the ones this module performs. ``_mutating`` is set only around
this module's own host calls, so exactly those self-inflicted notifications
are dropped and everything else still reaches ``reassert_width``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from .config import SidePanelConfig
from .host import WindowHostDeps
from .session import DockSpec

logger = logging.getLogger(__name__)


class WindowPlacementStrategy:
    """Open the docked window and keep its configured width."""

    def __init__(
        self,
        config: SidePanelConfig,
        host: WindowHostDeps,
        *,
        find_docked_window: Callable[[], object | None],
    ) -> None:
        self.config = config
        self.host = host
        self._find_docked_window = find_docked_window
        self._mutating = False

    @property
    def mutating(self) -> bool:
        return self._mutating

    @contextmanager
    def own_layout_change(self) -> Iterator[None]:
        previous = self._mutating
        self._mutating = True
        try:
            yield
        finally:
            self._mutating = previous

    def dock_spec(self) -> DockSpec:
        return DockSpec(side=self.config.side, slot=self.config.slot, width=self.config.width)

    def open_docked(self) -> object:
        """Create the docked window, apply window options, and focus it."""
        spec = self.dock_spec()
        with self.own_layout_change():
            window = self.host.create_docked_window(spec)
            for key, value in self.config.window_options.items():
                self.host.set_window_option(window, key, value)
            self.host.select_window(window)
        logger.debug("opened docked window on %s slot %d width %.3f", spec.side, spec.slot, spec.width)
        return window

    def reassert_width(self) -> bool:
        """Layout-changed handler: re-apply the configured width.

        Returns True when the width was re-applied.
        """
        if self._mutating:
            return False
        window = self._find_docked_window()
        if window is None:
            return False
        # The user is dragging the panel border.
        if window == self.host.selected_window():
            return False
        with self.own_layout_change():
            self.host.set_window_width(window, self.config.width)
        logger.debug("reasserted docked window width %.3f", self.config.width)
        return True

    def window_for_file(self, path: Path) -> object | None:
        """Return the window a file opened from the panel should be shown in.

        ``None`` lets the engine pick (usually by splitting).
        """
        selector = self.config.open_file_window_selector
        window = selector() if selector is not None else self.host.most_recently_used_window()
        if window is None:
            return None
        if window == self._find_docked_window():
            logger.debug("window selector returned the docked window for %s; ignoring it", path)
            return None
        return window
