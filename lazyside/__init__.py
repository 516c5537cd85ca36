"""Public package surface for lazyside.

Exports the side-panel controller and the types callers wire it with.
Most implementation lives in submodules under ``lazyside``.
"""

from __future__ import annotations

from .config import SidePanelConfig, load_side_panel_config, save_side_panel_config
from .controller import VisibilityController
from .errors import UserFacingError
from .events import EventSource, HostEvents
from .host import TreeBrowserDeps, WindowHostDeps
from .session import DockSpec, EditorContext, Session

__all__ = [
    "DockSpec",
    "EditorContext",
    "EventSource",
    "HostEvents",
    "Session",
    "SidePanelConfig",
    "TreeBrowserDeps",
    "UserFacingError",
    "VisibilityController",
    "WindowHostDeps",
    "load_side_panel_config",
    "save_side_panel_config",
]
