"""Side-panel domain datatypes shared by registry, follow and controller code."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

PLACEMENT_DOCKED = "docked"
PLACEMENT_FULLFRAME = "fullframe"
PLACEMENT_OTHER = "other"
PLACEMENT_KINDS = (PLACEMENT_DOCKED, PLACEMENT_FULLFRAME, PLACEMENT_OTHER)

FOLLOW_OFF = "off"
FOLLOW_SELECT = "select"
FOLLOW_EXPAND = "expand"
FOLLOW_MODES = (FOLLOW_OFF, FOLLOW_SELECT, FOLLOW_EXPAND)

SIDES = ("left", "right", "top", "bottom")


@dataclass(eq=False)
class Session:
    """One tree-browser instance bound to a root path.

    ``placement_kind`` is tagged once at creation and never inferred from the
    window geometry. Sessions compare by identity.
    """

    root_path: Path
    placement_kind: str = PLACEMENT_DOCKED
    window: object | None = None
    current_entry: Path | None = None

    def __post_init__(self) -> None:
        if self.placement_kind not in PLACEMENT_KINDS:
            raise ValueError(f"unknown placement kind: {self.placement_kind!r}")

    @property
    def is_docked(self) -> bool:
        return self.placement_kind == PLACEMENT_DOCKED

    @property
    def is_fullframe(self) -> bool:
        return self.placement_kind == PLACEMENT_FULLFRAME


@dataclass(frozen=True)
class EditorContext:
    """Explicit editor state for one command invocation."""

    file_path: Path | None = None
    window: object | None = None
    explicit_root: Path | None = None
    cwd: Path | None = None


@dataclass(frozen=True)
class DockSpec:
    """Placement request passed to the host when opening the docked window."""

    side: str
    slot: int
    width: float
