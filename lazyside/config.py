"""Side-panel configuration and persistent JSON config helpers.

``SidePanelConfig`` is built once and handed to the controller; only the
project-switch flag changes later, through the controller's setter.
Persisted values live under the ``side_panel`` key of the user config file.
All disk access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .session import FOLLOW_MODES, FOLLOW_SELECT, SIDES

logger = logging.getLogger(__name__)

APP_NAME = "lazyside"
CONFIG_FILENAME = "config.json"
CONFIG_SECTION = "side_panel"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_WINDOW_OPTIONS: dict[str, object] = {
    "no_delete_other_windows": True,
    "no_other_window": True,
}


def _default_window_options() -> dict[str, object]:
    return dict(DEFAULT_WINDOW_OPTIONS)


@dataclass(frozen=True)
class SidePanelConfig:
    """Process-wide side-panel settings, read on every relevant operation."""

    side: str = "left"
    slot: int = -1
    width: float = 0.2
    window_options: Mapping[str, object] = field(default_factory=_default_window_options)
    open_file_window_selector: Callable[[], object | None] | None = None
    follow_buffer_file: str = FOLLOW_SELECT
    follow_project_switch: bool = True
    reuse_session: bool = False

    def __post_init__(self) -> None:
        if self.side not in SIDES:
            raise ValueError(f"side must be one of {', '.join(SIDES)}: {self.side!r}")
        if isinstance(self.slot, bool) or not isinstance(self.slot, int):
            raise ValueError(f"slot must be an integer: {self.slot!r}")
        if isinstance(self.width, bool) or not isinstance(self.width, (int, float)):
            raise ValueError(f"width must be a number: {self.width!r}")
        if not 0.0 < self.width < 1.0:
            raise ValueError(f"width must be a fraction in (0, 1): {self.width!r}")
        if self.follow_buffer_file not in FOLLOW_MODES:
            raise ValueError(
                f"follow_buffer_file must be one of {', '.join(FOLLOW_MODES)}: {self.follow_buffer_file!r}"
            )
        if any(not isinstance(key, str) for key in self.window_options):
            raise ValueError("window option names must be strings")


def load_config(path: Path | None = None) -> dict[str, object]:
    """Return the top-level JSON object stored in the config file.

    Anything other than a readable JSON object reads as ``{}``.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.debug("ignoring malformed config at %s", config_path)
        return {}
    if not isinstance(data, dict):
        logger.debug("ignoring non-object config at %s", config_path)
        return {}
    return data


def save_config(data: dict[str, object], path: Path | None = None) -> bool:
    """Write ``data`` as indented JSON; False when it could not be written.

    Serialization happens before the file is touched, so unserializable data
    leaves the previous file intact.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        payload = json.dumps(data, indent=2, sort_keys=True)
    except (TypeError, ValueError):
        logger.debug("config not serializable; keeping %s", config_path, exc_info=True)
        return False
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(payload + "\n", encoding="utf-8")
    except OSError:
        logger.debug("could not write config to %s", config_path, exc_info=True)
        return False
    return True


def _coerce_width(value: object) -> float | None:
    """Accept a fraction in (0, 1) or a percentage in [1, 100)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if 0 < value < 1:
        return float(value)
    if 1 <= value < 100:
        return round(float(value) / 100.0, 4)
    return None


def load_side_panel_config(**overrides: object) -> SidePanelConfig:
    """Build ``SidePanelConfig`` from persisted values plus keyword overrides.

    Each persisted key is validated on its own; invalid entries are dropped
    and the dataclass default is used instead. Overrides are applied last
    and are validated by the dataclass itself.
    """
    section = load_config().get(CONFIG_SECTION)
    if not isinstance(section, dict):
        section = {}

    values: dict[str, object] = {}
    side = section.get("side")
    if isinstance(side, str) and side in SIDES:
        values["side"] = side
    slot = section.get("slot")
    if isinstance(slot, int) and not isinstance(slot, bool):
        values["slot"] = slot
    width = _coerce_width(section.get("width"))
    if width is not None:
        values["width"] = width
    follow = section.get("follow_buffer_file")
    if isinstance(follow, str) and follow in FOLLOW_MODES:
        values["follow_buffer_file"] = follow
    for flag in ("follow_project_switch", "reuse_session"):
        raw_flag = section.get(flag)
        if isinstance(raw_flag, bool):
            values[flag] = raw_flag
    options = section.get("window_options")
    if isinstance(options, dict):
        values["window_options"] = {key: value for key, value in options.items() if isinstance(key, str)}

    values.update(overrides)
    return SidePanelConfig(**values)


def save_side_panel_config(panel_config: SidePanelConfig) -> bool:
    """Persist the serializable side-panel fields.

    The window selector is a callable and is never written. Returns False
    when nothing was written.
    """
    config = load_config()
    config[CONFIG_SECTION] = {
        "side": panel_config.side,
        "slot": panel_config.slot,
        "width": panel_config.width,
        "window_options": dict(panel_config.window_options),
        "follow_buffer_file": panel_config.follow_buffer_file,
        "follow_project_switch": panel_config.follow_project_switch,
        "reuse_session": panel_config.reuse_session,
    }
    return save_config(config)
