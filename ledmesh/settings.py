"""Controller settings, their JSON form and their persistent store."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any


@dataclass
class ControllerSettings:
    """Everything the controller remembers between restarts."""

    universe: int = 1
    start_channel: int = 1
    led_count: int = 30
    dmx_universe: int = 1
    mode: int = 0
    is_root: bool = False
    extend_network: bool = False
    enable_dmx: bool = True
    ssid: str = ""
    password: str = ""


def _as_uint(bits: int) -> Callable[[Any], int]:
    mask = (1 << bits) - 1

    def convert(value: Any) -> int:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return int(value) & mask
        return 0

    return convert


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, separators=(",", ":"))


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "universe": _as_uint(16),
    "start_channel": _as_uint(16),
    "led_count": _as_uint(16),
    "dmx_universe": _as_uint(16),
    "mode": _as_uint(8),
    "is_root": _as_bool,
    "extend_network": _as_bool,
    "enable_dmx": _as_bool,
    "ssid": _as_str,
    "password": _as_str,
}


def _apply(settings: ControllerSettings, values: Mapping[str, Any]) -> ControllerSettings:
    changes = {
        name: convert(values[name])
        for name, convert in _CONVERTERS.items()
        if name in values
    }
    return replace(settings, **changes)


def settings_to_json(settings: ControllerSettings) -> str:
    """Serialise settings as a compact JSON object."""
    return json.dumps(asdict(settings), separators=(",", ":"))


def settings_from_json(
    text: str | bytes, settings: ControllerSettings | None = None
) -> ControllerSettings:
    """Return ``settings`` updated with the keys present in ``text``.

    Text that is not a JSON object leaves the settings unchanged.
    """
    base = settings if settings is not None else ControllerSettings()
    try:
        values = json.loads(text)
    except (ValueError, TypeError):
        return replace(base)
    if not isinstance(values, dict):
        return replace(base)
    return _apply(base, values)


class SettingsManager:
    """Keeps controller settings in a JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> ControllerSettings:
        """Read the stored settings; missing or unreadable values fall back to defaults."""
        try:
            values = json.loads(self.path.read_text(encoding="utf-8"))
        except (FileNotFoundError, ValueError):
            values = {}
        if not isinstance(values, dict):
            values = {}
        return _apply(ControllerSettings(), values)

    def save(self, settings: ControllerSettings) -> None:
        """Write the settings, replacing the stored file in one step."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(settings_to_json(settings), encoding="utf-8")
        os.replace(tmp, self.path)