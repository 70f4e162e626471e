"""Named scenes, each selecting a lighting effect, stored as a JSON array."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

_UINT32_MASK = 0xFFFFFFFF


@dataclass
class Scene:
    """A stored scene."""

    id: int
    name: str
    effect: str


def _as_uint32(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) & _UINT32_MASK
    return 0


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, separators=(",", ":"))


def _to_scene(item: Scene | Mapping[str, Any] | Any) -> Scene:
    if isinstance(item, Scene):
        return item
    fields = item if isinstance(item, Mapping) else {}
    return Scene(
        id=_as_uint32(fields.get("id")),
        name=_as_str(fields.get("name")),
        effect=_as_str(fields.get("effect")),
    )


class SceneManager:
    """Holds the scene list and keeps it in a JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._scenes: list[Scene] = []

    @property
    def scenes(self) -> list[Scene]:
        """The current scenes, in order."""
        return self._scenes

    def load(self) -> list[Scene]:
        """Replace the scenes with those in the file; a missing file means none.

        Raises ValueError when the file is not valid JSON.
        """
        self._scenes = []
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return self._scenes
        try:
            document = json.loads(text)
        except ValueError as exc:
            raise ValueError(f"invalid scene file {self.path}: {exc}") from exc
        if isinstance(document, list):
            self.replace(document)
        return self._scenes

    def save(self) -> None:
        """Write the scenes to the file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([asdict(s) for s in self._scenes], separators=(",", ":"))
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, self.path)

    def replace(self, scenes: Iterable[Scene | Mapping[str, Any]]) -> list[Scene]:
        """Set the scenes from Scene objects or mappings with id, name and effect."""
        self._scenes = [_to_scene(item) for item in scenes]
        return self._scenes

    def find_scene(self, scene_id: int) -> Scene | None:
        """Return the first scene with the given id, or None."""
        return next((s for s in self._scenes if s.id == scene_id), None)