"""An in-memory LED strip with a hook for pushing frames out."""

from __future__ import annotations

from collections.abc import Callable

Pixel = tuple[int, int, int]
ShowCallback = Callable[[list[Pixel]], None]

_OFF: Pixel = (0, 0, 0)


class LEDManager:
    """Holds the colour of each LED and hands a frame to ``on_show`` on show()."""

    def __init__(self, count: int, on_show: ShowCallback | None = None) -> None:
        if count < 0:
            raise ValueError("LED count must not be negative")
        self._count = count
        self._pixels: list[Pixel] = [_OFF] * count
        self._on_show = on_show

    def set_pixel(self, idx: int, r: int, g: int, b: int) -> None:
        """Set one LED; indices outside the strip are ignored."""
        if not 0 <= idx < self._count:
            return
        self._pixels[idx] = (r & 0xFF, g & 0xFF, b & 0xFF)

    def show(self) -> None:
        """Push the current frame to the output."""
        if self._on_show is not None:
            self._on_show(list(self._pixels))

    def clear(self) -> None:
        """Turn every LED off and show the result."""
        self._pixels = [_OFF] * self._count
        self.show()

    def __len__(self) -> int:
        return self._count

    def pixels(self) -> list[Pixel]:
        """Return a copy of the current frame."""
        return list(self._pixels)