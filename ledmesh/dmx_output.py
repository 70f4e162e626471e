"""Writing DMX frames to a serial stream."""

from __future__ import annotations

from typing import BinaryIO

START_CODE = b"\x00"


class DMXOutput:
    """Sends DMX frames, each prefixed with the null start code, to a byte stream."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self.stream = stream

    def send_frame(self, data: bytes) -> bool:
        """Write one frame; return False when there is no stream to write to."""
        if self.stream is None:
            return False
        self.stream.write(START_CODE)
        self.stream.write(bytes(data))
        self.stream.flush()
        return True