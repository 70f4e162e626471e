"""Receiving ArtDMX frames over UDP."""

from __future__ import annotations

import socket
from collections.abc import Callable
from dataclasses import dataclass

ARTNET_PORT = 6454
ARTNET_ID = b"Art-Net\x00"
OP_DMX = 0x5000
HEADER_SIZE = 18
MAX_DMX_CHANNELS = 512


@dataclass(frozen=True)
class ArtDmxPacket:
    """The fields of one ArtDMX packet."""

    protocol_version: int
    sequence: int
    physical: int
    universe: int
    data: bytes


def parse_art_dmx(data: bytes) -> ArtDmxPacket:
    """Decode an ArtDMX datagram, raising ValueError if it is not one."""
    if len(data) < HEADER_SIZE:
        raise ValueError("datagram shorter than an ArtDMX header")
    if data[:8] != ARTNET_ID:
        raise ValueError("missing Art-Net identifier")
    opcode = int.from_bytes(data[8:10], "little")
    if opcode != OP_DMX:
        raise ValueError(f"not an ArtDMX packet (opcode 0x{opcode:04x})")
    length = min(int.from_bytes(data[16:18], "big"), MAX_DMX_CHANNELS)
    return ArtDmxPacket(
        protocol_version=int.from_bytes(data[10:12], "big"),
        sequence=data[12],
        physical=data[13],
        universe=int.from_bytes(data[14:16], "little"),
        data=bytes(data[HEADER_SIZE:HEADER_SIZE + length]),
    )


class ArtNetReceiver:
    """Listens for ArtDMX packets and passes matching frames to ``on_frame``.

    A universe of 0 accepts every universe.
    """

    def __init__(
        self,
        universe: int = 0,
        on_frame: Callable[[bytes], None] | None = None,
    ) -> None:
        self.universe = universe
        self.on_frame = on_frame
        self._sock: socket.socket | None = None

    def handle_datagram(self, data: bytes) -> ArtDmxPacket | None:
        """Process one datagram; return the packet if it was delivered."""
        try:
            packet = parse_art_dmx(data)
        except ValueError:
            return None
        if self.universe != 0 and self.universe != packet.universe:
            return None
        if self.on_frame is not None:
            self.on_frame(packet.data)
        return packet

    def open(self, port: int = ARTNET_PORT) -> int:
        """Bind a non-blocking UDP socket and return the port it is bound to."""
        self.close()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", port))
            sock.setblocking(False)
        except OSError:
            sock.close()
            raise
        self._sock = sock
        return sock.getsockname()[1]

    def poll(self) -> ArtDmxPacket | None:
        """Handle one waiting datagram, if any."""
        if self._sock is None:
            raise RuntimeError("receiver is not open")
        try:
            data = self._sock.recv(65535)
        except (BlockingIOError, ConnectionResetError):
            return None
        return self.handle_datagram(data)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> ArtNetReceiver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()