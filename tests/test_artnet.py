import socket
import time

import pytest

from ledmesh.artnet import ArtNetReceiver, parse_art_dmx


def art_dmx(universe=0, payload=b"", length=None, opcode=0x5000, ident=b"Art-Net\x00"):
    if length is None:
        length = len(payload)
    return (
        ident
        + opcode.to_bytes(2, "little")
        + (14).to_bytes(2, "big")
        + bytes([7, 1])
        + universe.to_bytes(2, "little")
        + length.to_bytes(2, "big")
        + payload
    )


def test_parse_fields():
    packet = parse_art_dmx(art_dmx(universe=3, payload=b"\x01\x02\x03"))
    assert packet.universe == 3
    assert packet.sequence == 7
    assert packet.physical == 1
    assert packet.protocol_version == 14
    assert packet.data == b"\x01\x02\x03"


def test_parse_clamps_length():
    packet = parse_art_dmx(art_dmx(payload=bytes(600)))
    assert len(packet.data) == 512


def test_parse_uses_length_field():
    packet = parse_art_dmx(art_dmx(payload=b"abcdef", length=2))
    assert packet.data == b"ab"


@pytest.mark.parametrize(
    "datagram",
    [
        b"Art-Net\x00",
        art_dmx(ident=b"Art-Xet\x00"),
        art_dmx(opcode=0x2000),
    ],
)
def test_parse_rejects_bad_datagrams(datagram):
    with pytest.raises(ValueError):
        parse_art_dmx(datagram)


def test_handle_delivers_frame():
    frames = []
    receiver = ArtNetReceiver(1, frames.append)
    packet = receiver.handle_datagram(art_dmx(universe=1, payload=b"\xff\x00"))
    assert frames == [b"\xff\x00"]
    assert packet.universe == 1


def test_handle_filters_universe():
    frames = []
    receiver = ArtNetReceiver(1, frames.append)
    assert receiver.handle_datagram(art_dmx(universe=2, payload=b"\x01")) is None
    assert frames == []


def test_universe_zero_accepts_all():
    frames = []
    receiver = ArtNetReceiver(0, frames.append)
    receiver.handle_datagram(art_dmx(universe=5, payload=b"\x01"))
    receiver.handle_datagram(art_dmx(universe=9, payload=b"\x02"))
    assert frames == [b"\x01", b"\x02"]


def test_handle_ignores_garbage():
    frames = []
    receiver = ArtNetReceiver(0, frames.append)
    assert receiver.handle_datagram(b"hello") is None
    assert frames == []


def test_poll_requires_open():
    with pytest.raises(RuntimeError):
        ArtNetReceiver().poll()


def test_poll_receives_over_udp():
    frames = []
    with ArtNetReceiver(0, frames.append) as receiver:
        port = receiver.open(0)
        assert receiver.poll() is None
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
            sender.sendto(art_dmx(universe=4, payload=b"\x10\x20\x30"), ("127.0.0.1", port))
        packet = None
        for _ in range(200):
            packet = receiver.poll()
            if packet is not None:
                break
            time.sleep(0.01)
    assert packet.universe == 4
    assert frames == [b"\x10\x20\x30"]