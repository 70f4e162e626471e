"""Ties Art-Net input, DMX output, effects and the web console together."""

from __future__ import annotations

import argparse
import asyncio
import time
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path

from aiohttp import web

from .artnet import ARTNET_PORT, ArtNetReceiver
from .dmx_output import DMXOutput
from .fx_engine import EffectType, FXEngine
from .led_manager import LEDManager
from .mic_input import MicInput
from .scenes import SceneManager
from .settings import ControllerSettings, SettingsManager
from .web_server import WebServer

DMX_TIMEOUT_MS = 2000
PULSE_HOLD_MS = 500
STATUS_INTERVAL_MS = 500
LOOP_DELAY_S = 0.01


def _millis() -> int:
    return int(time.monotonic() * 1000)


class Controller:
    """Routes incoming DMX frames to the strip and falls back to effects when idle."""

    def __init__(
        self,
        settings: ControllerSettings,
        leds: LEDManager,
        fx: FXEngine,
        mic: MicInput | None = None,
        dmx: DMXOutput | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.settings = settings
        self.leds = leds
        self.fx = fx
        self.mic = mic
        self.dmx = dmx
        self._clock = clock or _millis
        self.fx_overridden = False
        self._last_dmx_time = 0
        self._last_pulse = 0
        if mic is not None:
            fx.attach_mic(mic)
        fx.enable_auto_fx(False)
        fx.set_effect(EffectType.AUDIO_REACTIVE)

    def on_dmx_frame(self, data: bytes) -> None:
        """Forward a frame to DMX, paint the strip from it and suspend the effects."""
        if self.settings.enable_dmx and self.dmx is not None:
            self.dmx.send_frame(data)
        start = (self.settings.start_channel - 1) & 0xFFFF
        length = len(data)
        for i in range(len(self.leds)):
            idx = start + i * 3
            if idx + 2 < length:
                self.leds.set_pixel(i, data[idx], data[idx + 1], data[idx + 2])
        self.leds.show()
        self._last_dmx_time = self._clock()
        if not self.fx_overridden:
            self.fx.set_effect(EffectType.NONE)
            self.fx_overridden = True

    def tick(self) -> None:
        """Run one pass of the control loop."""
        if self.fx_overridden and self._clock() - self._last_dmx_time > DMX_TIMEOUT_MS:
            self.fx_overridden = False
            self.fx.set_effect(EffectType.AUDIO_REACTIVE)
        if self.fx_overridden:
            return
        if self.mic is not None and self.mic.detect_beat():
            self.fx.set_effect(EffectType.PULSE)
            self._last_pulse = self._clock()
        elif (
            self.fx.effect is EffectType.PULSE
            and self._clock() - self._last_pulse > PULSE_HOLD_MS
        ):
            self.fx.set_effect(EffectType.AUDIO_REACTIVE)
        self.fx.update()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ledmesh", description="LED mesh lighting controller")
    parser.add_argument("--data-dir", default=".", help="directory holding settings and scenes")
    parser.add_argument("--static-dir", default=None, help="directory of the web console")
    parser.add_argument("--host", default="0.0.0.0", help="address for the web console")
    parser.add_argument("--port", type=int, default=80, help="port for the web console")
    parser.add_argument("--artnet-port", type=int, default=ARTNET_PORT, help="Art-Net UDP port")
    parser.add_argument("--dmx-device", default=None, help="serial device to write DMX frames to")
    return parser.parse_args(argv)


async def _serve(args: argparse.Namespace) -> None:
    data_dir = Path(args.data_dir)
    settings_mgr = SettingsManager(data_dir / "settings.json")
    settings = settings_mgr.load()
    scenes = SceneManager(data_dir / "scenes.json")
    try:
        scenes.load()
    except ValueError:
        pass
    leds = LEDManager(settings.led_count)
    fx = FXEngine(leds)
    mic = MicInput(read_analog=lambda: 0)
    restart = asyncio.Event()

    with ExitStack() as stack:
        stream = stack.enter_context(open(args.dmx_device, "wb")) if args.dmx_device else None
        controller = Controller(settings, leds, fx, mic, DMXOutput(stream))
        receiver = stack.enter_context(
            ArtNetReceiver(settings.dmx_universe, controller.on_dmx_frame)
        )
        receiver.open(args.artnet_port)
        server = WebServer(settings_mgr, settings, scenes, fx, args.static_dir, restart.set)
        runner = web.AppRunner(server.create_app())
        await runner.setup()
        try:
            await web.TCPSite(runner, args.host, args.port).start()
            last_status = _millis()
            while not restart.is_set():
                receiver.poll()
                controller.tick()
                if _millis() - last_status >= STATUS_INTERVAL_MS:
                    last_status = _millis()
                    await server.broadcast_status()
                await asyncio.sleep(LOOP_DELAY_S)
        finally:
            await runner.cleanup()


def main(argv: list[str] | None = None) -> int:
    """Run the controller until interrupted; a restart request starts it afresh."""
    args = _parse_args(argv)
    try:
        while True:
            asyncio.run(_serve(args))
    except KeyboardInterrupt:
        pass
    return 0