"""Animated lighting effects driven by a millisecond clock."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import Enum, auto

from .color_utils import hsl_to_rgb
from .led_manager import LEDManager
from .mic_input import MicInput

DEFAULT_AUTO_INTERVAL_MS = 5000


def _millis() -> int:
    return int(time.monotonic() * 1000)


class EffectType(Enum):
    NONE = auto()
    CHASE = auto()
    PULSE = auto()
    STATIC = auto()
    WIPE = auto()
    BOUNCE = auto()
    COLOR_CYCLE = auto()
    COMPLEMENTARY = auto()
    AUDIO_REACTIVE = auto()


_AUTO_NEXT = {
    EffectType.CHASE: EffectType.PULSE,
    EffectType.PULSE: EffectType.STATIC,
    EffectType.STATIC: EffectType.WIPE,
    EffectType.WIPE: EffectType.BOUNCE,
    EffectType.BOUNCE: EffectType.COLOR_CYCLE,
    EffectType.COLOR_CYCLE: EffectType.COMPLEMENTARY,
    EffectType.COMPLEMENTARY: EffectType.AUDIO_REACTIVE,
}


def _wheel(hue: int) -> tuple[int, int, int]:
    region = hue // 43
    remainder = ((hue - region * 43) * 6) & 0xFF
    q = 255 - remainder
    t = remainder
    return {
        0: (255, t, 0),
        1: (q, 255, 0),
        2: (0, 255, t),
        3: (0, q, 255),
        4: (t, 0, 255),
    }.get(region, (255, 0, q))


class FXEngine:
    """Renders the current effect onto an LED strip."""

    def __init__(self, leds: LEDManager, clock: Callable[[], int] | None = None) -> None:
        self._leds = leds
        self._clock = clock or _millis
        self._effect = EffectType.NONE
        self._auto_fx = False
        self._auto_interval = DEFAULT_AUTO_INTERVAL_MS
        self._last_update = 0
        self._last_change = 0
        self._chase_pos = 0
        self._pulse_val = 0
        self._pulse_up = True
        self._wipe_pos = 0
        self._bounce_pos = 0
        self._bounce_forward = True
        self._cycle_hue = 0
        self._comp_hue = 0
        self._mic: MicInput | None = None
        self._runners = {
            EffectType.CHASE: self._run_chase,
            EffectType.PULSE: self._run_pulse,
            EffectType.STATIC: self._run_static,
            EffectType.WIPE: self._run_wipe,
            EffectType.BOUNCE: self._run_bounce,
            EffectType.COLOR_CYCLE: self._run_color_cycle,
            EffectType.COMPLEMENTARY: self._run_complementary,
            EffectType.AUDIO_REACTIVE: self._run_audio_reactive,
        }

    @property
    def effect(self) -> EffectType:
        """The effect currently running."""
        return self._effect

    def attach_mic(self, mic: MicInput) -> None:
        self._mic = mic

    def set_effect(self, effect: EffectType) -> None:
        """Switch effects; switching to NONE turns the strip off."""
        self._effect = effect
        self._last_change = self._clock()
        if effect is EffectType.NONE:
            self._leds.clear()

    def enable_auto_fx(self, enable: bool, interval_ms: int = DEFAULT_AUTO_INTERVAL_MS) -> None:
        """Turn automatic cycling through the effects on or off."""
        self._auto_fx = enable
        self._auto_interval = interval_ms
        self._last_change = self._clock()

    def update(self) -> None:
        """Advance auto cycling and render one step of the current effect if due."""
        if self._auto_fx and self._clock() - self._last_change > self._auto_interval:
            self.set_effect(_AUTO_NEXT.get(self._effect, EffectType.CHASE))
        runner = self._runners.get(self._effect)
        if runner is not None:
            runner()

    def _due(self, interval_ms: int) -> bool:
        now = self._clock()
        if now - self._last_update < interval_ms:
            return False
        self._last_update = now
        return True

    def _fill(self, r: int, g: int, b: int) -> None:
        for i in range(len(self._leds)):
            self._leds.set_pixel(i, r, g, b)

    def _run_chase(self) -> None:
        count = len(self._leds)
        if not self._due(100) or count == 0:
            return
        self._leds.clear()
        self._leds.set_pixel(self._chase_pos % count, 255, 0, 0)
        self._leds.show()
        self._chase_pos = (self._chase_pos + 1) % count

    def _run_pulse(self) -> None:
        if not self._due(30):
            return
        val = self._pulse_val
        self._fill(val, 0, val)
        self._leds.show()
        if self._pulse_up:
            self._pulse_val += 5
            if self._pulse_val >= 250:
                self._pulse_val = 250
                self._pulse_up = False
        else:
            self._pulse_val = self._pulse_val - 5 if self._pulse_val > 5 else 0
            if self._pulse_val == 0:
                self._pulse_up = True

    def _run_static(self) -> None:
        if not self._due(500):
            return
        self._fill(0, 0, 255)
        self._leds.show()

    def _run_wipe(self) -> None:
        if not self._due(50):
            return
        self._leds.set_pixel(self._wipe_pos, 0, 255, 0)
        self._leds.show()
        self._wipe_pos += 1
        if self._wipe_pos >= len(self._leds):
            self._wipe_pos = 0
            self._leds.clear()

    def _run_bounce(self) -> None:
        if not self._due(80):
            return
        self._leds.clear()
        self._leds.set_pixel(self._bounce_pos, 255, 255, 0)
        self._leds.show()
        if self._bounce_forward:
            self._bounce_pos += 1
            if self._bounce_pos >= len(self._leds) - 1:
                self._bounce_forward = False
        else:
            self._bounce_pos -= 1
            if self._bounce_pos <= 0:
                self._bounce_forward = True

    def _run_color_cycle(self) -> None:
        if not self._due(60):
            return
        for i in range(len(self._leds)):
            hue = (self._cycle_hue + i * 5) & 0xFF
            self._leds.set_pixel(i, *_wheel(hue))
        self._leds.show()
        self._cycle_hue = (self._cycle_hue + 1) & 0xFF

    def _run_complementary(self) -> None:
        if not self._due(50):
            return
        count = len(self._leds)
        for i in range(count):
            hue = self._comp_hue if i < count // 2 else (self._comp_hue + 128) & 0xFF
            self._leds.set_pixel(i, *hsl_to_rgb(hue, 255, 127))
        self._leds.show()
        self._comp_hue = (self._comp_hue + 1) & 0xFF

    def _run_audio_reactive(self) -> None:
        if self._mic is None or not self._due(30):
            return
        level = self._mic.read_level()
        brightness = (level * 255 // 4095) & 0xFF
        self._fill(brightness, 0, brightness)
        self._leds.show()