# ledmesh

A controller for an LED strip. It runs animated lighting effects, takes
Art-Net (ArtDMX) frames from the network and paints them onto the strip,
forwards those frames to a DMX output stream, keeps a list of named scenes,
and offers a small web console with a JSON API and a WebSocket status feed.

## Install

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Running

    ledmesh

This starts the controller: an Art-Net listener, the effect loop and the web
console. Options:

- `--data-dir DIR` – where `settings.json` and `scenes.json` are kept
  (default: the current directory).
- `--static-dir DIR` – a directory holding the web console. If it contains
  `index.html`, its files are served from `/`; otherwise `/` returns a short
  placeholder page.
- `--host ADDR` – address for the web console (default `0.0.0.0`).
- `--port N` – port for the web console (default `80`).
- `--artnet-port N` – UDP port for Art-Net (default `6454`).
- `--dmx-device PATH` – a file or device to which DMX frames are written.

While Art-Net frames arrive, they drive the strip and the effects pause. When
no frame has come for two seconds, the controller returns to the
audio-reactive effect. A `POST /restart` stops the controller and starts it
again with the settings as stored.

## Web API

- `GET /settings` – the current settings as JSON.
- `POST /settings` – update any of the settings keys given in a JSON object,
  save them, and return the result.
- `GET /scenes` – the scene list as a JSON array of `{"id", "name", "effect"}`.
- `POST /scenes` – replace the scene list and save it; a body that is not JSON
  gets status 400.
- `POST /play` – `{"id": N}` switches to that scene's effect (`CHASE`,
  `PULSE` or `AUDIO_REACTIVE`; any other name turns the effects off). An
  unknown id gets status 404.
- `POST /api/auto` – `{"enable": true, "speed": 5000}` turns automatic effect
  rotation on or off, with the interval in milliseconds.
- `GET /status`, `GET /nodes`, `GET /wifi_scan` – see "Limits" below.
- `POST /restart` – answers `restarting` and restarts the controller.
- `GET /ws` – a WebSocket that receives the status document every half second.

## Modules

- `ledmesh.color_utils` – `hsl_to_rgb` and `complementary_color`, taking
  0–255 hue, saturation and lightness and returning an `RGB` tuple.
- `ledmesh.led_manager` – `LEDManager`, an in-memory strip with `set_pixel`,
  `show`, `clear` and `pixels`; indices outside the strip are ignored, and
  `show` hands a copy of the frame to an optional `on_show` callback.
- `ledmesh.mic_input` – `MicInput`, reading a level from a callable, with
  `read_level` and `detect_beat` (threshold 800 by default, 150 ms hold-off).
- `ledmesh.fx_engine` – `FXEngine` and `EffectType`: chase, pulse, static,
  wipe, bounce, colour cycle, complementary and audio-reactive effects, with
  automatic rotation through them via `enable_auto_fx`.
- `ledmesh.artnet` – `parse_art_dmx`, which decodes an ArtDMX datagram into an
  `ArtDmxPacket` or raises `ValueError`, and `ArtNetReceiver`, a non-blocking
  UDP listener (`open`, `poll`, `close`, usable as a context manager) with an
  optional universe filter; universe 0 accepts all.
- `ledmesh.dmx_output` – `DMXOutput`, writing each frame to a byte stream
  after a null start code.
- `ledmesh.settings` – `ControllerSettings`, `settings_to_json`,
  `settings_from_json` and `SettingsManager`, which stores settings in a JSON
  file.
- `ledmesh.scenes` – `Scene` and `SceneManager`, stored as a JSON array, with
  `load`, `save`, `replace` and `find_scene`.
- `ledmesh.web_server` – `WebServer`, whose `create_app` builds the aiohttp
  application, and `effect_for_scene`.
- `ledmesh.controller` – `Controller`, which routes DMX frames to the strip and
  switches between effects and beats, and `main`, the `ledmesh` command.

## Example

```python
from ledmesh.led_manager import LEDManager
from ledmesh.fx_engine import FXEngine, EffectType

leds = LEDManager(30, on_show=lambda frame: print(frame[:3]))
fx = FXEngine(leds)
fx.set_effect(EffectType.CHASE)
fx.update()
print(leds.pixels()[0])   # (255, 0, 0)
```

## Limits

- No LED hardware is driven. `LEDManager` only holds pixel colours; to light a
  real strip, pass an `on_show` callback that writes the frame out. The
  `ledmesh` command passes none.
- No microphone is read. `MicInput` takes any callable; the `ledmesh` command
  gives it one that always returns 0, so beats are never detected there and
  the audio-reactive effect stays dark.
- `--dmx-device` opens the path for plain binary writing; it does not set up a
  serial line's baud rate, framing or break.
- There is no mesh networking and no Wi-Fi handling: `/nodes` and `/wifi_scan`
  always return an empty array, and `/status` and the WebSocket feed always
  report an empty node list. The `is_root`, `extend_network`, `ssid` and
  `password` settings are stored and served but not acted on.