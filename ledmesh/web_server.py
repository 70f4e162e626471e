"""HTTP and WebSocket console for the controller."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

from aiohttp import WSMsgType, web

from .fx_engine import EffectType, FXEngine
from .scenes import SceneManager
from .settings import ControllerSettings, SettingsManager, settings_from_json, settings_to_json

JSON_TYPE = "application/json"
EMPTY_OBJECT = "{}"
EMPTY_ARRAY = "[]"

DEFAULT_INDEX = """<!DOCTYPE html>
<html>
<head>
    <meta charset='utf-8'>
    <title>LED Mesh Controller</title>
</head>
<body>
    <h1>Web Console Missing</h1>
    <p>Put the web interface, with its index.html, in the static directory.</p>
</body>
</html>
"""

_SCENE_EFFECTS = {
    "CHASE": EffectType.CHASE,
    "PULSE": EffectType.PULSE,
    "AUDIO_REACTIVE": EffectType.AUDIO_REACTIVE,
}


def effect_for_scene(effect_name: str) -> EffectType:
    """Map a scene's effect name to an effect; unknown names mean NONE."""
    return _SCENE_EFFECTS.get(effect_name, EffectType.NONE)


def _as_uint32(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) & 0xFFFFFFFF
    return 0


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _json_response(text: str, status: int = 200) -> web.Response:
    return web.Response(text=text, status=status, content_type=JSON_TYPE)


def _field(document: Any, name: str) -> Any:
    return document.get(name) if isinstance(document, dict) else None


async def _read_json(request: web.Request) -> Any:
    """Parse the request body, raising ValueError when it is not JSON."""
    body = await request.read()
    return json.loads(body)


class WebServer:
    """Serves settings, scenes and playback control over HTTP, and status over /ws."""

    def __init__(
        self,
        settings_mgr: SettingsManager,
        settings: ControllerSettings,
        scenes: SceneManager,
        fx: FXEngine | None = None,
        static_dir: str | os.PathLike[str] | None = None,
        on_restart: Callable[[], None] | None = None,
    ) -> None:
        self.settings_mgr = settings_mgr
        self.settings = settings
        self.scenes = scenes
        self.fx = fx
        self.static_dir = Path(static_dir) if static_dir is not None else None
        self.on_restart = on_restart
        self._clients: set[web.WebSocketResponse] = set()

    def create_app(self) -> web.Application:
        """Build the application with every route registered."""
        app = web.Application()
        app.router.add_get("/settings", self._get_settings)
        app.router.add_post("/settings", self._post_settings)
        app.router.add_get("/scenes", self._get_scenes)
        app.router.add_post("/scenes", self._post_scenes)
        app.router.add_get("/nodes", self._get_nodes)
        app.router.add_get("/status", self._get_status)
        app.router.add_post("/play", self._post_play)
        app.router.add_post("/api/auto", self._post_auto)
        app.router.add_post("/restart", self._post_restart)
        app.router.add_get("/wifi_scan", self._get_wifi_scan)
        app.router.add_get("/ws", self._websocket)
        if self.static_dir is not None and (self.static_dir / "index.html").is_file():
            app.router.add_get("/{path:.*}", self._static)
        else:
            app.router.add_get("/", self._default_index)
        app.on_shutdown.append(self._close_clients)
        return app

    def status_payload(self) -> dict[str, Any]:
        """The status document sent by /status and over the WebSocket."""
        return {"nodes": []}

    async def broadcast_status(self) -> int:
        """Send the status to every connected WebSocket; return how many got it."""
        text = json.dumps(self.status_payload(), separators=(",", ":"))
        sent = 0
        for ws in list(self._clients):
            if ws.closed:
                self._clients.discard(ws)
                continue
            await ws.send_str(text)
            sent += 1
        return sent

    def _update_settings(self, updated: ControllerSettings) -> None:
        for field in fields(updated):
            setattr(self.settings, field.name, getattr(updated, field.name))

    async def _get_settings(self, request: web.Request) -> web.Response:
        return _json_response(settings_to_json(self.settings))

    async def _post_settings(self, request: web.Request) -> web.Response:
        body = await request.read()
        self._update_settings(settings_from_json(body, self.settings))
        self.settings_mgr.save(self.settings)
        return _json_response(settings_to_json(self.settings))

    async def _get_scenes(self, request: web.Request) -> web.Response:
        payload = [asdict(scene) for scene in self.scenes.scenes]
        return _json_response(json.dumps(payload, separators=(",", ":")))

    async def _post_scenes(self, request: web.Request) -> web.Response:
        try:
            document = await _read_json(request)
        except ValueError:
            return _json_response(EMPTY_OBJECT, status=400)
        self.scenes.replace(document if isinstance(document, list) else [])
        self.scenes.save()
        return _json_response(EMPTY_OBJECT)

    async def _get_nodes(self, request: web.Request) -> web.Response:
        return _json_response(EMPTY_ARRAY)

    async def _get_status(self, request: web.Request) -> web.Response:
        return _json_response(json.dumps(self.status_payload(), separators=(",", ":")))

    async def _post_play(self, request: web.Request) -> web.Response:
        try:
            document = await _read_json(request)
        except ValueError:
            return _json_response(EMPTY_OBJECT, status=400)
        scene = self.scenes.find_scene(_as_uint32(_field(document, "id")))
        if scene is None:
            return _json_response(EMPTY_OBJECT, status=404)
        if self.fx is not None:
            self.fx.set_effect(effect_for_scene(scene.effect))
        return _json_response(EMPTY_OBJECT)

    async def _post_auto(self, request: web.Request) -> web.Response:
        try:
            document = await _read_json(request)
        except ValueError:
            return _json_response(EMPTY_OBJECT, status=400)
        enable = _as_bool(_field(document, "enable"))
        speed = _as_uint32(_field(document, "speed"))
        if self.fx is not None:
            self.fx.enable_auto_fx(enable, speed)
        return _json_response(EMPTY_OBJECT)

    async def _post_restart(self, request: web.Request) -> web.StreamResponse:
        response = web.Response(text="restarting", content_type="text/plain")
        await response.prepare(request)
        await response.write_eof()
        if self.on_restart is not None:
            self.on_restart()
        return response

    async def _get_wifi_scan(self, request: web.Request) -> web.Response:
        return _json_response(EMPTY_ARRAY)

    async def _default_index(self, request: web.Request) -> web.Response:
        return web.Response(text=DEFAULT_INDEX, content_type="text/html")

    async def _static(self, request: web.Request) -> web.StreamResponse:
        assert self.static_dir is not None
        root = self.static_dir.resolve()
        relative = request.match_info.get("path", "")
        target = (root / relative).resolve() if relative else root
        if target != root and root not in target.parents:
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)

    async def _websocket(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        self._clients.add(ws)
        try:
            async for message in ws:
                if message.type == WSMsgType.ERROR:
                    break
        finally:
            self._clients.discard(ws)
        return ws

    async def _close_clients(self, app: web.Application) -> None:
        for ws in list(self._clients):
            await ws.close()
        self._clients.clear()