import asyncio
from collections.abc import Awaitable, Sequence
import itertools
import json
from typing import Any

import websockets
from websockets.asyncio.server import serve, ServerConnection, Server as WebsocketsServer

from flightsim.analysis import distance_flown_km, emitted_so_far, format_co2
from flightsim.engine import Engine
from flightsim.icons import Icon
from flightsim.log import log
from flightsim.model.airport import AIRPORTS
from flightsim.model.criteria import FilterCriteria
from flightsim.model.json import dumps
from flightsim.model.position import Position
from flightsim.runnable import Runnable
from flightsim.surface import Handle, LineStyle, RenderError, RenderSurface
from flightsim.util import is_finite


class Server(Runnable, RenderSurface):
    """
    The websocket server is the rendering surface the engine draws on. Every create, update and remove call becomes a
    command that is batched and broadcast to all connected map clients, which apply them to their Leaflet maps. The
    server also keeps the current state of every live object, so a client that connects mid-session receives a
    snapshot, along with the airports to draw underneath the traffic, and then follows along with the batches.

    Clients talk back with small JSON messages that drive the engine:

        {"type": "select", "id": "3E8"}         select a flight (null id clears the selection)
        {"type": "filters", "classification": "MIL", "operator": "ALL", "min_altitude": 0, "min_speed": 0}
        {"type": "search", "text": "lhr"}
        {"type": "analyze", "id": "3E8"}
    """

    def __init__(self, listen_host: str, listen_port: int):
        Runnable.__init__(self)
        self._listen_host = listen_host
        self._listen_port = listen_port
        self._server: WebsocketsServer | None = None
        self._clients: list[ServerConnection] = []
        self._engine: Engine | None = None

        self._next_handle = itertools.count(1)
        self._objects: dict[Handle, dict[str, Any]] = {}
        self._outbox: list[dict[str, Any]] = []
        self._outbox_ready = asyncio.Event()

    def attach(self, engine: Engine) -> None:
        self._engine = engine

    def snapshot(self) -> list[dict[str, Any]]:
        """
        Commands that recreate every live object from scratch.
        """
        return [dict(obj) for obj in self._objects.values()]

    def snapshot_message(self) -> str:
        """
        The first message a client receives: the airport layer, which never changes, and the commands that bring its
        map up to date.
        """
        return dumps({"type": "snapshot", "airports": AIRPORTS, "commands": self.snapshot()})

    def drain(self) -> list[dict[str, Any]]:
        """
        Take all commands issued since the last drain.
        """
        batch, self._outbox = self._outbox, []
        self._outbox_ready.clear()
        return batch

    # RenderSurface

    def create_marker(self, position: Position, icon: Icon) -> Handle:
        _check_position(position)
        return self._create("marker", position=position, icon=icon)

    def update_marker_position(self, handle: Handle, position: Position) -> None:
        _check_position(position)
        self._update(handle, "marker", position=position)

    def update_marker_icon(self, handle: Handle, icon: Icon) -> None:
        self._update(handle, "marker", icon=icon)

    def remove_marker(self, handle: Handle) -> None:
        self._remove(handle, "marker")

    def create_trail(self, points: Sequence[Position], style: LineStyle) -> Handle:
        _check_points(points)
        return self._create("trail", points=list(points), style=style)

    def update_trail(self, handle: Handle, points: Sequence[Position]) -> None:
        _check_points(points)
        self._update(handle, "trail", points=list(points))

    def remove_trail(self, handle: Handle) -> None:
        self._remove(handle, "trail")

    def create_line(self, points: Sequence[Position], style: LineStyle) -> Handle:
        _check_points(points)
        return self._create("line", points=list(points), style=style)

    def update_line(self, handle: Handle, points: Sequence[Position]) -> None:
        _check_points(points)
        self._update(handle, "line", points=list(points))

    def remove_line(self, handle: Handle) -> None:
        self._remove(handle, "line")

    # Runnable

    async def setup(self) -> None:
        asyncio.create_task(self._serve())

    async def step(self) -> None:
        # Wait for new commands to arrive, or for one second to pass, whichever comes first.
        try:
            async with asyncio.timeout(1):
                await self._outbox_ready.wait()
        except TimeoutError:
            pass

        batch = self.drain()
        messages = [self.state_message()]
        if batch:
            messages.insert(0, dumps({"type": "batch", "commands": batch}))

        futures: list[Awaitable[None]] = []
        try:
            for ws in self._clients:
                for message in messages:
                    futures.append(ws.send(message))
            await asyncio.gather(*futures)
        except websockets.WebSocketException as exc:
            log(f"websocket exception: {exc}")

    async def teardown(self) -> None:
        if self._server:
            self._server.close()

    def state_message(self) -> str:
        """
        The presentation state map clients use for their panels: the selected flight with its live CO2 figures, the
        latest analysis, and how many flights are on the map.
        """
        state: dict[str, Any] = {"type": "state", "visible": 0, "selected": None, "analysis": None}
        if self._engine is not None:
            state["visible"] = len(self._engine.visible)
            state["selection_state"] = self._engine.selection_state.name
            state["analysis"] = self._engine.analysis
            flight = self._engine.selected
            if flight is not None:
                emitted = emitted_so_far(flight)
                state["selected"] = flight
                state["distance_flown_km"] = round(distance_flown_km(flight))
                state["emitted_kg"] = round(emitted)
                state["emitted"] = format_co2(emitted)
        return dumps(state)

    def receive(self, raw: str | bytes) -> None:
        """
        Apply one message from a map client to the engine. Messages that can't be understood are logged and dropped.
        """
        if self._engine is None:
            return
        try:
            message = json.loads(raw)
        except json.JSONDecodeError as exc:
            log(f"bad client message: {exc}")
            return

        match message:
            case {"type": "select", "id": None | str() as flight_id}:
                self._engine.select_flight(flight_id)
            case {"type": "filters"}:
                try:
                    criteria = FilterCriteria.from_json(message)
                except ValueError as exc:
                    log(f"bad filters: {exc}")
                    return
                self._engine.set_filters(criteria)
            case {"type": "search", "text": str() as text}:
                self._engine.set_search_text(text)
            case {"type": "analyze", "id": str() as flight_id}:
                self._engine.request_analyze(flight_id)
            case _:
                log(f"unrecognized client message: {message!r}")

    def _create(self, kind: str, **fields: Any) -> Handle:
        handle = next(self._next_handle)
        command = {"op": f"create_{kind}", "handle": handle, **fields}
        self._objects[handle] = command
        self._emit(dict(command))
        return handle

    def _update(self, handle: Handle, kind: str, **fields: Any) -> None:
        obj = self._lookup(handle, kind)
        obj.update(fields)
        self._emit({"op": f"update_{kind}", "handle": handle, **fields})

    def _remove(self, handle: Handle, kind: str) -> None:
        self._lookup(handle, kind)
        del self._objects[handle]
        self._emit({"op": f"remove_{kind}", "handle": handle})

    def _lookup(self, handle: Handle, kind: str) -> dict[str, Any]:
        try:
            obj = self._objects[handle]
        except KeyError as exc:
            raise RenderError(f"no such {kind}: {handle}") from exc
        if obj["op"] != f"create_{kind}":
            raise RenderError(f"handle {handle} is not a {kind}")
        return obj

    def _emit(self, command: dict[str, Any]) -> None:
        self._outbox.append(command)
        self._outbox_ready.set()

    async def _serve(self) -> None:
        async with serve(self._handler, self._listen_host, self._listen_port) as server:
            log(f"listening on {self._listen_host}:{self._listen_port}")
            self._server = server
            await server.wait_closed()
        log("stopped listening")

    async def _handler(self, ws: ServerConnection) -> None:
        log(f"{ws.remote_address[0]}:{ws.remote_address[1]}: connection established")
        snapshot = self.snapshot_message()
        self._clients.append(ws)
        try:
            await ws.send(snapshot)
            async for raw in ws:
                self.receive(raw)
        except websockets.ConnectionClosed:
            pass
        finally:
            self._clients.remove(ws)
        log(f"{ws.remote_address[0]}:{ws.remote_address[1]}: connection closed")


def _check_position(position: Position) -> None:
    if not is_finite(position.latitude, position.longitude):
        raise RenderError(f"non-finite coordinate {position}")
    if not -90 <= position.latitude <= 90:
        raise RenderError(f"latitude out of range: {position.latitude}")
    if not -180 <= position.longitude <= 180:
        raise RenderError(f"longitude out of range: {position.longitude}")


def _check_points(points: Sequence[Position]) -> None:
    for point in points:
        _check_position(point)
