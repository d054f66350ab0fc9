import json
import math

import pytest

from flightsim.analysis import AnalysisService
from flightsim.api import Server
from flightsim.engine import Engine
from flightsim.icons import icon_for
from flightsim.model.airport import AIRPORTS
from flightsim.model.classification import AircraftClass
from flightsim.model.criteria import FilterCriteria
from flightsim.model.position import Position
from flightsim.store import EntityStore
from flightsim.surface import LineStyle, RenderError

from fakes import make_flight


def _server_with_engine() -> tuple[Server, Engine]:
    server = Server("", 0)
    store = EntityStore(
        [
            make_flight(0x3E8, callsign="BAW100"),
            make_flight(0x3E9, callsign="RCH200", classification=AircraftClass.MIL, operator="RCH"),
        ]
    )
    engine = Engine(store, server, AnalysisService(delay=0))
    server.attach(engine)
    return server, engine


def test_commands_are_batched_in_order():
    server = Server("", 0)
    flight = make_flight()
    marker = server.create_marker(flight.position, icon_for(flight, False))
    server.update_marker_position(marker, Position(-21.0, 50.0))
    server.remove_marker(marker)

    batch = server.drain()
    assert [c["op"] for c in batch] == ["create_marker", "update_marker", "remove_marker"]
    assert all(c["handle"] == marker for c in batch)
    assert server.drain() == []


def test_snapshot_reflects_current_state():
    server = Server("", 0)
    trail = server.create_trail([Position(0, 0)], LineStyle("#fff", 2))
    line = server.create_line([Position(0, 0), Position(1, 1)], LineStyle("#000", 3))
    server.update_trail(trail, [Position(0, 0), Position(0.1, 0.1)])
    server.remove_line(line)

    snapshot = server.snapshot()
    assert len(snapshot) == 1
    assert snapshot[0]["op"] == "create_trail"
    assert snapshot[0]["points"] == [Position(0, 0), Position(0.1, 0.1)]


@pytest.mark.parametrize(
    "position",
    [Position(0, 91), Position(181, 0), Position(math.nan, 0), Position(0, math.inf)],
)
def test_rejects_bad_coordinates(position):
    server = Server("", 0)
    flight = make_flight()
    with pytest.raises(RenderError):
        server.create_marker(position, icon_for(flight, False))
    with pytest.raises(RenderError):
        server.create_line([Position(0, 0), position], LineStyle("#000", 1))
    assert server.snapshot() == []


def test_rejects_unknown_or_mismatched_handles():
    server = Server("", 0)
    trail = server.create_trail([], LineStyle("#fff", 2))
    with pytest.raises(RenderError):
        server.remove_marker(trail)
    with pytest.raises(RenderError):
        server.update_line(999, [])


def test_engine_draws_through_the_server():
    server, engine = _server_with_engine()
    ops = [c["op"] for c in server.drain()]
    assert ops.count("create_marker") == 2
    assert ops.count("create_trail") == 2

    engine.tick()
    ops = [c["op"] for c in server.drain()]
    assert ops.count("update_marker") == 2
    assert "create_marker" not in ops


def test_client_messages_drive_the_engine():
    server, engine = _server_with_engine()

    server.receive(json.dumps({"type": "select", "id": "3E9"}))
    assert str(engine.selected.flight_id) == "3E9"

    server.receive(json.dumps({"type": "filters", "classification": "MIL", "operator": "ALL", "min_altitude": 0}))
    assert [f.callsign for f in engine.visible] == ["RCH200"]

    server.receive(json.dumps({"type": "filters"}))
    server.receive(json.dumps({"type": "search", "text": "baw"}))
    assert [f.callsign for f in engine.visible] == ["BAW100"]

    server.receive(json.dumps({"type": "select", "id": None}))
    assert engine.selected is None


def test_bad_client_messages_are_ignored():
    server, engine = _server_with_engine()
    server.receive("{not json")
    server.receive(json.dumps({"type": "filters", "classification": "UFO"}))
    server.receive('{"type": "filters", "min_altitude": Infinity}')
    server.receive('{"type": "filters", "min_speed": -Infinity}')
    server.receive('{"type": "filters", "min_altitude": NaN}')
    server.receive(json.dumps({"type": "select", "id": 12}))
    server.receive(json.dumps(["select"]))
    assert len(engine.visible) == 2
    assert engine.criteria == FilterCriteria()
    assert engine.selected is None


def test_state_message():
    server, engine = _server_with_engine()
    engine.select_flight("3E8")

    state = json.loads(server.state_message())

    assert state["type"] == "state"
    assert state["visible"] == 2
    assert state["selection_state"] == "SELECTED"
    assert state["selected"]["callsign"] == "BAW100"
    assert state["selected"]["origin"]["iata"] == "LHR"
    assert state["analysis"] is None
    assert state["emitted"].endswith(("KG", "TONS"))


def test_snapshot_message_carries_the_airport_layer():
    server, _ = _server_with_engine()

    message = json.loads(server.snapshot_message())

    assert message["type"] == "snapshot"
    assert [a["iata"] for a in message["airports"]] == [a.iata for a in AIRPORTS]
    assert message["airports"][0] == {"iata": "LHR", "latitude": 51.47, "longitude": -0.4543, "city": "London"}
    assert {c["op"] for c in message["commands"]} == {"create_marker", "create_trail"}
    assert len(message["commands"]) == 4
