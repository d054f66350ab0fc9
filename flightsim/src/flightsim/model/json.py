"""
Utilities for serializing flightsim data model objects into JSON. Example:

    flight = model.Flight(...)
    model.json.dumps({"selected": flight})

This is equivalent to:

    flight = model.Flight(...)
    json.dumps({"selected": flight}, default=<private serialization function>, allow_nan=False, separators=(",", ":"))

Render objects (icons and line styles) serialize to the form the browser map consumes; icons carry their HTML.
"""

import dataclasses
import json
from typing import Any

from flightsim.icons import Icon, render_html
from flightsim.model.airport import Airport
from flightsim.model.analysis_result import AnalysisResult
from flightsim.model.classification import AircraftClass
from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID
from flightsim.model.operator import Operator
from flightsim.model.position import Position
from flightsim.surface import LineStyle


def _default(obj: Any) -> Any:
    if isinstance(obj, Flight):
        return _flight(obj)
    if isinstance(obj, FlightID):
        return str(obj)
    if isinstance(obj, Position):
        return {"longitude": obj.longitude, "latitude": obj.latitude}
    if isinstance(obj, AircraftClass):
        return obj.value
    if isinstance(obj, Icon):
        return {"html": render_html(obj), "size": obj.box_size, "anchor": obj.anchor, "z_index": obj.z_index}
    if isinstance(obj, LineStyle):
        return {k: v for k, v in dataclasses.asdict(obj).items() if v is not None}
    if isinstance(obj, (Airport, Operator, AnalysisResult)):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__!r} is not JSON serializable")


def _flight(flight: Flight) -> dict[str, Any]:
    return {
        "id": flight.flight_id,
        "callsign": flight.callsign,
        "classification": flight.classification,
        "label": flight.classification.profile.label,
        "operator": flight.operator,
        "model": flight.model,
        "registration": flight.registration,
        "origin": flight.origin,
        "destination": flight.destination,
        "position": flight.position,
        "heading": flight.heading,
        "altitude": flight.altitude,
        "speed": flight.speed,
        "mach": flight.mach,
        "vertical_speed": flight.vertical_speed,
        "squawk": flight.squawk,
    }


def dumps(obj: Any) -> str:
    return json.dumps(obj, default=_default, allow_nan=False, separators=(",", ":"))
