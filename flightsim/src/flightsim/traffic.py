"""
Synthesizes the fleet the simulation starts with. Flights are placed somewhere along the straight line between a random
origin and destination, pointed at the destination, and given speeds and altitudes scattered around their class's
nominal figures. Pass a seeded `random.Random` for a reproducible fleet.
"""

import random
import string

from flightsim.geodesy import flat_heading, interpolate
from flightsim.model.airport import AIRPORTS, Airport
from flightsim.model.classification import AircraftClass
from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID
from flightsim.model.operator import AIRLINE_COUNT, CARGO_CODES, MILITARY_CODES, OPERATORS, PRIVATE, Operator
from flightsim.model.position import Position


FIRST_ID = 1000

MODELS = ("Boeing 737", "Airbus A320", "Boeing 787", "Airbus A350", "Boeing 777")
MILITARY_MODEL = "C-17 Globemaster"

# Cumulative thresholds on a uniform draw in [0, 1); anything at or below the last threshold is commercial.
# fmt:off
_CLASS_THRESHOLDS: tuple[tuple[float, AircraftClass], ...] = (
    (0.95, AircraftClass.MIL),
    (0.90, AircraftClass.CARGO),
    (0.88, AircraftClass.HELI),
    (0.86, AircraftClass.EVTOL),
)
# fmt:on


def generate_world_traffic(count: int, rng: random.Random | None = None) -> list[Flight]:
    rng = rng or random.Random()
    return [_generate_flight(FlightID(FIRST_ID + i), rng) for i in range(count)]


def _pick_class(rng: random.Random) -> AircraftClass:
    draw = rng.random()
    for threshold, classification in _CLASS_THRESHOLDS:
        if draw > threshold:
            return classification
    return AircraftClass.COMM


def _pick_operator(classification: AircraftClass, rng: random.Random) -> Operator:
    match classification:
        case AircraftClass.MIL:
            return next(o for o in OPERATORS if o.code in MILITARY_CODES)
        case AircraftClass.CARGO:
            return next(o for o in OPERATORS if o.code in CARGO_CODES)
        case AircraftClass.HELI | AircraftClass.EVTOL:
            return PRIVATE
        case _:
            return OPERATORS[rng.randrange(AIRLINE_COUNT)]


def _pick_route(rng: random.Random) -> tuple[Airport, Airport]:
    origin = rng.choice(AIRPORTS)
    destination = rng.choice(AIRPORTS)
    while destination.iata == origin.iata:
        destination = rng.choice(AIRPORTS)
    return origin, destination


def _registration(operator: Operator, rng: random.Random) -> str:
    suffix = "".join(rng.choices(string.ascii_uppercase + string.digits, k=5))
    return f"{operator.country or 'N'}-{suffix}"


def _generate_flight(flight_id: FlightID, rng: random.Random) -> Flight:
    classification = _pick_class(rng)
    profile = classification.profile
    operator = _pick_operator(classification, rng)
    origin, destination = _pick_route(rng)

    progress = rng.random()
    position = Position(
        interpolate(origin.longitude, destination.longitude, progress),
        interpolate(origin.latitude, destination.latitude, progress),
    )

    military = classification == AircraftClass.MIL
    heavy = military or classification == AircraftClass.CARGO

    return Flight(
        flight_id=flight_id,
        callsign=f"{operator.code}{rng.randrange(100, 9100)}",
        classification=classification,
        operator=operator,
        model=MILITARY_MODEL if military else rng.choice(MODELS),
        registration=_registration(operator, rng),
        origin=origin,
        destination=destination,
        position=position,
        heading=flat_heading(origin.position, destination.position),
        altitude=profile.base_altitude + rng.randrange(-2000, 2000),
        speed=profile.base_speed + rng.randrange(-30, 30),
        vertical_speed=rng.randrange(-1000, 1000),
        squawk="0000" if military else str(rng.randrange(1000, 8000)),
        co2_factor=1.5 if heavy else 0.8,
    )
