"""
The fixed-step kinematic integrator. Every tick moves each flight a short distance along its heading using a flat-plane
approximation: the displacement in degrees is split into latitude and longitude components with the heading measured
clockwise from north, so a heading of 90 moves a flight due east. Flights that would leave the 85-degree band turn
around instead of flying over the pole, and longitude wraps at the antimeridian.
"""

from collections.abc import Callable, Iterable
import math
import time

from flightsim.geodesy import normalize_longitude
from flightsim.log import log
from flightsim.model.flight import Flight
from flightsim.model.position import Position
from flightsim.runnable import Runnable


# Degrees of arc covered per tick by a flight doing 3600 knots.
DISPLACEMENT_SCALE = 0.2
POLAR_LIMIT = 85.0


def advance(flight: Flight) -> None:
    """
    Move a flight forward by one tick and record the new position in its history.
    """
    heading = math.radians(flight.heading)
    distance = (flight.speed / 3600) * DISPLACEMENT_SCALE
    latitude = flight.position.latitude + math.cos(heading) * distance
    longitude = flight.position.longitude + math.sin(heading) * distance

    if latitude > POLAR_LIMIT or latitude < -POLAR_LIMIT:
        flight.heading = (flight.heading + 180) % 360
        latitude = max(-POLAR_LIMIT, min(POLAR_LIMIT, latitude))

    flight.position = Position(normalize_longitude(longitude), latitude)
    flight.history.append(flight.position)


def tick(flights: Iterable[Flight]) -> None:
    for flight in flights:
        advance(flight)


class Ticker(Runnable):
    """
    Calls `on_tick` once every `interval` seconds. Each call runs to completion before the next is scheduled, so ticks
    never overlap. If a tick (or anything else sharing the event loop) runs long enough that one or more deadlines have
    already passed, those ticks are skipped rather than run back to back.
    """

    def __init__(self, interval: float, on_tick: Callable[[], None]):
        super().__init__()
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError("tick interval must be a positive number")
        self._interval = interval
        self._on_tick = on_tick
        self._deadline = 0.0
        self.ticks = 0
        self.skipped = 0

    async def setup(self) -> None:
        self._deadline = time.monotonic() + self._interval

    async def step(self) -> None:
        await self.pause(self._deadline - time.monotonic())
        if not self.is_running():
            return

        self._on_tick()
        self.ticks += 1
        self._deadline += self._interval

        now = time.monotonic()
        if now >= self._deadline:
            missed = int((now - self._deadline) // self._interval) + 1
            self.skipped += missed
            self._deadline += missed * self._interval
            log(f"tick {self.ticks} overran; skipping {missed} tick(s)")
