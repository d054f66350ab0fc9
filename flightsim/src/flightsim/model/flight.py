from collections import deque
from dataclasses import dataclass, field

from flightsim.model.airport import Airport
from flightsim.model.classification import AircraftClass
from flightsim.model.flight_id import FlightID
from flightsim.model.operator import Operator
from flightsim.model.position import Position


HISTORY_LIMIT = 25
SPEED_OF_SOUND_KT = 661


def _history() -> deque[Position]:
    return deque(maxlen=HISTORY_LIMIT)


@dataclass(eq=False)
class Flight:
    """
    Represents a simulated flight. Flights are generated in bulk when the engine starts and live for the whole session.

    A Flight object's kinematic properties (position, heading, history) change on every simulation tick. Only the
    simulation module writes them; everything else, including the reconciler that draws flights on the map, treats a
    Flight as read-only. `history` holds the most recent positions, oldest first, and never grows beyond
    HISTORY_LIMIT entries.
    """

    # fmt:off
    flight_id:      FlightID
    callsign:       str
    classification: AircraftClass
    operator:       Operator
    model:          str
    registration:   str

    origin:         Airport
    destination:    Airport

    position:       Position
    heading:        float  # degrees clockwise from north, [0, 360)
    altitude:       int    # feet
    speed:          int    # knots over ground
    vertical_speed: int    # feet per minute
    squawk:         str
    co2_factor:     float

    history:        deque[Position] = field(default_factory=_history)
    # fmt:on

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"{self.callsign}: origin and destination are both {self.origin.iata}")
        if self.history.maxlen != HISTORY_LIMIT:
            self.history = deque(self.history, maxlen=HISTORY_LIMIT)

    @property
    def mach(self) -> float:
        return round(self.speed / SPEED_OF_SOUND_KT, 2)
