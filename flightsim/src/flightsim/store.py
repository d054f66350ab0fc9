from collections.abc import Iterable, Iterator

from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID


class EntityStore:
    """
    The fleet: every flight in the session, keyed by identifier, in the order the flights were added. The fleet's size
    is fixed once the store is built. The store hands out the Flight objects themselves; the simulation updates them in
    place on each tick.
    """

    def __init__(self, flights: Iterable[Flight]):
        self._flights: dict[FlightID, Flight] = {}
        for flight in flights:
            if flight.flight_id in self._flights:
                raise ValueError(f"duplicate flight identifier {flight.flight_id}")
            self._flights[flight.flight_id] = flight

    def __len__(self) -> int:
        return len(self._flights)

    def __iter__(self) -> Iterator[Flight]:
        return iter(self._flights.values())

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._flights

    def get(self, flight_id: FlightID | str | None) -> Flight | None:
        if flight_id is None:
            return None
        if isinstance(flight_id, str):
            try:
                flight_id = FlightID(flight_id)
            except ValueError:
                return None
        return self._flights.get(flight_id)
