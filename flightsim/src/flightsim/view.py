from collections.abc import Iterable

from flightsim.model.criteria import FilterCriteria
from flightsim.model.flight import Flight


def visible(flights: Iterable[Flight], criteria: FilterCriteria, search_text: str = "") -> list[Flight]:
    """
    Return the flights that pass the search and the filters, in their original order.

    A non-blank search matches, case-insensitively, any flight whose callsign, operator name, registration, model, or
    origin or destination IATA code or city contains the trimmed search text. The filters then restrict by aircraft
    class, operator code and minimum altitude.
    """
    query = search_text.strip().upper()
    return [f for f in flights if (not query or _matches(f, query)) and _passes(f, criteria)]


def _matches(flight: Flight, query: str) -> bool:
    fields = (
        flight.callsign,
        flight.operator.name,
        flight.registration,
        flight.model,
        flight.origin.iata,
        flight.origin.city,
        flight.destination.iata,
        flight.destination.city,
    )
    return any(query in field.upper() for field in fields)


def _passes(flight: Flight, criteria: FilterCriteria) -> bool:
    if criteria.classification is not None and flight.classification != criteria.classification:
        return False
    if criteria.operator is not None and flight.operator.code != criteria.operator:
        return False
    return flight.altitude >= criteria.min_altitude
