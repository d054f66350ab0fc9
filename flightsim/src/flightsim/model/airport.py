from dataclasses import dataclass

from flightsim.model.position import Position


@dataclass(frozen=True)
class Airport:
    """
    An airport used as a flight's origin or destination. Airports are loaded once and shared by reference between
    flights.
    """

    iata: str
    latitude: float
    longitude: float
    city: str

    @property
    def position(self) -> Position:
        return Position(self.longitude, self.latitude)


# fmt:off
AIRPORTS: tuple[Airport, ...] = (
    Airport("LHR",  51.4700,   -0.4543, "London"),
    Airport("JFK",  40.6413,  -73.7781, "New York"),
    Airport("DXB",  25.2532,   55.3657, "Dubai"),
    Airport("HND",  35.5494,  139.7798, "Tokyo"),
    Airport("LAX",  33.9416, -118.4085, "Los Angeles"),
    Airport("CDG",  49.0097,    2.5479, "Paris"),
    Airport("AMS",  52.3105,    4.7683, "Amsterdam"),
    Airport("SIN",   1.3644,  103.9915, "Singapore"),
    Airport("SYD", -33.9399,  151.1753, "Sydney"),
    Airport("FRA",  50.0379,    8.5622, "Frankfurt"),
    Airport("DFW",  32.8998,  -97.0403, "Dallas"),
    Airport("HKG",  22.3080,  113.9185, "Hong Kong"),
    Airport("IST",  41.2753,   28.7519, "Istanbul"),
    Airport("MIA",  25.7959,  -80.2870, "Miami"),
)
# fmt:on
