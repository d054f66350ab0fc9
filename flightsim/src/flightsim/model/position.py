from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    A location on the surface of Earth in decimal degrees. The simulation treats the map as a flat plate carrée, so no
    datum is implied; latitude and longitude are simply the coordinates the map surface draws at.
    """

    longitude: float
    latitude: float
