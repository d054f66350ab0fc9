class FlightID:
    """
    An opaque identifier for a simulated flight. Identifiers are assigned when the fleet is generated and never change
    for the life of the flight, which makes them suitable keys for relating render objects on the map surface back to
    flights. Their canonical representation is uppercase hexadecimal digits without padding, e.g. "3E8".
    """

    MIN = 0

    def __init__(self, value: str | int) -> None:
        if isinstance(value, str):
            value = int(value, 16)
        if value >= FlightID.MIN:
            self._value = value
        else:
            raise ValueError("initializing value out of range")

    def __eq__(self, other: object) -> bool:
        """
        FlightID has equality with other FlightID objects, integers, and strings of hexadecimal digits.
        """
        if isinstance(other, FlightID):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        if isinstance(other, str):
            try:
                return self._value == int(other, 16)
            except ValueError:
                return False
        return False

    def __hash__(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"FlightID(0x{self._value:x})"

    def __str__(self) -> str:
        return f"{self._value:X}"
