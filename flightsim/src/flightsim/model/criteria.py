from dataclasses import dataclass
from typing import Any, Self

from flightsim.model.classification import AircraftClass


ALL = "ALL"


@dataclass(frozen=True)
class FilterCriteria:
    """
    The user's filter settings. A `classification` or `operator` of None means "all". `min_speed` is part of the
    filter panel's state and is reset along with everything else, but it doesn't take part in deciding which flights
    are visible.
    """

    classification: AircraftClass | None = None
    operator: str | None = None
    min_altitude: int = 0
    min_speed: int = 0

    def in_domain(self, operator_codes: set[str]) -> bool:
        """
        Return True if every value is one the filter panel could produce.
        """
        if self.min_altitude < 0 or self.min_speed < 0:
            return False
        return self.operator is None or self.operator in operator_codes

    @classmethod
    def from_json(cls, obj: dict[str, Any]) -> Self:
        """
        Build criteria from a filter message sent by a map client, e.g.

            {"classification": "MIL", "operator": "ALL", "min_altitude": 10000}

        Missing keys take their defaults; "ALL" means no restriction. Raises ValueError if a value has the wrong type or
        names an unknown aircraft class.
        """
        classification = obj.get("classification", ALL)
        operator = obj.get("operator", ALL)
        if not isinstance(classification, str) or not isinstance(operator, str):
            raise ValueError("classification and operator must be strings")
        try:
            min_altitude = int(obj.get("min_altitude", 0))
            min_speed = int(obj.get("min_speed", 0))
        except (TypeError, OverflowError) as exc:
            raise ValueError(f"bad threshold: {exc}") from exc
        return cls(
            classification=None if classification == ALL else AircraftClass(classification),
            operator=None if operator == ALL else operator,
            min_altitude=min_altitude,
            min_speed=min_speed,
        )
