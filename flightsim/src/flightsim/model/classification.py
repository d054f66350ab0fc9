"""
Aircraft classes. Each class carries a fixed profile (label, map glyph, nominal cruise speed and altitude, emission
rate) that is looked up through the enum member rather than by string key:

    AircraftClass.MIL.profile.base_speed  # 600
    AircraftClass("HELI").restricted      # False
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ClassProfile:
    label: str
    glyph: str
    base_speed: int  # knots
    base_altitude: int  # feet
    co2_rate: float  # kg of CO2 per km flown
    restricted: bool = False


class AircraftClass(Enum):
    COMM = "COMM"
    CARGO = "CARGO"
    MIL = "MIL"
    HELI = "HELI"
    EVTOL = "EVTOL"
    GA = "GA"

    @property
    def profile(self) -> ClassProfile:
        return _PROFILES[self]

    @property
    def restricted(self) -> bool:
        return _PROFILES[self].restricted


# fmt:off
_PROFILES: dict[AircraftClass, ClassProfile] = {
    AircraftClass.COMM:  ClassProfile("Commercial",       "fa-plane",           480, 35000, 12.5),
    AircraftClass.CARGO: ClassProfile("Cargo / Heavy",    "fa-truck-plane",     460, 33000, 16.0),
    AircraftClass.MIL:   ClassProfile("Military / Gov",   "fa-jet-fighter",     600, 40000, 22.0, restricted=True),
    AircraftClass.HELI:  ClassProfile("Helicopter",       "fa-helicopter",      120,  3000,  4.5),
    AircraftClass.EVTOL: ClassProfile("Air Taxi",         "fa-paper-plane",     100,  1500,  0.05),
    AircraftClass.GA:    ClassProfile("General Aviation", "fa-plane-propeller", 140,  8000,  1.2),
}
# fmt:on
