import json

import pytest

from flightsim.model import json as model_json
from flightsim.model.classification import AircraftClass, ClassProfile
from flightsim.model.criteria import FilterCriteria
from flightsim.model.flight import HISTORY_LIMIT
from flightsim.model.flight_id import FlightID
from flightsim.model.operator import OPERATORS, find_operator, operator_codes
from flightsim.model.position import Position

from fakes import make_flight


def test_flight_id_equality():
    assert FlightID("3e8") == FlightID(1000)
    assert FlightID(1000) == "3E8"
    assert FlightID(1000) == 1000
    assert FlightID(1000) != "zz"
    assert hash(FlightID("3E8")) == hash(FlightID(1000))
    assert str(FlightID(1000)) == "3E8"
    assert int(FlightID("3E8")) == 1000


def test_flight_id_range():
    with pytest.raises(ValueError):
        FlightID(-1)
    with pytest.raises(ValueError):
        FlightID("not hex")


def test_class_profiles():
    assert all(isinstance(c.profile, ClassProfile) for c in AircraftClass)
    assert AircraftClass.MIL.restricted
    assert not any(c.restricted for c in AircraftClass if c is not AircraftClass.MIL)
    assert AircraftClass("HELI").profile.base_speed == 120
    assert AircraftClass.COMM.profile.label == "Commercial"


def test_operator_catalog():
    assert len({o.code for o in OPERATORS}) == len(OPERATORS)
    assert find_operator("ECO").name == "ECO FLY Zero"
    assert find_operator("PVT").name == "Private Ops"
    assert find_operator("XXX") is None
    assert "PVT" in operator_codes()


def test_flight_rejects_same_origin_and_destination():
    with pytest.raises(ValueError):
        make_flight(origin="LHR", destination="LHR")


def test_flight_history_is_bounded():
    flight = make_flight()
    for i in range(HISTORY_LIMIT * 2):
        flight.history.append(Position(i, 0))
    assert len(flight.history) == HISTORY_LIMIT
    assert flight.history[0] == Position(HISTORY_LIMIT, 0)


def test_mach():
    assert make_flight(speed=480).mach == 0.73


def test_criteria_from_json():
    assert FilterCriteria.from_json({}) == FilterCriteria()
    assert FilterCriteria.from_json({"classification": "ALL", "operator": "ALL"}) == FilterCriteria()
    assert FilterCriteria.from_json(
        {"classification": "CARGO", "operator": "FDX", "min_altitude": "10000", "min_speed": 300}
    ) == FilterCriteria(AircraftClass.CARGO, "FDX", 10000, 300)
    with pytest.raises(ValueError):
        FilterCriteria.from_json({"classification": "BALLOON"})
    with pytest.raises(ValueError):
        FilterCriteria.from_json({"min_altitude": "high"})
    with pytest.raises(ValueError):
        FilterCriteria.from_json({"operator": 5})


def test_criteria_domain():
    codes = operator_codes()
    assert FilterCriteria().in_domain(codes)
    assert not FilterCriteria(min_altitude=-1).in_domain(codes)
    assert not FilterCriteria(operator="ZZZ").in_domain(codes)


def test_json_dumps_flight():
    flight = make_flight(0x3E8, callsign="BAW123")
    data = json.loads(model_json.dumps({"selected": flight}))["selected"]
    assert data["id"] == "3E8"
    assert data["classification"] == "COMM"
    assert data["operator"]["code"] == "BAW"
    assert data["position"] == {"longitude": -20.0, "latitude": 50.0}
    assert "history" not in data


def test_json_dumps_refuses_nan():
    with pytest.raises(ValueError):
        model_json.dumps(Position(float("nan"), 0))
