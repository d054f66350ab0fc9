import asyncio
import random

import pytest

from flightsim.analysis import (
    MAX_SAVING_PERCENT,
    MIN_SAVING_PERCENT,
    AnalysisService,
    co2_kg,
    emitted_so_far,
    format_co2,
)
from flightsim.geodesy import distance_km
from flightsim.model.classification import AircraftClass
from flightsim.model.position import Position

from fakes import airport, make_flight


def test_co2_rates_by_class():
    assert co2_kg(100, AircraftClass.COMM) == 1250
    assert co2_kg(100, AircraftClass.MIL) == 2200
    assert co2_kg(100, AircraftClass.EVTOL) == pytest.approx(5)


def test_emitted_so_far_is_zero_at_origin():
    lhr = airport("LHR")
    flight = make_flight(latitude=lhr.latitude, longitude=lhr.longitude)
    assert emitted_so_far(flight) == 0


def test_emitted_so_far_grows_with_distance():
    flight = make_flight(latitude=50.0, longitude=-20.0)
    expected = distance_km(airport("LHR").position, Position(-20.0, 50.0)) * 12.5
    assert emitted_so_far(flight) == pytest.approx(expected)


def test_format_co2():
    assert format_co2(456.4) == "456 KG"
    assert format_co2(999.6) == "1000 KG"
    assert format_co2(1000) == "1.00 TONS"
    assert format_co2(12340) == "12.34 TONS"


def test_analysis_result():
    flight = make_flight()
    service = AnalysisService(delay=0, rng=random.Random(9))

    result = asyncio.run(service.analyze(flight))

    total = distance_km(airport("LHR").position, airport("JFK").position) * 12.5
    assert result.current_total_kg == round(total)
    assert MIN_SAVING_PERCENT <= result.saving_percent <= MAX_SAVING_PERCENT
    assert result.saving_kg == round(total * result.saving_percent / 100)
