"""
CO2 figures for the flight panel and the eco-route analysis. Emissions are estimated from distance flown and a fixed
per-class rate; the analysis service adds a simulated savings projection after a short delay, standing in for a remote
route optimizer.
"""

import asyncio
import random

from flightsim.geodesy import distance_km
from flightsim.model.analysis_result import AnalysisResult
from flightsim.model.classification import AircraftClass
from flightsim.model.flight import Flight


MIN_SAVING_PERCENT = 8
MAX_SAVING_PERCENT = 19


def co2_kg(distance: float, classification: AircraftClass) -> float:
    """
    Estimated kilograms of CO2 emitted flying `distance` kilometers.
    """
    return distance * classification.profile.co2_rate


def distance_flown_km(flight: Flight) -> float:
    return distance_km(flight.origin.position, flight.position)


def emitted_so_far(flight: Flight) -> float:
    return co2_kg(distance_flown_km(flight), flight.classification)


def format_co2(kg: float) -> str:
    if kg >= 1000:
        return f"{kg / 1000:.2f} TONS"
    return f"{round(kg)} KG"


class AnalysisService:
    def __init__(self, delay: float = 1.5, rng: random.Random | None = None):
        self._delay = delay
        self._rng = rng or random.Random()

    async def analyze(self, flight: Flight) -> AnalysisResult:
        """
        Project the emissions saving available to `flight` by flying its eco-route. The total is computed from the
        flight's state at the time of the request.
        """
        total = co2_kg(distance_km(flight.origin.position, flight.destination.position), flight.classification)
        await asyncio.sleep(self._delay)
        percent = self._rng.randint(MIN_SAVING_PERCENT, MAX_SAVING_PERCENT)
        return AnalysisResult(
            current_total_kg=round(total),
            saving_percent=percent,
            saving_kg=round(total * percent / 100),
        )
