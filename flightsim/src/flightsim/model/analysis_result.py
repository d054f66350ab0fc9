from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisResult:
    """
    A projected-savings estimate for one flight, produced by the analysis service. All figures are kilograms of CO2
    except `saving_percent`.
    """

    current_total_kg: int
    saving_percent: int
    saving_kg: int
