"""
UK Traffic Light Label

FSA 2013 front-of-pack colours for fat, saturates, sugars and salt per 100g,
plus each nutrient's share of the adult reference intake (RI).
"""

from dataclasses import dataclass
from typing import Dict, List

from ..config import ENERGY_RI_KJ, TFL_THRESHOLDS
from ..nutrients import NutrientVector, round_half_up

GREEN = 'green'
AMBER = 'amber'
RED = 'red'

# Decimals shown on the pill
_DECIMALS = {'fat': 1, 'saturates': 1, 'sugars': 1, 'salt': 2}


@dataclass(frozen=True)
class EnergyCell:
    kj: float
    kcal: float
    ri_pct: int


@dataclass(frozen=True)
class NutrientCell:
    key: str
    name: str
    colour: str
    value: float
    formatted: str
    unit: str
    ri_pct: int


@dataclass(frozen=True)
class TrafficLightLabel:
    energy: EnergyCell
    cells: List[NutrientCell]

    def colours(self) -> Dict[str, str]:
        return {cell.key: cell.colour for cell in self.cells}


def traffic_light_colour(value: float, green: float, amber: float) -> str:
    """green at or below the first bound, amber at or below the second, else red."""
    if value <= green:
        return GREEN
    if value <= amber:
        return AMBER
    return RED


def ri_percent(value: float, reference_intake: float) -> int:
    return round_half_up(value / reference_intake * 100)


def traffic_light_label(vector: NutrientVector) -> TrafficLightLabel:
    values = {
        'fat': vector.fat,
        'saturates': vector.saturated_fat,
        'sugars': vector.sugars,
        'salt': vector.salt,
    }

    cells = []
    for key, threshold in TFL_THRESHOLDS.items():
        value = values[key]
        cells.append(NutrientCell(
            key=key,
            name=threshold['name'],
            colour=traffic_light_colour(value, threshold['green'], threshold['amber']),
            value=value,
            formatted=f"{value:.{_DECIMALS[key]}f}",
            unit=threshold['unit'],
            ri_pct=ri_percent(value, threshold['ri']),
        ))

    energy = EnergyCell(
        kj=vector.energy_kj,
        kcal=vector.energy_kcal,
        ri_pct=ri_percent(vector.energy_kj, ENERGY_RI_KJ),
    )
    return TrafficLightLabel(energy=energy, cells=cells)


def compare_traffic_light(blend: NutrientVector, beef: NutrientVector) -> Dict[str, TrafficLightLabel]:
    """Labels for the blend and its 100%-beef reference."""
    return {'blend': traffic_light_label(blend), 'beef': traffic_light_label(beef)}
