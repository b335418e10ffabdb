"""
AU Health Star Rating

FSANZ Nutrient Profiling Scoring Criterion, Category 2 foods. Baseline points
for energy, saturated fat, sugars and sodium minus modifying points for
fruit/veg/nut/legume content, fibre and protein give a net score, which maps
to 0.5-5.0 stars.
"""

from dataclasses import dataclass
from typing import Dict, Sequence

from ..config import (
    HSR_A_ENERGY,
    HSR_A_SATFAT,
    HSR_A_SODIUM,
    HSR_A_SUGARS,
    HSR_C_FIBRE,
    HSR_C_FVNL,
    HSR_C_PROTEIN,
    HSR_FVNL_MAX_POINTS,
    HSR_MIN_STARS,
    HSR_PROTEIN_CUTOFF,
    HSR_STAR_BANDS,
)
from ..nutrients import NutrientVector, round_half_up


@dataclass(frozen=True)
class HealthStarResult:
    net_score: int
    points_a: int
    points_c: int
    stars: float

    @property
    def image_index(self) -> int:
        """Star artwork number, 1-10 (stars x 2)."""
        return round_half_up(self.stars * 2)


def hsr_points(value: float, thresholds: Sequence[float]) -> int:
    """Number of leading thresholds the value strictly exceeds."""
    points = 0
    for i, threshold in enumerate(thresholds):
        if value > threshold:
            points = i + 1
        else:
            break
    return points


def stars_for_net_score(net_score: float) -> float:
    for upper, stars in HSR_STAR_BANDS:
        if net_score <= upper:
            return stars
    return HSR_MIN_STARS


def calculate_health_star(
    energy_kj: float,
    saturated_fat_g: float,
    sugars_g: float,
    sodium_mg: float,
    fiber_g: float,
    protein_g: float,
    fvnl_pct: float,
) -> HealthStarResult:
    points_a = (
        hsr_points(energy_kj, HSR_A_ENERGY)
        + hsr_points(saturated_fat_g, HSR_A_SATFAT)
        + hsr_points(sugars_g, HSR_A_SUGARS)
        + hsr_points(sodium_mg, HSR_A_SODIUM)
    )

    fvnl_points = hsr_points(fvnl_pct, HSR_C_FVNL)
    fibre_points = hsr_points(fiber_g, HSR_C_FIBRE)
    protein_points = hsr_points(protein_g, HSR_C_PROTEIN)

    if points_a >= HSR_PROTEIN_CUTOFF and fvnl_points < HSR_FVNL_MAX_POINTS:
        points_c = fvnl_points + fibre_points
    else:
        points_c = fvnl_points + fibre_points + protein_points

    net_score = points_a - points_c
    return HealthStarResult(
        net_score=net_score,
        points_a=points_a,
        points_c=points_c,
        stars=stars_for_net_score(net_score),
    )


def health_star(vector: NutrientVector) -> HealthStarResult:
    return calculate_health_star(
        vector.energy_kj,
        vector.saturated_fat,
        vector.sugars,
        vector.sodium_mg,
        vector.fiber,
        vector.protein,
        vector.fvnl_pct,
    )


def compare_health_star(blend: NutrientVector, beef: NutrientVector) -> Dict[str, HealthStarResult]:
    """Ratings for the blend and its 100%-beef reference."""
    return {'blend': health_star(blend), 'beef': health_star(beef)}
