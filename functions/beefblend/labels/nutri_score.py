"""
EU Nutri-Score

General-foods algorithm applied to beef blends:
- Negative points (A): energy, sugars, saturated fat, sodium (0-10 each)
- Positive points (C): fibre and protein (0-5 each); fruit/veg/legume points are 0
- Score = A - C, with protein left out when A >= 11 and fruit/veg/legume points < 5
- Letter grade from the score bands in NUTRISCORE_LETTER_GRADE
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from ..config import (
    NUTRISCORE_COMPONENTS,
    NUTRISCORE_FVL_MAX_POINTS,
    NUTRISCORE_LETTER_GRADE,
    NUTRISCORE_PROTEIN_CUTOFF,
    NUTRISCORE_UNFAVOURABLE,
    SODIUM_MG_PER_SALT_G,
)
from ..nutrients import NutrientVector


@dataclass(frozen=True)
class NutriScoreResult:
    score: int
    grade: str
    points_a: int
    points_c: int
    component_points: Dict[str, int]


def _score_from_upper_bounds(value: Optional[float], thresholds: List[tuple], cap_points: Optional[int] = None) -> int:
    """Assign points based on ordered (upper_bound, points) pairs."""
    if value is None or pd.isna(value):
        return 0
    for upper_bound, points in thresholds:
        if value <= upper_bound:
            return points
    return cap_points if cap_points is not None else 0


def _letter_grade_from_config(score: int, letter_cfg: Dict[str, Dict[str, float]]) -> Optional[str]:
    """Map a nutri-score to a letter grade using the letter grade configuration."""
    for grade, bounds in letter_cfg.items():
        lower = bounds.get("min", -np.inf)
        upper = bounds.get("max", np.inf)
        if lower <= score <= upper:
            return grade
    return None


def nutri_score_points(component: str, value: Optional[float]) -> int:
    cfg = NUTRISCORE_COMPONENTS[component]
    return _score_from_upper_bounds(value, cfg["pairs"], cap_points=cfg["cap"])


def calculate_nutri_score(
    energy_kj: float,
    sugars_g: float,
    saturated_fat_g: float,
    salt_g: float,
    fiber_g: float,
    protein_g: float,
) -> NutriScoreResult:
    """Nutri-Score of one product from its per-100g values."""
    values = {
        'energy_kj': energy_kj,
        'sugars_g': sugars_g,
        'saturated_fat_g': saturated_fat_g,
        'sodium_mg': salt_g * SODIUM_MG_PER_SALT_G,
        'fiber_g': fiber_g,
        'protein_g': protein_g,
    }
    component_points = {name: nutri_score_points(name, value) for name, value in values.items()}

    points_a = sum(component_points[name] for name in NUTRISCORE_UNFAVOURABLE)

    # No fruit, vegetable or legume content in a beef blend
    fvl_points = 0
    if points_a < NUTRISCORE_PROTEIN_CUTOFF or fvl_points == NUTRISCORE_FVL_MAX_POINTS:
        points_c = fvl_points + component_points['fiber_g'] + component_points['protein_g']
    else:
        points_c = fvl_points + component_points['fiber_g']

    score = points_a - points_c
    return NutriScoreResult(
        score=score,
        grade=_letter_grade_from_config(score, NUTRISCORE_LETTER_GRADE),
        points_a=points_a,
        points_c=points_c,
        component_points=component_points,
    )


def nutri_score(vector: NutrientVector) -> NutriScoreResult:
    return calculate_nutri_score(
        vector.energy_kj,
        vector.sugars,
        vector.saturated_fat,
        vector.salt,
        vector.fiber,
        vector.protein,
    )


def compare_nutri_score(blend: NutrientVector, beef: NutrientVector) -> Dict[str, NutriScoreResult]:
    """Scores for the blend and its 100%-beef reference."""
    return {'blend': nutri_score(blend), 'beef': nutri_score(beef)}
