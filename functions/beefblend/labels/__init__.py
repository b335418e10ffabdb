"""
Front-of-pack nutrition labels.

Each country that mandates or recommends a label gets one algorithm:
UK traffic light, EU Nutri-Score, AU Health Star Rating.
"""

from typing import Callable, Dict, Optional

from ..nutrients import NutrientVector
from .health_star import HealthStarResult, calculate_health_star, compare_health_star, health_star
from .nutri_score import NutriScoreResult, calculate_nutri_score, compare_nutri_score, nutri_score
from .traffic_light import TrafficLightLabel, compare_traffic_light, traffic_light_colour, traffic_light_label

LabelComparison = Callable[[NutrientVector, NutrientVector], Dict[str, object]]

LABELS_BY_COUNTRY: Dict[str, LabelComparison] = {
    'UK': compare_traffic_light,
    'EU': compare_nutri_score,
    'AU': compare_health_star,
}


def label_for_country(code: str) -> Optional[LabelComparison]:
    """Blend-vs-beef label comparison for a country code, or None if it has no label."""
    return LABELS_BY_COUNTRY.get(code.upper())


__all__ = [
    'HealthStarResult',
    'NutriScoreResult',
    'TrafficLightLabel',
    'LABELS_BY_COUNTRY',
    'calculate_health_star',
    'calculate_nutri_score',
    'compare_health_star',
    'compare_nutri_score',
    'compare_traffic_light',
    'health_star',
    'label_for_country',
    'nutri_score',
    'traffic_light_colour',
    'traffic_light_label',
]
