"""
Blend Report

Assembles everything shown to the buyer for a recommendation: blend and
100%-beef prices, CO2 saving, nutrition claims, the nutrient-by-nutrient
comparison against the buyer's original trim, and the country's
front-of-pack label for both.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from .blend_scoring import BlendRecommendation
from .candidates import trim_at_fat
from .claims import nutrition_claims
from .config import (
    ADDED_FIBER_BADGE,
    BADGE_BETTER_RATIO,
    BADGE_NEUTRAL_HIGH_RATIO,
    BADGE_NEUTRAL_LOW_RATIO,
    BADGE_WORSE_RATIO,
    HIGHER_IS_BETTER,
    NUTRIENT_FIBER,
    NUTRIENT_VITAMIN_D,
    NUTRITION_PANELS,
)
from .country import CountryProfile
from .labels import label_for_country
from .nutrients import (
    beef_nutrient_vector,
    beef_value,
    blend_nutrient,
    blend_nutrient_vector,
    format_nutrient,
    round_half_up,
)
from .reference_tables import ReferenceTables

logger = logging.getLogger(__name__)

NUTRITION_COLUMNS = ['nutrient', 'blend', 'beef', 'blend_display', 'beef_display', 'change_pct', 'badge', 'tone']


def user_trim_id(tables: ReferenceTables, user_fat: float, fallback: Optional[str]) -> Optional[str]:
    """Trim the buyer would use alone: the ceiling trim, else `fallback`."""
    trim_id = trim_at_fat(tables, user_fat)
    return fallback if trim_id is None else trim_id


def blend_name(beef_fraction: float, extract_fraction: float, water_fraction: float) -> str:
    """e.g. '60/40' for 60% beef and 40% extract plus water."""
    return f"{round_half_up(beef_fraction * 100)}/{round_half_up((extract_fraction + water_fraction) * 100)}"


def carbon_reduction_pct(blend_co2: float, beef_co2: float) -> Optional[int]:
    if not beef_co2:
        return None
    return round_half_up((1 - blend_co2 / beef_co2) * 100)


def badge_tone(ratio: float, lower_is_better: bool) -> str:
    """Colour band of a blend/beef ratio; higher-is-better ratios are inverted first."""
    if lower_is_better:
        r = ratio
    else:
        r = float('inf') if ratio == 0 else 1 / ratio

    if r <= BADGE_BETTER_RATIO:
        return 'better'
    if r <= BADGE_NEUTRAL_LOW_RATIO:
        return 'slightly better'
    if r <= BADGE_NEUTRAL_HIGH_RATIO:
        return 'neutral'
    if r < BADGE_WORSE_RATIO:
        return 'slightly worse'
    return 'worse'


def change_badge(nutrient: str, blend_100g: float, beef_100g: float) -> Dict[str, Any]:
    """
    Change of the blend against beef, always from per-100g values.

    Returns:
        dict with change_pct (None when beef has none of the nutrient),
        badge text ('▼ 12%', '▲ 5%', '=', 'ADDED FIBER' or '') and tone
    """
    if nutrient in (NUTRIENT_FIBER, 'Dietary Fibre') and beef_100g == 0 and blend_100g > 0:
        return {'change_pct': None, 'badge': ADDED_FIBER_BADGE, 'tone': 'better'}
    if beef_100g <= 0:
        return {'change_pct': None, 'badge': '', 'tone': None}

    ratio = blend_100g / beef_100g
    change_pct = round_half_up((ratio - 1) * 100)
    if change_pct == 0:
        badge = '='
    else:
        badge = f"{'▼' if change_pct < 0 else '▲'} {abs(change_pct)}%"
    return {
        'change_pct': change_pct,
        'badge': badge,
        'tone': badge_tone(ratio, nutrient not in HIGHER_IS_BETTER),
    }


def nutrition_comparison(
    tables: ReferenceTables,
    country: CountryProfile,
    format_name: str,
    recipe_name: str,
    trim_id: str,
    beef_trim_id: str,
    serving_g: Optional[float] = None,
) -> pd.DataFrame:
    """
    Blend vs 100%-beef values for the country's nutrition panel.

    Values are per 100g, or per serving when serving_g is given; the change
    badge is always computed from per-100g values.
    """
    scale = serving_g / 100 if serving_g else 1.0
    nutrients = NUTRITION_PANELS.get(country.code, NUTRITION_PANELS['US'])

    rows: List[Dict[str, Any]] = []
    for nutrient in nutrients:
        blend_100g = blend_nutrient(tables, format_name, recipe_name, trim_id, nutrient)
        beef_100g = beef_value(tables, beef_trim_id, nutrient)
        rows.append({
            'nutrient': nutrient,
            'blend': blend_100g * scale,
            'beef': beef_100g * scale,
            'blend_display': format_nutrient(nutrient, blend_100g * scale),
            'beef_display': format_nutrient(nutrient, beef_100g * scale),
            **change_badge(nutrient, blend_100g, beef_100g),
        })

    return pd.DataFrame(rows, columns=NUTRITION_COLUMNS)


def build_blend_report(
    tables: ReferenceTables,
    country: CountryProfile,
    format_name: str,
    user_fat: float,
    recommendation: BlendRecommendation,
    serving_g: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Consumer-facing summary of a recommendation.

    Claims and labels are always evaluated per 100g; serving_g only scales
    the nutrition comparison.
    """
    recipe_name = recommendation.recipe_name
    recipe_key = recipe_name or ''
    trim_id = recommendation.trim_id
    fractions = tables.recipe_fractions(format_name, recipe_key)
    beef_trim_id = user_trim_id(tables, user_fat, trim_id)

    trim_spec = tables.trims.get(trim_id)
    trim_price = trim_spec.price if trim_spec else 0.0
    beef_spec = tables.trims.get(beef_trim_id)
    beef_price = beef_spec.price if beef_spec else 0.0

    blend_price = (
        fractions.beef * trim_price
        + fractions.extract * country.extract_price
        + fractions.water * country.water_price
    )

    blend_co2 = fractions.extract * tables.extract_co2 + fractions.beef * tables.beef_co2
    beef_co2 = tables.beef_co2

    blend_vector = blend_nutrient_vector(tables, format_name, recipe_key, trim_id)
    beef_vector = beef_nutrient_vector(tables, beef_trim_id)
    vitamin_d = blend_nutrient(tables, format_name, recipe_key, trim_id, NUTRIENT_VITAMIN_D)

    comparison = label_for_country(country.code)
    label = comparison(blend_vector, beef_vector) if comparison else None

    if recommendation.is_degenerate:
        logger.warning(f"Building report for a default blend; '{format_name}' had no scored candidates")

    return {
        'country': country.code,
        'format': format_name,
        'recipe_name': recipe_name,
        'trim_id': trim_id,
        'user_trim_id': beef_trim_id,
        'beef_fraction': fractions.beef,
        'extract_fraction': fractions.extract,
        'water_fraction': fractions.water,
        'blend_name': blend_name(fractions.beef, fractions.extract, fractions.water),
        'currency': country.currency,
        'price_unit': country.price_unit,
        'blend_price': blend_price,
        'beef_price': beef_price,
        'saving': beef_price - blend_price,
        'blend_co2': blend_co2,
        'beef_co2': beef_co2,
        'carbon_reduction_pct': carbon_reduction_pct(blend_co2, beef_co2),
        'claims': nutrition_claims(blend_vector, country, vitamin_d_mcg=vitamin_d),
        'blend_nutrients': blend_vector,
        'nutrition': nutrition_comparison(
            tables, country, format_name, recipe_key, trim_id, beef_trim_id, serving_g,
        ),
        'serving_g': serving_g,
        'label': label,
        'used_fallback': recommendation.used_fallback,
        'is_degenerate': recommendation.is_degenerate,
    }


def format_report(report: Dict[str, Any]) -> str:
    """Plain-text rendering of a report for the command line."""
    cur = report['currency']
    lines = [
        f"Recommended blend: {report['blend_name']} ({report['recipe_name']}) with {report['trim_id']}",
        f"Blend price: {cur}{report['blend_price']:.2f} {report['price_unit']}  "
        f"(100% {report['user_trim_id']}: {cur}{report['beef_price']:.2f})",
    ]
    if report['carbon_reduction_pct'] is not None:
        lines.append(f"Carbon: {report['blend_co2']:.1f} vs {report['beef_co2']:.1f} kg CO2e/kg "
                     f"({report['carbon_reduction_pct']}% lower)")
    if report['claims']:
        lines.append(f"Claims: {', '.join(report['claims'])}")
    if report['used_fallback']:
        lines.append("Note: the requested nutrition claim could not be met by any blend")
    if report['is_degenerate']:
        lines.append("Note: no reference data for this format; showing the default blend")

    per = f"per {report['serving_g']:g}g" if report['serving_g'] else 'per 100g'
    lines.append('')
    lines.append(f"Nutrition ({per}):")
    table = report['nutrition'][['nutrient', 'blend_display', 'beef_display', 'badge']]
    lines.append(table.to_string(index=False, header=['Nutrient', 'Blend', 'Beef', 'Change']))

    label = report['label']
    if label:
        lines.append('')
        lines.append(f"Label: blend {_label_summary(label['blend'])} vs beef {_label_summary(label['beef'])}")
    return '\n'.join(lines)


def _label_summary(result: Any) -> str:
    if hasattr(result, 'grade'):
        return f"Nutri-Score {result.grade} ({result.score})"
    if hasattr(result, 'stars'):
        return f"{result.stars:.1f} stars"
    return ' '.join(f"{cell.name} {cell.colour}" for cell in result.cells)
