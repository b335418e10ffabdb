"""
Nutrient Interpolation

Blends per-100g nutrient values of the extract and a beef trim by mass
fraction. Every other module that needs a blended nutrient goes through here.
Missing nutrients resolve to 0.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .config import (
    INTEGER_NUTRIENTS,
    NUTRIENT_ALIASES,
    NUTRIENT_ENERGY_KCAL,
    NUTRIENT_ENERGY_KJ,
    NUTRIENT_FAT,
    NUTRIENT_FIBER,
    NUTRIENT_PROTEIN,
    NUTRIENT_SALT,
    NUTRIENT_SATURATED_FAT,
    NUTRIENT_SODIUM,
    NUTRIENT_SUGARS,
    SODIUM_MG_PER_SALT_G,
)
from .reference_tables import ReferenceTables


@dataclass(frozen=True)
class NutrientVector:
    """Per-100g values consumed by the label algorithms."""
    energy_kj: float = 0.0
    energy_kcal: float = 0.0
    fat: float = 0.0
    saturated_fat: float = 0.0
    sugars: float = 0.0
    salt: float = 0.0
    sodium_mg: float = 0.0
    fiber: float = 0.0
    protein: float = 0.0
    fvnl_pct: float = 0.0


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _lookup(values: Optional[Dict[str, float]], nutrient: str) -> Optional[float]:
    """Return the value for a nutrient or one of its aliases, or None if absent."""
    if not values:
        return None
    for key in [nutrient] + NUTRIENT_ALIASES.get(nutrient, []):
        value = values.get(key)
        if value is not None:
            return float(value)
    return None


def extract_value(tables: ReferenceTables, nutrient: str) -> float:
    return _lookup(tables.extract_nutrients, nutrient) or 0.0


def beef_value(tables: ReferenceTables, trim_id: str, nutrient: str) -> float:
    return _lookup(tables.beef_nutrients.get(trim_id), nutrient) or 0.0


def interpolate(
    nutrient: str,
    extract_fraction: float,
    beef_fraction: float,
    trim_id: str,
    tables: ReferenceTables,
) -> float:
    """Blend the extract and trim value of `nutrient` by mass fraction."""
    return (
        extract_value(tables, nutrient) * extract_fraction
        + beef_value(tables, trim_id, nutrient) * beef_fraction
    )


def blend_nutrient(
    tables: ReferenceTables,
    format_name: str,
    recipe_name: str,
    trim_id: str,
    nutrient: str,
) -> float:
    """Interpolated nutrient value for a recipe of a format using a given trim."""
    fractions = tables.recipe_fractions(format_name, recipe_name)
    return interpolate(nutrient, fractions.extract, fractions.beef, trim_id, tables)


def extract_fat_fraction(tables: ReferenceTables) -> float:
    """Extract fat as a 0..1 fraction (the table stores g per 100g)."""
    return extract_value(tables, NUTRIENT_FAT) / 100


def blended_fat(trim_fat: float, extract_fat: float, beef_fraction: float, extract_fraction: float) -> float:
    return trim_fat * beef_fraction + extract_fat * extract_fraction


def _vector_from_lookup(get, fvnl_pct: float, has_salt: bool, has_sodium: bool) -> NutrientVector:
    salt = get(NUTRIENT_SALT)
    sodium_mg = get(NUTRIENT_SODIUM)

    # Fill whichever of salt / sodium the table does not carry
    if not has_salt and has_sodium:
        salt = sodium_mg / SODIUM_MG_PER_SALT_G
    if not has_sodium and has_salt:
        sodium_mg = salt * SODIUM_MG_PER_SALT_G

    return NutrientVector(
        energy_kj=get(NUTRIENT_ENERGY_KJ),
        energy_kcal=get(NUTRIENT_ENERGY_KCAL),
        fat=get(NUTRIENT_FAT),
        saturated_fat=get(NUTRIENT_SATURATED_FAT),
        sugars=get(NUTRIENT_SUGARS),
        salt=salt,
        sodium_mg=sodium_mg,
        fiber=get(NUTRIENT_FIBER),
        protein=get(NUTRIENT_PROTEIN),
        fvnl_pct=fvnl_pct,
    )


def blend_nutrient_vector(
    tables: ReferenceTables,
    format_name: str,
    recipe_name: str,
    trim_id: str,
) -> NutrientVector:
    """
    Nutrient vector of a blend. The extract fraction doubles as the
    fruit/vegetable/nut/legume percentage.
    """
    fractions = tables.recipe_fractions(format_name, recipe_name)
    beef_row = tables.beef_nutrients.get(trim_id)

    def present(nutrient: str) -> bool:
        return _lookup(tables.extract_nutrients, nutrient) is not None or _lookup(beef_row, nutrient) is not None

    return _vector_from_lookup(
        lambda nutrient: interpolate(nutrient, fractions.extract, fractions.beef, trim_id, tables),
        fvnl_pct=fractions.extract * 100,
        has_salt=present(NUTRIENT_SALT),
        has_sodium=present(NUTRIENT_SODIUM),
    )


def beef_nutrient_vector(tables: ReferenceTables, trim_id: str) -> NutrientVector:
    """Nutrient vector of 100% beef of the given trim."""
    beef_row = tables.beef_nutrients.get(trim_id)
    return _vector_from_lookup(
        lambda nutrient: beef_value(tables, trim_id, nutrient),
        fvnl_pct=0.0,
        has_salt=_lookup(beef_row, NUTRIENT_SALT) is not None,
        has_sodium=_lookup(beef_row, NUTRIENT_SODIUM) is not None,
    )


def beef_trim_name(fat_fraction: float) -> str:
    """Trim id for a fat fraction, e.g. 0.2 -> '80CL Beef Trim'."""
    cl = round_half_up((1 - fat_fraction) * 100)
    return f"{cl}CL Beef Trim"


def format_nutrient(nutrient: str, value: float) -> str:
    """Display string for a nutrient value."""
    if value == 0:
        return '0'
    if nutrient in INTEGER_NUTRIENTS:
        return str(round_half_up(value))
    if value < 1:
        return f"{value:.2f}"
    return f"{value:.1f}"
