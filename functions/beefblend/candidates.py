"""
Candidate Enumeration

Builds every physically valid (recipe, trim) pair for a format and a fat
ceiling. Each trim is bounded on the lean side by the user's ceiling trim and
on the fatty side by the recipe's natural floor: the leanest trim whose
blended fat still sits above the ceiling.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .claims import meets_high_fiber, meets_high_protein
from .config import (
    FORMAT_FORMED,
    FORMED_EXCLUDED_BEEF_FRACTION,
    NUTRIENT_ENERGY_KCAL,
    NUTRIENT_ENERGY_KJ,
    NUTRIENT_FIBER,
    NUTRIENT_PROTEIN,
    NUTRIENT_SATURATED_FAT,
)
from .country import CountryProfile
from .nutrients import blended_fat, extract_fat_fraction, extract_value, interpolate
from .reference_tables import RecipeFractions, ReferenceTables

logger = logging.getLogger(__name__)

# Default ceiling_index: look the ceiling up from user_fat. None means unmatched.
RESOLVE_CEILING = object()


@dataclass(frozen=True)
class Candidate:
    recipe_name: str
    trim_id: str
    beef_fraction: float
    extract_fraction: float
    water_fraction: float
    fiber: float
    protein: float
    energy_kj: float
    calories: float
    saturated_fat: float
    cost: float
    co2: float
    blended_fat: float

    @property
    def extract_plus_water(self) -> float:
        return self.extract_fraction + self.water_fraction


def trim_at_fat(tables: ReferenceTables, fat: float) -> Optional[str]:
    """First trim in the trim table whose fat equals `fat`, or None."""
    for trim_id, spec in tables.trims.items():
        if spec.fat == fat:
            return trim_id
    return None


def resolve_ceiling_index(tables: ReferenceTables, user_fat: float) -> Optional[int]:
    """
    Lean-order index of the first trim whose fat equals the user's ceiling.

    Returns None when no trim matches, or the matching trim is not part of the
    lean order.
    """
    trim_id = trim_at_fat(tables, user_fat)
    if trim_id is None:
        return None
    index = tables.trim_index(trim_id)
    return index if index >= 0 else None


def natural_floor_index(
    tables: ReferenceTables,
    fractions: RecipeFractions,
    user_fat: float,
    extract_fat: Optional[float] = None,
) -> int:
    """
    Fattiest trim a recipe may use.

    The last trim (fattiest to leanest) whose blended fat is strictly above the
    ceiling; if none is, the first trim at or below it; otherwise the last
    index. Trims missing from the trim table are skipped.
    """
    if extract_fat is None:
        extract_fat = extract_fat_fraction(tables)

    floor = None
    for i, trim_id in enumerate(tables.trim_order):
        spec = tables.trims.get(trim_id)
        if spec is None:
            continue
        if blended_fat(spec.fat, extract_fat, fractions.beef, fractions.extract) > user_fat:
            floor = i
    if floor is not None:
        return floor

    for i, trim_id in enumerate(tables.trim_order):
        spec = tables.trims.get(trim_id)
        if spec is None:
            continue
        if blended_fat(spec.fat, extract_fat, fractions.beef, fractions.extract) <= user_fat:
            return i
    return len(tables.trim_order) - 1


def eligible_range(floor_index: int, ceiling_index: Optional[int]) -> range:
    """Inclusive lean-order index range between floor and ceiling."""
    if ceiling_index is None:
        return range(0, floor_index + 1)
    return range(min(floor_index, ceiling_index), max(floor_index, ceiling_index) + 1)


def is_excluded_recipe(format_name: str, fractions: RecipeFractions) -> bool:
    """Formed product takes no rehydrated recipes and no 50/50 ratio."""
    if format_name != FORMAT_FORMED:
        return False
    return fractions.water > 0 or fractions.beef == FORMED_EXCLUDED_BEEF_FRACTION


def build_candidates(
    tables: ReferenceTables,
    country: CountryProfile,
    format_name: str,
    user_fat: float,
    apply_constraints: bool = True,
    must_fiber: bool = False,
    must_protein: bool = False,
    ceiling_index: Union[Optional[int], object] = RESOLVE_CEILING,
) -> List[Candidate]:
    """
    Enumerate the candidates of one format in recipe order, then lean order.

    Args:
        tables: Reference data snapshot
        country: Supplies extract/water prices and claim thresholds
        format_name: Key into the recipe table
        user_fat: Fat ceiling as a 0..1 fraction
        apply_constraints: Whether must_fiber / must_protein filter the pool
        must_fiber: Keep only blends that qualify for "high in fiber"
        must_protein: Keep only blends that qualify for "high in protein"
        ceiling_index: Pre-resolved ceiling (None when unmatched); looked up
            from user_fat when left at RESOLVE_CEILING

    Returns:
        List of Candidate (possibly empty)
    """
    if ceiling_index is RESOLVE_CEILING:
        ceiling_index = resolve_ceiling_index(tables, user_fat)

    extract_fat = extract_fat_fraction(tables)
    extract_fiber = extract_value(tables, NUTRIENT_FIBER)

    out = []
    for recipe_name, raw_fractions in tables.recipes_for(format_name).items():
        fractions = RecipeFractions(*raw_fractions)
        if is_excluded_recipe(format_name, fractions):
            continue

        floor = natural_floor_index(tables, fractions, user_fat, extract_fat)

        for i in eligible_range(floor, ceiling_index):
            trim_id = tables.trim_order[i]
            spec = tables.trims.get(trim_id)
            if spec is None:
                continue

            # Beef carries no fiber
            fiber = extract_fiber * fractions.extract
            protein = interpolate(NUTRIENT_PROTEIN, fractions.extract, fractions.beef, trim_id, tables)
            energy_kj = interpolate(NUTRIENT_ENERGY_KJ, fractions.extract, fractions.beef, trim_id, tables)

            if apply_constraints:
                if must_fiber and not meets_high_fiber(fiber, country):
                    continue
                if must_protein and not meets_high_protein(protein, energy_kj, country):
                    continue

            out.append(Candidate(
                recipe_name=recipe_name,
                trim_id=trim_id,
                beef_fraction=fractions.beef,
                extract_fraction=fractions.extract,
                water_fraction=fractions.water,
                fiber=fiber,
                protein=protein,
                energy_kj=energy_kj,
                calories=interpolate(NUTRIENT_ENERGY_KCAL, fractions.extract, fractions.beef, trim_id, tables),
                saturated_fat=interpolate(NUTRIENT_SATURATED_FAT, fractions.extract, fractions.beef, trim_id, tables),
                cost=(
                    fractions.beef * spec.price
                    + fractions.extract * country.extract_price
                    + fractions.water * country.water_price
                ),
                co2=fractions.beef * tables.beef_co2 + fractions.extract * tables.extract_co2,
                blended_fat=blended_fat(spec.fat, extract_fat, fractions.beef, fractions.extract),
            ))

    logger.debug(f"Built {len(out)} candidates for '{format_name}' "
                 f"(constraints={'on' if apply_constraints else 'off'})")
    return out
