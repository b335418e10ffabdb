"""
Reference Tables

In-memory snapshot of the data the engine scores against: beef trim prices
and fat, recipe ratios per format, per-100g nutrient values for the extract
and each trim, and CO2 factors. Built by data_loader or directly by callers.
"""

from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Tuple, TypeAlias

from .config import CL_ORDER_LEAN


class TrimSpec(NamedTuple):
    fat: float    # fat fraction 0..1
    price: float  # price per unit in the country's currency


class RecipeFractions(NamedTuple):
    beef: float
    extract: float
    water: float


TrimTable: TypeAlias = Dict[str, TrimSpec]
RecipeTable: TypeAlias = Dict[str, Dict[str, RecipeFractions]]


@dataclass(frozen=True)
class ReferenceTables:
    trims: TrimTable = field(default_factory=dict)
    recipes: RecipeTable = field(default_factory=dict)
    extract_nutrients: Dict[str, float] = field(default_factory=dict)
    beef_nutrients: Dict[str, Dict[str, float]] = field(default_factory=dict)
    extract_co2: float = 0.0  # kg CO2e per kg
    beef_co2: float = 0.0     # kg CO2e per kg
    trim_order: Tuple[str, ...] = CL_ORDER_LEAN

    def is_empty(self) -> bool:
        """True when no trims or recipes were loaded (e.g. no data for a country)."""
        return not self.trims or not self.recipes

    def recipes_for(self, format_name: str) -> Dict[str, RecipeFractions]:
        return self.recipes.get(format_name, {})

    def recipe_fractions(self, format_name: str, recipe_name: str) -> RecipeFractions:
        """Fractions for a recipe, or all zeros when the recipe is unknown."""
        fractions = self.recipes_for(format_name).get(recipe_name)
        if fractions is None:
            return RecipeFractions(0.0, 0.0, 0.0)
        return RecipeFractions(*fractions)

    def trim_index(self, trim_id: str) -> int:
        """Position of a trim in the lean order, or -1 when absent."""
        try:
            return self.trim_order.index(trim_id)
        except ValueError:
            return -1
