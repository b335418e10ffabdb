"""
Scoring Configuration

Every tunable of the scoring engine with its default. Overrides (e.g. rows of
a scoring_config table, keyed the same way) are merged once when the engine
is built. Unknown keys are ignored and unparseable values keep the default.
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple

from .config import (
    BALANCE_RECIPE_BONUS,
    CO2_PAD,
    COST_PAD,
    DEFAULT_PRIORITY,
    NUTRITION_WEIGHTS,
    PRIORITY_BALANCE,
    PRIORITY_COST,
    PRIORITY_NUTRITION,
    PRIORITY_SUSTAINABILITY,
    PRIORITY_WEIGHTS,
    TRIM_PENALTY,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringConfig:
    # Normalisation padding
    cost_pad: float = COST_PAD
    co2_pad: float = CO2_PAD

    # Nutrition composite weights
    nutr_w_fiber: float = NUTRITION_WEIGHTS['fiber']
    nutr_w_protein: float = NUTRITION_WEIGHTS['protein']
    nutr_w_calories: float = NUTRITION_WEIGHTS['calories']
    nutr_w_satfat: float = NUTRITION_WEIGHTS['satfat']

    # Priority weight sets (n = nutrition, c = cost, s = sustainability)
    cost_n: float = PRIORITY_WEIGHTS[PRIORITY_COST][0]
    cost_c: float = PRIORITY_WEIGHTS[PRIORITY_COST][1]
    cost_s: float = PRIORITY_WEIGHTS[PRIORITY_COST][2]
    nutrition_n: float = PRIORITY_WEIGHTS[PRIORITY_NUTRITION][0]
    nutrition_c: float = PRIORITY_WEIGHTS[PRIORITY_NUTRITION][1]
    nutrition_s: float = PRIORITY_WEIGHTS[PRIORITY_NUTRITION][2]
    balance_n: float = PRIORITY_WEIGHTS[PRIORITY_BALANCE][0]
    balance_c: float = PRIORITY_WEIGHTS[PRIORITY_BALANCE][1]
    balance_s: float = PRIORITY_WEIGHTS[PRIORITY_BALANCE][2]
    sustainability_n: float = PRIORITY_WEIGHTS[PRIORITY_SUSTAINABILITY][0]
    sustainability_c: float = PRIORITY_WEIGHTS[PRIORITY_SUSTAINABILITY][1]
    sustainability_s: float = PRIORITY_WEIGHTS[PRIORITY_SUSTAINABILITY][2]

    # Balance-only mechanics
    trim_penalty: float = TRIM_PENALTY
    balance_recipe_bonus: float = BALANCE_RECIPE_BONUS

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None) -> 'ScoringConfig':
        """Build a config from the defaults plus any recognised overrides."""
        if not overrides:
            return cls()

        known = {f.name for f in fields(cls)}
        values = {}
        for key, raw in overrides.items():
            if key not in known:
                logger.debug(f"Ignoring unknown scoring config key '{key}'")
                continue
            try:
                value = float(raw)
            except (TypeError, ValueError):
                logger.warning(f"Scoring config '{key}' has non-numeric value {raw!r}; keeping default")
                continue
            if math.isnan(value):
                logger.warning(f"Scoring config '{key}' is NaN; keeping default")
                continue
            values[key] = value

        return cls(**values)

    def priority_weights(self, priority: str) -> Tuple[float, float, float]:
        """(nutrition, cost, sustainability) weights; unknown priorities use balance."""
        if priority not in PRIORITY_WEIGHTS:
            priority = DEFAULT_PRIORITY
        return (
            getattr(self, f"{priority}_n"),
            getattr(self, f"{priority}_c"),
            getattr(self, f"{priority}_s"),
        )

    @property
    def nutrition_weights(self) -> Tuple[float, float, float, float]:
        """(fiber, protein, calories, saturated fat) composite weights."""
        return (self.nutr_w_fiber, self.nutr_w_protein, self.nutr_w_calories, self.nutr_w_satfat)
