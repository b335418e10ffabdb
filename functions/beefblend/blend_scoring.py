"""
Blend Scoring Engine

Scores every candidate blend under a priority profile and picks the winner.

Pipeline:
1. Enumerate candidates with the user's hard constraints
2. If a constraint emptied the pool, rebuild without constraints (fallback)
3. Normalise nutrition, cost and CO2 across the pool
4. Weight them by priority; balance adds a trim penalty and a recipe bonus
5. The first candidate with the highest score wins

An empty pool after the fallback yields a degenerate recommendation (first
recipe of the format with the default trim) flagged with is_degenerate.
"""

import logging
from dataclasses import asdict, dataclass
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .candidates import RESOLVE_CEILING, Candidate, build_candidates, resolve_ceiling_index
from .config import (
    BALANCE_BONUS_CENTER,
    BALANCE_BONUS_WIDTH,
    DEFAULT_PRIORITY,
    DEFAULT_TRIM_INDEX,
    PRIORITY_BALANCE,
)
from .country import CountryProfile
from .normalization import normalize, normalize_padded
from .reference_tables import ReferenceTables
from .scoring_config import ScoringConfig

logger = logging.getLogger(__name__)

CANDIDATE_COLUMNS = list(Candidate.__dataclass_fields__)


@dataclass(frozen=True)
class BlendRecommendation:
    recipe_name: Optional[str]
    trim_id: Optional[str]
    used_fallback: bool = False
    is_degenerate: bool = False
    score: Optional[float] = None


def default_trim_id(trim_order) -> Optional[str]:
    """Trim used for a degenerate result; the last trim when the order is short."""
    if len(trim_order) > DEFAULT_TRIM_INDEX:
        return trim_order[DEFAULT_TRIM_INDEX]
    return trim_order[-1] if trim_order else None


def balance_recipe_bonus(extract_plus_water: pd.Series, coefficient: float) -> pd.Series:
    """Gaussian bump centred on a 40% extract-plus-water blend."""
    offset = extract_plus_water - BALANCE_BONUS_CENTER
    return coefficient * np.exp(-(offset ** 2) / (2 * BALANCE_BONUS_WIDTH ** 2))


class BlendScoringEngine:
    """
    Scores (recipe, trim) candidates for one country and reference snapshot.

    The engine holds no state between calls; the scoring config is merged
    once at construction.
    """

    def __init__(
            self,
            tables: ReferenceTables,
            country: CountryProfile,
            scoring_config: Optional[ScoringConfig] = None,
            overrides: Optional[Mapping[str, object]] = None,
    ):
        """
        Args:
            tables: Reference data snapshot (not mutated)
            country: Country profile supplying prices and claim thresholds
            scoring_config: Pre-built config; takes priority over overrides
            overrides: Raw key/value tunables merged onto the defaults
        """
        self.tables = tables
        self.country = country
        self.config = scoring_config or ScoringConfig.from_overrides(overrides)

    def ceiling_index(self, user_fat: float) -> Optional[int]:
        index = resolve_ceiling_index(self.tables, user_fat)
        if index is None:
            logger.warning(f"No trim matches fat ceiling {user_fat}; "
                           f"considering every trim up to each recipe's floor")
        return index

    def build_candidates(
            self,
            format_name: str,
            user_fat: float,
            apply_constraints: bool = True,
            must_fiber: bool = False,
            must_protein: bool = False,
            ceiling_index: Union[Optional[int], object] = RESOLVE_CEILING,
    ) -> List[Candidate]:
        return build_candidates(
            self.tables,
            self.country,
            format_name,
            user_fat,
            apply_constraints=apply_constraints,
            must_fiber=must_fiber,
            must_protein=must_protein,
            ceiling_index=ceiling_index,
        )

    def candidate_pool(
            self,
            format_name: str,
            user_fat: float,
            must_fiber: bool = False,
            must_protein: bool = False,
            ceiling_index: Union[Optional[int], object] = RESOLVE_CEILING,
    ) -> Tuple[List[Candidate], bool]:
        """
        Constrained pool, or the unconstrained pool when constraints emptied it.

        Returns:
            (candidates, used_fallback)
        """
        if ceiling_index is RESOLVE_CEILING:
            ceiling_index = resolve_ceiling_index(self.tables, user_fat)
        pool = self.build_candidates(format_name, user_fat, True, must_fiber, must_protein, ceiling_index)
        if pool:
            return pool, False

        used_fallback = must_fiber or must_protein
        if used_fallback:
            logger.warning(f"No '{format_name}' blend meets the requested claims "
                           f"(fiber={must_fiber}, protein={must_protein}); scoring without them")
        pool = self.build_candidates(format_name, user_fat, False, ceiling_index=ceiling_index)
        return pool, used_fallback

    def score_candidates(
            self,
            candidates: List[Candidate],
            priority: str = DEFAULT_PRIORITY,
            ceiling_index: Optional[int] = None,
    ) -> pd.DataFrame:
        """
        Score a candidate pool.

        Args:
            candidates: Pool in enumeration order
            priority: cost | nutrition | balance | sustainability (unknown -> balance)
            ceiling_index: Lean-order index of the user's trim, for the balance penalty

        Returns:
            DataFrame with one row per candidate: candidate fields, trim_index,
            normalised components (n_*), nutrition, raw_score, score and rank,
            sorted best-first. Equal scores keep enumeration order.
        """
        if not candidates:
            return pd.DataFrame(columns=CANDIDATE_COLUMNS + [
                'trim_index', 'n_fiber', 'n_protein', 'n_calories', 'n_satfat',
                'nutrition', 'n_cost', 'n_co2', 'raw_score', 'score', 'rank',
            ])

        cfg = self.config
        df = pd.DataFrame([asdict(c) for c in candidates], columns=CANDIDATE_COLUMNS)
        df['trim_index'] = [self.tables.trim_index(t) for t in df['trim_id']]

        # NORMALISE NUTRITION (higher fiber/protein, lower calories/sat fat)
        df['n_fiber'] = normalize(df['fiber'])
        df['n_protein'] = normalize(df['protein'])
        df['n_calories'] = normalize(df['calories'], lower_is_better=True)
        df['n_satfat'] = normalize(df['saturated_fat'], lower_is_better=True)

        w_fiber, w_protein, w_calories, w_satfat = cfg.nutrition_weights
        df['nutrition'] = np.sqrt(
            w_fiber * df['n_fiber']
            + w_protein * df['n_protein']
            + w_calories * df['n_calories']
            + w_satfat * df['n_satfat']
        )

        # PADDED NORMALISATION FOR COST AND CO2
        df['n_cost'] = normalize_padded(df['cost'], lower_is_better=True, pad=cfg.cost_pad)
        df['n_co2'] = normalize_padded(df['co2'], lower_is_better=True, pad=cfg.co2_pad)

        w_n, w_c, w_s = cfg.priority_weights(priority)
        df['raw_score'] = w_n * df['nutrition'] + w_c * df['n_cost'] + w_s * df['n_co2']

        # Unknown priorities borrow the balance weights but not its adjustments
        if priority == PRIORITY_BALANCE:
            if ceiling_index is None:
                steps_leaner = pd.Series(0, index=df.index)
            else:
                steps_leaner = (ceiling_index - df['trim_index']).clip(lower=0)
            penalised = df['raw_score'] * (1 - cfg.trim_penalty * steps_leaner)
            extract_plus_water = df['extract_fraction'] + df['water_fraction']
            df['score'] = penalised + balance_recipe_bonus(extract_plus_water, cfg.balance_recipe_bonus)
        else:
            df['score'] = df['raw_score']

        invalid = df['score'].isna()
        if invalid.any():
            logger.warning(f"{int(invalid.sum())} of {len(df)} candidates scored NaN "
                           f"(check scoring overrides); ranking them last")

        df['rank'] = df['score'].rank(method='first', ascending=False, na_option='bottom').astype(int)
        return df.sort_values('rank').reset_index(drop=True)

    def recommend(
            self,
            format_name: str,
            user_fat: float,
            priority: str = DEFAULT_PRIORITY,
            must_fiber: bool = False,
            must_protein: bool = False,
    ) -> BlendRecommendation:
        """
        Pick the best (recipe, trim) for a format and fat ceiling.

        Returns:
            BlendRecommendation; used_fallback is set when a requested claim
            could not be met, is_degenerate when no candidate existed at all
        """
        ceiling = self.ceiling_index(user_fat)
        pool, used_fallback = self.candidate_pool(format_name, user_fat, must_fiber, must_protein, ceiling)

        if not pool:
            recipes = list(self.tables.recipes_for(format_name))
            trim_id = default_trim_id(self.tables.trim_order)
            logger.warning(f"No candidates for '{format_name}' at fat {user_fat}; "
                           f"reference data may be missing. Returning default blend")
            return BlendRecommendation(
                recipe_name=recipes[0] if recipes else None,
                trim_id=trim_id,
                used_fallback=False,
                is_degenerate=True,
            )

        scored = self.score_candidates(pool, priority, ceiling)
        best = scored.iloc[0]
        logger.info(f"Scored {len(scored)} candidates for '{format_name}' ({priority}); "
                    f"winner {best['recipe_name']} with {best['trim_id']} ({best['score']:.4f})")

        return BlendRecommendation(
            recipe_name=best['recipe_name'],
            trim_id=best['trim_id'],
            used_fallback=used_fallback,
            is_degenerate=False,
            score=float(best['score']),
        )

    def ranking(
            self,
            format_name: str,
            user_fat: float,
            priority: str = DEFAULT_PRIORITY,
            must_fiber: bool = False,
            must_protein: bool = False,
    ) -> pd.DataFrame:
        """Scored pool recommend() would choose from, best-first."""
        ceiling = self.ceiling_index(user_fat)
        pool, _ = self.candidate_pool(format_name, user_fat, must_fiber, must_protein, ceiling)
        return self.score_candidates(pool, priority, ceiling)


def quick_recommend(
        tables: ReferenceTables,
        country: CountryProfile,
        format_name: str,
        user_fat: float,
        priority: str = DEFAULT_PRIORITY,
        must_fiber: bool = False,
        must_protein: bool = False,
        overrides: Optional[Mapping[str, object]] = None,
) -> BlendRecommendation:
    # One-shot helper: builds a throwaway engine and returns its recommendation
    engine = BlendScoringEngine(tables, country, overrides=overrides)
    return engine.recommend(format_name, user_fat, priority, must_fiber, must_protein)
