"""
Beef blend recommendation engine.

Recommends the beef trim and blend recipe for a shiitake-extract beef blend
given a fat ceiling, product format and priority, and derives the claims and
front-of-pack labels for the winning blend against 100% beef.

Usage:
    from beefblend import BlendScoringEngine, get_country_profile, load_reference_tables

    tables = load_reference_tables(beef_prices_df, recipes_df, nutrition_df, co2_df, 'UK')
    engine = BlendScoringEngine(tables, get_country_profile('UK'))
    recommendation = engine.recommend('Ground Beef / Beef Mince', user_fat=0.2, priority='balance')
"""

from .blend_report import build_blend_report, format_report, nutrition_comparison
from .blend_scoring import BlendRecommendation, BlendScoringEngine, quick_recommend
from .candidates import Candidate, build_candidates, natural_floor_index, resolve_ceiling_index, trim_at_fat
from .claims import (
    meets_high_fiber,
    meets_high_protein,
    meets_source_fiber,
    meets_source_protein,
    nutrition_claims,
)
from .country import (
    COUNTRY_PROFILES,
    CountryProfile,
    EnergyPercentRule,
    GramsRule,
    ProteinRule,
    get_country_profile,
)
from .data_loader import load_reference_tables, load_scoring_overrides, load_tables_from_csv
from .labels import label_for_country
from .normalization import normalize, normalize_padded
from .nutrients import NutrientVector, beef_nutrient_vector, blend_nutrient_vector, interpolate
from .reference_tables import RecipeFractions, ReferenceTables, TrimSpec
from .scoring_config import ScoringConfig

__all__ = [
    # Engine
    'BlendScoringEngine',
    'BlendRecommendation',
    'quick_recommend',
    'Candidate',
    'build_candidates',
    'natural_floor_index',
    'resolve_ceiling_index',
    'trim_at_fat',
    'ScoringConfig',
    'normalize',
    'normalize_padded',

    # Data
    'ReferenceTables',
    'TrimSpec',
    'RecipeFractions',
    'load_reference_tables',
    'load_scoring_overrides',
    'load_tables_from_csv',

    # Countries and claims
    'CountryProfile',
    'COUNTRY_PROFILES',
    'GramsRule',
    'EnergyPercentRule',
    'ProteinRule',
    'get_country_profile',
    'meets_high_fiber',
    'meets_high_protein',
    'meets_source_fiber',
    'meets_source_protein',
    'nutrition_claims',

    # Nutrients, labels and report
    'NutrientVector',
    'interpolate',
    'blend_nutrient_vector',
    'beef_nutrient_vector',
    'label_for_country',
    'build_blend_report',
    'format_report',
    'nutrition_comparison',
]
