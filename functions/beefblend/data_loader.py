import logging
import os
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from .config import CL_ORDER_LEAN
from .reference_tables import RecipeFractions, ReferenceTables, TrimSpec

logger = logging.getLogger(__name__)

# Ingredient names used by the nutrition and CO2 tables
EXTRACT_INGREDIENT = 'shiitake'
BEEF_INGREDIENT = 'beef'

BEEF_PRICES_COLUMNS = {'trim', 'fat_pct', 'price'}
RECIPES_COLUMNS = {'format', 'recipe', 'beef_pct', 'fable_pct', 'water_pct'}
NUTRITION_COLUMNS = {'ingredient', 'nutrient', 'value'}
CO2_COLUMNS = {'ingredient', 'co2_per_kg'}
SCORING_CONFIG_COLUMNS = {'key', 'value'}

TABLE_FILES = {
    'beef_prices': 'beef_prices.csv',
    'recipes': 'recipes.csv',
    'nutrition': 'nutrition.csv',
    'co2': 'co2.csv',
    'scoring_config': 'scoring_config.csv',
}


def _validate_columns(df: pd.DataFrame, required: Iterable[str], table: str) -> None:
    missing = set(required) - set(df.columns)
    if missing:
        raise ValueError(f"{table} table missing required columns: {sorted(missing)}")


def _filter_country(df: pd.DataFrame, country_code: Optional[str]) -> pd.DataFrame:
    if country_code is None or 'country' not in df.columns:
        return df
    return df[df['country'].astype(str).str.strip().str.upper() == country_code.upper()]


def _numeric(df: pd.DataFrame, columns: Iterable[str], table: str) -> pd.DataFrame:
    """Coerce columns to floats and drop rows that do not parse."""
    df = df.copy()
    columns = list(columns)
    for column in columns:
        df[column] = pd.to_numeric(df[column], errors='coerce')

    bad = df[columns].isna().any(axis=1)
    if bad.any():
        logger.warning(f"{table}: dropping {int(bad.sum())} rows with non-numeric {columns}")
        df = df.loc[~bad]
    return df


def build_trim_table(beef_prices: pd.DataFrame) -> Dict[str, TrimSpec]:
    df = _numeric(beef_prices, ['fat_pct', 'price'], 'beef_prices')
    return {
        str(row.trim): TrimSpec(fat=float(row.fat_pct), price=float(row.price))
        for row in df.itertuples(index=False)
    }


def build_recipe_table(recipes: pd.DataFrame) -> Dict[str, Dict[str, RecipeFractions]]:
    df = _numeric(recipes, ['beef_pct', 'fable_pct', 'water_pct'], 'recipes')
    table: Dict[str, Dict[str, RecipeFractions]] = {}
    for row in df.itertuples(index=False):
        table.setdefault(str(row.format), {})[str(row.recipe)] = RecipeFractions(
            beef=float(row.beef_pct),
            extract=float(row.fable_pct),
            water=float(row.water_pct),
        )
    return table


def build_nutrient_reference(nutrition: pd.DataFrame) -> Tuple[Dict[str, float], Dict[str, Dict[str, float]]]:
    """Split nutrition rows into (extract values, beef values per trim)."""
    df = _numeric(nutrition, ['value'], 'nutrition')
    extract: Dict[str, float] = {}
    beef: Dict[str, Dict[str, float]] = {}
    for row in df.itertuples(index=False):
        ingredient = str(row.ingredient)
        if ingredient == EXTRACT_INGREDIENT:
            extract[str(row.nutrient)] = float(row.value)
        else:
            beef.setdefault(ingredient, {})[str(row.nutrient)] = float(row.value)
    return extract, beef


def build_co2_factors(co2: pd.DataFrame) -> Tuple[float, float]:
    """(extract kg CO2e/kg, beef kg CO2e/kg); missing ingredients are 0."""
    df = _numeric(co2, ['co2_per_kg'], 'co2')
    factors = dict(zip(df['ingredient'].astype(str), df['co2_per_kg']))
    return float(factors.get(EXTRACT_INGREDIENT, 0.0)), float(factors.get(BEEF_INGREDIENT, 0.0))


def load_scoring_overrides(scoring_config: Optional[pd.DataFrame]) -> Dict[str, object]:
    """Raw key/value overrides; parsing and defaults are handled by ScoringConfig."""
    if scoring_config is None or scoring_config.empty:
        return {}
    _validate_columns(scoring_config, SCORING_CONFIG_COLUMNS, 'scoring_config')
    return dict(zip(scoring_config['key'].astype(str), scoring_config['value']))


def load_reference_tables(
    beef_prices: pd.DataFrame,
    recipes: pd.DataFrame,
    nutrition: pd.DataFrame,
    co2: pd.DataFrame,
    country_code: Optional[str] = None,
) -> ReferenceTables:
    """
    Build a ReferenceTables snapshot from the raw data tables.

    Args:
        beef_prices: trim, fat_pct, price
        recipes: format, recipe, beef_pct, fable_pct, water_pct
        nutrition: ingredient, nutrient, value ('shiitake' rows are the extract)
        co2: ingredient, co2_per_kg
        country_code: Keep only rows for this country when a 'country' column exists

    Raises:
        ValueError: If a table is missing required columns
    """
    _validate_columns(beef_prices, BEEF_PRICES_COLUMNS, 'beef_prices')
    _validate_columns(recipes, RECIPES_COLUMNS, 'recipes')
    _validate_columns(nutrition, NUTRITION_COLUMNS, 'nutrition')
    _validate_columns(co2, CO2_COLUMNS, 'co2')

    beef_prices = _filter_country(beef_prices, country_code)
    recipes = _filter_country(recipes, country_code)
    nutrition = _filter_country(nutrition, country_code)
    co2 = _filter_country(co2, country_code)

    extract_nutrients, beef_nutrients = build_nutrient_reference(nutrition)
    extract_co2, beef_co2 = build_co2_factors(co2)

    tables = ReferenceTables(
        trims=build_trim_table(beef_prices),
        recipes=build_recipe_table(recipes),
        extract_nutrients=extract_nutrients,
        beef_nutrients=beef_nutrients,
        extract_co2=extract_co2,
        beef_co2=beef_co2,
        trim_order=CL_ORDER_LEAN,
    )

    if tables.is_empty():
        logger.warning(f"No trims or recipes loaded for country {country_code}")
    else:
        logger.info(f"Loaded {len(tables.trims)} trims and "
                    f"{sum(len(r) for r in tables.recipes.values())} recipes for country {country_code}")
    return tables


def load_tables_from_csv(
    directory: str,
    country_code: Optional[str] = None,
) -> Tuple[ReferenceTables, Dict[str, object]]:
    """
    Load reference tables and scoring overrides from CSV files in a directory.

    scoring_config.csv is optional; every other file in TABLE_FILES is required.

    Returns:
        (tables, scoring overrides)
    """
    frames = {}
    for name, filename in TABLE_FILES.items():
        path = os.path.join(directory, filename)
        if not os.path.exists(path):
            if name == 'scoring_config':
                frames[name] = None
                continue
            raise FileNotFoundError(f"Missing reference table: {path}")
        frames[name] = pd.read_csv(path)

    tables = load_reference_tables(
        frames['beef_prices'],
        frames['recipes'],
        frames['nutrition'],
        frames['co2'],
        country_code=country_code,
    )
    overrides = load_scoring_overrides(frames['scoring_config'])
    return tables, overrides
