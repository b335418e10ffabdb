"""
Shared fixtures: a small but realistic reference data set (seven trims, two
formats, shiitake extract and beef nutrition) in the raw table shapes the
data loader accepts.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

# Add functions/ to path for imports
functions_root = Path(__file__).parent.parent
if str(functions_root) not in sys.path:
    sys.path.insert(0, str(functions_root))

from beefblend.country import get_country_profile
from beefblend.data_loader import load_reference_tables

UNFORMED = 'Ground Beef / Beef Mince'
FORMED = 'Burger / Meatball'

# (trim, fat fraction, price per kg)
TRIMS = [
    ('60CL Beef Trim', 0.40, 3.00),
    ('65CL Beef Trim', 0.35, 3.50),
    ('70CL Beef Trim', 0.30, 4.00),
    ('75CL Beef Trim', 0.25, 4.50),
    ('80CL Beef Trim', 0.20, 5.00),
    ('85CL Beef Trim', 0.15, 5.50),
    ('90CL Beef Trim', 0.10, 6.00),
]

# (format, recipe, beef, extract, water)
RECIPES = [
    (UNFORMED, '50/50, no water', 0.5, 0.5, 0.0),
    (UNFORMED, '60/40, no water', 0.6, 0.4, 0.0),
    (UNFORMED, '70/30, no water', 0.7, 0.3, 0.0),
    (UNFORMED, '60/20/20 rehydrated', 0.6, 0.2, 0.2),
    (FORMED, '50/50, no water', 0.5, 0.5, 0.0),
    (FORMED, '70/30, no water', 0.7, 0.3, 0.0),
    (FORMED, '60/20/20 rehydrated', 0.6, 0.2, 0.2),
    (FORMED, '80/20, no water', 0.8, 0.2, 0.0),
]

EXTRACT_NUTRITION = {
    'Energy (kJ)': 300.0,
    'Energy (Calories)': 72.0,
    'Total Fat': 1.0,
    'Saturated Fat': 0.2,
    'Carbohydrate': 10.0,
    'Total Sugars': 2.0,
    'Dietary Fiber': 12.0,
    'Protein': 6.0,
    'Salt': 0.05,
    'Vitamin D': 2.0,
}


def beef_nutrition(fat: float) -> dict:
    """Per-100g values of a trim with the given fat fraction."""
    fat_g = fat * 100
    protein_g = 20 - fat * 20
    return {
        'Energy (kJ)': 37 * fat_g + 17 * protein_g,
        'Energy (Calories)': 9 * fat_g + 4 * protein_g,
        'Total Fat': fat_g,
        'Saturated Fat': fat_g * 0.4,
        'Carbohydrate': 0.0,
        'Total Sugars': 0.0,
        'Protein': protein_g,
        'Salt': 0.2,
    }


@pytest.fixture
def beef_prices_df():
    return pd.DataFrame(TRIMS, columns=['trim', 'fat_pct', 'price'])


@pytest.fixture
def recipes_df():
    return pd.DataFrame(RECIPES, columns=['format', 'recipe', 'beef_pct', 'fable_pct', 'water_pct'])


@pytest.fixture
def nutrition_df():
    rows = [('shiitake', nutrient, value) for nutrient, value in EXTRACT_NUTRITION.items()]
    for trim, fat, _ in TRIMS:
        rows.extend((trim, nutrient, value) for nutrient, value in beef_nutrition(fat).items())
    return pd.DataFrame(rows, columns=['ingredient', 'nutrient', 'value'])


@pytest.fixture
def co2_df():
    return pd.DataFrame([('shiitake', 1.5), ('beef', 27.0)], columns=['ingredient', 'co2_per_kg'])


@pytest.fixture
def scoring_config_df():
    return pd.DataFrame([('cost_pad', '1.5'), ('trim_penalty', '0.05')], columns=['key', 'value'])


@pytest.fixture
def tables(beef_prices_df, recipes_df, nutrition_df, co2_df):
    return load_reference_tables(beef_prices_df, recipes_df, nutrition_df, co2_df)


@pytest.fixture
def uk():
    return get_country_profile('UK')


@pytest.fixture
def us():
    return get_country_profile('US')


@pytest.fixture
def eu():
    return get_country_profile('EU')


@pytest.fixture
def tables_dir(tmp_path, beef_prices_df, recipes_df, nutrition_df, co2_df, scoring_config_df):
    """Directory of CSV reference tables."""
    beef_prices_df.to_csv(tmp_path / 'beef_prices.csv', index=False)
    recipes_df.to_csv(tmp_path / 'recipes.csv', index=False)
    nutrition_df.to_csv(tmp_path / 'nutrition.csv', index=False)
    co2_df.to_csv(tmp_path / 'co2.csv', index=False)
    scoring_config_df.to_csv(tmp_path / 'scoring_config.csv', index=False)
    return tmp_path
