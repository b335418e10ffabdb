# beefblend/config.py
"""
Blend Engine Configuration

Constants for candidate enumeration, scoring defaults and the front-of-pack
label tables. Tunable scoring weights have their defaults here; overrides are
merged into a ScoringConfig (see scoring_config.py).
"""

# TRIM ORDERING
# -----------------------------------------------------------

# CL grades ordered from fattiest to leanest.
# Higher index = leaner trim = higher CL.
CL_ORDER_LEAN = (
    '60CL Beef Trim', '65CL Beef Trim', '70CL Beef Trim',
    '75CL Beef Trim', '80CL Beef Trim', '85CL Beef Trim', '90CL Beef Trim',
)

# Lean-order index returned when no candidate could be scored (80CL)
DEFAULT_TRIM_INDEX = 4

# FORMATS
# -----------------------------------------------------------

FORMAT_FORMED = 'Burger / Meatball'
FORMAT_UNFORMED = 'Ground Beef / Beef Mince'

# The 50/50 ratio is reserved for unformed product
FORMED_EXCLUDED_BEEF_FRACTION = 0.5

# NUTRIENT NAMES (as they appear in the nutrition table)
# -----------------------------------------------------------

NUTRIENT_ENERGY_KJ = 'Energy (kJ)'
NUTRIENT_ENERGY_KCAL = 'Energy (Calories)'
NUTRIENT_FAT = 'Total Fat'
NUTRIENT_SATURATED_FAT = 'Saturated Fat'
NUTRIENT_SUGARS = 'Total Sugars'
NUTRIENT_SALT = 'Salt'
NUTRIENT_SODIUM = 'Sodium'
NUTRIENT_FIBER = 'Dietary Fiber'
NUTRIENT_PROTEIN = 'Protein'
NUTRIENT_VITAMIN_D = 'Vitamin D'

# Alternative spellings tried in order when the primary key is missing
NUTRIENT_ALIASES = {
    'Dietary Fiber': ['Dietary Fibre'],
    'Dietary Fibre': ['Dietary Fiber'],
}

# Nutrients shown as whole numbers
INTEGER_NUTRIENTS = {NUTRIENT_ENERGY_KCAL, NUTRIENT_ENERGY_KJ, NUTRIENT_SODIUM}

# Sodium (mg) per gram of salt
SODIUM_MG_PER_SALT_G = 400

# CLAIMS
# -----------------------------------------------------------

# kJ per gram of protein, used by energy-percentage protein claims
PROTEIN_KJ_PER_G = 17

# "High in Vitamin D" (mcg per 100g)
HIGH_VITAMIN_D_MCG = 10

# SCORING DEFAULTS
# -----------------------------------------------------------

PRIORITY_COST = 'cost'
PRIORITY_NUTRITION = 'nutrition'
PRIORITY_BALANCE = 'balance'
PRIORITY_SUSTAINABILITY = 'sustainability'
PRIORITIES = (PRIORITY_COST, PRIORITY_NUTRITION, PRIORITY_BALANCE, PRIORITY_SUSTAINABILITY)
DEFAULT_PRIORITY = PRIORITY_BALANCE

# Nutrition composite weights (normalised 0-1 inputs, then sqrt)
NUTRITION_WEIGHTS = {
    'fiber': 0.35,     # higher = better
    'protein': 0.35,   # higher = better
    'calories': 0.20,  # lower = better
    'satfat': 0.10,    # lower = better
}

# Priority weight sets: (nutrition, cost, sustainability)
PRIORITY_WEIGHTS = {
    PRIORITY_COST: (0.00, 1.00, 0.00),
    PRIORITY_NUTRITION: (1.00, 0.15, 0.10),
    PRIORITY_BALANCE: (0.50, 0.50, 0.00),
    PRIORITY_SUSTAINABILITY: (0.15, 0.10, 1.00),
}

# Padding of the min/max window for cost and CO2 normalisation
COST_PAD = 1.5
CO2_PAD = 1.0

# Balance-only mechanics
TRIM_PENALTY = 0.05
BALANCE_RECIPE_BONUS = 0.12
BALANCE_BONUS_CENTER = 0.40
BALANCE_BONUS_WIDTH = 0.10

# UK TRAFFIC LIGHT (FSA 2013, per 100g)
# -----------------------------------------------------------

TFL_THRESHOLDS = {
    'fat': {'green': 3, 'amber': 17.5, 'unit': 'g', 'name': 'Fat', 'ri': 70},
    'saturates': {'green': 1.5, 'amber': 5, 'unit': 'g', 'name': 'Saturates', 'ri': 20},
    'sugars': {'green': 5, 'amber': 22.5, 'unit': 'g', 'name': 'Sugars', 'ri': 90},
    'salt': {'green': 0.3, 'amber': 1.5, 'unit': 'g', 'name': 'Salt', 'ri': 6},
}

# Adult reference intakes for energy
ENERGY_RI_KJ = 8400

# EU NUTRI-SCORE (general foods)
# -----------------------------------------------------------
# Each component is a list of (upper_bound, points) pairs; values above the
# last bound receive the cap.

NUTRISCORE_COMPONENTS = {
    'energy_kj': {
        'pairs': [(335, 0), (670, 1), (1005, 2), (1340, 3), (1675, 4), (2010, 5), (2345, 6), (2680, 7), (3015, 8), (3350, 9)],
        'cap': 10,
    },
    'sugars_g': {
        'pairs': [(4.5, 0), (9, 1), (13.5, 2), (18, 3), (22.5, 4), (27, 5), (31, 6), (36, 7), (40, 8), (45, 9)],
        'cap': 10,
    },
    'saturated_fat_g': {
        'pairs': [(1, 0), (2, 1), (3, 2), (4, 3), (5, 4), (6, 5), (7, 6), (8, 7), (9, 8), (10, 9)],
        'cap': 10,
    },
    'sodium_mg': {
        'pairs': [(90, 0), (180, 1), (270, 2), (360, 3), (450, 4), (540, 5), (630, 6), (720, 7), (810, 8), (900, 9)],
        'cap': 10,
    },
    'fiber_g': {
        'pairs': [(0.9, 0), (1.9, 1), (2.8, 2), (3.7, 3), (4.7, 4)],
        'cap': 5,
    },
    'protein_g': {
        'pairs': [(1.6, 0), (3.2, 1), (4.8, 2), (6.4, 3), (8.0, 4)],
        'cap': 5,
    },
}

NUTRISCORE_UNFAVOURABLE = ['energy_kj', 'sugars_g', 'saturated_fat_g', 'sodium_mg']

# Protein is dropped from the favourable sum at or above this many negative
# points, unless fruit/veg/legume points reach NUTRISCORE_FVL_MAX_POINTS
NUTRISCORE_PROTEIN_CUTOFF = 11
NUTRISCORE_FVL_MAX_POINTS = 5

NUTRISCORE_LETTER_GRADE = {
    'A': {'min': float('-inf'), 'max': -1},
    'B': {'min': 0, 'max': 2},
    'C': {'min': 3, 'max': 10},
    'D': {'min': 11, 'max': 18},
    'E': {'min': 19, 'max': float('inf')},
}

# AU HEALTH STAR RATING (FSANZ NPSC, Category 2 foods)
# -----------------------------------------------------------
# Points = number of leading thresholds the value strictly exceeds.

HSR_A_ENERGY = [335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350, 3685]
HSR_A_SATFAT = [1.01, 2.01, 3.01, 4.01, 5.01, 6.01, 7.01, 8.01, 9.01, 10.01, 11.21, 12.51, 13.91, 15.51, 17.31, 19.31, 21.61, 24.11, 26.91, 30.01]
HSR_A_SUGARS = [5.01, 8.91, 12.81, 16.81, 20.71, 24.61, 28.51, 32.41, 36.31, 40.31, 44.21, 48.11, 52.01, 55.91, 59.81, 63.81, 67.71, 71.61, 75.51, 79.41]
HSR_A_SODIUM = [90, 180, 270, 360, 450, 540, 630, 720, 810, 900, 990, 1080, 1170, 1260, 1350, 1440, 1530, 1620, 1710, 1800]
HSR_C_FVNL = [40, 60, 67, 75, 80, 90, 95, 99.5, 100]
HSR_C_FIBRE = [0.91, 1.91, 2.81, 3.71, 4.71, 5.41, 6.31, 7.31, 8.41, 9.71, 11.21, 13.01, 15.01, 17.31, 20.01]
HSR_C_PROTEIN = [1.61, 3.20, 4.81, 6.41, 8.01, 9.61, 11.61, 13.91, 16.71, 20.01, 24.01, 28.91, 34.71, 41.61, 50.01]

HSR_PROTEIN_CUTOFF = 13
HSR_FVNL_MAX_POINTS = 5

# (upper net score, stars); anything above the last bound gets HSR_MIN_STARS
HSR_STAR_BANDS = [
    (-15, 5.0),
    (-10, 4.5),
    (-5, 4.0),
    (0, 3.5),
    (5, 3.0),
    (10, 2.5),
    (15, 2.0),
    (20, 1.5),
    (25, 1.0),
]
HSR_MIN_STARS = 0.5

# NUTRITION COMPARISON
# -----------------------------------------------------------

# Rows of the blend-vs-beef panel, by country code
NUTRITION_PANELS = {
    'US': [
        'Energy (Calories)', 'Total Fat', 'Saturated Fat', 'Trans Fat', 'Cholesterol',
        'Sodium', 'Total Carbohydrate', 'Dietary Fiber', 'Total Sugars', 'Added Sugars',
        'Protein', 'Vitamin D', 'Calcium', 'Iron', 'Potassium',
    ],
    'UK': [
        'Energy (kJ)', 'Energy (Calories)', 'Total Fat', 'Saturated Fat', 'Carbohydrate',
        'Total Sugars', 'Dietary Fiber', 'Protein', 'Salt',
    ],
    'AU': [
        'Energy (kJ)', 'Protein', 'Total Fat', 'Saturated Fat', 'Carbohydrate',
        'Total Sugars', 'Dietary Fibre', 'Sodium',
    ],
}
NUTRITION_PANELS['EU'] = NUTRITION_PANELS['UK']

# Nutrients where more is better; every other nutrient is lower-is-better
HIGHER_IS_BETTER = {
    'Dietary Fiber', 'Dietary Fibre', 'Protein', 'Vitamin D', 'Calcium', 'Iron', 'Potassium',
}

# US per-serving view (4 oz)
US_SERVING_G = 112

# Blend / beef ratio bands for the change badge, oriented so lower = better
BADGE_BETTER_RATIO = 0.80
BADGE_NEUTRAL_LOW_RATIO = 1.00
BADGE_NEUTRAL_HIGH_RATIO = 1.15
BADGE_WORSE_RATIO = 1.30
ADDED_FIBER_BADGE = 'ADDED FIBER'
