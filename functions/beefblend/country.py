"""
Country Profiles

Per-country currency, ingredient prices and nutrition claim thresholds.
A CountryProfile is passed explicitly into every engine, claim and label call.
"""

from dataclasses import dataclass
from typing import Dict, TypeAlias, Union


@dataclass(frozen=True)
class GramsRule:
    """Protein claim met when protein (g per 100g) reaches `grams`."""
    grams: float


@dataclass(frozen=True)
class EnergyPercentRule:
    """Protein claim met when protein supplies at least `percent` of total energy."""
    percent: float


ProteinRule: TypeAlias = Union[GramsRule, EnergyPercentRule]


@dataclass(frozen=True)
class CountryProfile:
    code: str
    name: str
    currency: str
    price_unit: str
    extract_price: float
    water_price: float
    high_fiber: float    # g per 100g
    source_fiber: float  # g per 100g
    high_protein: ProteinRule
    source_protein: ProteinRule
    fiber_spelling: str = 'Fiber'


COUNTRY_PROFILES: Dict[str, CountryProfile] = {
    'United States': CountryProfile(
        code='US',
        name='United States',
        currency='$',
        price_unit='per lb',
        extract_price=4.98,
        water_price=0.001,
        high_fiber=5,
        source_fiber=2.5,
        high_protein=GramsRule(10),
        source_protein=GramsRule(5),
        fiber_spelling='Fiber',
    ),
    # UK Food Standards Agency definitions
    'United Kingdom': CountryProfile(
        code='UK',
        name='United Kingdom',
        currency='£',
        price_unit='per kg',
        extract_price=6.00,
        water_price=0.001,
        high_fiber=6,
        source_fiber=3,
        high_protein=EnergyPercentRule(20),
        source_protein=EnergyPercentRule(10),
        fiber_spelling='Fibre',
    ),
    # EU Regulation 1924/2006
    'Europe': CountryProfile(
        code='EU',
        name='Europe',
        currency='€',
        price_unit='per kg',
        extract_price=6.90,
        water_price=0.001,
        high_fiber=6,
        source_fiber=3,
        high_protein=EnergyPercentRule(20),
        source_protein=EnergyPercentRule(10),
        fiber_spelling='Fibre',
    ),
}


def get_country_profile(country: str) -> CountryProfile:
    """
    Look up a built-in profile by name ('United Kingdom') or code ('UK').

    Raises:
        ValueError: If no built-in profile matches
    """
    if country in COUNTRY_PROFILES:
        return COUNTRY_PROFILES[country]

    code = country.strip().upper()
    for profile in COUNTRY_PROFILES.values():
        if profile.code == code:
            return profile

    raise ValueError(f"Unknown country: {country}. "
                     f"Available: {list(COUNTRY_PROFILES.keys())}")
