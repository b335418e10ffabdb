"""
Nutrition Claims

Decides whether a nutrient level clears a country's "high in" / "source of"
thresholds. Protein rules are either absolute grams or a share of total energy.
"""

from typing import List, Optional

from .config import HIGH_VITAMIN_D_MCG, PROTEIN_KJ_PER_G
from .country import CountryProfile, EnergyPercentRule, GramsRule, ProteinRule
from .nutrients import NutrientVector


def protein_energy_pct(protein_g: float, energy_kj: Optional[float]) -> Optional[float]:
    """Share of energy supplied by protein, or None when energy is zero or missing."""
    if not energy_kj:
        return None
    return protein_g * PROTEIN_KJ_PER_G / energy_kj * 100


def meets_protein_rule(rule: ProteinRule, protein_g: float, energy_kj: Optional[float]) -> bool:
    if isinstance(rule, EnergyPercentRule):
        pct = protein_energy_pct(protein_g, energy_kj)
        return pct is not None and pct >= rule.percent
    if isinstance(rule, GramsRule):
        return protein_g >= rule.grams
    raise TypeError(f"Unsupported protein rule: {rule!r}")


def meets_high_protein(protein_g: float, energy_kj: Optional[float], country: CountryProfile) -> bool:
    return meets_protein_rule(country.high_protein, protein_g, energy_kj)


def meets_source_protein(protein_g: float, energy_kj: Optional[float], country: CountryProfile) -> bool:
    return meets_protein_rule(country.source_protein, protein_g, energy_kj)


def meets_high_fiber(fiber_g: float, country: CountryProfile) -> bool:
    return fiber_g >= country.high_fiber


def meets_source_fiber(fiber_g: float, country: CountryProfile) -> bool:
    return fiber_g >= country.source_fiber


def nutrition_claims(
    vector: NutrientVector,
    country: CountryProfile,
    vitamin_d_mcg: float = 0.0,
) -> List[str]:
    """
    Claims a blend may carry, strongest first per nutrient.

    A "source of" claim is only listed when the matching "high in" claim is not.
    """
    claims = []
    if meets_high_fiber(vector.fiber, country):
        claims.append(f"High in {country.fiber_spelling}")
    elif meets_source_fiber(vector.fiber, country):
        claims.append(f"Source of {country.fiber_spelling}")

    if meets_high_protein(vector.protein, vector.energy_kj, country):
        claims.append('High in Protein')
    elif meets_source_protein(vector.protein, vector.energy_kj, country):
        claims.append('Source of Protein')

    if vitamin_d_mcg >= HIGH_VITAMIN_D_MCG:
        claims.append('High in Vitamin D')

    return claims
