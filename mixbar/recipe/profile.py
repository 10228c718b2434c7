"""
Estimates what the performer is actually pouring: the volume-weighted blend of
ingredient vectors, mapped back onto the catalog reference scales.
"""

from typing import Mapping, Sequence

from mixbar.recipe.catalog import REFERENCE_SCALES, ReferenceScale
from mixbar.recipe.recipe_types import AXES, Allocation, DrinkProfile, SabitVector

# Acidity 0 reads as neutral water, 1.0 as the pH reference (lime juice)
NEUTRAL_PH = 7.0


def blend_vector(allocations: Sequence[Allocation]) -> SabitVector:
    total = sum(a.amount for a in allocations)
    if total <= 0:
        return SabitVector()
    sums = [0.0] * len(AXES)
    for a in allocations:
        for idx, value in enumerate(a.ingredient.vector.as_tuple()):
            sums[idx] += value * a.amount
    return SabitVector(*(s / total for s in sums))


def estimate_profile(
    allocations: Sequence[Allocation],
    scales: Mapping[str, ReferenceScale] = REFERENCE_SCALES,
) -> DrinkProfile:
    if not allocations:
        return DrinkProfile(blend=SabitVector())

    blend = blend_vector(allocations)
    return DrinkProfile(
        abv=round(blend.i * scales["i"].maximum, 1),
        sugar_g_per_l=round(blend.s * scales["s"].maximum, 1),
        carbonation_vol=round(blend.t * scales["t"].maximum, 1),
        ph=round(NEUTRAL_PH - (NEUTRAL_PH - scales["a"].maximum) * blend.a, 1),
        blend=blend,
    )
