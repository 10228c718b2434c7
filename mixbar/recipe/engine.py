"""
x-Music Bar: Recipe Engine

Maps a SABIT vector onto the ingredient catalog:
1. Total volume follows Texture alone: V = V_min + (V_max - V_min) * T
2. Affinity of each ingredient is the dot product with its SABIT vector (floored at 0)
3. Softmax with temperature sigma turns affinities into a distribution
4. The distribution splits the total volume
5. Pours under the minimum are dropped, the rest sorted largest first

Pure and stateless: one engine can serve any number of display surfaces.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from mixbar import config
from mixbar.recipe.catalog import DEFAULT_CATALOG
from mixbar.recipe.recipe_types import (
    Allocation,
    Ingredient,
    RecipeItem,
    RecipeResult,
    SabitVector,
)

logger = logging.getLogger(__name__)

# Softmax temperature. Higher values concentrate the pour on the best-matching
# ingredients, lower values flatten it toward an even split. Governs how
# strongly the drink reacts to each drag of the radar.
SOFTMAX_SIGMA = config.SOFTMAX_SIGMA

# Short drink at T=0, long drink at T=1 (ml)
VOLUME_MIN_ML = config.VOLUME_MIN_ML
VOLUME_MAX_ML = config.VOLUME_MAX_ML

# Pours below this are not worth measuring (ml)
MIN_POUR_ML = config.MIN_POUR_ML


class RecipeEngine:
    """
    Vector-to-recipe mapping over an injected catalog.

    Every public method clamps its input to [0, 1] first, so any float vector
    is accepted. Precision is kept until `compute_recipe` rounds for display.
    """

    def __init__(
        self,
        catalog: Sequence[Ingredient] = DEFAULT_CATALOG,
        sigma: float = SOFTMAX_SIGMA,
        volume_min: float = VOLUME_MIN_ML,
        volume_max: float = VOLUME_MAX_ML,
        min_pour: float = MIN_POUR_ML,
    ):
        self.catalog = tuple(catalog)
        self.sigma = float(sigma)
        self.volume_min = float(volume_min)
        self.volume_max = float(volume_max)
        self.min_pour = float(min_pour)
        # One row per ingredient, columns in SABIT order
        self._matrix = np.array(
            [ing.vector.as_tuple() for ing in self.catalog], dtype=float
        ).reshape(len(self.catalog), 5)
        logger.debug(
            f"RecipeEngine ready: {len(self.catalog)} ingredients, sigma={self.sigma}, "
            f"volume={self.volume_min}-{self.volume_max}ml, min_pour={self.min_pour}ml"
        )

    def total_volume(self, vector: SabitVector) -> float:
        t = vector.clamped().t
        return self.volume_min + (self.volume_max - self.volume_min) * t

    def score(self, vector: SabitVector, ingredient: Ingredient) -> float:
        v = vector.clamped().as_tuple()
        dot = sum(x * y for x, y in zip(v, ingredient.vector.as_tuple()))
        return max(0.0, dot)

    def allocate(self, vector: SabitVector) -> List[Allocation]:
        """Unfiltered, unrounded allocation in catalog order."""
        vector = vector.clamped()
        if not self.catalog:
            return []

        volume = self.total_volume(vector)
        scores = np.maximum(self._matrix @ np.array(vector.as_tuple(), dtype=float), 0.0)

        # Shifting by the max leaves the softmax unchanged and keeps exp() finite
        logits = scores * self.sigma
        weights = np.exp(logits - logits.max())
        probs = weights / weights.sum()

        return [
            Allocation(
                ingredient=ing,
                score=float(score),
                probability=float(p),
                amount=float(p) * volume,
            )
            for ing, score, p in zip(self.catalog, scores, probs)
        ]

    def compute_recipe(self, vector: SabitVector) -> RecipeResult:
        vector = vector.clamped()
        volume = self.total_volume(vector)
        allocations = self.allocate(vector)

        kept = [a for a in allocations if a.amount >= self.min_pour]
        # sorted() is stable: equal pours stay in catalog order
        kept = sorted(kept, key=lambda a: a.amount, reverse=True)

        return RecipeResult(
            total_volume=round(volume, 1),
            recipe=[RecipeItem(a.ingredient.name, round(a.amount, 1)) for a in kept],
        )

    def describe(self) -> dict:
        return {
            "ingredients": len(self.catalog),
            "sigma": self.sigma,
            "volume_min_ml": self.volume_min,
            "volume_max_ml": self.volume_max,
            "min_pour_ml": self.min_pour,
        }


def compute_recipe(
    vector: SabitVector,
    catalog: Optional[Sequence[Ingredient]] = None,
    **overrides,
) -> RecipeResult:
    """One-shot helper; `overrides` are RecipeEngine keyword arguments."""
    engine = RecipeEngine(catalog if catalog is not None else DEFAULT_CATALOG, **overrides)
    return engine.compute_recipe(vector)
