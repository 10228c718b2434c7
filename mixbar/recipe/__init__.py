"""
x-Music Bar recipe core: catalog, engine, normalization and presentation.
"""

from mixbar.recipe.catalog import (
    DEFAULT_CATALOG,
    REFERENCE_SCALES,
    CatalogError,
    check_catalog,
    get_catalog,
    load_catalog,
)
from mixbar.recipe.engine import (
    MIN_POUR_ML,
    SOFTMAX_SIGMA,
    VOLUME_MAX_ML,
    VOLUME_MIN_ML,
    RecipeEngine,
    compute_recipe,
)
from mixbar.recipe.normalizer import balance, from_record, record_to_engine_vector, to_engine_vector
from mixbar.recipe.recipe_types import (
    Allocation,
    DisplayVector,
    DrinkProfile,
    Ingredient,
    RecipeItem,
    RecipeResult,
    SabitVector,
)

__all__ = [
    "DEFAULT_CATALOG",
    "REFERENCE_SCALES",
    "CatalogError",
    "check_catalog",
    "get_catalog",
    "load_catalog",
    "MIN_POUR_ML",
    "SOFTMAX_SIGMA",
    "VOLUME_MAX_ML",
    "VOLUME_MIN_ML",
    "RecipeEngine",
    "compute_recipe",
    "balance",
    "from_record",
    "record_to_engine_vector",
    "to_engine_vector",
    "Allocation",
    "DisplayVector",
    "DrinkProfile",
    "Ingredient",
    "RecipeItem",
    "RecipeResult",
    "SabitVector",
]
