"""
x-Music Bar: Ingredient Catalog

Each ingredient carries a SABIT vector normalized against a physical reference
maximum per axis. The entry holding exactly 1.0 on an axis defines that axis'
scale:
- [S] Sweetness: 800 g/L sugar (simple syrup) = 1.0
- [A] Acidity: pH 2.0 (lime juice) = 1.0
- [B] Bitterness: Campari = 1.0
- [I] Intensity: 47.3% ABV (Tanqueray gin) = 1.0
- [T] Texture: 4.0 volumes CO2 (high-carbonation soda) = 1.0

Order is the tie-break order for equal pours; it never affects scoring.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from mixbar.recipe.recipe_types import AXES, AXIS_LABELS, Ingredient

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into ingredients."""


@dataclass(frozen=True)
class ReferenceScale:
    axis: str
    label: str
    maximum: float
    unit: str
    reference: str


REFERENCE_SCALES = {
    "s": ReferenceScale("s", AXIS_LABELS["s"], 800.0, "g/L sugar", "Simple Syrup"),
    "a": ReferenceScale("a", AXIS_LABELS["a"], 2.0, "pH", "Lime Juice"),
    "b": ReferenceScale("b", AXIS_LABELS["b"], 1.0, "Campari bitterness", "Campari"),
    "i": ReferenceScale("i", AXIS_LABELS["i"], 47.3, "% ABV", "Gin (Tanqueray)"),
    "t": ReferenceScale("t", AXIS_LABELS["t"], 4.0, "vol CO2", "Soda (High Carbonation)"),
}

DEFAULT_CATALOG: Tuple[Ingredient, ...] = (
    # === Spirits ===
    Ingredient("Gin (Tanqueray)",       s=0.00, a=0.00, b=0.15, i=1.00, t=0.00,
               category="spirit", note="ABV 47.3% (reference), light botanical bitterness"),
    Ingredient("Vodka",                 s=0.00, a=0.00, b=0.00, i=0.85, t=0.00,
               category="spirit", note="ABV 40.0%, neutral spirit"),
    Ingredient("Whiskey (Jameson)",     s=0.05, a=0.00, b=0.20, i=0.85, t=0.00,
               category="spirit", note="ABV 40.0%, cask bitterness and faint sweetness"),
    Ingredient("White Rum",             s=0.08, a=0.00, b=0.00, i=0.85, t=0.00,
               category="spirit", note="ABV 40.0%, cane sweetness"),

    # === Liqueurs ===
    Ingredient("Campari",               s=0.31, a=0.00, b=1.00, i=0.53, t=0.00,
               category="liqueur", note="Sugar 250 g/L, cinchona bitterness (reference), ABV 25%"),
    Ingredient("Cinzano Rosso",         s=0.19, a=0.15, b=0.40, i=0.32, t=0.00,
               category="liqueur", note="Sugar 150 g/L, herbal bitterness, ABV 15%"),
    Ingredient("Kahlua",                s=0.55, a=0.05, b=0.45, i=0.42, t=0.00,
               category="liqueur", note="Sugar 444 g/L, coffee bitterness, ABV 20%"),
    Ingredient("Cointreau",             s=0.31, a=0.10, b=0.05, i=0.85, t=0.00,
               category="liqueur", note="Sugar 250 g/L, orange peel, ABV 40%"),

    # === Juices & syrups ===
    Ingredient("Lemon Juice",           s=0.05, a=0.95, b=0.05, i=0.00, t=0.00,
               category="mixer", note="pH 2.3, faint pith bitterness"),
    Ingredient("Lime Juice",            s=0.05, a=1.00, b=0.05, i=0.00, t=0.00,
               category="mixer", note="pH 2.0 (reference), faint bitterness"),
    Ingredient("Simple Syrup",          s=1.00, a=0.00, b=0.00, i=0.00, t=0.10,
               category="mixer", note="Sugar 800 g/L (reference), syrup body"),
    Ingredient("Grenadine",             s=0.90, a=0.20, b=0.00, i=0.00, t=0.20,
               category="mixer", note="High sugar, pomegranate acidity"),

    # === Carbonated ===
    Ingredient("Tonic Water",           s=0.12, a=0.20, b=0.45, i=0.00, t=0.80,
               category="carbonated", note="Sugar 90 g/L, quinine bitterness, 3.0 vol CO2"),
    Ingredient("Ginger Ale",            s=0.13, a=0.20, b=0.00, i=0.00, t=0.90,
               category="carbonated", note="Sugar 100 g/L, 3.5 vol CO2"),
    Ingredient("Soda (High Carbonation)", s=0.00, a=0.00, b=0.00, i=0.00, t=1.00,
               category="carbonated", note="4.0 vol CO2 (reference)"),
)


def check_catalog(catalog: Iterable[Ingredient]) -> List[str]:
    """
    Lists data-integrity problems in a catalog. An empty list means the catalog
    has every component in [0, 1], unique names and a 1.0 reference entry on
    every axis. Nothing here runs on the compute path.
    """
    catalog = list(catalog)
    if not catalog:
        return ["catalog is empty"]

    problems = []
    seen = set()
    for ing in catalog:
        if ing.name in seen:
            problems.append(f"duplicate ingredient name: {ing.name}")
        seen.add(ing.name)
        for axis, value in zip(AXES, ing.vector.as_tuple()):
            if not 0.0 <= value <= 1.0:
                problems.append(f"{ing.name}: {axis}={value} outside [0, 1]")

    for axis in AXES:
        if not any(getattr(ing, axis) == 1.0 for ing in catalog):
            problems.append(f"no reference entry with {axis}=1.0 ({AXIS_LABELS[axis]})")
    return problems


def _parse_entry(raw, index: int) -> Ingredient:
    if not isinstance(raw, dict):
        raise CatalogError(f"entry {index} is not an object")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError(f"entry {index} has no name")
    try:
        values = {axis: float(raw.get(axis, 0.0)) for axis in AXES}
    except (TypeError, ValueError) as e:
        raise CatalogError(f"entry {index} ({name}) has a non-numeric axis: {e}") from e
    return Ingredient(
        name=name.strip(),
        category=str(raw.get("category", "")),
        note=str(raw.get("note", "")),
        **values,
    )


def load_catalog(path: Union[str, Path]) -> Tuple[Ingredient, ...]:
    """Loads a substitute catalog from a JSON list of ingredient objects."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"catalog {path} is not valid JSON: {e}") from e

    if isinstance(data, dict) and "ingredients" in data:
        data = data["ingredients"]
    if not isinstance(data, list):
        raise CatalogError(f"catalog {path} must be a list of ingredients")

    catalog = tuple(_parse_entry(raw, idx) for idx, raw in enumerate(data))
    for problem in check_catalog(catalog):
        logger.warning(f"Catalog {path.name}: {problem}")
    logger.info(f"Loaded {len(catalog)} ingredients from {path}")
    return catalog


def get_catalog(path: Optional[Union[str, Path]] = None) -> Tuple[Ingredient, ...]:
    if path is None:
        return DEFAULT_CATALOG
    return load_catalog(path)
