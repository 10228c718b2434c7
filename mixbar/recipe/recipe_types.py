"""
x-Music Bar: Recipe Types
Defines the SABIT vectors, catalog entries and recipe results shared by the
engine, the normalizer and the display surfaces.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Engine representation uses lowercase axes, display representation uppercase
AXES = ("s", "a", "b", "i", "t")
DISPLAY_AXES = ("S", "A", "B", "I", "T")

AXIS_LABELS = {
    "s": "Sweetness",
    "a": "Acidity",
    "b": "Bitterness",
    "i": "Intensity",
    "t": "Texture",
}


def _clamp_unit(value: float) -> float:
    """Clamp to [0, 1]. NaN collapses to 0."""
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class DisplayVector:
    """SABIT values as the radar widget shows them (0 - 100)."""
    S: float = 0.0
    A: float = 0.0
    B: float = 0.0
    I: float = 0.0
    T: float = 0.0

    def as_tuple(self) -> Tuple[float, ...]:
        return (self.S, self.A, self.B, self.I, self.T)

    def to_dict(self) -> Dict[str, float]:
        return dict(zip(DISPLAY_AXES, self.as_tuple()))


@dataclass(frozen=True)
class SabitVector:
    """SABIT values in the engine domain (0.0 - 1.0 per axis, no sum constraint)."""
    s: float = 0.0
    a: float = 0.0
    b: float = 0.0
    i: float = 0.0
    t: float = 0.0

    def as_tuple(self) -> Tuple[float, ...]:
        return (self.s, self.a, self.b, self.i, self.t)

    def to_dict(self) -> Dict[str, float]:
        return dict(zip(AXES, self.as_tuple()))

    def clamped(self) -> "SabitVector":
        return SabitVector(*(_clamp_unit(float(v)) for v in self.as_tuple()))


@dataclass(frozen=True)
class Ingredient:
    """A catalog entry and its characteristic SABIT vector."""
    name: str
    s: float = 0.0
    a: float = 0.0
    b: float = 0.0
    i: float = 0.0
    t: float = 0.0
    category: str = ""  # spirit, liqueur, mixer, carbonated
    note: str = ""      # physical basis of the authored values

    @property
    def vector(self) -> SabitVector:
        return SabitVector(self.s, self.a, self.b, self.i, self.t)

    def to_dict(self) -> Dict[str, object]:
        data = {"name": self.name, **self.vector.to_dict()}
        if self.category:
            data["category"] = self.category
        if self.note:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class Allocation:
    """Full-precision share of the drink for one ingredient, before filtering."""
    ingredient: Ingredient
    score: float
    probability: float
    amount: float


@dataclass(frozen=True)
class RecipeItem:
    """One line of the recipe card."""
    name: str
    amount: float  # ml, one decimal

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "amount": self.amount}


@dataclass(frozen=True)
class RecipeResult:
    """Total volume and pours, largest first."""
    total_volume: float
    recipe: List[RecipeItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_volume": self.total_volume,
            "recipe": [item.to_dict() for item in self.recipe],
        }


@dataclass(frozen=True)
class DrinkProfile:
    """Physical estimate of the poured drink, derived from the catalog reference scales."""
    abv: float = 0.0             # % alcohol by volume
    sugar_g_per_l: float = 0.0
    carbonation_vol: float = 0.0
    ph: float = 7.0              # neutral when nothing acidic is poured
    blend: Optional[SabitVector] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "abv": self.abv,
            "sugar_g_per_l": self.sugar_g_per_l,
            "carbonation_vol": self.carbonation_vol,
            "ph": self.ph,
            "blend": self.blend.to_dict() if self.blend else None,
        }
