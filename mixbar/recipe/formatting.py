from typing import List, Optional

from mixbar.recipe.recipe_types import DrinkProfile, RecipeResult


def format_amount(value: float) -> str:
    return f"{value:.1f}"


def render_recipe_text(result: RecipeResult, profile: Optional[DrinkProfile] = None) -> str:
    """Plain-text recipe card for the performer display."""
    lines: List[str] = [f"TOTAL VOLUME: {format_amount(result.total_volume)} ml"]
    lines.append("-" * 32)

    if not result.recipe:
        lines.append("(no pours above threshold)")
    else:
        width = max(len(item.name) for item in result.recipe)
        for item in result.recipe:
            lines.append(f"{item.name.ljust(width)}  {format_amount(item.amount):>6} ml")

    if profile is not None:
        lines.append("-" * 32)
        lines.append(
            f"pH {format_amount(profile.ph)} | "
            f"ABV {format_amount(profile.abv)}% | "
            f"Sugar {format_amount(profile.sugar_g_per_l)} g/L | "
            f"CO2 {format_amount(profile.carbonation_vol)} vol"
        )
    return "\n".join(lines)
