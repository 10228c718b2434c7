"""Shared SABIT record between the input surface and display surfaces."""

from mixbar.sync.channel import (
    SABIT_RECORD_KEY,
    InMemorySyncChannel,
    SabitRecord,
    SyncChannel,
)
from mixbar.sync.stream import RecipeStream, build_recipe_content

__all__ = [
    "SABIT_RECORD_KEY",
    "InMemorySyncChannel",
    "SabitRecord",
    "SyncChannel",
    "RecipeStream",
    "build_recipe_content",
]
