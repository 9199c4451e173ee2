"""
models/ingredient.py
--------------------
Domain model for catalogue ingredients.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID


class IngredientCategory(str, Enum):
    """Closed set of ingredient categories. Validated by callers, not storage."""
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    MEAT = "meat"
    FISH = "fish"
    EGGS = "eggs"
    DAIRY = "dairy"
    GRAINS = "grains"
    WATER = "water"
    SEASONINGS = "seasonings"
    OTHERS = "others"


@dataclass
class Ingredient:
    """
    Represents an ingredient in the shared catalogue.

    Attributes:
        id: Server-generated UUID (None for new records).
        name: Ingredient name (e.g., 'kimchi').
        category: One of IngredientCategory values.
        days_until_exp: Shelf life in days after purchase.
        created_at: Set by the database on insert.
        updated_at: Refreshed by the database on every update.
    """
    name: str
    category: str
    days_until_exp: int
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.category}, {self.days_until_exp}d)"
