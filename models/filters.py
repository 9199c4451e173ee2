"""
models/filters.py
-----------------
Partial-filter records for search operations.
Every field is independently optional: None means "absent", while an
empty string is a present value and is matched literally.
"""

from dataclasses import dataclass, fields
from typing import Optional
from uuid import UUID


@dataclass
class _Filter:
    def is_empty(self) -> bool:
        """Returns True when no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class IngredientFilter(_Filter):
    name: Optional[str] = None
    category: Optional[str] = None


@dataclass
class RecipeFilter(_Filter):
    user_id: Optional[UUID] = None
    name: Optional[str] = None
    category: Optional[str] = None
