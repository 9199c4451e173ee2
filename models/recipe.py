"""
models/recipe.py
----------------
Domain model for the Recipe aggregate: a parent row plus two ordered,
owned child collections (ingredient lines and instruction steps).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class RecipeIngredientLine:
    """One ingredient line. The same ingredient may appear in several lines."""
    ingredient_id: UUID
    amount: int
    unit: str
    recipe_id: Optional[UUID] = None


@dataclass
class RecipeInstructionLine:
    """One instruction step. step_num is assigned by the caller."""
    step_num: int
    instruction: str
    recipe_id: Optional[UUID] = None


@dataclass
class Recipe:
    """
    Aggregate root. Lines only exist while the recipe row exists and are
    always written and replaced together with it.

    Attributes:
        id: Server-generated UUID (None for new records).
        user_id: Owner; immutable after creation.
        name: Recipe name.
        category: Recipe category (e.g., 'korean').
        ingredients: Ingredient lines in insertion order.
        instructions: Instruction steps in insertion order.
        created_at: Set by the database on insert.
        updated_at: Refreshed by the database on every update.
    """
    user_id: UUID
    name: str
    category: str
    ingredients: list[RecipeIngredientLine] = field(default_factory=list)
    instructions: list[RecipeInstructionLine] = field(default_factory=list)
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return (
            f"{self.name} [{self.category}] - "
            f"{len(self.ingredients)} ingredients, {len(self.instructions)} steps"
        )
