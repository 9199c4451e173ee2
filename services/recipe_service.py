"""
services/recipe_service.py
--------------------------
Business logic for recipes: validated search and fridge matching.
"""

from typing import Optional
from uuid import UUID

from db.errors import EmptyFilterError
from models.filters import RecipeFilter
from models.recipe import Recipe, RecipeIngredientLine
from repositories.store import Store
from utils.logger import get_logger

logger = get_logger(__name__)


class RecipeService:
    """Recipe use cases built on the storage port."""

    def __init__(self, store: Store):
        self.store = store

    def search(
        self,
        user_id: Optional[UUID] = None,
        name: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Recipe]:
        """
        Search recipes by any combination of owner, name and category.

        Raises:
            EmptyFilterError: No criterion was given.
        """
        search_filter = RecipeFilter(user_id=user_id, name=name, category=category)
        if search_filter.is_empty():
            logger.info("Rejected recipe search without criteria")
            raise EmptyFilterError("search recipes")
        return self.store.search_recipes(search_filter)

    def missing_ingredients(self, user_id: UUID, recipe_id: UUID) -> list[RecipeIngredientLine]:
        """
        Recipe lines the user's fridge cannot cover.

        Amounts are compared per ingredient when the units match; a line whose
        unit differs from the stocked unit counts as missing.

        Raises:
            NotFoundError: The recipe does not exist.
        """
        recipe = self.store.get_recipe(recipe_id)
        stock = {i.ingredient_id: i for i in self.store.list_fridge_ingredients(user_id)}

        used: dict[UUID, int] = {}
        missing = []
        for line in recipe.ingredients:
            item = stock.get(line.ingredient_id)
            needed = used.get(line.ingredient_id, 0) + line.amount
            if item is None or item.unit != line.unit or item.amount < needed:
                missing.append(line)
                continue
            used[line.ingredient_id] = needed
        return missing

    def cookable(self, user_id: UUID, recipe_id: UUID) -> bool:
        """Returns True if the user's fridge covers every ingredient line."""
        return not self.missing_ingredients(user_id, recipe_id)
