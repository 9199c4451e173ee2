"""
repositories/store.py
---------------------
The storage port. Services depend on `Store`, never on a concrete database.

Contract shared by every implementation:
    - get_* return the record or raise NotFoundError.
    - list_* / search_* return a list, empty when nothing matches.
    - create_* / update_* return the persisted record (server-generated ids
      and timestamps included), never the object passed in.
    - delete_* return None and raise NotFoundError when nothing matched.
    - Any other failure is a StorageError subclass from db.errors.
"""

from typing import Protocol
from uuid import UUID

from models.filters import IngredientFilter, RecipeFilter
from models.fridge import FridgeIngredient
from models.ingredient import Ingredient
from models.recipe import Recipe
from models.user import User


class Store(Protocol):
    """Persistence interface for users, ingredients, fridges and recipes."""

    def ping(self) -> None:
        """Raise ConnectivityError if the backend is unreachable."""

    # ── Users ─────────────────────────────────────────────

    def get_user(self, user_id: UUID) -> User:
        """Return the user with this id."""

    def get_user_by_email(self, email_address: str) -> User:
        """Return the user with this login address."""

    def create_user(self, user: User) -> User:
        """Insert a user and return the stored row."""

    def update_user(self, user: User) -> User:
        """Update a user's profile fields and return the stored row."""

    # ── Ingredients ───────────────────────────────────────

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient:
        """Return the ingredient with this id."""

    def search_ingredients(self, search_filter: IngredientFilter) -> list[Ingredient]:
        """Return ingredients matching every field set on the filter."""

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Insert an ingredient and return the stored row."""

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Update an ingredient and return the stored row."""

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete the ingredient with this id."""

    # ── Fridge ────────────────────────────────────────────

    def get_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> FridgeIngredient:
        """Return one fridge row by its composite key."""

    def list_fridge_ingredients(self, user_id: UUID) -> list[FridgeIngredient]:
        """Return everything in a user's fridge."""

    def create_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        """Insert a fridge row and return the stored row."""

    def update_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        """Update a fridge row and return the stored row."""

    def delete_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        """Delete a fridge row by its composite key."""

    # ── Recipes ───────────────────────────────────────────

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        """Return the full recipe aggregate."""

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return every recipe owned by a user."""

    def search_recipes(self, search_filter: RecipeFilter) -> list[Recipe]:
        """Return recipes matching every field set on the filter."""

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Insert a recipe with its lines and return the stored aggregate."""

    def update_recipe(self, recipe: Recipe) -> Recipe:
        """Replace a recipe and all of its lines; return the stored aggregate."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe and all of its lines."""
