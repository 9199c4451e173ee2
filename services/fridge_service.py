"""
services/fridge_service.py
--------------------------
Business logic for a user's fridge stock.
"""

from dataclasses import replace
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from models.fridge import FridgeIngredient
from repositories.store import Store
from utils.logger import get_logger

logger = get_logger(__name__)


class FridgeService:
    """
    Handles fridge stock on top of the storage port.

    Responsibilities:
        - Resolve an ingredient's shelf life and compute the expiration date.
        - List stock and what is about to expire.
    """

    def __init__(self, store: Store):
        self.store = store

    def add_item(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        amount: int,
        unit: str,
        purchased_date: Optional[date] = None,
    ) -> FridgeIngredient:
        """
        Put an ingredient in the user's fridge.

        Raises:
            NotFoundError: The ingredient does not exist.
        """
        item = self._with_expiration(FridgeIngredient(
            user_id=user_id,
            ingredient_id=ingredient_id,
            amount=amount,
            unit=unit,
            purchased_date=purchased_date or date.today(),
        ))
        return self.store.create_fridge_ingredient(item)

    def update_item(self, item: FridgeIngredient) -> FridgeIngredient:
        """
        Update quantity or purchase date; the expiration date is recomputed.

        Raises:
            NotFoundError: The ingredient, or the fridge row, does not exist.
        """
        return self.store.update_fridge_ingredient(self._with_expiration(item))

    def remove_item(self, user_id: UUID, ingredient_id: UUID) -> None:
        self.store.delete_fridge_ingredient(user_id, ingredient_id)

    def list_items(self, user_id: UUID) -> list[FridgeIngredient]:
        return self.store.list_fridge_ingredients(user_id)

    def expiring_soon(
        self, user_id: UUID, within_days: int = 3, today: Optional[date] = None
    ) -> list[FridgeIngredient]:
        """
        Items expiring within the next `within_days` days, already expired ones included.

        Returns:
            Fridge rows ordered by expiration date.
        """
        cutoff = (today or date.today()) + timedelta(days=within_days)
        items = [
            i for i in self.store.list_fridge_ingredients(user_id)
            if i.expiration_date is not None and i.expiration_date <= cutoff
        ]
        return sorted(items, key=lambda i: i.expiration_date)

    def _with_expiration(self, item: FridgeIngredient) -> FridgeIngredient:
        ingredient = self.store.get_ingredient(item.ingredient_id)
        return replace(
            item, expiration_date=item.purchased_date + timedelta(days=ingredient.days_until_exp)
        )
