"""
models/fridge.py
----------------
Domain model for ingredients stocked in a user's fridge.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID


@dataclass
class FridgeIngredient:
    """
    One ingredient held by one user. Identity is (user_id, ingredient_id).

    Attributes:
        user_id: Owning user.
        ingredient_id: Catalogue ingredient.
        amount: Quantity held, in `unit`.
        unit: Unit of measure (e.g., 'g', 'pcs').
        purchased_date: When it was bought.
        expiration_date: purchased_date + ingredient shelf life, computed by
            the caller; stored as given.
        created_at: Set by the database on insert.
        updated_at: Refreshed by the database on every update.
    """
    user_id: UUID
    ingredient_id: UUID
    amount: int
    unit: str
    purchased_date: date = field(default_factory=date.today)
    expiration_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_expired(self, on: Optional[date] = None) -> bool:
        """Returns True if the item is past its expiration date."""
        if self.expiration_date is None:
            return False
        return self.expiration_date < (on or date.today())

    def __str__(self) -> str:
        return f"{self.amount} {self.unit} of {self.ingredient_id} (exp {self.expiration_date})"
