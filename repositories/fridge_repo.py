"""
repositories/fridge_repo.py
----------------------------
Data access layer for fridge stock.
Rows are keyed by (user_uuid, ingredient_uuid); there is no surrogate key.
"""

from uuid import UUID

from db.errors import NotFoundError
from models.fridge import FridgeIngredient
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    user_uuid, ingredient_uuid, amount, unit, purchased_date,
    expiration_date, created_at, updated_at
"""


class FridgeRepository(BaseRepository):
    """Repository for CRUD operations on the fridge_ingredients table."""

    # ── CREATE ────────────────────────────────────────────

    def create_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        """
        Put an ingredient into a user's fridge.
        `expiration_date` is stored exactly as given.

        Raises:
            ConflictError: The user already holds this ingredient.
        """
        sql = f"""
            INSERT INTO wdiet.fridge_ingredients
                (user_uuid, ingredient_uuid, amount, unit, purchased_date, expiration_date)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS};
        """
        with self._transaction("create fridge ingredient") as tx:
            tx.execute(sql, (
                item.user_id, item.ingredient_id, item.amount,
                item.unit, item.purchased_date, item.expiration_date,
            ))
            created = self._row_to_item(tx.fetchone())
        logger.info(f"Added ingredient {created.ingredient_id} to fridge of user {created.user_id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> FridgeIngredient:
        """
        Fetch one fridge row by its composite key.

        Raises:
            NotFoundError: The user does not hold this ingredient.
        """
        sql = f"""
            SELECT {_COLUMNS} FROM wdiet.fridge_ingredients
            WHERE user_uuid = %s AND ingredient_uuid = %s
            LIMIT 1;
        """
        with self._transaction("get fridge ingredient") as tx:
            row = tx.execute(sql, (user_id, ingredient_id)).fetchone()
            if row is None:
                raise NotFoundError("get fridge ingredient")
            return self._row_to_item(row)

    def list_fridge_ingredients(self, user_id: UUID) -> list[FridgeIngredient]:
        """
        Get everything in a user's fridge, soonest expiry first.

        Returns:
            List of FridgeIngredient objects (empty if the fridge is empty).
        """
        sql = f"""
            SELECT {_COLUMNS} FROM wdiet.fridge_ingredients
            WHERE user_uuid = %s
            ORDER BY expiration_date ASC;
        """
        with self._transaction("list fridge ingredients") as tx:
            return [self._row_to_item(r) for r in tx.execute(sql, (user_id,)).fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        """
        Update quantity and dates of a fridge row.

        Raises:
            NotFoundError: The user does not hold this ingredient.
        """
        sql = f"""
            UPDATE wdiet.fridge_ingredients
            SET amount = %s, unit = %s, purchased_date = %s, expiration_date = %s
            WHERE user_uuid = %s AND ingredient_uuid = %s
            RETURNING {_COLUMNS};
        """
        with self._transaction("update fridge ingredient") as tx:
            tx.execute(sql, (
                item.amount, item.unit, item.purchased_date, item.expiration_date,
                item.user_id, item.ingredient_id,
            ))
            tx.expect_rowcount(1)
            return self._row_to_item(tx.fetchone())

    # ── DELETE ────────────────────────────────────────────

    def delete_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        """
        Remove an ingredient from a user's fridge.

        Raises:
            NotFoundError: The user does not hold this ingredient.
        """
        sql = "DELETE FROM wdiet.fridge_ingredients WHERE user_uuid = %s AND ingredient_uuid = %s;"
        with self._transaction("delete fridge ingredient") as tx:
            tx.execute(sql, (user_id, ingredient_id))
            tx.expect_rowcount(1)
        logger.info(f"Removed ingredient {ingredient_id} from fridge of user {user_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_item(row: tuple) -> FridgeIngredient:
        """Convert a database row tuple to a FridgeIngredient domain object."""
        return FridgeIngredient(
            user_id=row[0],
            ingredient_id=row[1],
            amount=row[2],
            unit=row[3],
            purchased_date=row[4],
            expiration_date=row[5],
            created_at=row[6],
            updated_at=row[7],
        )
