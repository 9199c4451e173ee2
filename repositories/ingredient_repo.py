"""
repositories/ingredient_repo.py
--------------------------------
Data access layer for the ingredient catalogue.
All SQL queries related to the `ingredients` table live here.
"""

from uuid import UUID

from db.errors import NotFoundError
from models.filters import IngredientFilter
from models.ingredient import Ingredient
from repositories.base import BaseRepository
from repositories.predicates import build_ingredient_predicate
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "ingredient_uuid, ingredient_name, category, days_until_exp, created_at, updated_at"


class IngredientRepository(BaseRepository):
    """Repository for CRUD operations on the ingredients table."""

    # ── CREATE ────────────────────────────────────────────

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """
        Insert a new catalogue ingredient.

        Returns:
            The persisted Ingredient with its generated `id` and timestamps.
        """
        sql = f"""
            INSERT INTO wdiet.ingredients (ingredient_name, category, days_until_exp)
            VALUES (%s, %s, %s)
            RETURNING {_COLUMNS};
        """
        with self._transaction("create ingredient") as tx:
            tx.execute(sql, (ingredient.name, ingredient.category, ingredient.days_until_exp))
            created = self._row_to_ingredient(tx.fetchone())
        logger.info(f"Created ingredient '{created.name}' {created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient:
        """
        Fetch a single ingredient by ID.

        Raises:
            NotFoundError: No ingredient has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM wdiet.ingredients WHERE ingredient_uuid = %s LIMIT 1;"
        with self._transaction("get ingredient") as tx:
            row = tx.execute(sql, (ingredient_id,)).fetchone()
            if row is None:
                raise NotFoundError("get ingredient")
            return self._row_to_ingredient(row)

    def search_ingredients(self, search_filter: IngredientFilter) -> list[Ingredient]:
        """
        Find ingredients matching every field set on the filter.

        Returns:
            Matching ingredients; an empty list when nothing matches.

        Raises:
            EmptyFilterError: No field of the filter is set.
        """
        where, args = build_ingredient_predicate(search_filter).render()
        sql = f"SELECT {_COLUMNS} FROM wdiet.ingredients WHERE {where} ORDER BY ingredient_name;"
        with self._transaction("search ingredients") as tx:
            return [self._row_to_ingredient(r) for r in tx.execute(sql, args).fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """
        Update name, category and shelf life of an ingredient.

        Raises:
            NotFoundError: No ingredient has `ingredient.id`.
        """
        sql = f"""
            UPDATE wdiet.ingredients
            SET ingredient_name = %s, category = %s, days_until_exp = %s
            WHERE ingredient_uuid = %s
            RETURNING {_COLUMNS};
        """
        with self._transaction("update ingredient") as tx:
            tx.execute(sql, (
                ingredient.name, ingredient.category,
                ingredient.days_until_exp, ingredient.id,
            ))
            tx.expect_rowcount(1)
            return self._row_to_ingredient(tx.fetchone())

    # ── DELETE ────────────────────────────────────────────

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """
        Delete an ingredient by ID.

        Raises:
            NotFoundError: No ingredient has this ID.
        """
        sql = "DELETE FROM wdiet.ingredients WHERE ingredient_uuid = %s;"
        with self._transaction("delete ingredient") as tx:
            tx.execute(sql, (ingredient_id,))
            tx.expect_rowcount(1)
        logger.info(f"Deleted ingredient {ingredient_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_ingredient(row: tuple) -> Ingredient:
        """Convert a database row tuple to an Ingredient domain object."""
        return Ingredient(
            id=row[0],
            name=row[1],
            category=row[2],
            days_until_exp=row[3],
            created_at=row[4],
            updated_at=row[5],
        )
