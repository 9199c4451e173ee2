"""
repositories/recipe_repo.py
----------------------------
Data access layer for the Recipe aggregate.

A recipe is one `recipes` row plus its `recipe_ingredients` and
`recipe_instructions` rows. Lines have no lifecycle of their own: every
write below touches the parent and its lines inside one transaction, so a
reader sees either the whole aggregate or nothing.

Statement order per write:
    create  parent insert -> ingredient inserts -> instruction inserts
    update  parent update -> delete all lines -> re-insert supplied lines
    delete  lock parent -> delete ingredient lines -> delete instructions -> delete parent

Updates are full replacement: a line left out of the update is deleted.
Concurrent updates of the same recipe are last-commit-wins.
"""

from uuid import UUID

from db.connection import Transaction
from db.errors import NotFoundError
from models.filters import RecipeFilter
from models.recipe import Recipe, RecipeIngredientLine, RecipeInstructionLine
from repositories.base import BaseRepository
from repositories.predicates import build_recipe_predicate
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "recipe_uuid, user_uuid, recipe_name, category, created_at, updated_at"

_INSERT_INGREDIENT_SQL = """
    INSERT INTO wdiet.recipe_ingredients (recipe_uuid, ingredient_uuid, position, amount, unit)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING recipe_uuid, ingredient_uuid, amount, unit;
"""

_INSERT_INSTRUCTION_SQL = """
    INSERT INTO wdiet.recipe_instructions (recipe_uuid, position, step_num, instruction)
    VALUES (%s, %s, %s, %s)
    RETURNING recipe_uuid, step_num, instruction;
"""

_SELECT_INGREDIENTS_SQL = """
    SELECT recipe_uuid, ingredient_uuid, amount, unit
    FROM wdiet.recipe_ingredients
    WHERE recipe_uuid = %s
    ORDER BY position ASC;
"""

_SELECT_INSTRUCTIONS_SQL = """
    SELECT recipe_uuid, step_num, instruction
    FROM wdiet.recipe_instructions
    WHERE recipe_uuid = %s
    ORDER BY position ASC;
"""

_DELETE_INGREDIENTS_SQL = "DELETE FROM wdiet.recipe_ingredients WHERE recipe_uuid = %s;"
_DELETE_INSTRUCTIONS_SQL = "DELETE FROM wdiet.recipe_instructions WHERE recipe_uuid = %s;"


class RecipeRepository(BaseRepository):
    """Repository for the recipes table and its two line tables."""

    # ── CREATE ────────────────────────────────────────────

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """
        Insert a recipe and all of its lines atomically.

        Args:
            recipe: The Recipe to persist; `id` and timestamps are ignored.

        Returns:
            The persisted Recipe with generated `id`, timestamps and lines
            stamped with the new recipe id, in input order.
        """
        sql = f"""
            INSERT INTO wdiet.recipes (user_uuid, recipe_name, category)
            VALUES (%s, %s, %s)
            RETURNING {_COLUMNS};
        """
        with self._transaction("create recipe") as tx:
            tx.execute(sql, (recipe.user_id, recipe.name, recipe.category))
            created = self._row_to_recipe(tx.fetchone())
            self._insert_lines(tx, created, recipe)
        logger.info(
            f"Created recipe '{created.name}' {created.id} with "
            f"{len(created.ingredients)} ingredients, {len(created.instructions)} steps"
        )
        return created

    # ── READ ──────────────────────────────────────────────

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        """
        Fetch a full recipe aggregate.

        Raises:
            NotFoundError: No recipe has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM wdiet.recipes WHERE recipe_uuid = %s LIMIT 1;"
        with self._transaction("get recipe") as tx:
            row = tx.execute(sql, (recipe_id,)).fetchone()
            if row is None:
                raise NotFoundError("get recipe")
            recipe = self._row_to_recipe(row)
            self._load_lines(tx, recipe)
            return recipe

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Get every recipe owned by a user, oldest first."""
        sql = f"""
            SELECT {_COLUMNS} FROM wdiet.recipes
            WHERE user_uuid = %s
            ORDER BY created_at ASC;
        """
        with self._transaction("list recipes") as tx:
            return self._fetch_aggregates(tx, sql, (user_id,))

    def search_recipes(self, search_filter: RecipeFilter) -> list[Recipe]:
        """
        Find recipes matching every field set on the filter.

        Returns:
            Matching recipes with their lines; an empty list when nothing matches.

        Raises:
            EmptyFilterError: No field of the filter is set.
        """
        where, args = build_recipe_predicate(search_filter).render()
        sql = f"SELECT {_COLUMNS} FROM wdiet.recipes WHERE {where} ORDER BY created_at ASC;"
        with self._transaction("search recipes") as tx:
            return self._fetch_aggregates(tx, sql, args)

    # ── UPDATE ────────────────────────────────────────────

    def update_recipe(self, recipe: Recipe) -> Recipe:
        """
        Replace a recipe's name, category and all of its lines.

        The owner and id are never changed. Lines not present in `recipe`
        are deleted.

        Raises:
            NotFoundError: No recipe has `recipe.id`; no line is touched.
        """
        sql = f"""
            UPDATE wdiet.recipes
            SET recipe_name = %s, category = %s
            WHERE recipe_uuid = %s
            RETURNING {_COLUMNS};
        """
        with self._transaction("update recipe") as tx:
            tx.execute(sql, (recipe.name, recipe.category, recipe.id))
            tx.expect_rowcount(1)
            updated = self._row_to_recipe(tx.fetchone())
            tx.execute(_DELETE_INGREDIENTS_SQL, (updated.id,))
            tx.execute(_DELETE_INSTRUCTIONS_SQL, (updated.id,))
            self._insert_lines(tx, updated, recipe)
        logger.info(f"Updated recipe {updated.id}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete_recipe(self, recipe_id: UUID) -> None:
        """
        Delete a recipe and all of its lines.

        Raises:
            NotFoundError: No recipe has this ID.
            ConflictError: A delete removed a different number of rows than
                were counted under the parent lock.
        """
        lock_sql = """
            SELECT
                (SELECT count(*) FROM wdiet.recipe_ingredients i WHERE i.recipe_uuid = r.recipe_uuid),
                (SELECT count(*) FROM wdiet.recipe_instructions s WHERE s.recipe_uuid = r.recipe_uuid)
            FROM wdiet.recipes r
            WHERE r.recipe_uuid = %s
            FOR UPDATE OF r;
        """
        with self._transaction("delete recipe") as tx:
            row = tx.execute(lock_sql, (recipe_id,)).fetchone()
            if row is None:
                raise NotFoundError("delete recipe")
            ingredient_count, instruction_count = row

            tx.execute(_DELETE_INGREDIENTS_SQL, (recipe_id,))
            tx.expect_rowcount(ingredient_count, missing_is_not_found=False)
            tx.execute(_DELETE_INSTRUCTIONS_SQL, (recipe_id,))
            tx.expect_rowcount(instruction_count, missing_is_not_found=False)
            tx.execute("DELETE FROM wdiet.recipes WHERE recipe_uuid = %s;", (recipe_id,))
            tx.expect_rowcount(1)
        logger.info(f"Deleted recipe {recipe_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _insert_lines(tx: Transaction, target: Recipe, source: Recipe) -> None:
        """Insert `source`'s lines under `target.id`, collecting the stored rows on `target`."""
        target.ingredients = []
        for position, line in enumerate(source.ingredients):
            tx.execute(_INSERT_INGREDIENT_SQL, (
                target.id, line.ingredient_id, position, line.amount, line.unit,
            ))
            target.ingredients.append(RecipeRepository._row_to_ingredient_line(tx.fetchone()))

        target.instructions = []
        for position, line in enumerate(source.instructions):
            tx.execute(_INSERT_INSTRUCTION_SQL, (
                target.id, position, line.step_num, line.instruction,
            ))
            target.instructions.append(RecipeRepository._row_to_instruction_line(tx.fetchone()))

    @staticmethod
    def _load_lines(tx: Transaction, recipe: Recipe) -> None:
        # TODO: batch with `WHERE recipe_uuid = ANY(%s)` if N+2N reads on search get slow
        recipe.ingredients = [
            RecipeRepository._row_to_ingredient_line(r)
            for r in tx.execute(_SELECT_INGREDIENTS_SQL, (recipe.id,)).fetchall()
        ]
        recipe.instructions = [
            RecipeRepository._row_to_instruction_line(r)
            for r in tx.execute(_SELECT_INSTRUCTIONS_SQL, (recipe.id,)).fetchall()
        ]

    def _fetch_aggregates(self, tx: Transaction, sql: str, params) -> list[Recipe]:
        recipes = [self._row_to_recipe(r) for r in tx.execute(sql, params).fetchall()]
        for recipe in recipes:
            self._load_lines(tx, recipe)
        return recipes

    @staticmethod
    def _row_to_recipe(row: tuple) -> Recipe:
        """Convert a recipes row tuple to a Recipe without lines."""
        return Recipe(
            id=row[0],
            user_id=row[1],
            name=row[2],
            category=row[3],
            created_at=row[4],
            updated_at=row[5],
        )

    @staticmethod
    def _row_to_ingredient_line(row: tuple) -> RecipeIngredientLine:
        return RecipeIngredientLine(
            recipe_id=row[0], ingredient_id=row[1], amount=row[2], unit=row[3],
        )

    @staticmethod
    def _row_to_instruction_line(row: tuple) -> RecipeInstructionLine:
        return RecipeInstructionLine(recipe_id=row[0], step_num=row[1], instruction=row[2])
