"""
repositories/postgres_store.py
------------------------------
PostgreSQL implementation of the `Store` port.
"""

from db.errors import ConnectivityError, StorageError
from repositories.fridge_repo import FridgeRepository
from repositories.ingredient_repo import IngredientRepository
from repositories.recipe_repo import RecipeRepository
from repositories.store import Store
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresStore(
    UserRepository,
    IngredientRepository,
    FridgeRepository,
    RecipeRepository,
    Store,
):
    """
    Every repository behind one object, sharing one per-call deadline.

    Usage:
        init_pool()
        store = PostgresStore(timeout=5)
        recipe = store.get_recipe(recipe_id)
    """

    def ping(self) -> None:
        """
        Check the database answers a trivial query.

        Raises:
            ConnectivityError: The database is unreachable or did not answer in time.
        """
        try:
            with self._transaction("ping") as tx:
                tx.execute("SELECT 1;")
        except ConnectivityError:
            raise
        except StorageError as e:
            raise ConnectivityError("ping") from e
