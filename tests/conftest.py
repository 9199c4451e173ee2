"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

import db.connection as db_connection
from db.errors import ConflictError, EmptyFilterError, NotFoundError
from models.filters import IngredientFilter, RecipeFilter
from models.fridge import FridgeIngredient
from models.ingredient import Ingredient
from models.recipe import Recipe
from models.user import User

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ── Fake psycopg2 ─────────────────────────────────────────


@dataclass
class Result:
    """Rows and rowcount produced by one statement."""

    rows: list[tuple] = field(default_factory=list)
    rowcount: int | None = None


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.rows: list[tuple] = []
        self.rowcount = -1

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def execute(self, query: str, params=None) -> None:
        self.conn.executed.append((" ".join(query.split()), params))
        if query.lstrip().startswith("SET LOCAL"):
            self.rows, self.rowcount = [], -1
            return
        for needle, exc in self.conn.failures:
            if needle in query:
                raise exc
        result = self.conn.results.pop(0) if self.conn.results else Result()
        self.rows = list(result.rows)
        self.rowcount = len(result.rows) if result.rowcount is None else result.rowcount

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def fetchall(self) -> list[tuple]:
        rows, self.rows = self.rows, []
        return rows


@dataclass
class FakeConnection:
    """Scripted connection: each statement consumes the next queued Result."""

    results: list[Result] = field(default_factory=list)
    failures: list[tuple[str, Exception]] = field(default_factory=list)
    executed: list[tuple[str, object]] = field(default_factory=list)
    commits: int = 0
    rollbacks: int = 0
    closed: int = 0

    def queue(self, *results: Result) -> None:
        self.results.extend(results)

    def fail_on(self, needle: str, exc: Exception) -> None:
        self.failures.append((needle, exc))

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    @property
    def statements(self) -> list[str]:
        """Executed SQL without the per-transaction timeout setup."""
        return [sql for sql, _ in self.executed if not sql.startswith("SET LOCAL")]

    @property
    def params(self) -> list[object]:
        return [p for sql, p in self.executed if not sql.startswith("SET LOCAL")]


@dataclass
class FakePool:
    conn: FakeConnection
    released: list[tuple[FakeConnection, bool]] = field(default_factory=list)

    def getconn(self) -> FakeConnection:
        return self.conn

    def putconn(self, conn: FakeConnection, close: bool = False) -> None:
        self.released.append((conn, close))

    def closeall(self) -> None:
        return None


@pytest.fixture
def pool(monkeypatch) -> FakePool:
    fake = FakePool(FakeConnection())
    monkeypatch.setattr(db_connection, "_pool", fake)
    return fake


@pytest.fixture
def conn(pool: FakePool) -> FakeConnection:
    return pool.conn


# ── In-memory Store ───────────────────────────────────────


@dataclass
class InMemoryStore:
    """Dict-backed Store for service tests."""

    users: dict[UUID, User] = field(default_factory=dict)
    ingredients: dict[UUID, Ingredient] = field(default_factory=dict)
    fridge: dict[tuple[UUID, UUID], FridgeIngredient] = field(default_factory=dict)
    recipes: dict[UUID, Recipe] = field(default_factory=dict)
    searches: list[object] = field(default_factory=list)

    def ping(self) -> None:
        return None

    def get_user(self, user_id: UUID) -> User:
        if user_id not in self.users:
            raise NotFoundError("get user")
        return self.users[user_id]

    def get_user_by_email(self, email_address: str) -> User:
        for user in self.users.values():
            if user.email_address == email_address:
                return user
        raise NotFoundError("get user by email")

    def create_user(self, user: User) -> User:
        created = replace(user, id=uuid4(), created_at=NOW, updated_at=NOW)
        self.users[created.id] = created
        return created

    def update_user(self, user: User) -> User:
        current = self.get_user(user.id)
        updated = replace(user, hashed_password=current.hashed_password,
                          created_at=current.created_at, updated_at=NOW)
        self.users[user.id] = updated
        return updated

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient:
        if ingredient_id not in self.ingredients:
            raise NotFoundError("get ingredient")
        return self.ingredients[ingredient_id]

    def search_ingredients(self, search_filter: IngredientFilter) -> list[Ingredient]:
        if search_filter.is_empty():
            raise EmptyFilterError("search ingredients")
        self.searches.append(search_filter)
        return [
            i for i in self.ingredients.values()
            if search_filter.name in (None, i.name)
            and search_filter.category in (None, i.category)
        ]

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        created = replace(ingredient, id=uuid4(), created_at=NOW, updated_at=NOW)
        self.ingredients[created.id] = created
        return created

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        self.get_ingredient(ingredient.id)
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        self.get_ingredient(ingredient_id)
        del self.ingredients[ingredient_id]

    def get_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> FridgeIngredient:
        key = (user_id, ingredient_id)
        if key not in self.fridge:
            raise NotFoundError("get fridge ingredient")
        return self.fridge[key]

    def list_fridge_ingredients(self, user_id: UUID) -> list[FridgeIngredient]:
        return [i for (uid, _), i in self.fridge.items() if uid == user_id]

    def create_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        key = (item.user_id, item.ingredient_id)
        if key in self.fridge:
            raise ConflictError("create fridge ingredient")
        created = replace(item, created_at=NOW, updated_at=NOW)
        self.fridge[key] = created
        return created

    def update_fridge_ingredient(self, item: FridgeIngredient) -> FridgeIngredient:
        current = self.get_fridge_ingredient(item.user_id, item.ingredient_id)
        updated = replace(item, created_at=current.created_at, updated_at=NOW)
        self.fridge[(item.user_id, item.ingredient_id)] = updated
        return updated

    def delete_fridge_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        self.get_fridge_ingredient(user_id, ingredient_id)
        del self.fridge[(user_id, ingredient_id)]

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        if recipe_id not in self.recipes:
            raise NotFoundError("get recipe")
        return self.recipes[recipe_id]

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        return [r for r in self.recipes.values() if r.user_id == user_id]

    def search_recipes(self, search_filter: RecipeFilter) -> list[Recipe]:
        if search_filter.is_empty():
            raise EmptyFilterError("search recipes")
        self.searches.append(search_filter)
        return [
            r for r in self.recipes.values()
            if search_filter.user_id in (None, r.user_id)
            and search_filter.name in (None, r.name)
            and search_filter.category in (None, r.category)
        ]

    def create_recipe(self, recipe: Recipe) -> Recipe:
        created = replace(recipe, id=uuid4(), created_at=NOW, updated_at=NOW)
        self.recipes[created.id] = created
        return created

    def update_recipe(self, recipe: Recipe) -> Recipe:
        current = self.get_recipe(recipe.id)
        updated = replace(recipe, user_id=current.user_id, updated_at=NOW)
        self.recipes[recipe.id] = updated
        return updated

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.get_recipe(recipe_id)
        del self.recipes[recipe_id]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()
