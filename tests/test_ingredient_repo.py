"""Tests for the PostgreSQL ingredient repository."""

from uuid import uuid4

import pytest

from db.errors import EmptyFilterError, NotFoundError
from models.filters import IngredientFilter
from models.ingredient import Ingredient
from repositories.ingredient_repo import IngredientRepository
from tests.conftest import NOW, Result


def _row(ingredient_id, name="kimchi", category="vegetables", days=30) -> tuple:
    return (ingredient_id, name, category, days, NOW, NOW)


def test_create_ingredient(conn) -> None:
    ingredient_id = uuid4()
    conn.queue(Result([_row(ingredient_id)]))

    created = IngredientRepository().create_ingredient(
        Ingredient(name="kimchi", category="vegetables", days_until_exp=30)
    )

    assert created.id == ingredient_id
    assert conn.params[0] == ("kimchi", "vegetables", 30)


def test_get_unknown_ingredient_is_not_found(conn) -> None:
    with pytest.raises(NotFoundError):
        IngredientRepository().get_ingredient(uuid4())


def test_search_binds_filter_values(conn) -> None:
    first, second = uuid4(), uuid4()
    conn.queue(Result([_row(first, name="rice", category="grains"),
                       _row(second, name="rice", category="grains")]))

    found = IngredientRepository().search_ingredients(IngredientFilter(category="grains"))

    assert [i.id for i in found] == [first, second]
    assert "WHERE category = %s" in conn.statements[0]
    assert conn.params[0] == ["grains"]


def test_search_with_no_matches_returns_empty_list(conn) -> None:
    found = IngredientRepository().search_ingredients(IngredientFilter(name="durian"))

    assert found == []
    assert conn.commits == 1


def test_search_with_empty_filter_never_reaches_database(pool, conn) -> None:
    with pytest.raises(EmptyFilterError):
        IngredientRepository().search_ingredients(IngredientFilter())

    assert conn.executed == []
    assert pool.released == []


def test_update_ingredient(conn) -> None:
    ingredient_id = uuid4()
    conn.queue(Result([_row(ingredient_id, days=7)]))

    updated = IngredientRepository().update_ingredient(
        Ingredient(name="kimchi", category="vegetables", days_until_exp=7, id=ingredient_id)
    )

    assert updated.days_until_exp == 7
    assert conn.params[0] == ("kimchi", "vegetables", 7, ingredient_id)


def test_delete_unknown_ingredient_is_not_found(conn) -> None:
    conn.queue(Result(rowcount=0))

    with pytest.raises(NotFoundError):
        IngredientRepository().delete_ingredient(uuid4())

    assert conn.rollbacks == 1


def test_delete_ingredient(conn) -> None:
    ingredient_id = uuid4()
    conn.queue(Result(rowcount=1))

    IngredientRepository().delete_ingredient(ingredient_id)

    assert conn.statements == ["DELETE FROM wdiet.ingredients WHERE ingredient_uuid = %s;"]
    assert conn.commits == 1
