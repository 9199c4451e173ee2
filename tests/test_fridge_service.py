"""Tests for fridge stock business logic."""

from datetime import date
from uuid import uuid4

import pytest

from db.errors import NotFoundError
from models.fridge import FridgeIngredient
from models.ingredient import Ingredient
from services.fridge_service import FridgeService


@pytest.fixture
def kimchi(store):
    return store.create_ingredient(Ingredient(name="kimchi", category="vegetables", days_until_exp=14))


def test_add_item_computes_expiration(store, kimchi) -> None:
    user_id = uuid4()

    item = FridgeService(store).add_item(user_id, kimchi.id, 1, "jar", date(2024, 3, 1))

    assert item.expiration_date == date(2024, 3, 15)
    assert store.get_fridge_ingredient(user_id, kimchi.id).amount == 1


def test_add_unknown_ingredient_is_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        FridgeService(store).add_item(uuid4(), uuid4(), 1, "pcs", date(2024, 3, 1))

    assert store.fridge == {}


def test_update_item_recomputes_expiration(store, kimchi) -> None:
    service = FridgeService(store)
    user_id = uuid4()
    item = service.add_item(user_id, kimchi.id, 1, "jar", date(2024, 3, 1))

    item.purchased_date = date(2024, 4, 1)
    updated = service.update_item(item)

    assert updated.expiration_date == date(2024, 4, 15)


def test_remove_missing_item_is_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        FridgeService(store).remove_item(uuid4(), uuid4())


def test_expiring_soon(store, kimchi) -> None:
    service = FridgeService(store)
    milk = store.create_ingredient(Ingredient(name="milk", category="dairy", days_until_exp=5))
    user_id = uuid4()
    service.add_item(user_id, kimchi.id, 1, "jar", date(2024, 3, 1))
    service.add_item(user_id, milk.id, 1, "l", date(2024, 3, 1))

    soon = service.expiring_soon(user_id, within_days=3, today=date(2024, 3, 3))

    assert [i.ingredient_id for i in soon] == [milk.id]
    assert service.list_items(user_id) != []


def test_update_item_leaves_callers_object_alone(store, kimchi) -> None:
    service = FridgeService(store)
    user_id = uuid4()
    item = service.add_item(user_id, kimchi.id, 1, "jar", date(2024, 3, 1))
    edited = FridgeIngredient(
        user_id=user_id, ingredient_id=kimchi.id, amount=2, unit="jar",
        purchased_date=date(2024, 4, 1), expiration_date=item.expiration_date,
    )

    updated = service.update_item(edited)

    assert updated.expiration_date == date(2024, 4, 15)
    assert edited.expiration_date == date(2024, 3, 15)
