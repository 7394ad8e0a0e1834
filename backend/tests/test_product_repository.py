from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from robostore.core.errors import NotFoundError, ValidationError
from robostore.models.product import Product


def record(**overrides) -> dict:
    data = {
        "name": "LiDAR Lite 360",
        "description": "360 degree 2D laser scanner",
        "price": 129.5,
        "category": "Sensors",
    }
    data.update(overrides)
    return data


def test_create_assigns_id_timestamps_and_defaults(repository):
    product = repository.create(record(name="  LiDAR Lite 360  "))

    assert len(product.id) == 32
    assert product.created_at is not None
    assert product.updated_at is not None
    assert product.name == "LiDAR Lite 360"
    assert product.stock == 0
    assert product.images == []
    assert product.features == []
    assert product.specifications["compatibility"] == []


def test_create_stores_nested_fields(repository):
    product = repository.create(record(
        images=[{"url": "https://cdn.test/a.png", "storage_handle": "robotics_products/a"}],
        features=["12 m range"],
        specifications={"power": "5V USB", "compatibility": ["ROS 2"]},
        stock=40,
    ))

    assert product.images == [{"url": "https://cdn.test/a.png", "storage_handle": "robotics_products/a"}]
    assert product.features == ["12 m range"]
    assert product.specifications["power"] == "5V USB"
    assert product.specifications["compatibility"] == ["ROS 2"]
    assert product.stock == 40


def test_create_reports_every_missing_field(repository, db):
    with pytest.raises(ValidationError) as exc:
        repository.create({"category": "Kits"})

    assert "name: Field required" in exc.value.errors
    assert "description: Field required" in exc.value.errors
    assert "price: Field required" in exc.value.errors
    assert db.query(Product).count() == 0


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"category": "Boats"}, "category"),
        ({"price": -1}, "price"),
        ({"stock": -3}, "stock"),
        ({"price": "inf"}, "price"),
        ({"price": float("nan")}, "price"),
        ({"stock": "99999999999999999999"}, "stock"),
        ({"name": "   "}, "name"),
        ({"images": [{"url": "https://cdn.test/a.png", "storage_handle": ""}]}, "images.0.storage_handle"),
    ],
)
def test_create_rejects_invariant_violations(repository, overrides, field):
    with pytest.raises(ValidationError) as exc:
        repository.create(record(**overrides))

    assert any(msg.startswith(f"{field}:") for msg in exc.value.errors)


def test_find_all_is_newest_first(repository, db):
    first = repository.create(record(name="first"))
    second = repository.create(record(name="second"))
    third = repository.create(record(name="third"))

    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    first.created_at = base
    second.created_at = base + timedelta(days=2)
    third.created_at = base + timedelta(days=1)
    db.commit()

    names = [p.name for p in repository.find_all()]
    assert names == ["second", "third", "first"]


def test_find_by_id_missing_raises(repository):
    with pytest.raises(NotFoundError):
        repository.find_by_id("0" * 32)


def test_update_applies_only_supplied_fields(repository):
    product = repository.create(record(stock=4))
    created_at = product.created_at

    updated = repository.update_by_id(product.id, {"price": "99.90", "features": ["SLAM ready"]})

    assert updated.price == pytest.approx(99.9)
    assert updated.features == ["SLAM ready"]
    assert updated.stock == 4
    assert updated.name == "LiDAR Lite 360"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_runs_field_validators(repository):
    product = repository.create(record())

    with pytest.raises(ValidationError):
        repository.update_by_id(product.id, {"category": "Boats"})
    with pytest.raises(ValidationError):
        repository.update_by_id(product.id, {"name": None})

    assert repository.find_by_id(product.id).category == "Sensors"


def test_update_missing_raises(repository):
    with pytest.raises(NotFoundError):
        repository.update_by_id("missing", {"price": 1})


def test_delete_removes_record(repository):
    product = repository.create(record())

    repository.delete_by_id(product.id)

    with pytest.raises(NotFoundError):
        repository.find_by_id(product.id)
    with pytest.raises(NotFoundError):
        repository.delete_by_id(product.id)


@pytest.mark.parametrize("changes", [{"price": "inf"}, {"stock": 2**63}])
def test_update_rejects_unstorable_numbers(repository, changes):
    product = repository.create(record(stock=4))

    with pytest.raises(ValidationError):
        repository.update_by_id(product.id, changes)

    stored = repository.find_by_id(product.id)
    assert stored.price == pytest.approx(129.5)
    assert stored.stock == 4
