"""
==============================================================================
Catalog Store Tests
==============================================================================

Tests run against both the SQL and the in-memory store.

==============================================================================
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shelfspot.catalog.models import ProductRecord, derive_display_hint, placeholder_image_url
from shelfspot.catalog.samples import SAMPLE_PRODUCTS, seed_store
from shelfspot.catalog.sql_store import SqlCatalogStore
from shelfspot.catalog.store import CatalogStore, InMemoryCatalogStore
from shelfspot.core.exceptions import AppException
from shelfspot.schemas.product import ProductCreate
from shelfspot.utils.validators import MAX_PRICE, ProductInputValidator, has_cents_precision


def make_product(**overrides) -> ProductCreate:
    data = {"name": "Desk Lamp", "price": 49.5, "description": "A bright lamp"}
    data.update(overrides)
    return ProductCreate.model_validate(data)


class TestCreate:
    """Tests for CatalogStore.create_product."""

    def test_assigns_id_timestamp_and_defaults(self, store: CatalogStore):
        """Test a new record gets an id, created_at, image and hint."""
        record = store.create_product(make_product())

        assert record.id
        assert record.created_at is not None
        assert record.created_at.tzinfo is not None
        assert record.image_url == placeholder_image_url(record.id)
        assert record.display_hint == "Desk Lamp"
        assert record.price == 49.5

    def test_ids_unique(self, store: CatalogStore):
        """Test ids never repeat."""
        ids = {store.create_product(make_product()).id for _ in range(10)}
        assert len(ids) == 10

    def test_keeps_supplied_optional_fields(self, store: CatalogStore):
        """Test imageUrl and displayHint are kept when given."""
        record = store.create_product(make_product(
            imageUrl="https://example.com/lamp.png",
            displayHint="brass lamp",
        ))
        assert record.image_url == "https://example.com/lamp.png"
        assert record.display_hint == "brass lamp"

    def test_strips_surrounding_whitespace(self, store: CatalogStore):
        """Test name and description are stored trimmed."""
        record = store.create_product(make_product(name="  Desk Lamp ", description=" Bright "))
        assert record.name == "Desk Lamp"
        assert record.description == "Bright"

    @pytest.mark.parametrize("overrides, message", [
        ({"name": ""}, "name is required"),
        ({"price": float("nan")}, "price must be greater than zero"),
        ({"price": True}, "price must be a number"),
        ({"price": "12"}, "price must be a number"),
        ({"price": -1}, "price must be greater than zero"),
        ({"price": 0.001}, "price must have at most two decimal places"),
        ({"price": 1.999}, "price must have at most two decimal places"),
        ({"description": "  "}, "description is required"),
    ])
    def test_rejects_invalid_input(self, store: CatalogStore, overrides: dict, message: str):
        """Test the store validates input that skipped the API schema."""
        data = {"name": "Desk Lamp", "price": 49.5, "description": "A bright lamp"}
        data.update(overrides)

        with pytest.raises(AppException) as exc_info:
            store.create_product(ProductCreate.model_construct(**data))

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == message
        assert store.count() == 0


class TestList:
    """Tests for CatalogStore.list_products."""

    def test_empty(self, store: CatalogStore):
        assert store.list_products() == []

    def test_newest_first(self, store: CatalogStore):
        """Test listing order is descending created_at."""
        created = [store.create_product(make_product(name=f"Lamp {i}")) for i in range(5)]

        listed = store.list_products()

        assert [p.id for p in listed] == [p.id for p in reversed(created)]
        assert all(a.created_at >= b.created_at for a, b in zip(listed, listed[1:]))

    @pytest.mark.parametrize("price", [0.01, 1.99, 1.5, 20, MAX_PRICE])
    def test_price_stored_exactly(self, store: CatalogStore, price):
        """Test whole-cent prices come back unchanged from either backend."""
        record = store.create_product(make_product(price=price))

        assert record.price == price
        assert store.list_products()[0].price == price

    def test_round_trip(self, store: CatalogStore):
        """Test a listed record equals the created one."""
        record = store.create_product(make_product(price=19.99))
        listed = store.list_products()[0]

        assert listed.id == record.id
        assert listed.name == record.name
        assert listed.price == 19.99
        assert listed.description == record.description
        assert listed.image_url == record.image_url
        assert listed.display_hint == record.display_hint


class TestDelete:
    """Tests for CatalogStore.delete_product."""

    def test_delete_existing(self, store: CatalogStore):
        """Test the deleted id disappears and the rest remain."""
        keep = store.create_product(make_product(name="Keep"))
        drop = store.create_product(make_product(name="Drop"))

        store.delete_product(drop.id)

        assert [p.id for p in store.list_products()] == [keep.id]

    def test_delete_unknown(self, store: CatalogStore):
        """Test deleting an unknown id raises PRODUCT_NOT_FOUND."""
        store.create_product(make_product())

        with pytest.raises(AppException) as exc_info:
            store.delete_product("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"
        assert store.count() == 1

    def test_delete_twice(self, store: CatalogStore):
        """Test the second delete of the same id is a 404."""
        record = store.create_product(make_product())
        store.delete_product(record.id)

        with pytest.raises(AppException):
            store.delete_product(record.id)


class TestInMemoryStore:
    """Tests specific to InMemoryCatalogStore."""

    def test_initial_products_sorted(self):
        """Test seeded records are ordered newest first."""
        now = datetime.now(timezone.utc)
        older = ProductRecord(id="a", name="Old", price=1, description="d", created_at=now - timedelta(days=1))
        newer = ProductRecord(id="b", name="New", price=1, description="d", created_at=now)

        store = InMemoryCatalogStore([older, newer])

        assert [p.id for p in store.list_products()] == ["b", "a"]

    def test_list_returns_copy(self):
        """Test callers cannot mutate the stored list."""
        store = InMemoryCatalogStore()
        store.create_product(make_product())

        store.list_products().clear()

        assert store.count() == 1

    def test_clear(self):
        store = InMemoryCatalogStore()
        store.create_product(make_product())
        store.clear()
        assert store.count() == 0


class TestSqlStoreFailures:
    """Tests for persistence failures in SqlCatalogStore."""

    def test_store_error_on_missing_table(self, db: Session):
        """Test database errors surface as STORE_ERROR without internals."""
        store = SqlCatalogStore(db)
        db.connection().exec_driver_sql("DROP TABLE products")

        with pytest.raises(AppException) as exc_info:
            store.list_products()

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "STORE_ERROR"
        assert "products" not in exc_info.value.message


class TestSampleData:
    """Tests for seed_store."""

    def test_seeds_empty_store(self, store: CatalogStore):
        """Test the demo catalog lists in its declared order."""
        inserted = seed_store(store)

        assert inserted == len(SAMPLE_PRODUCTS)
        names = [p.name for p in store.list_products()]
        assert names == [item["name"] for item in SAMPLE_PRODUCTS]

    def test_skips_populated_store(self, store: CatalogStore):
        """Test seeding never touches existing data."""
        store.create_product(make_product())

        assert seed_store(store) == 0
        assert store.count() == 1


class TestHelpers:
    """Tests for record helpers and the input validator."""

    @pytest.mark.parametrize("name, expected", [
        ("Desk Lamp", "Desk Lamp"),
        ("Adjustable Standing Desk Lamp", "Adjustable Standing"),
        ("Kettle", "Kettle"),
        ("   ", None),
    ])
    def test_derive_display_hint(self, name: str, expected):
        assert derive_display_hint(name) == expected

    def test_placeholder_contains_id(self):
        assert "abc-123" in placeholder_image_url("abc-123")

    def test_validator_accepts_valid(self):
        validator = ProductInputValidator()
        assert validator.validate("Desk Lamp", 49.5, "A bright lamp") == (True, None)
        assert validator.is_valid("Desk Lamp", 1, "x")

    def test_validator_rejects_huge_price(self):
        validator = ProductInputValidator()
        is_valid, error = validator.validate("Desk Lamp", 1e12, "A bright lamp")
        assert not is_valid
        assert "exceed" in error

    @pytest.mark.parametrize("price, expected", [
        (19.99, True),
        (49.5, True),
        (20, True),
        (0.001, False),
        (1.999, False),
        (1e-05, False),
    ])
    def test_has_cents_precision(self, price, expected):
        assert has_cents_precision(price) is expected

    def test_schema_rejects_sub_cent_price(self):
        """Test the request schema refuses prices the column would round."""
        with pytest.raises(ValidationError) as exc_info:
            make_product(price=0.001)
        assert "two decimal places" in str(exc_info.value)

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/a.png", "example.com/lamp.png"])
    def test_schema_rejects_bad_image_url(self, url: str):
        with pytest.raises(ValidationError):
            make_product(imageUrl=url)
