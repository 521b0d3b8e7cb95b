"""Tests for product request and response schemas."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from product_api.models.product import Product
from product_api.schemas.product import ProductPatch, ProductRead, ProductWrite, as_utc


class TestProductWrite:

    def test_is_active_defaults_to_true(self):
        payload = ProductWrite.model_validate(
            {"name": "Foo", "description": "Bar", "price": 1, "category": "Test"}
        )
        assert payload.is_active is True

    def test_accepts_wire_name(self):
        payload = ProductWrite.model_validate(
            {"name": "Foo", "description": "Bar", "price": 1, "category": "Test", "isActive": False}
        )
        assert payload.is_active is False

    @pytest.mark.parametrize("price", ["nan", "inf"])
    def test_rejects_non_finite_price(self, price):
        with pytest.raises(ValidationError):
            ProductWrite(name="Foo", description="Bar", price=float(price), category="Test")

    @pytest.mark.parametrize("price", [True, False])
    def test_rejects_boolean_price(self, price):
        with pytest.raises(ValidationError, match="price must be a number"):
            ProductWrite(name="Foo", description="Bar", price=price, category="Test")

    def test_accepts_integer_price(self):
        assert ProductWrite(name="Foo", description="Bar", price=5, category="Test").price == 5.0

    def test_rejects_blank_description(self):
        with pytest.raises(ValidationError, match="description must not be blank"):
            ProductWrite(name="Foo", description="  ", price=1, category="Test")


class TestProductPatch:

    def test_changes_only_include_supplied_fields(self):
        patch = ProductPatch.model_validate({"price": 29.99, "isActive": False})
        assert patch.changes() == {"price": 29.99, "is_active": False}

    def test_empty_patch_has_no_changes(self):
        assert ProductPatch().changes() == {}

    def test_rejects_explicit_null(self):
        with pytest.raises(ValidationError, match="price must not be null"):
            ProductPatch.model_validate({"price": None})

    def test_rejects_boolean_price(self):
        with pytest.raises(ValidationError, match="price must be a number"):
            ProductPatch.model_validate({"price": True})

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            ProductPatch.model_validate({"colour": "red"})


class TestProductRead:

    def test_serializes_wire_names_and_utc_timestamps(self):
        product = Product(
            id=3,
            name="Foo",
            description="Bar",
            price=9.99,
            category="Test",
            is_active=True,
            created_at=datetime(2024, 1, 1, 12, 0),
            updated_at=datetime(2024, 1, 1, 12, 0, 0, 5),
        )

        data = ProductRead.from_model(product).model_dump(by_alias=True)

        assert data == {
            "id": 3,
            "name": "Foo",
            "description": "Bar",
            "price": 9.99,
            "category": "Test",
            "createdAt": "2024-01-01T12:00:00+00:00",
            "updatedAt": "2024-01-01T12:00:00.000005+00:00",
            "isActive": True,
        }


def test_as_utc_converts_offsets():
    local = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(local) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert as_utc(local).utcoffset() == timedelta(0)
