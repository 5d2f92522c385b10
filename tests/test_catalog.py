"""
Product Catalog Tests

Ownership, the verified-farmer gate, numeric validation and edits.
"""

import pytest

from catalog.products import ProductCatalog
from catalog.validators import parse_number, parse_date
from common.errors import (
    InvalidNumeric, InvalidOwner, MissingImage, NotFound, UnverifiedOwner, ValidationError
)

IMAGE = "/uploads/1718000000000-wheat.jpg"


def wheat(**overrides):
    attrs = {"name": "Sharbati Wheat", "category": "Grains", "price": "12.50", "quantity": "3"}
    attrs.update(overrides)
    return attrs


class TestValidators:

    def test_parse_number_accepts_text(self):
        assert parse_number("Price", "12.50", required=True) == 12.5
        assert parse_number("Price", " 3 ", required=True) == 3.0
        assert parse_number("Price", 7) == 7.0

    @pytest.mark.parametrize("raw", ["abc", "12,5", "nan", "inf", True])
    def test_parse_number_rejects_non_numbers(self, raw):
        with pytest.raises(InvalidNumeric):
            parse_number("Price", raw)

    def test_blank_optional_is_none_and_required_raises(self):
        assert parse_number("Moisture", "") is None
        assert parse_number("Moisture", None) is None
        with pytest.raises(ValidationError, match="Price is required"):
            parse_number("Price", "  ", required=True)

    def test_range_checks(self):
        with pytest.raises(InvalidNumeric):
            parse_number("Moisture", "120", maximum=100)
        with pytest.raises(InvalidNumeric):
            parse_number("Price", "-1", minimum=0)

    def test_parse_date(self):
        assert parse_date("Harvest date", "2024-03-15").isoformat() == "2024-03-15"
        assert parse_date("Harvest date", "") is None
        with pytest.raises(ValidationError):
            parse_date("Harvest date", "15/03/2024")


class TestCreateProduct:

    def test_create_parses_numbers(self, catalog, verified_farmer):
        product_id = catalog.create_product(verified_farmer["id"], wheat(), IMAGE)
        product = catalog.get_product(product_id)

        assert product["price"] == 12.5
        assert product["quantity"] == 3.0
        assert product["image"] == IMAGE
        assert product["farmerId"] == verified_farmer["id"]
        assert product["attestationStatus"] == "Pending"
        assert product["qrCode"] is None

    def test_location_defaults_to_farmer(self, catalog, verified_farmer):
        product_id = catalog.create_product(verified_farmer["id"], wheat(), IMAGE)
        assert catalog.get_product(product_id)["location"] == "Nashik, Maharashtra"

    def test_attestation_attributes(self, catalog, verified_farmer):
        product_id = catalog.create_product(
            verified_farmer["id"], wheat(), IMAGE,
            attestation_attrs={"moisture": "12.5", "protein": "9.0", "pesticideResidue": "0.02",
                               "soilPH": "6.8", "harvestDate": "2024-03-15"},
            lab_report_ref="/uploads/1718000000001-report.pdf",
        )
        product = catalog.get_product(product_id)
        assert product["moisture"] == 12.5
        assert product["protein"] == 9.0
        assert product["pesticideResidue"] == 0.02
        assert product["soilPH"] == 6.8
        assert product["harvestDate"] == "2024-03-15"
        assert product["labReport"] == "/uploads/1718000000001-report.pdf"

    def test_invalid_numeric_rejected(self, catalog, verified_farmer):
        with pytest.raises(InvalidNumeric):
            catalog.create_product(verified_farmer["id"], wheat(price="abc"), IMAGE)
        with pytest.raises(InvalidNumeric):
            catalog.create_product(verified_farmer["id"], wheat(), IMAGE, attestation_attrs={"soilPH": "15"})
        assert catalog.list_products_by_farmer(verified_farmer["id"]) == []

    def test_image_required(self, catalog, verified_farmer):
        with pytest.raises(MissingImage):
            catalog.create_product(verified_farmer["id"], wheat(), None)
        with pytest.raises(MissingImage):
            catalog.create_product(verified_farmer["id"], wheat(), "")

    def test_owner_must_exist(self, catalog):
        with pytest.raises(InvalidOwner):
            catalog.create_product("farmer-1", wheat(), IMAGE)
        with pytest.raises(InvalidOwner):
            catalog.create_product("a" * 32, wheat(), IMAGE)

    def test_unverified_owner_blocked(self, catalog, farmer):
        with pytest.raises(UnverifiedOwner):
            catalog.create_product(farmer["id"], wheat(), IMAGE)

    def test_rejected_owner_blocked(self, catalog, verification, farmer):
        verification.set_verification(farmer["id"], "Rejected", "Documents do not match")
        with pytest.raises(UnverifiedOwner):
            catalog.create_product(farmer["id"], wheat(), IMAGE)

    def test_gate_can_be_disabled(self, database, farmer):
        open_catalog = ProductCatalog(database, require_verified_owner=False)
        product_id = open_catalog.create_product(farmer["id"], wheat(), IMAGE)
        assert open_catalog.get_product(product_id)["name"] == "Sharbati Wheat"


class TestUpdateAndDelete:

    def test_update_only_supplied_fields(self, catalog, product_id):
        updated = catalog.update_product(product_id, {"price": "55", "moisture": "11", "name": ""})

        assert updated["price"] == 55.0
        assert updated["moisture"] == 11.0
        assert updated["name"] == "Sharbati Wheat"
        assert updated["quantity"] == 100.0

    def test_update_replaces_image(self, catalog, product_id):
        updated = catalog.update_product(product_id, {}, image_ref="/uploads/2-new.jpg")
        assert updated["image"] == "/uploads/2-new.jpg"

    def test_update_validates_numbers(self, catalog, product_id):
        with pytest.raises(InvalidNumeric):
            catalog.update_product(product_id, {"quantity": "lots"})
        assert catalog.get_product(product_id)["quantity"] == 100.0

    def test_update_unknown_product(self, catalog):
        with pytest.raises(NotFound):
            catalog.update_product("b" * 32, {"price": "10"})

    def test_delete(self, catalog, product_id):
        deleted = catalog.delete_product(product_id)
        assert deleted["id"] == product_id
        with pytest.raises(NotFound):
            catalog.get_product(product_id)
        with pytest.raises(NotFound):
            catalog.delete_product(product_id)


class TestListing:

    def test_list_by_farmer(self, catalog, verified_farmer, product_id):
        products = catalog.list_products_by_farmer(verified_farmer["id"])
        assert [p["id"] for p in products] == [product_id]

    def test_list_by_malformed_farmer(self, catalog):
        with pytest.raises(InvalidOwner):
            catalog.list_products_by_farmer("../etc")

    def test_list_all_includes_farmer(self, catalog, product_id):
        products = catalog.list_all_products()
        assert len(products) == 1
        assert products[0]["farmer"]["farmName"] == "Green Acres"
        assert products[0]["farmer"]["verificationStatus"] == "Verified"
