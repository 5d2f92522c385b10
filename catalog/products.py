"""
Product Catalog

Create, update, delete and list product listings with their
quality-attestation metadata. Products belong to exactly one farmer.
"""

import logging
from typing import Dict, Any, List, Optional

from common.errors import InvalidOwner, MissingImage, NotFound, ValidationError
from database import crud
from database.connection import Database
from database.models import Product, ATTESTATION_PENDING
from catalog.validators import is_blank, parse_field, parse_date
from verification.farmer_status import require_verified

logger = logging.getLogger(__name__)

TEXT_FIELDS = {
    "name": "name",
    "category": "category",
    "location": "location",
}

NUMERIC_FIELDS = {
    "price": "price",
    "quantity": "quantity",
}

ATTESTATION_FIELDS = {
    "moisture": "moisture",
    "protein": "protein",
    "pesticideResidue": "pesticide_residue",
    "soilPH": "soil_ph",
}


def product_record(product: Product, include_farmer: bool = False) -> Dict[str, Any]:
    """Convert a product row to its wire form."""
    record = {
        "id": product.id,
        "farmerId": product.farmer_id,
        "name": product.name,
        "category": product.category,
        "price": product.price,
        "quantity": product.quantity,
        "location": product.location,
        "image": product.image,
        "harvestDate": product.harvest_date.isoformat() if product.harvest_date else None,
        "moisture": product.moisture,
        "protein": product.protein,
        "pesticideResidue": product.pesticide_residue,
        "soilPH": product.soil_ph,
        "labReport": product.lab_report,
        "qrCode": product.qr_code,
        "attestationStatus": product.attestation_status,
    }
    if include_farmer and product.farmer is not None:
        record["farmer"] = {
            "id": product.farmer.id,
            "name": product.farmer.name,
            "farmName": product.farmer.farm_name,
            "location": product.farmer.location,
            "verificationStatus": product.farmer.verification_status,
        }
    return record


def _parse_columns(attrs: Dict[str, Any], required: tuple = ()) -> Dict[str, Any]:
    """
    Validate supplied fields and map them to column values.

    Blank values count as "not supplied" and are left out of the result,
    except for required fields, which raise.
    """
    columns = {}

    for field, column in TEXT_FIELDS.items():
        value = attrs.get(field)
        if is_blank(value):
            if field in required:
                raise ValidationError(f"Product {field} is required")
            continue
        columns[column] = str(value).strip()

    for field, column in {**NUMERIC_FIELDS, **ATTESTATION_FIELDS}.items():
        value = parse_field(field, attrs.get(field), required=field in required)
        if value is not None:
            columns[column] = value

    harvest_date = parse_date("Harvest date", attrs.get("harvestDate"))
    if harvest_date is not None:
        columns["harvest_date"] = harvest_date

    return columns


class ProductCatalog:
    """Product listings owned by farmers."""

    def __init__(self, database: Database, require_verified_owner: bool = True):
        self.database = database
        self.require_verified_owner = require_verified_owner

    def create_product(
        self,
        farmer_id: str,
        attrs: Dict[str, Any],
        image_ref: Optional[str],
        attestation_attrs: Optional[Dict[str, Any]] = None,
        lab_report_ref: Optional[str] = None
    ) -> str:
        """
        Persist a new product listing.

        The attestation code is not generated here; it needs the id this
        method returns (see AttestationIssuer.issue_attestation).

        Args:
            farmer_id: Owning farmer's identity key
            attrs: name, category, price, quantity, location
            image_ref: Stored primary image reference (required)
            attestation_attrs: harvestDate, moisture, protein,
                pesticideResidue, soilPH
            lab_report_ref: Stored lab report reference

        Returns:
            New product id

        Raises:
            InvalidOwner: Malformed or unknown farmer id
            UnverifiedOwner: Owner is not Verified (when the trust gate is on)
            MissingImage: No primary image
            InvalidNumeric: A numeric field does not parse or is out of range
        """
        if not crud.is_valid_id(farmer_id):
            raise InvalidOwner()
        if is_blank(image_ref):
            raise MissingImage()

        columns = _parse_columns(
            {**attrs, **(attestation_attrs or {})},
            required=("name", "price", "quantity"),
        )

        with self.database.session() as db:
            farmer = crud.get_farmer(db, farmer_id)
            if not farmer:
                raise InvalidOwner("Farmer not found")
            if self.require_verified_owner:
                require_verified(farmer)

            columns.setdefault("location", farmer.location)
            product = crud.create_product(db, {
                **columns,
                "farmer_id": farmer.id,
                "image": image_ref,
                "lab_report": lab_report_ref or None,
                "qr_code": None,
                "attestation_status": ATTESTATION_PENDING,
            })
            product_id = product.id

        logger.info(f"Farmer {farmer_id} created product {product_id} ({columns['name']})")
        return product_id

    def update_product(
        self,
        product_id: str,
        attrs: Dict[str, Any],
        image_ref: Optional[str] = None,
        lab_report_ref: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Update supplied fields of a product.

        A new image replaces the stored reference; removing the old file
        is up to the caller. The attestation code is not regenerated: it points at the
        certificate URL, which always shows current data.
        """
        columns = _parse_columns(attrs)
        if not is_blank(image_ref):
            columns["image"] = image_ref
        if not is_blank(lab_report_ref):
            columns["lab_report"] = lab_report_ref

        with self.database.session() as db:
            product = crud.get_product(db, product_id)
            if not product:
                raise NotFound("Product not found")
            for column, value in columns.items():
                setattr(product, column, value)
            db.flush()
            record = product_record(product)

        logger.info(f"Updated product {product_id}: {', '.join(sorted(columns)) or 'no changes'}")
        return record

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        """Delete a product. Unknown ids raise NotFound. Returns the deleted record."""
        with self.database.session() as db:
            product = crud.get_product(db, product_id)
            if not product:
                raise NotFound("Product not found")
            record = product_record(product)
            db.delete(product)

        logger.info(f"Deleted product {product_id}")
        return record

    def get_product(self, product_id: str, include_farmer: bool = False) -> Dict[str, Any]:
        with self.database.session() as db:
            product = crud.get_product(db, product_id)
            if not product:
                raise NotFound("Product not found")
            return product_record(product, include_farmer=include_farmer)

    def list_products_by_farmer(self, farmer_id: str) -> List[Dict[str, Any]]:
        if not crud.is_valid_id(farmer_id):
            raise InvalidOwner()
        with self.database.session() as db:
            return [product_record(p) for p in crud.get_products_by_farmer(db, farmer_id)]

    def list_all_products(self) -> List[Dict[str, Any]]:
        """All products with the owning farmer's name, location and status."""
        with self.database.session() as db:
            return [product_record(p, include_farmer=True) for p in crud.get_all_products(db)]
