"""
Attestation Code Issuer

Binds a persisted product to a scannable code. The code encodes the
product's certificate URL, which contains the product id, so the product
row must exist first:

    1. persist product            (attestation_status = Pending)
    2. render PNG to <dir>/<productId>-authQR.png
    3. record qr_code reference   (attestation_status = Issued)

A failure in step 2 or 3 removes the written image and leaves the product
in state Failed with no reference, so issuance can be retried.
"""

import logging
from pathlib import Path
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError

from common.errors import NotFound, EncodingError, DuplicateAttestation, StorageFailure
from database import crud
from database.connection import Database
from database.models import ATTESTATION_ISSUED, ATTESTATION_FAILED
from attestation.qrcode_gen import certificate_url, qr_filename, generate_qr_code
from catalog.products import ProductCatalog

logger = logging.getLogger(__name__)

QR_PUBLIC_PREFIX = "/qrcodes"


class AttestationIssuer:
    """Generates and records attestation codes for products."""

    def __init__(
        self,
        database: Database,
        catalog: ProductCatalog,
        base_url: str,
        qr_code_dir: Path,
        public_prefix: str = QR_PUBLIC_PREFIX
    ):
        self.database = database
        self.catalog = catalog
        self.base_url = base_url.rstrip("/")
        self.qr_code_dir = Path(qr_code_dir)
        self.public_prefix = public_prefix.rstrip("/")

    def certificate_url(self, product_id: str) -> str:
        return certificate_url(product_id, self.base_url)

    def qr_code_path(self, product_id: str) -> Path:
        return self.qr_code_dir / qr_filename(product_id)

    def qr_code_ref(self, product_id: str) -> str:
        return f"{self.public_prefix}/{qr_filename(product_id)}"

    def issue_attestation(self, product_id: str) -> Dict[str, Any]:
        """
        Render and record the attestation code for a persisted product.

        Re-issuing overwrites the image at the same derived path.

        Returns:
            {"productId", "url", "qrCode", "attestationStatus"}

        Raises:
            NotFound: Product does not exist
            EncodingError: Image generation or write failed
            DuplicateAttestation: Reference already bound to another product
            StorageFailure: Recording the reference failed
        """
        with self.database.session() as db:
            if not crud.get_product(db, product_id):
                raise NotFound("Product not found")

        url = self.certificate_url(product_id)
        path = self.qr_code_path(product_id)
        ref = self.qr_code_ref(product_id)

        try:
            generate_qr_code(url, output_file=path)
        except Exception as e:
            logger.error(f"QR generation failed for product {product_id}: {e}", exc_info=True)
            self._discard_image(path)
            self._mark_failed(product_id)
            raise EncodingError(productId=product_id, attestationStatus=ATTESTATION_FAILED) from e

        try:
            with self.database.session() as db:
                product = crud.get_product(db, product_id)
                if not product:
                    raise NotFound("Product not found")
                product.qr_code = ref
                product.attestation_status = ATTESTATION_ISSUED
        except IntegrityError as e:
            logger.error(f"Attestation reference {ref} already in use: {e.orig}")
            self._discard_image(path)
            self._mark_failed(product_id)
            raise DuplicateAttestation(productId=product_id)
        except (NotFound, StorageFailure):
            # Product vanished or the update failed: do not leave an orphaned code
            self._discard_image(path)
            self._mark_failed(product_id)
            raise

        logger.info(f"Issued attestation code for product {product_id} -> {url}")
        return {
            "productId": product_id,
            "url": url,
            "qrCode": ref,
            "attestationStatus": ATTESTATION_ISSUED,
        }

    def withdraw_product(self, product_id: str) -> Dict[str, Any]:
        """Delete a product and its attestation image."""
        record = self.catalog.delete_product(product_id)
        self._discard_image(self.qr_code_path(product_id))
        return record

    def qr_png(self, product_id: str) -> bytes:
        """
        PNG bytes of a product's attestation code.

        Issues the code on demand when it was never issued, failed earlier,
        or the image file is missing.
        """
        product = self.catalog.get_product(product_id)
        path = self.qr_code_path(product_id)
        if product["attestationStatus"] != ATTESTATION_ISSUED or not path.exists():
            logger.info(f"Attestation code missing for product {product_id}, issuing now")
            self.issue_attestation(product_id)
        return path.read_bytes()

    def _discard_image(self, path: Path):
        if path.exists():
            path.unlink()
            logger.info(f"Removed attestation image {path.name}")

    def _mark_failed(self, product_id: str):
        try:
            with self.database.session() as db:
                product = crud.get_product(db, product_id)
                if product:
                    product.qr_code = None
                    product.attestation_status = ATTESTATION_FAILED
        except StorageFailure:
            logger.error(f"Could not mark attestation failed for product {product_id}")
