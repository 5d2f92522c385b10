"""
Public product endpoints

No authentication: the certificate page and QR image are opened by anyone
scanning a product's code.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response

from common.errors import NotFound
from service.responses import success
from service.state import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products")
async def list_products(services: Services = Depends(get_services)):
    """All products with their farmer's name, location and verification status."""
    products = services.catalog.list_all_products()
    return success(products=products, count=len(products))


@router.get("/product/{product_id}/qr")
async def product_qr(product_id: str, services: Services = Depends(get_services)):
    """PNG of the product's attestation QR code, issued on demand if missing."""
    png = services.issuer.qr_png(product_id)
    return Response(content=png, media_type="image/png")


@router.post("/product/{product_id}/qr")
async def reissue_qr(product_id: str, services: Services = Depends(get_services)):
    """Retry attestation issuance, e.g. after a Failed status."""
    attestation = services.issuer.issue_attestation(product_id)
    return success(
        "QR code issued",
        productId=product_id,
        qrCode=attestation["qrCode"],
        certificateUrl=attestation["url"],
        attestationStatus=attestation["attestationStatus"],
    )


@router.get("/product/{product_id}/view", response_class=HTMLResponse)
async def view_certificate(product_id: str, services: Services = Depends(get_services)):
    """
    Public authenticity certificate.

    Example:
        GET /product/3f2b9c.../view
    """
    try:
        return HTMLResponse(content=services.certificates.render_certificate(product_id))
    except NotFound:
        logger.info(f"Certificate requested for unknown product {product_id}")
        return HTMLResponse(content=services.certificates.render_not_found(product_id), status_code=404)
