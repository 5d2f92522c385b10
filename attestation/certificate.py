"""
Certificate Renderer

Public, unauthenticated product authenticity page. Reached by scanning the
attestation code, so an unknown product renders a friendly page instead of
an API error. Data is read live, so the page always reflects the product's
current stored attributes.
"""

import html
import logging
from typing import Dict, Any, Optional

from common.errors import NotFound
from database import crud
from database.connection import Database
from database.models import VERIFIED, REJECTED
from attestation.issuer import AttestationIssuer

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"


def _esc(value) -> str:
    return html.escape(str(value))


def _number(value: float) -> str:
    return f"{value:g}"


def format_metric(value: Optional[float], unit: str = "") -> str:
    """
    Format an optional attestation metric.

    Example:
        >>> format_metric(12.5, "%")
        '12.5%'
        >>> format_metric(9.0, "%")
        '9%'
        >>> format_metric(None, "%")
        'Not available'
    """
    if value is None:
        return NOT_AVAILABLE
    if unit == "%":
        return f"{_number(value)}%"
    if unit:
        return f"{_number(value)} {unit}"
    return _number(value)


class CertificateRenderer:
    """Builds the product + farmer join shown on the certificate page."""

    def __init__(self, database: Database, issuer: AttestationIssuer):
        self.database = database
        self.issuer = issuer

    def build_certificate(self, product_id: str) -> Dict[str, Any]:
        """
        Join a product with its owning farmer for display.

        Raises:
            NotFound: Unknown or malformed product id
        """
        with self.database.session() as db:
            product = crud.get_product(db, product_id)
            if not product:
                raise NotFound("Product not found")
            farmer = product.farmer

            return {
                "certificateUrl": self.issuer.certificate_url(product.id),
                "qrCode": product.qr_code,
                "attestationStatus": product.attestation_status,
                "farmer": {
                    "id": farmer.id,
                    "name": farmer.name,
                    "farmName": farmer.farm_name,
                    "location": farmer.location,
                    "farmingType": farmer.farming_type or NOT_AVAILABLE,
                    "verificationStatus": farmer.verification_status,
                    "verifiedAt": farmer.verified_at.strftime("%d %b %Y") if farmer.verified_at else None,
                },
                "product": {
                    "id": product.id,
                    "name": product.name,
                    "category": product.category or NOT_AVAILABLE,
                    "price": f"₹{product.price:,.2f}",
                    "quantity": _number(product.quantity),
                    "location": product.location or farmer.location,
                    "image": product.image,
                    "harvestDate": product.harvest_date.isoformat() if product.harvest_date else NOT_AVAILABLE,
                },
                "metrics": {
                    "moisture": format_metric(product.moisture, "%"),
                    "protein": format_metric(product.protein, "%"),
                    "pesticideResidue": format_metric(product.pesticide_residue, "ppm"),
                    "soilPH": format_metric(product.soil_ph),
                },
                "labReport": product.lab_report,
            }

    def render_certificate(self, product_id: str) -> str:
        """Render the certificate page as HTML. Raises NotFound for unknown products."""
        cert = self.build_certificate(product_id)
        e = _esc

        farmer = cert['farmer']
        product = cert['product']
        metrics = cert['metrics']

        status = farmer['verificationStatus']
        if status == VERIFIED:
            since = f" since {e(farmer['verifiedAt'])}" if farmer['verifiedAt'] else ""
            badge = f"<span class=\"badge verified\">✅ Verified farmer{since}</span>"
        elif status == REJECTED:
            badge = '<span class="badge rejected">⚠️ Farmer verification rejected</span>'
        else:
            badge = '<span class="badge pending">⏳ Farmer verification pending</span>'

        if cert['labReport']:
            lab_report = e(cert['labReport'])
            lab_report_html = f"<p><a href=\"{lab_report}\" target=\"_blank\" rel=\"noopener\">📄 View lab report</a></p>"
        else:
            lab_report_html = f"<p>Lab report: {NOT_AVAILABLE}</p>"

        qr_html = ""
        if cert['qrCode']:
            qr_code = e(cert['qrCode'])
            qr_html = f"<img class=\"qr\" src=\"{qr_code}\" alt=\"Authenticity QR code\">"

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{e(product['name'])} - Product Authenticity Certificate</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
        }}
        .header {{
            background: #2e7d32;
            color: white;
            padding: 20px;
            border-radius: 5px;
            margin-bottom: 20px;
        }}
        .card {{
            background: white;
            padding: 20px;
            border-radius: 5px;
            margin-bottom: 20px;
        }}
        .badge {{
            display: inline-block;
            padding: 4px 12px;
            border-radius: 20px;
            font-size: 13px;
            font-weight: 600;
        }}
        .verified {{ background: #c8e6c9; color: #1b5e20; }}
        .pending {{ background: #fff3cd; color: #7a5c00; }}
        .rejected {{ background: #f8d7da; color: #842029; }}
        .qr {{ width: 160px; float: right; }}
        td {{ padding: 6px 12px 6px 0; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>🌾 Product Authenticity Certificate</h1>
        <p>{e(product['name'])} from {e(farmer['farmName'])}</p>
    </div>

    <div class="card">
        {qr_html}
        <h2>👨‍🌾 Farmer</h2>
        <p>{badge}</p>
        <table>
            <tr><td><strong>Name</strong></td><td>{e(farmer['name'])}</td></tr>
            <tr><td><strong>Farm</strong></td><td>{e(farmer['farmName'])}</td></tr>
            <tr><td><strong>Location</strong></td><td>{e(farmer['location'])}</td></tr>
            <tr><td><strong>Farming type</strong></td><td>{e(farmer['farmingType'])}</td></tr>
            <tr><td><strong>Farmer ID</strong></td><td>{e(farmer['id'])}</td></tr>
        </table>
    </div>

    <div class="card">
        <h2>📦 Product</h2>
        <table>
            <tr><td><strong>Name</strong></td><td>{e(product['name'])}</td></tr>
            <tr><td><strong>Category</strong></td><td>{e(product['category'])}</td></tr>
            <tr><td><strong>Price</strong></td><td>{e(product['price'])}</td></tr>
            <tr><td><strong>Quantity</strong></td><td>{e(product['quantity'])}</td></tr>
            <tr><td><strong>Harvest date</strong></td><td>{e(product['harvestDate'])}</td></tr>
        </table>
    </div>

    <div class="card">
        <h2>🔬 Quality Attestation</h2>
        <table>
            <tr><td><strong>Moisture</strong></td><td>{e(metrics['moisture'])}</td></tr>
            <tr><td><strong>Protein</strong></td><td>{e(metrics['protein'])}</td></tr>
            <tr><td><strong>Pesticide residue</strong></td><td>{e(metrics['pesticideResidue'])}</td></tr>
            <tr><td><strong>Soil pH</strong></td><td>{e(metrics['soilPH'])}</td></tr>
        </table>
        {lab_report_html}
    </div>

    <p style="font-size: 12px; color: #666;">
        Certificate: <a href="{e(cert['certificateUrl'])}">{e(cert['certificateUrl'])}</a>
    </p>
</body>
</html>
"""

    def render_not_found(self, product_id: str) -> str:
        """Friendly page for unknown or deleted products."""
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Product Not Found</title>
</head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 40px auto; text-align: center;">
    <h1>❌ Product Not Found</h1>
    <p>We could not find a product certificate for this code.</p>
    <p>The listing may have been removed by the farmer, or the code is not genuine.</p>
    <p style="font-size: 12px; color: #666;">Reference: {html.escape(product_id)}</p>
</body>
</html>
"""
