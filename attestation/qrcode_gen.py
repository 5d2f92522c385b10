"""
QR Code Generator for product certificates

Encodes a product's public certificate URL into a PNG image that can be
printed on packaging. Scanning it opens the certificate page.
"""

import io
from pathlib import Path
from typing import Optional

import qrcode


def certificate_url(product_id: str, base_url: str) -> str:
    """
    Derive the public certificate URL for a product.

    Example:
        >>> certificate_url("3f2b...", "https://agridirect.example")
        'https://agridirect.example/product/3f2b.../view'
    """
    return f"{base_url.rstrip('/')}/product/{product_id}/view"


def qr_filename(product_id: str) -> str:
    return f"{product_id}-authQR.png"


def make_qr_image(url: str, size: int = 10, border: int = 4):
    """Build a QR image for a URL (high error correction for printed labels)."""
    qr = qrcode.QRCode(
        version=1,  # Auto-size
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=size,
        border=border,
    )
    qr.add_data(url)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white")


def generate_qr_code(url: str, output_file: Optional[Path] = None) -> bytes:
    """
    Generate a QR code PNG for a URL.

    Args:
        url: URL to encode
        output_file: Optional path to save the PNG; overwritten if it exists

    Returns:
        PNG image bytes
    """
    img = make_qr_image(url)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    png = buffer.getvalue()

    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_bytes(png)

    return png
