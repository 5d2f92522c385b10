"""
Product attestation codes and public certificates
"""

from .qrcode_gen import certificate_url, generate_qr_code
from .issuer import AttestationIssuer
from .certificate import CertificateRenderer, format_metric

__all__ = [
    "certificate_url",
    "generate_qr_code",
    "AttestationIssuer",
    "CertificateRenderer",
    "format_metric",
]
