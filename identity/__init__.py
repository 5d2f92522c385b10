"""
Farmer and consumer identities
"""

from .passwords import hash_password, verify_password
from .registration import IdentityStore, farmer_public, consumer_public, FARMER, CONSUMER, FARMER_DOCUMENT_FIELDS

__all__ = [
    "hash_password",
    "verify_password",
    "IdentityStore",
    "farmer_public",
    "consumer_public",
    "FARMER",
    "CONSUMER",
    "FARMER_DOCUMENT_FIELDS",
]
