"""
Shared configuration and error taxonomy for AgriDirect
"""

from .errors import (
    MarketplaceError,
    ValidationError,
    InvalidNumeric,
    MissingImage,
    InvalidStatus,
    DuplicateIdentity,
    DuplicateAttestation,
    NotFound,
    InvalidCredentials,
    InvalidOwner,
    UnverifiedOwner,
    EncodingError,
    StorageFailure,
)
from .settings import Settings

__all__ = [
    "MarketplaceError",
    "ValidationError",
    "InvalidNumeric",
    "MissingImage",
    "InvalidStatus",
    "DuplicateIdentity",
    "DuplicateAttestation",
    "NotFound",
    "InvalidCredentials",
    "InvalidOwner",
    "UnverifiedOwner",
    "EncodingError",
    "StorageFailure",
    "Settings",
]
