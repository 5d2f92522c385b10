"""
Marketplace error taxonomy.

Every business failure raised by a component is a MarketplaceError subclass.
The HTTP layer turns them into the response envelope; the `code` attribute
is the machine-readable kind and the message is safe to show to users.
"""


class MarketplaceError(Exception):
    """Base class for user-facing marketplace failures."""
    code = "error"
    default_message = "Request could not be completed"

    def __init__(self, message: str = None, **details):
        self.message = message or self.default_message
        self.details = details  # extra response fields, e.g. productId
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    """Raised when input is missing or malformed."""
    code = "validation_error"
    default_message = "Invalid input"


class InvalidNumeric(ValidationError):
    """Raised when a numeric field does not parse as a finite number."""
    code = "invalid_numeric"
    default_message = "Invalid numeric value"


class MissingImage(ValidationError):
    """Raised when a product is created without a primary image."""
    code = "missing_image"
    default_message = "Product image is required"


class InvalidStatus(ValidationError):
    """Raised when an admin decision is not Verified or Rejected."""
    code = "invalid_status"
    default_message = "Invalid verification status"


class DuplicateIdentity(MarketplaceError):
    code = "duplicate_identity"
    default_message = "Email already registered"


class DuplicateAttestation(MarketplaceError):
    code = "duplicate_attestation"
    default_message = "Attestation code already assigned to another product"


class NotFound(MarketplaceError):
    code = "not_found"
    default_message = "Not found"


class InvalidCredentials(MarketplaceError):
    """Raised for unknown email and wrong password alike."""
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class InvalidOwner(MarketplaceError):
    code = "invalid_owner"
    default_message = "Invalid farmer ID"


class UnverifiedOwner(MarketplaceError):
    code = "unverified_owner"
    default_message = "Farmer is not verified yet"


class EncodingError(MarketplaceError):
    code = "encoding_error"
    default_message = "Could not generate QR code"


class StorageFailure(MarketplaceError):
    code = "storage_failure"
    default_message = "Storage error"
