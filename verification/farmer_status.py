"""
Farmer verification workflow

Pending (initial) -> Verified | Rejected. Admin decisions can be revisited:
a Rejected farmer may later be Verified and vice versa. verified_at is set
only while the farmer is Verified.
"""

import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from common.errors import NotFound, InvalidStatus, UnverifiedOwner, ValidationError
from database import crud
from database.connection import Database
from database.models import Farmer, VERIFIED, REJECTED, VERIFICATION_STATES
from identity.registration import farmer_public

logger = logging.getLogger(__name__)

ADMIN_DECISIONS = (VERIFIED, REJECTED)


def require_verified(farmer: Farmer) -> None:
    """Raise UnverifiedOwner unless the farmer is Verified."""
    if farmer.verification_status != VERIFIED:
        raise UnverifiedOwner(
            f"Farmer verification is {farmer.verification_status.lower()}; "
            "products can be listed once an admin verifies the account"
        )


class FarmerVerification:
    """Admin transitions on a farmer's trust status."""

    def __init__(self, database: Database):
        self.database = database

    def set_verification(self, farmer_id: str, new_status: str, notes: Optional[str] = None) -> Dict[str, Any]:
        """
        Record an admin decision on a farmer.

        Args:
            farmer_id: Farmer identity key
            new_status: "Verified" or "Rejected"
            notes: Free-text admin notes (always stored, may be None)

        Returns:
            Updated public farmer record

        Raises:
            InvalidStatus: new_status is not an admin decision
            NotFound: Unknown or malformed farmer id
        """
        if new_status not in ADMIN_DECISIONS:
            raise InvalidStatus()

        with self.database.session() as db:
            farmer = crud.get_farmer(db, farmer_id)
            if not farmer:
                raise NotFound("Farmer not found")

            previous = farmer.verification_status
            farmer.verification_status = new_status
            farmer.admin_notes = notes
            farmer.verified_at = datetime.utcnow() if new_status == VERIFIED else None
            db.flush()
            record = farmer_public(farmer)

        logger.info(f"Farmer {farmer_id} verification: {previous} -> {new_status}")
        return record

    def list_farmers(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """List farmers for admin review, optionally by status."""
        if status and status not in VERIFICATION_STATES:
            raise ValidationError(f"Status must be one of: {', '.join(VERIFICATION_STATES)}")
        with self.database.session() as db:
            return [farmer_public(f) for f in crud.get_farmers(db, status)]
