"""
Admin endpoints for farmer verification
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from service.auth import verify_admin_key
from service.responses import success
from service.state import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(verify_admin_key)])


class VerifyRequest(BaseModel):
    status: Optional[str] = None
    adminNotes: Optional[str] = None


@router.post("/farmer/{farmer_id}/verify")
async def verify_farmer(
    farmer_id: str,
    body: VerifyRequest,
    services: Services = Depends(get_services),
):
    """Record an admin decision (Verified or Rejected) on a farmer."""
    farmer = services.verification.set_verification(farmer_id, body.status, body.adminNotes)
    logger.info(f"Admin set farmer {farmer_id} to {farmer['verificationStatus']}")
    return success(
        f"Farmer {farmer['verificationStatus'].lower()}",
        farmerId=farmer_id,
        verificationStatus=farmer["verificationStatus"],
        verifiedAt=farmer["verifiedAt"],
        farmer=farmer,
    )


@router.get("/farmers")
async def list_farmers(status: Optional[str] = None, services: Services = Depends(get_services)):
    """List farmers, optionally only those with the given verification status."""
    farmers = services.verification.list_farmers(status)
    return success(farmers=farmers, count=len(farmers))
