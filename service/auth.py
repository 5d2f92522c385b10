"""
Admin API Key Authentication

Admin routes require the X-API-Key header to match ADMIN_API_KEY. When no
key is configured the admin routes are open (local development).
"""

import logging

from fastapi import Depends, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader

from service.state import Services, get_services

logger = logging.getLogger(__name__)

API_KEY_NAME = "X-API-Key"
_api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


async def verify_admin_key(
    api_key: str = Security(_api_key_header),
    services: Services = Depends(get_services),
):
    """
    Verify the admin API key.

    Raises:
        HTTPException: 401 if a key is configured and the header does not match
    """
    expected = services.settings.admin_api_key
    if not expected:
        return True
    if api_key != expected:
        logger.warning("Rejected admin request with invalid API key")
        raise HTTPException(status_code=401, detail="Invalid API key")
    return True
