"""
Response envelope helpers

Every JSON response carries {"status": "success" | "error", "message": ...}
plus operation-specific fields. Business failures are returned with HTTP 200.
"""

from typing import Dict, Any, Optional

from fastapi.responses import JSONResponse

from common.errors import MarketplaceError


def success(message: Optional[str] = None, **data) -> Dict[str, Any]:
    body = {"status": "success"}
    if message:
        body["message"] = message
    body.update(data)
    return body


def error(message: str, code: str = "error", status_code: int = 200, **data) -> JSONResponse:
    body = {"status": "error", "code": code, "message": message}
    body.update(data)
    return JSONResponse(status_code=status_code, content=body)


def error_from(exc: MarketplaceError) -> JSONResponse:
    return error(exc.message, code=exc.code, **exc.details)
