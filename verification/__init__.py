"""
Farmer verification (admin trust workflow)
"""

from .farmer_status import FarmerVerification, require_verified, ADMIN_DECISIONS

__all__ = ["FarmerVerification", "require_verified", "ADMIN_DECISIONS"]
