"""
Service container shared by the routers through app.state
"""

from dataclasses import dataclass

from fastapi import Request

from attestation.certificate import CertificateRenderer
from attestation.issuer import AttestationIssuer
from catalog.products import ProductCatalog
from common.settings import Settings
from database.connection import Database
from identity.registration import IdentityStore
from orders.orders import OrderBook
from storage.file_store import FileStore
from verification.farmer_status import FarmerVerification


@dataclass
class Services:
    settings: Settings
    database: Database
    files: FileStore
    identity: IdentityStore
    verification: FarmerVerification
    catalog: ProductCatalog
    issuer: AttestationIssuer
    certificates: CertificateRenderer
    orders: OrderBook

    @classmethod
    def build(cls, settings: Settings) -> "Services":
        database = Database(settings.database_url)
        catalog = ProductCatalog(database, require_verified_owner=settings.require_verified_farmer)
        issuer = AttestationIssuer(database, catalog, settings.base_url, settings.qr_code_dir)
        return cls(
            settings=settings,
            database=database,
            files=FileStore(settings.upload_dir),
            identity=IdentityStore(database, bcrypt_rounds=settings.bcrypt_rounds),
            verification=FarmerVerification(database),
            catalog=catalog,
            issuer=issuer,
            certificates=CertificateRenderer(database, issuer),
            orders=OrderBook(database),
        )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the app's component container."""
    return request.app.state.services
