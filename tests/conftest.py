"""
Shared fixtures: every test gets its own SQLite file and upload directory.
"""

import pytest
from fastapi.testclient import TestClient

from attestation.certificate import CertificateRenderer
from attestation.issuer import AttestationIssuer
from catalog.products import ProductCatalog
from common.settings import Settings
from database.connection import Database
from identity.registration import IdentityStore
from orders.orders import OrderBook
from service.api import create_app
from storage.file_store import FileStore
from verification.farmer_status import FarmerVerification

ADMIN_KEY = "test-admin-key"


def farmer_profile(**overrides):
    profile = {
        "name": "Ravi Kumar",
        "farmName": "Green Acres",
        "location": "Nashik, Maharashtra",
        "mobile": "9876543210",
        "email": "ravi@example.com",
        "experience": "12",
        "farmingType": "Natural/Organic",
    }
    profile.update(overrides)
    return profile


def consumer_profile(**overrides):
    profile = {
        "name": "Anita Shah",
        "email": "anita@example.com",
        "mobile": "9123456780",
    }
    profile.update(overrides)
    return profile


@pytest.fixture
def settings(tmp_path):
    """Test settings (fast bcrypt, temp storage, admin key configured)."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'agridirect-test.db'}",
        base_url="http://testserver/",
        upload_dir=tmp_path / "uploads",
        bcrypt_rounds=4,
        admin_api_key=ADMIN_KEY,
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def identity(database):
    return IdentityStore(database, bcrypt_rounds=4)


@pytest.fixture
def verification(database):
    return FarmerVerification(database)


@pytest.fixture
def catalog(database):
    return ProductCatalog(database, require_verified_owner=True)


@pytest.fixture
def issuer(database, catalog, settings):
    return AttestationIssuer(database, catalog, settings.base_url, settings.qr_code_dir)


@pytest.fixture
def certificates(database, issuer):
    return CertificateRenderer(database, issuer)


@pytest.fixture
def order_book(database):
    return OrderBook(database)


@pytest.fixture
def files(settings):
    return FileStore(settings.upload_dir)


@pytest.fixture
def farmer(identity):
    """A registered farmer awaiting verification."""
    return identity.register_farmer(farmer_profile(), "s3cret-pass")


@pytest.fixture
def verified_farmer(farmer, verification):
    return verification.set_verification(farmer["id"], "Verified", "Documents checked")


@pytest.fixture
def consumer(identity):
    return identity.register_consumer(consumer_profile(), "buyer-pass")


@pytest.fixture
def product_id(catalog, verified_farmer):
    """A persisted wheat listing (no attestation code issued yet)."""
    return catalog.create_product(
        verified_farmer["id"],
        {"name": "Sharbati Wheat", "category": "Grains", "price": "50", "quantity": "100"},
        "/uploads/1718000000000-wheat.jpg",
        attestation_attrs={"moisture": "12.5", "protein": "9.0", "harvestDate": "2024-03-15"},
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
