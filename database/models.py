"""
SQLAlchemy models for the AgriDirect marketplace
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Farmer verification states
PENDING = "Pending"
VERIFIED = "Verified"
REJECTED = "Rejected"
VERIFICATION_STATES = (PENDING, VERIFIED, REJECTED)

FARMING_TYPES = ("Natural/Organic", "Conventional", "Both", "")

# Attestation code lifecycle on a product
ATTESTATION_PENDING = "Pending"
ATTESTATION_ISSUED = "Issued"
ATTESTATION_FAILED = "Failed"


def new_id() -> str:
    """Generate an identity key (32 lowercase hex chars)."""
    return uuid.uuid4().hex


class Farmer(Base):
    """Seller identity with government documents and admin verification status"""
    __tablename__ = "farmers"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    farm_name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=False)
    mobile = Column(String(10), nullable=False)
    experience = Column(Integer, default=0)
    email = Column(String(254), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)  # bcrypt, includes salt

    # Optional government documents (public file references)
    aadhaar = Column(String(20))
    aadhaar_file = Column(String(500))
    pan_file = Column(String(500))
    land_proof = Column(String(500))
    lease_proof = Column(String(500))
    farmer_id_proof = Column(String(500))
    organic_proof = Column(String(500))
    certificate = Column(String(500))

    farming_type = Column(String(20), default="")  # Natural/Organic, Conventional, Both, ""

    verification_status = Column(String(20), default=PENDING, nullable=False, index=True)
    verified_at = Column(DateTime)  # set only while Verified
    admin_notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    products = relationship("Product", back_populates="farmer")


class Consumer(Base):
    """Buyer identity (no verification workflow)"""
    __tablename__ = "consumers"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    email = Column(String(254), unique=True, nullable=False, index=True)
    mobile = Column(String(10), nullable=False)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)


class Product(Base):
    """Product listing with quality-attestation metadata"""
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    farmer_id = Column(String(32), ForeignKey("farmers.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100))
    price = Column(Float, nullable=False)
    quantity = Column(Float, nullable=False)
    location = Column(String(200))
    image = Column(String(500), nullable=False)

    # Quality attestation (all optional)
    harvest_date = Column(Date)
    moisture = Column(Float)  # %
    protein = Column(Float)  # %
    pesticide_residue = Column(Float)  # ppm
    soil_ph = Column(Float)
    lab_report = Column(String(500))

    # Scannable code, set only after the product row exists
    qr_code = Column(String(500), unique=True)
    attestation_status = Column(String(20), default=ATTESTATION_PENDING, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    farmer = relationship("Farmer", back_populates="products")


class Order(Base):
    """Order with consumer/product snapshot taken at checkout"""
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_id)
    product_id = Column(String(32), ForeignKey("products.id", ondelete="SET NULL"), index=True)  # nulled if the product is deleted
    farmer_id = Column(String(32), ForeignKey("farmers.id"), index=True)
    consumer_id = Column(String(32), ForeignKey("consumers.id"), index=True)

    # Snapshot (not a live join)
    consumer_name = Column(String(200))
    consumer_email = Column(String(254))
    consumer_mobile = Column(String(10))
    product_name = Column(String(200))
    unit_price = Column(Float, nullable=False)

    quantity = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)
    address = Column(Text)
    payment_method = Column(String(50))
    date = Column(DateTime, default=datetime.utcnow, index=True)
