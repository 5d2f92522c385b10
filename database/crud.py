"""
CRUD operations for AgriDirect
"""

import re
from typing import Optional, List

from sqlalchemy.orm import Session, joinedload

from database.models import Farmer, Consumer, Product, Order

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def is_valid_id(value) -> bool:
    """Check an identity key is well-formed (32 lowercase hex chars)."""
    return isinstance(value, str) and bool(ID_PATTERN.match(value))


def create_farmer(db: Session, farmer_data: dict) -> Farmer:
    """Create new farmer identity."""
    farmer = Farmer(**farmer_data)
    db.add(farmer)
    db.flush()
    return farmer


def create_consumer(db: Session, consumer_data: dict) -> Consumer:
    """Create new consumer identity."""
    consumer = Consumer(**consumer_data)
    db.add(consumer)
    db.flush()
    return consumer


def create_product(db: Session, product_data: dict) -> Product:
    """Create new product listing."""
    product = Product(**product_data)
    db.add(product)
    db.flush()
    return product


def create_order(db: Session, order_data: dict) -> Order:
    order = Order(**order_data)
    db.add(order)
    db.flush()
    return order


def get_farmer(db: Session, farmer_id: str) -> Optional[Farmer]:
    """Query farmer by id; malformed ids resolve to None."""
    if not is_valid_id(farmer_id):
        return None
    return db.query(Farmer).filter(Farmer.id == farmer_id).first()


def get_farmer_by_email(db: Session, email: str) -> Optional[Farmer]:
    return db.query(Farmer).filter(Farmer.email == email).first()


def get_consumer(db: Session, consumer_id: str) -> Optional[Consumer]:
    if not is_valid_id(consumer_id):
        return None
    return db.query(Consumer).filter(Consumer.id == consumer_id).first()


def get_consumer_by_email(db: Session, email: str) -> Optional[Consumer]:
    return db.query(Consumer).filter(Consumer.email == email).first()


def get_product(db: Session, product_id: str) -> Optional[Product]:
    """Query product by id with its owning farmer loaded."""
    if not is_valid_id(product_id):
        return None
    return db.query(Product)\
        .options(joinedload(Product.farmer))\
        .filter(Product.id == product_id)\
        .first()


def get_farmers(db: Session, status: Optional[str] = None) -> List[Farmer]:
    """Get all farmers, optionally filtered by verification status."""
    query = db.query(Farmer)
    if status:
        query = query.filter(Farmer.verification_status == status)
    return query.order_by(Farmer.created_at.desc()).all()


def get_products_by_farmer(db: Session, farmer_id: str) -> List[Product]:
    return db.query(Product)\
        .filter(Product.farmer_id == farmer_id)\
        .order_by(Product.created_at.desc())\
        .all()


def get_all_products(db: Session) -> List[Product]:
    """Get all products with owning farmer joined."""
    return db.query(Product)\
        .options(joinedload(Product.farmer))\
        .order_by(Product.created_at.desc())\
        .all()


def get_orders_by_consumer(db: Session, consumer_id: str) -> List[Order]:
    return db.query(Order)\
        .filter(Order.consumer_id == consumer_id)\
        .order_by(Order.date.desc())\
        .all()


def get_orders_by_farmer(db: Session, farmer_id: str) -> List[Order]:
    return db.query(Order)\
        .filter(Order.farmer_id == farmer_id)\
        .order_by(Order.date.desc())\
        .all()
