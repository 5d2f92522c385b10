"""
Database package for AgriDirect
"""

from .models import (
    Base,
    Farmer,
    Consumer,
    Product,
    Order,
    PENDING,
    VERIFIED,
    REJECTED,
)
from .connection import Database
from .crud import (
    is_valid_id,
    create_farmer,
    create_consumer,
    create_product,
    create_order,
    get_farmer,
    get_farmer_by_email,
    get_consumer,
    get_consumer_by_email,
    get_product,
    get_farmers,
    get_products_by_farmer,
    get_all_products,
    get_orders_by_consumer,
    get_orders_by_farmer,
)

__all__ = [
    "Base",
    "Farmer",
    "Consumer",
    "Product",
    "Order",
    "PENDING",
    "VERIFIED",
    "REJECTED",
    "Database",
    "is_valid_id",
    "create_farmer",
    "create_consumer",
    "create_product",
    "create_order",
    "get_farmer",
    "get_farmer_by_email",
    "get_consumer",
    "get_consumer_by_email",
    "get_product",
    "get_farmers",
    "get_products_by_farmer",
    "get_all_products",
    "get_orders_by_consumer",
    "get_orders_by_farmer",
]
