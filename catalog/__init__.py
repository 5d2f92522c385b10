"""
Product catalog
"""

from .products import ProductCatalog, product_record
from .validators import parse_number, parse_date

__all__ = ["ProductCatalog", "product_record", "parse_number", "parse_date"]
