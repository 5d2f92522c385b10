"""
Orders placed by consumers
"""

from .orders import OrderBook, order_record

__all__ = ["OrderBook", "order_record"]
