"""
Order Book

Orders copy the consumer's contact details and the product's name and
price at checkout. The total is always computed here; a client-sent
unitPrice or totalPrice is only checked against it.
"""

import logging
from typing import Dict, Any, List, Optional

from common.errors import NotFound, ValidationError
from database import crud
from database.connection import Database
from database.models import Order
from catalog.validators import is_blank, parse_number

logger = logging.getLogger(__name__)

PRICE_TOLERANCE = 0.005


def order_record(order: Order) -> Dict[str, Any]:
    return {
        "id": order.id,
        "productId": order.product_id,
        "farmerId": order.farmer_id,
        "consumerId": order.consumer_id,
        "consumerName": order.consumer_name,
        "consumerEmail": order.consumer_email,
        "consumerMobile": order.consumer_mobile,
        "productName": order.product_name,
        "unitPrice": order.unit_price,
        "quantity": order.quantity,
        "totalPrice": order.total_price,
        "address": order.address,
        "paymentMethod": order.payment_method,
        "date": order.date.isoformat() if order.date else None,
    }


class OrderBook:
    """Places and lists orders."""

    def __init__(self, database: Database):
        self.database = database

    def place_order(
        self,
        consumer_id: str,
        product_id: str,
        quantity,
        address: Optional[str],
        payment_method: Optional[str] = "COD",
        unit_price=None,
        total_price=None
    ) -> Dict[str, Any]:
        """
        Place an order for a product.

        Args:
            consumer_id: Buying consumer
            product_id: Product being bought
            quantity: Units ordered (positive number)
            address: Delivery address
            payment_method: Free text, defaults to COD
            unit_price: Optional client-side price, must match the product
            total_price: Optional client-side total, must match unit price x quantity

        Returns:
            Stored order record

        Raises:
            NotFound: Unknown consumer or product
            InvalidNumeric: Quantity or prices are not numbers
            ValidationError: Missing address, non-positive quantity, or client prices that disagree with the server
        """
        quantity = parse_number("Quantity", quantity, required=True)
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero")
        if is_blank(address):
            raise ValidationError("Delivery address is required")
        payment_method = (payment_method or "COD").strip() or "COD"
        if len(payment_method) > 50:
            raise ValidationError("Payment method is too long")
        claimed_unit = parse_number("Unit price", unit_price)
        claimed_total = parse_number("Total price", total_price)

        with self.database.session() as db:
            consumer = crud.get_consumer(db, consumer_id)
            if not consumer:
                raise NotFound("Consumer not found")
            product = crud.get_product(db, product_id)
            if not product:
                raise NotFound("Product not found")

            unit = product.price
            total = round(unit * quantity, 2)

            if claimed_unit is not None and abs(claimed_unit - unit) > PRICE_TOLERANCE:
                logger.warning(
                    f"Order rejected: unit price {claimed_unit} != {unit} for product {product_id}"
                )
                raise ValidationError("Unit price does not match the current product price")
            if claimed_total is not None and abs(claimed_total - total) > PRICE_TOLERANCE:
                logger.warning(
                    f"Order rejected: total {claimed_total} != {total} for product {product_id}"
                )
                raise ValidationError(f"Total price mismatch: expected {total:.2f}")

            order = crud.create_order(db, {
                "product_id": product.id,
                "farmer_id": product.farmer_id,
                "consumer_id": consumer.id,
                "consumer_name": consumer.name,
                "consumer_email": consumer.email,
                "consumer_mobile": consumer.mobile,
                "product_name": product.name,
                "unit_price": unit,
                "quantity": quantity,
                "total_price": total,
                "address": address.strip(),
                "payment_method": payment_method,
            })
            record = order_record(order)

        logger.info(f"Order {record['id']}: consumer {consumer_id} bought {quantity:g} x {product_id} = {total:.2f}")
        return record

    def list_orders_for_consumer(self, consumer_id: str) -> List[Dict[str, Any]]:
        if not crud.is_valid_id(consumer_id):
            raise ValidationError("Invalid consumer ID")
        with self.database.session() as db:
            return [order_record(o) for o in crud.get_orders_by_consumer(db, consumer_id)]

    def list_orders_for_farmer(self, farmer_id: str) -> List[Dict[str, Any]]:
        if not crud.is_valid_id(farmer_id):
            raise ValidationError("Invalid farmer ID")
        with self.database.session() as db:
            return [order_record(o) for o in crud.get_orders_by_farmer(db, farmer_id)]
