"""
Order Book Tests

Server-side totals, price checks and order history.
"""

import pytest

from common.errors import InvalidNumeric, NotFound, ValidationError


class TestPlaceOrder:

    def test_total_computed_server_side(self, order_book, consumer, product_id, verified_farmer):
        order = order_book.place_order(consumer["id"], product_id, "4", "12 MG Road, Pune")

        assert order["unitPrice"] == 50.0
        assert order["quantity"] == 4.0
        assert order["totalPrice"] == 200.0
        assert order["farmerId"] == verified_farmer["id"]
        assert order["paymentMethod"] == "COD"

    def test_snapshot_of_consumer_and_product(self, order_book, catalog, consumer, product_id):
        order = order_book.place_order(consumer["id"], product_id, 2, "12 MG Road, Pune", payment_method="UPI")
        catalog.update_product(product_id, {"name": "Wheat (new crop)", "price": "60"})

        stored = order_book.list_orders_for_consumer(consumer["id"])[0]
        assert stored["id"] == order["id"]
        assert stored["productName"] == "Sharbati Wheat"
        assert stored["unitPrice"] == 50.0
        assert stored["consumerName"] == "Anita Shah"
        assert stored["consumerEmail"] == "anita@example.com"
        assert stored["paymentMethod"] == "UPI"

    def test_matching_client_prices_accepted(self, order_book, consumer, product_id):
        order = order_book.place_order(
            consumer["id"], product_id, 4, "12 MG Road, Pune", unit_price="50", total_price=200
        )
        assert order["totalPrice"] == 200.0

    def test_client_price_mismatch_rejected(self, order_book, consumer, product_id):
        with pytest.raises(ValidationError, match="Unit price"):
            order_book.place_order(consumer["id"], product_id, 4, "12 MG Road, Pune", unit_price=1)
        with pytest.raises(ValidationError, match="expected 200.00"):
            order_book.place_order(consumer["id"], product_id, 4, "12 MG Road, Pune", total_price=20)
        assert order_book.list_orders_for_consumer(consumer["id"]) == []

    @pytest.mark.parametrize("quantity", [0, "-1"])
    def test_quantity_must_be_positive(self, order_book, consumer, product_id, quantity):
        with pytest.raises(ValidationError):
            order_book.place_order(consumer["id"], product_id, quantity, "12 MG Road, Pune")

    def test_quantity_must_be_numeric(self, order_book, consumer, product_id):
        with pytest.raises(InvalidNumeric):
            order_book.place_order(consumer["id"], product_id, "two", "12 MG Road, Pune")

    def test_address_required(self, order_book, consumer, product_id):
        with pytest.raises(ValidationError, match="address"):
            order_book.place_order(consumer["id"], product_id, 1, "   ")

    def test_unknown_consumer_or_product(self, order_book, consumer, product_id):
        with pytest.raises(NotFound, match="Consumer"):
            order_book.place_order("e" * 32, product_id, 1, "12 MG Road, Pune")
        with pytest.raises(NotFound, match="Product"):
            order_book.place_order(consumer["id"], "e" * 32, 1, "12 MG Road, Pune")


class TestOrderHistory:

    def test_orders_for_farmer(self, order_book, consumer, product_id, verified_farmer):
        order_book.place_order(consumer["id"], product_id, 1, "12 MG Road, Pune")
        order_book.place_order(consumer["id"], product_id, 3, "12 MG Road, Pune")

        orders = order_book.list_orders_for_farmer(verified_farmer["id"])
        assert len(orders) == 2
        assert {o["totalPrice"] for o in orders} == {50.0, 150.0}

    def test_malformed_ids(self, order_book):
        with pytest.raises(ValidationError):
            order_book.list_orders_for_consumer("not-an-id")
        with pytest.raises(ValidationError):
            order_book.list_orders_for_farmer("not-an-id")
