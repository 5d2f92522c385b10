"""
Order endpoints

The server computes every total; a client-sent unitPrice or totalPrice is
only checked against it.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from common.errors import ValidationError
from service.responses import success
from service.state import Services, get_services

router = APIRouter(prefix="/orders", tags=["orders"])


class OrderRequest(BaseModel):
    consumerId: Optional[str] = None
    productId: Optional[str] = None
    quantity: Any = None
    address: Optional[str] = None
    paymentMethod: Optional[str] = "COD"
    unitPrice: Any = None
    totalPrice: Any = None


@router.post("")
async def place_order(body: OrderRequest, services: Services = Depends(get_services)):
    order = services.orders.place_order(
        body.consumerId,
        body.productId,
        body.quantity,
        body.address,
        payment_method=body.paymentMethod,
        unit_price=body.unitPrice,
        total_price=body.totalPrice,
    )
    return success("Order placed successfully", orderId=order["id"], order=order)


@router.get("")
async def consumer_orders(consumerId: Optional[str] = None, services: Services = Depends(get_services)):
    if not consumerId:
        raise ValidationError("consumerId is required")
    orders = services.orders.list_orders_for_consumer(consumerId)
    return success(orders=orders, count=len(orders))
