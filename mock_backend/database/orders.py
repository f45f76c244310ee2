"""Order storage for mock backend"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from ..models.order import CreateOrderRequest, Order


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def create_order(self, user_id: str, request: CreateOrderRequest) -> Order:
        order = Order(
            id=f"order_{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            items=request.items,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            subtotal=request.subtotal,
            shipping_cost=request.shipping_cost,
            tax=request.tax,
            total=request.total,
            coupon_code=request.coupon_code,
            created_at=datetime.now(timezone.utc),
        )
        self.orders[order.id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    def list_orders(self, user_id: str) -> list[Order]:
        return [o for o in self.orders.values() if o.user_id == user_id]
