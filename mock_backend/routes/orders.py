"""Order API routes for mock backend"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..database import MockDatabase
from ..models.order import CreateOrderRequest
from ..models.user import User
from ..security import get_db, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])

REQUIRED_SHIPPING_FIELDS = ("line1", "city", "state", "zip", "country")


@router.post("", status_code=201)
async def create_order(
    request: CreateOrderRequest,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    """Validate and place an order, then empty the user's cart"""
    address = request.shipping_address
    missing = [f for f in REQUIRED_SHIPPING_FIELDS if not (getattr(address, f) or "").strip()]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required shipping fields: {', '.join(missing)}",
        )

    if not request.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    for item in request.items:
        product = db.products.get_product(item.product_id)
        if not product:
            raise HTTPException(status_code=404, detail=f"Product not found: {item.product_id}")
        if product.stock < item.quantity:
            raise HTTPException(
                status_code=400,
                detail=f"Insufficient stock for {product.title}",
            )

    for item in request.items:
        db.products.update_stock(item.product_id, -item.quantity)

    if request.coupon_code:
        db.promotions.record_usage(request.coupon_code)

    order = db.orders.create_order(user.id, request)
    db.carts.clear(user.id)
    logger.info(f"Order {order.id} placed by {user.id}: total {order.total:.2f}")

    return {"success": True, "data": order.to_document()}


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    order = db.orders.get_order(order_id)
    if not order or order.user_id != user.id:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"success": True, "data": order.to_document()}
