"""Cart API routes for mock backend"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ..database import MockDatabase
from ..models.cart import AddToCartRequest, UpdateCartItemRequest
from ..models.user import User
from ..security import get_db, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def cart_response(db: MockDatabase, user_id: str) -> dict:
    """Cart body with each line's product populated"""
    items = [
        entry.to_document(db.products.get_product(entry.product_id))
        for entry in db.carts.get_items(user_id)
    ]
    return {"success": True, "data": {"userId": user_id, "items": items}}


@router.get("")
async def get_cart(user: User = Depends(require_user), db: MockDatabase = Depends(get_db)):
    return cart_response(db, user.id)


@router.post("")
async def add_to_cart(
    request: AddToCartRequest,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    """Add an item, merging into the same (product, size, color) line"""
    product = db.products.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    existing = db.carts.find_variant(user.id, product.id, request.size, request.color)
    wanted = request.quantity + (existing.quantity if existing else 0)
    if product.stock < wanted:
        raise HTTPException(
            status_code=400,
            detail=f"Insufficient stock. Available: {product.stock}",
        )

    db.carts.add_item(user.id, product.id, request.quantity, request.size, request.color)
    return cart_response(db, user.id)


@router.patch("/{entry_id}")
async def update_cart_item(
    entry_id: str,
    request: UpdateCartItemRequest,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    entry = db.carts.find_entry(user.id, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Cart item not found")

    product = db.products.get_product(entry.product_id)
    if product and product.stock < request.quantity:
        raise HTTPException(
            status_code=400,
            detail=f"Insufficient stock. Available: {product.stock}",
        )

    db.carts.update_quantity(user.id, entry_id, request.quantity)
    return cart_response(db, user.id)


@router.delete("/{entry_id}")
async def remove_cart_item(
    entry_id: str,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    if not db.carts.remove_item(user.id, entry_id):
        raise HTTPException(status_code=404, detail="Cart item not found")
    return cart_response(db, user.id)


@router.delete("")
async def clear_cart(
    http_request: Request,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    """Empty the cart; disabled to emulate deployments without it"""
    if not http_request.app.state.settings.bulk_cart_clear_enabled:
        raise HTTPException(status_code=404, detail="Not found")

    db.carts.clear(user.id)
    logger.info(f"Cleared cart for {user.id}")
    return cart_response(db, user.id)
