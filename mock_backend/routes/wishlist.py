"""Wishlist API routes for mock backend"""

from fastapi import APIRouter, Depends, HTTPException

from ..database import MockDatabase
from ..models.user import User
from ..models.wishlist import AddToWishlistRequest
from ..security import get_db, require_user

router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])


def wishlist_response(db: MockDatabase, user_id: str) -> dict:
    items = [
        entry.to_document(db.products.get_product(entry.product_id))
        for entry in db.wishlists.get_items(user_id)
    ]
    return {"success": True, "data": items}


@router.get("")
async def get_wishlist(user: User = Depends(require_user), db: MockDatabase = Depends(get_db)):
    return wishlist_response(db, user.id)


@router.post("")
async def add_to_wishlist(
    request: AddToWishlistRequest,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    if not request.product_id:
        raise HTTPException(status_code=400, detail="Product ID is required")

    if not db.products.get_product(request.product_id):
        raise HTTPException(status_code=404, detail="Product not found")

    db.wishlists.add_item(user.id, request.product_id)
    return wishlist_response(db, user.id)


@router.delete("/{item_id}")
async def remove_from_wishlist(
    item_id: str,
    user: User = Depends(require_user),
    db: MockDatabase = Depends(get_db),
):
    if not db.wishlists.remove_item(user.id, item_id):
        raise HTTPException(status_code=404, detail="Item not found in wishlist")
    return wishlist_response(db, user.id)


@router.delete("")
async def clear_wishlist(user: User = Depends(require_user), db: MockDatabase = Depends(get_db)):
    db.wishlists.clear(user.id)
    return wishlist_response(db, user.id)
