"""Product API routes for mock backend"""

from fastapi import APIRouter, Depends, HTTPException

from ..database import MockDatabase
from ..security import get_db

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
async def list_products(db: MockDatabase = Depends(get_db)):
    return {"success": True, "data": [p.to_document() for p in db.products.list_products()]}


@router.get("/{product_id}")
async def get_product(product_id: str, db: MockDatabase = Depends(get_db)):
    product = db.products.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"success": True, "data": product.to_document()}
