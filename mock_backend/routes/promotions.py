"""Promotion API routes for mock backend"""

from fastapi import APIRouter, Depends, HTTPException

from ..database import MockDatabase
from ..models.promotion import VerifyCouponRequest
from ..security import get_db

router = APIRouter(prefix="/api/promotions", tags=["Promotions"])


@router.post("/verify-coupon")
async def verify_coupon(request: VerifyCouponRequest, db: MockDatabase = Depends(get_db)):
    """Check that a coupon exists, is running and has uses left"""
    if not request.coupon_code or not request.coupon_code.strip():
        raise HTTPException(status_code=400, detail="Coupon code is required")

    promotion = db.promotions.find_active(request.coupon_code)
    if not promotion:
        raise HTTPException(status_code=404, detail="Invalid or expired coupon code")

    if promotion.exhausted:
        raise HTTPException(status_code=400, detail="Coupon usage limit reached")

    return {"success": True, "data": promotion.to_coupon()}
