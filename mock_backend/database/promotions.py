"""Promotion storage for mock backend"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models.promotion import DiscountType, Promotion


class PromotionDatabase:
    """In-memory promotions seeded with demo coupons"""

    def __init__(self):
        self.promotions: dict[str, Promotion] = {}
        self._seed_promotions()

    def _seed_promotions(self):
        now = datetime.now(timezone.utc)
        running = {"start_date": now - timedelta(days=30), "end_date": now + timedelta(days=365)}
        seed = [
            Promotion(
                code="WELCOME10",
                name="Welcome 10% off",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=10,
                **running,
            ),
            Promotion(
                code="FLAT150",
                name="Flat 150 off",
                discount_type=DiscountType.FIXED,
                discount_value=150,
                **running,
            ),
            Promotion(
                code="BIG50",
                name="50 off orders over 200",
                discount_type=DiscountType.FIXED,
                discount_value=50,
                minimum_purchase=200,
                **running,
            ),
            Promotion(
                code="ONEUSE5",
                name="Single use 5 off",
                discount_type=DiscountType.FIXED,
                discount_value=5,
                usage_limit=1,
                usage_count=1,
                **running,
            ),
            Promotion(
                code="SUMMER20",
                name="Last summer",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=20,
                start_date=now - timedelta(days=120),
                end_date=now - timedelta(days=30),
            ),
        ]
        for promotion in seed:
            self.promotions[promotion.code] = promotion

    def find_active(self, code: str) -> Optional[Promotion]:
        """Look up a promotion that is active right now"""
        promotion = self.promotions.get(code.strip().upper())
        if promotion and promotion.is_valid_at(datetime.now(timezone.utc)):
            return promotion
        return None

    def record_usage(self, code: str) -> None:
        promotion = self.promotions.get(code.strip().upper())
        if promotion:
            self.promotions[promotion.code] = promotion.model_copy(
                update={"usage_count": promotion.usage_count + 1}
            )
