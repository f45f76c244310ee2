"""Product catalog for mock backend"""

from typing import Optional

from ..models.product import Product


class ProductDatabase:
    """In-memory product catalog seeded with demo apparel"""

    def __init__(self):
        self.products: dict[str, Product] = {}
        self._seed_products()

    def _seed_products(self):
        seed = [
            Product(
                id="prod-linen-shirt",
                title="Linen Relaxed Shirt",
                price=29.99,
                images=["/images/linen-shirt-front.jpg", "/images/linen-shirt-back.jpg"],
                stock=50,
                sizes=["S", "M", "L", "XL"],
                colors=["white", "sand"],
            ),
            Product(
                id="prod-silk-scarf",
                title="Silk Print Scarf",
                price=10.0,
                images=["/images/silk-scarf.jpg"],
                stock=100,
                category="accessories",
                colors=["red", "navy"],
            ),
            Product(
                id="prod-denim-jacket",
                title="Cropped Denim Jacket",
                price=89.5,
                sale_price=69.0,
                images=["/images/denim-jacket.jpg"],
                stock=20,
                sizes=["S", "M", "L"],
                colors=["indigo"],
            ),
            Product(
                id="prod-wool-coat",
                title="Wool Blend Overcoat",
                price=189.0,
                images=["/images/wool-coat.jpg"],
                stock=5,
                sizes=["M", "L"],
                colors=["camel", "charcoal"],
            ),
        ]
        for product in seed:
            self.products[product.id] = product

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def list_products(self) -> list[Product]:
        return list(self.products.values())

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """Apply a stock delta; refuses to go negative"""
        product = self.products.get(product_id)
        if not product:
            return False

        new_stock = product.stock + quantity_change
        if new_stock < 0:
            return False

        self.products[product_id] = product.model_copy(update={"stock": new_stock})
        return True
