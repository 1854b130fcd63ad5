from sqlalchemy.orm import joinedload

from app.models.product import Product
from app.repositories.base import Repository


class ProductRepository(Repository[Product]):
    model = Product

    def _query(self):
        # category and producer are always embedded in product responses
        return self.db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.producer),
        )
