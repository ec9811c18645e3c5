import uuid

from sqlalchemy.orm import Session

from shopcart.data.models.product import ProductModel
from shopcart.domain.errors import NotFound
from shopcart.domain.schemas import PageMeta, ProductIn, ProductOut, ProductPage
from shopcart.repos.product_repo import ProductRepo
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog produktow - tylko odczyt plus dodawanie przez admina."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, page: int, limit: int) -> ProductPage:
        page = max(page, 1)
        limit = limit if limit >= 1 else 10

        products, total = self.repo.list_products((page - 1) * limit, limit)
        return ProductPage(
            products=[ProductOut.model_validate(p) for p in products],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def get_product(self, product_id: uuid.UUID) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductOut.model_validate(product)

    def create_product(self, payload: ProductIn) -> ProductOut:
        product = self.repo.create_product(
            ProductModel(
                name=payload.name,
                description=payload.description,
                price=payload.price,
                number_of_stock=payload.stock,
            )
        )
        logger.info(f"Created product {product.id} with stock {product.number_of_stock}")
        return ProductOut.model_validate(product)
