# shopcart/repos/product_repo.py
import uuid

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from shopcart.data.models.product import ProductModel


class ProductRepo:
    """Stock ledger oparty o baze - koszyk tylko czyta stan magazynu."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: uuid.UUID) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self, offset: int, limit: int) -> tuple[list[ProductModel], int]:
        total = self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
        rows = self.db.execute(
            select(ProductModel).order_by(ProductModel.name).offset(offset).limit(limit)
        ).scalars()
        return list(rows), total

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def decrement_stock(self, product: ProductModel, quantity: int) -> None:
        # bez commita, czesc transakcji zamowienia
        product.number_of_stock = product.number_of_stock - quantity
        self.db.add(product)

    def available_stock(self, product_id: uuid.UUID) -> int | None:
        product = self.get_product(product_id)
        if product is None:
            return None
        return product.number_of_stock
