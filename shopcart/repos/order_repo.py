# shopcart/repos/order_repo.py
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopcart.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # commit robi OrderService razem ze stanem magazynu i koszykiem
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: uuid.UUID) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: uuid.UUID) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )
