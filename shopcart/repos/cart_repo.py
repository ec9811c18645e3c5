# shopcart/repos/cart_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopcart.data.models.cart import CartModel
from shopcart.data.models.cart_item import CartItemModel


class CartRepo:
    """Cart Store: koszyki i pozycje koszyka, kazdy zapis od razu commitowany."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------ carts
    def get_cart_by_user(self, user_id: uuid.UUID) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(
                CartModel.user_id == user_id,
                CartModel.deleted_at.is_(None),
            )
        ).scalar_one_or_none()

    def create_cart(self, user_id: uuid.UUID) -> CartModel:
        # user_id jest unikalne takze dla usunietych koszykow, wiec wskrzeszamy stary wiersz
        cart = self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

        if cart is None:
            cart = CartModel(user_id=user_id)
            self.db.add(cart)
        else:
            cart.deleted_at = None
            cart.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(cart)
        return cart

    def soft_delete_cart(self, cart: CartModel) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart.id))
        cart.deleted_at = datetime.now(timezone.utc)
        self.db.commit()

    # ------------------------------------------------------------ items
    def get_item(self, cart_id: uuid.UUID, product_id: uuid.UUID) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def create_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_item(self, item: CartItemModel) -> CartItemModel:
        item.updated_at = datetime.now(timezone.utc)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, cart_id: uuid.UUID, product_id: uuid.UUID) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def list_items(self, cart_id: uuid.UUID) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.added_at, CartItemModel.id)
            ).scalars()
        )

    def clear_items(self, cart_id: uuid.UUID) -> None:
        # bez commita - wola to OrderService w swojej transakcji
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
