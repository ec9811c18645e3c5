# shopcart/services/order_service.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.order import OrderItemModel, OrderModel, OrderStatus
from shopcart.domain.errors import (
    CacheUnavailable,
    Forbidden,
    NotFound,
    OutOfStock,
    ProductNotFound,
    ValidationFailed,
)
from shopcart.domain.principal import Principal
from shopcart.domain.schemas import OrderOut
from shopcart.repos.cart_repo import CartRepo
from shopcart.repos.order_repo import OrderRepo
from shopcart.repos.product_repo import ProductRepo
from shopcart.services.cart_cache import CartCache
from shopcart.services.notification_service import NotificationService
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


def new_order_number() -> str:
    return f"ORD-{datetime.now(timezone.utc):%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Separacja od CartService - koszyk jest tu tylko zrodlem pozycji.
    """

    def __init__(self, db: Session, cache: CartCache, notifier: NotificationService):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.cache = cache
        self.notifier = notifier

    def place_order(self, principal: Principal) -> OrderOut:
        """
        Use Case: zamowienie z koszyka.

        1. Koszyk musi istniec i miec pozycje
        2. Kazda pozycja jeszcze raz sprawdzana ze stanem magazynu
        3. Zamowienie + zdjecie stanu + wyczyszczenie koszyka w jednym commicie
        4. Invalidacja cache koszyka i powiadomienie (async)
        """
        cart = self.carts.get_cart_by_user(principal.user_id)
        items = self.carts.list_items(cart.id) if cart else []
        if not items:
            raise ValidationFailed("Cart is empty")

        lines = []
        for item in items:
            product = self.products.get_product(item.product_id)
            if product is None:
                raise ProductNotFound(detail={"product_id": str(item.product_id)})
            if item.quantity > product.number_of_stock:
                raise OutOfStock(
                    detail={
                        "product_id": str(item.product_id),
                        "requested": item.quantity,
                        "available": product.number_of_stock,
                    }
                )
            lines.append((product, item.quantity))

        order = OrderModel(
            user_id=principal.user_id,
            order_number=new_order_number(),
            status=OrderStatus.PENDING,
        )
        subtotal = Decimal("0.00")

        # wszystko sprawdzone, dopiero teraz ruszamy stan
        for product, quantity in lines:
            order.items.append(
                OrderItemModel(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=product.price,
                )
            )
            subtotal += Decimal(product.price) * quantity
            self.products.decrement_stock(product, quantity)

        order.subtotal = subtotal
        order.total_amount = subtotal

        try:
            self.repo.add_order(order)
            self.carts.clear_items(cart.id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(f"Order {order.order_number} created from cart {cart.id}, total {order.total_amount}")

        key = self.cache.key(cart.id)
        try:
            self.cache.delete(key)
        except CacheUnavailable as e:
            logger.warning("cart_cache_invalidate_failed", cart_id=str(cart.id), key=key, error=str(e))

        try:
            self.notifier.send_order_notification(principal.user_id, order.id, order.order_number)
        except Exception as e:
            # zamowienie jest juz zapisane, brak brokera nie moze go cofnac
            logger.warning("order_notification_failed", order_id=str(order.id), error=str(e))

        return OrderOut.model_validate(order)

    def get_order(self, principal: Principal, order_id: uuid.UUID) -> OrderOut:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFound("Order not found")

        if order.user_id != principal.user_id and not principal.is_admin:
            raise Forbidden("No access to this order")

        return OrderOut.model_validate(order)

    def list_orders(self, principal: Principal) -> list[OrderOut]:
        return [OrderOut.model_validate(o) for o in self.repo.list_orders(principal.user_id)]
