import enum
import uuid
from contextlib import nullcontext
from typing import NamedTuple, Protocol

from pydantic import ValidationError

from shopcart.data.models.cart import CartModel
from shopcart.data.models.cart_item import CartItemModel
from shopcart.domain.errors import (
    CacheCorruption,
    CacheUnavailable,
    CartMissing,
    NotFound,
    OutOfStock,
    ProductNotFound,
    ValidationFailed,
)
from shopcart.domain.principal import Principal
from shopcart.domain.schemas import CartItemList, CartItemOut
from shopcart.repos.cart_repo import CartRepo
from shopcart.services.cart_cache import CartCache
from shopcart.services.lock_service import LockService
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class StockLedger(Protocol):
    def available_stock(self, product_id: uuid.UUID) -> int | None: ...


class ItemsSource(str, enum.Enum):
    CACHE = "cache"
    STORE = "store"
    # redis nie odpowiada, dane prosto z bazy
    STORE_FALLBACK = "store_fallback"


class CartItems(NamedTuple):
    cart_id: uuid.UUID
    items: list[CartItemOut]
    source: ItemsSource


class CartService:
    """
    Use case'y koszyka.

    commands (create, add/update, remove, admin delete) zapisuja do bazy i
    zawsze usuwaja wpis cache koszyka; query (list) czyta najpierw z cache
    i degraduje do bazy gdy redis lezy.

    Sprawdzenie stanu magazynu to check-then-act bez blokady, dwa rownolegle
    dodania tego samego produktu moga przekroczyc stan. Jesli podany jest
    lock_service, odczyt stanu i zapis sa robione pod lockiem produktu.
    Lock jest globalny per produkt, nie per koszyk.
    """

    def __init__(
        self,
        store: CartRepo,
        stock_ledger: StockLedger,
        cache: CartCache,
        lock_service: LockService | None = None,
    ):
        self.store = store
        self.stock_ledger = stock_ledger
        self.cache = cache
        self.lock_service = lock_service

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_cart(self, principal: Principal) -> tuple[CartModel, bool]:
        """Zwraca (koszyk, czy_utworzony). Istniejacy koszyk to tez sukces."""
        existing = self.store.get_cart_by_user(principal.user_id)
        if existing:
            logger.info(f"User {principal.user_id} already has cart {existing.id}")
            return existing, False

        created = self.store.create_cart(principal.user_id)
        logger.info(f"Created cart {created.id} for user {principal.user_id}")
        return created, True

    def add_or_update_item(
        self,
        principal: Principal,
        product_id: uuid.UUID,
        quantity: int,
    ) -> CartItemModel:
        # walidacja przed jakimkolwiek dostepem do bazy
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationFailed("Quantity must be a positive integer")

        cart = self._ensure_cart(principal)

        # lock (jesli wlaczony) obejmuje odczyt stanu i zapis
        guard = self.lock_service.product_lock(product_id) if self.lock_service else nullcontext()
        with guard:
            stock = self.stock_ledger.available_stock(product_id)
            if stock is None:
                raise ProductNotFound()

            item = self._write_item(cart, product_id, quantity, stock)

        self._invalidate(cart.id)
        return item

    def remove_item(self, principal: Principal, product_id: uuid.UUID) -> None:
        cart = self.store.get_cart_by_user(principal.user_id)
        if cart is None:
            raise CartMissing("Failed to fetch cart")

        # usuniecie nieistniejacej pozycji to tez sukces
        removed = self.store.delete_item(cart.id, product_id)
        logger.info(f"Removed {removed} item(s) of product {product_id} from cart {cart.id}")

        self._invalidate(cart.id, quiet=True)

    # =====================================================
    # QUERY
    # =====================================================
    def list_items(self, principal: Principal) -> CartItems:
        cart = self.store.get_cart_by_user(principal.user_id)
        if cart is None:
            raise CartMissing()

        key = self.cache.key(cart.id)
        try:
            cached = self.cache.get(key)
        except CacheUnavailable as e:
            logger.warning("cart_cache_read_failed", cart_id=str(cart.id), key=key, error=str(e))
            return CartItems(cart.id, self._load_items(cart.id), ItemsSource.STORE_FALLBACK)

        if cached is not None:
            try:
                items = CartItemList.validate_json(cached)
            except ValidationError as e:
                # zepsuty wpis to bug, nie traktujemy go jak miss
                raise CacheCorruption(detail=str(e)) from e
            return CartItems(cart.id, items, ItemsSource.CACHE)

        items = self._load_items(cart.id)
        try:
            self.cache.set(key, CartItemList.dump_json(items).decode())
        except CacheUnavailable as e:
            logger.warning("cart_cache_populate_failed", cart_id=str(cart.id), key=key, error=str(e))
        return CartItems(cart.id, items, ItemsSource.STORE)

    # =====================================================
    # ADMIN
    # =====================================================
    def get_user_cart(self, user_id: uuid.UUID) -> tuple[CartModel, list[CartItemOut]]:
        cart = self.store.get_cart_by_user(user_id)
        if cart is None:
            raise NotFound("Cart does not exist")
        return cart, self._load_items(cart.id)

    def delete_user_cart(self, user_id: uuid.UUID) -> None:
        cart = self.store.get_cart_by_user(user_id)
        if cart is None:
            raise NotFound("Cart does not exist")

        self.store.soft_delete_cart(cart)
        logger.info(f"Admin deleted cart {cart.id} of user {user_id}")

        self._invalidate(cart.id, quiet=True)

    # =====================================================
    # helpers
    # =====================================================
    def _ensure_cart(self, principal: Principal) -> CartModel:
        cart = self.store.get_cart_by_user(principal.user_id)
        if cart is not None:
            return cart

        # lazy provisioning, po utworzeniu czytamy jeszcze raz
        self.store.create_cart(principal.user_id)
        cart = self.store.get_cart_by_user(principal.user_id)
        if cart is None:
            raise CartMissing("Failed to fetch cart")
        logger.info(f"Provisioned cart {cart.id} for user {principal.user_id}")
        return cart

    def _write_item(
        self,
        cart: CartModel,
        product_id: uuid.UUID,
        quantity: int,
        stock: int,
    ) -> CartItemModel:
        existing = self.store.get_item(cart.id, product_id)

        if existing is not None:
            total = existing.quantity + quantity
            if total > stock:
                raise OutOfStock(detail={"requested": total, "available": stock})

            logger.info(
                f"Product {product_id} already in cart {cart.id}, "
                f"quantity {existing.quantity} -> {total}"
            )
            existing.quantity = total
            return self.store.update_item(existing)

        if quantity > stock:
            raise OutOfStock(detail={"requested": quantity, "available": stock})

        logger.info(f"Adding product {product_id} to cart {cart.id}")
        return self.store.create_item(
            CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
        )

    def _load_items(self, cart_id: uuid.UUID) -> list[CartItemOut]:
        return CartItemList.validate_python(self.store.list_items(cart_id), from_attributes=True)

    def _invalidate(self, cart_id: uuid.UUID, quiet: bool = False) -> None:
        key = self.cache.key(cart_id)
        try:
            self.cache.delete(key)
        except CacheUnavailable as e:
            # zapis w bazie juz sie udal, stary wpis wygasnie po ttl
            log = logger.debug if quiet else logger.warning
            log("cart_cache_invalidate_failed", cart_id=str(cart_id), key=key, error=str(e))
