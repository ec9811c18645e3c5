# shopcart/api/deps.py
from functools import lru_cache

import redis
from fastapi import Depends
from sqlalchemy.orm import Session

from shopcart.data.database import get_db
from shopcart.repos.cart_repo import CartRepo
from shopcart.repos.product_repo import ProductRepo
from shopcart.services.cart_cache import CartCache
from shopcart.services.cart_service import CartService, StockLedger
from shopcart.services.lock_service import LockService
from shopcart.services.notification_service import NotificationService
from shopcart.services.order_service import OrderService
from shopcart.services.product_client import ProductClient
from shopcart.utils.settings import REDIS_URL, STOCK_LEDGER_BACKEND, STOCK_LOCK_ENABLED

# jedno miejsce skladania zaleznosci, testy podmieniaja je przez dependency_overrides


@lru_cache
def get_redis() -> redis.Redis:
    # from_url nie laczy sie od razu, pula polaczen wspolna dla procesu
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def get_cart_cache(client: redis.Redis = Depends(get_redis)) -> CartCache:
    return CartCache(client)


def get_lock_service(client: redis.Redis = Depends(get_redis)) -> LockService | None:
    if not STOCK_LOCK_ENABLED:
        return None
    return LockService(client)


def get_stock_ledger(db: Session = Depends(get_db)) -> StockLedger:
    if STOCK_LEDGER_BACKEND == "http":
        return ProductClient()
    return ProductRepo(db)


def get_cart_service(
    db: Session = Depends(get_db),
    cache: CartCache = Depends(get_cart_cache),
    stock_ledger: StockLedger = Depends(get_stock_ledger),
    lock_service: LockService | None = Depends(get_lock_service),
) -> CartService:
    return CartService(
        store=CartRepo(db),
        stock_ledger=stock_ledger,
        cache=cache,
        lock_service=lock_service,
    )


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_order_service(
    db: Session = Depends(get_db),
    cache: CartCache = Depends(get_cart_cache),
    notifier: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(db, cache, notifier)
