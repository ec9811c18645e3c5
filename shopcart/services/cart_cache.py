# shopcart/services/cart_cache.py
import uuid

import redis
from redis.exceptions import RedisError

from shopcart.domain.errors import CacheUnavailable
from shopcart.utils.retry import redis_retry
from shopcart.utils.settings import CART_CACHE_PREFIX, CART_CACHE_TTL_SECONDS


class CartCache:
    """
    Cache pozycji koszyka w redisie, klucz "cart:<cart_id>".

    Nie jest zrodlem prawdy: przy kazdym zapisie wpis jest usuwany (nie
    latany), a nastepny odczyt go odbudowuje. Bledy redisa (po retry)
    wychodza jako CacheUnavailable, miss to po prostu None.
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl: int = CART_CACHE_TTL_SECONDS,
        prefix: str = CART_CACHE_PREFIX,
        retry_attempts: int | None = None,
    ):
        self.redis = client
        self.ttl = ttl
        self.prefix = prefix
        self._retry = redis_retry(retry_attempts)

    def key(self, cart_id: uuid.UUID) -> str:
        return f"{self.prefix}{cart_id}"

    def get(self, key: str) -> str | None:
        try:
            return self._retry(self.redis.get)(key)
        except RedisError as e:
            raise CacheUnavailable(str(e)) from e

    def set(self, key: str, payload: str, ttl: int | None = None) -> None:
        try:
            self._retry(self.redis.set)(key, payload, ex=ttl or self.ttl)
        except RedisError as e:
            raise CacheUnavailable(str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self._retry(self.redis.delete)(key)
        except RedisError as e:
            raise CacheUnavailable(str(e)) from e

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError:
            return False
