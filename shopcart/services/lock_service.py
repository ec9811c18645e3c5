import uuid
from contextlib import contextmanager

import redis
from redis.exceptions import RedisError

from shopcart.domain.errors import Conflict, StoreFailure
from shopcart.utils.retry import redis_retry
from shopcart.utils.settings import STOCK_LOCK_TTL_SECONDS
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -krotki lock na produkt na czas check-then-act w koszyku
    -zwalnianie tylko przez wlasciciela tokenu (lua)
    """

    def __init__(self, client: redis.Redis, ttl: int = STOCK_LOCK_TTL_SECONDS, retry_attempts: int | None = None):
        self.redis = client
        self.ttl = ttl
        self._retry = redis_retry(retry_attempts)

    @staticmethod
    def key(product_id: uuid.UUID) -> str:
        return f"product:{product_id}:lock"

    def acquire_product_lock(self, product_id: uuid.UUID, token: str) -> bool:
        key = self.key(product_id)
        logger.info(f"Acquire lock {key}")
        #SET product:<id>:lock <token> NX EX ttl
        return bool(self._retry(self.redis.set)(key, token, nx=True, ex=self.ttl))

    def release_product_lock(self, product_id: uuid.UUID, token: str) -> bool:
        key = self.key(product_id)
        logger.info(f"Release lock {key}")
        return bool(self._retry(self.redis.eval)(_RELEASE_LUA, 1, key, token))

    @contextmanager
    def product_lock(self, product_id: uuid.UUID):
        token = uuid.uuid4().hex
        try:
            locked = self.acquire_product_lock(product_id, token)
        except RedisError as e:
            raise StoreFailure("Failed to acquire product lock", detail=str(e)) from e

        if not locked:
            raise Conflict("Product is being updated, retry")

        try:
            yield
        finally:
            try:
                self.release_product_lock(product_id, token)
            except RedisError as e:
                # lock i tak wygasnie po ttl
                logger.warning("lock_release_failed", product_id=str(product_id), error=str(e))
