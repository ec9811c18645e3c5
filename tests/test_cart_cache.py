import uuid
from unittest.mock import Mock

import pytest
import redis

from shopcart.domain.errors import CacheUnavailable
from shopcart.services.cart_cache import CartCache


def test_key_uses_cart_prefix(cache):
    cart_id = uuid.uuid4()

    assert cache.key(cart_id) == f"cart:{cart_id}"


def test_miss_is_none(cache):
    assert cache.get("cart:missing") is None


def test_set_uses_default_ttl(cache, fake_redis):
    cache.set("cart:1", "[]")

    assert fake_redis.data["cart:1"] == "[]"
    assert fake_redis.ttls["cart:1"] == 86400


def test_delete_missing_key_is_fine(cache):
    cache.delete("cart:missing")


@pytest.mark.parametrize("operation, args", [
    ("get", ("cart:1",)),
    ("set", ("cart:1", "[]")),
    ("delete", ("cart:1",)),
])
def test_redis_errors_become_cache_unavailable(cache, fake_redis, operation, args):
    fake_redis.down = True

    with pytest.raises(CacheUnavailable):
        getattr(cache, operation)(*args)


def test_transient_error_is_retried():
    client = Mock()
    client.get.side_effect = [redis.ConnectionError("reset"), "[]"]
    cache = CartCache(client, retry_attempts=2)

    assert cache.get("cart:1") == "[]"
    assert client.get.call_count == 2


def test_ping_reports_down(cache, fake_redis):
    assert cache.ping() is True

    fake_redis.down = True

    assert cache.ping() is False
