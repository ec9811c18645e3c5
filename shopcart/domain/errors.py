# shopcart/domain/errors.py
from typing import Any


class ShopError(Exception):
    """Blad domenowy z kodem HTTP, renderowany przez handler w api."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None, detail: Any = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class ValidationFailed(ShopError):
    status_code = 400
    message = "Validation failed"


class ProductNotFound(ShopError):
    status_code = 400
    message = "Product does not exist"


class OutOfStock(ShopError):
    status_code = 400
    message = "Product out of stock"


class NotFound(ShopError):
    status_code = 404
    message = "Not found"


class Forbidden(ShopError):
    status_code = 403
    message = "Forbidden"


class Unauthenticated(ShopError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(ShopError):
    status_code = 401
    message = "Invalid credential"


class Conflict(ShopError):
    status_code = 409
    message = "Conflict"


class CartMissing(ShopError):
    # koszyk powinien juz istniec, brak = niespojnosc a nie zwykly miss
    status_code = 500
    message = "Cart does not exist"


class CacheCorruption(ShopError):
    status_code = 500
    message = "Failed to parse cache"


class StoreFailure(ShopError):
    status_code = 500
    message = "Internal server error"


class CacheUnavailable(Exception):
    """Redis nie odpowiada. Nigdy nie trafia do klienta, serwis degraduje do bazy."""
