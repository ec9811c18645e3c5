# shopcart/services/product_client.py
import uuid

import requests

from shopcart.domain.errors import StoreFailure
from shopcart.domain.schemas import ProductOut
from shopcart.utils.retry import http_retry
from shopcart.utils.settings import PRODUCT_SERVICE_URL
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Stock ledger czytajacy produkty ze zdalnego katalogu po HTTP."""

    def __init__(self, base_url: str | None = None, timeout: int = 2, session: requests.Session | None = None):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @http_retry()
    def fetch_product(self, product_id: uuid.UUID) -> ProductOut | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = self.session.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()

        body = resp.json()
        # katalog odpowiada w kopercie {status, message, data}
        return ProductOut.model_validate(body.get("data", body))

    def available_stock(self, product_id: uuid.UUID) -> int | None:
        try:
            product = self.fetch_product(product_id)
        except requests.RequestException as e:
            raise StoreFailure("Failed to fetch product", detail=str(e)) from e

        if product is None:
            return None
        return product.stock
