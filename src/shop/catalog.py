from typing import List

from gateway.client import StoreGateway
from gateway.errors import NotFoundError
from gateway.models import Product
from utils.logger import get_logger

_logger = get_logger(__name__)


def normalize_query(text: str) -> str:
    return (text or "").lower()


class CatalogFetcher:
    """
    Retrieves the full or filtered product list.

    Both methods let NetworkError through; the caller decides what the user
    sees. A 404 on search is a valid "nothing matched" and comes back as [].
    """

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway

    async def fetch_all(self) -> List[Product]:
        products = await self.gateway.get_products()
        _logger.info(f"Fetched {len(products)} products")
        return products

    async def fetch_filtered(self, query: str) -> List[Product]:
        value = normalize_query(query)
        try:
            products = await self.gateway.search_products(value)
        except NotFoundError:
            _logger.debug(f"no products match {value!r}")
            return []
        _logger.debug(f"{len(products)} products match {value!r}")
        return products
