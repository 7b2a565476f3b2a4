# talks to the remote store, maps HTTP failures onto gateway.errors
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from gateway.errors import AuthError, NetworkError, NotFoundError
from gateway.models import Product, RawCartLine
from utils.logger import get_logger

_logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


def _error_message(response: httpx.Response) -> str:
    """Pull "message" out of a {"success": false, "message": ...} body."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""


def _raise_for_status(response: httpx.Response, auth_codes=(400, 401)) -> None:
    status = response.status_code
    if status < 400:
        return
    message = _error_message(response)
    if status == 404:
        raise NotFoundError(message, status)
    if status in auth_codes:
        raise AuthError(message, status)
    raise NetworkError(message, status)


def _json_list(response: httpx.Response) -> List[Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise NetworkError("backend returned invalid JSON", response.status_code) from e
    if not isinstance(data, list):
        raise NetworkError(
            f"expected a JSON array, got {type(data).__name__}", response.status_code
        )
    return data


class StoreGateway:
    """
    Async client for the store REST api.

    Every call opens its own httpx client.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            base_url=self.endpoint, timeout=self.timeout, transport=self._transport
        ) as client:
            yield client

    @staticmethod
    def _auth_headers(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        _logger.debug(f"{method} {self.endpoint}{path}")
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise NetworkError(f"could not reach {self.endpoint}: {e}") from e
        _logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    # ---------------------------
    # Products
    # ---------------------------

    async def get_products(self) -> List[Product]:
        response = await self._request("GET", "/products")
        # no auth on catalog routes, so 4xx other than 404 is a server problem
        _raise_for_status(response, auth_codes=())
        return [Product.from_json(p) for p in _json_list(response)]

    async def search_products(self, value: str) -> List[Product]:
        """GET /products/search?value=...; raises NotFoundError on zero matches."""
        response = await self._request(
            "GET", "/products/search", params={"value": value}
        )
        _raise_for_status(response, auth_codes=())
        return [Product.from_json(p) for p in _json_list(response)]

    # ---------------------------
    # Cart
    # ---------------------------

    async def get_cart(self, token: str) -> List[RawCartLine]:
        response = await self._request(
            "GET", "/cart", headers=self._auth_headers(token)
        )
        _raise_for_status(response)
        return [RawCartLine.from_json(line) for line in _json_list(response)]

    async def update_cart(
        self, token: str, product_id: str, qty: int
    ) -> List[RawCartLine]:
        """
        POST /cart {productId, qty}. The response is the whole cart after the
        change, which is the only cart state we trust.
        """
        response = await self._request(
            "POST",
            "/cart",
            json={"productId": product_id, "qty": qty},
            headers=self._auth_headers(token),
        )
        _raise_for_status(response)
        return [RawCartLine.from_json(line) for line in _json_list(response)]
