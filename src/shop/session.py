from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from gateway.client import StoreGateway
from gateway.errors import GatewayError
from gateway.models import EnrichedCartLine, Product
from shop.cart import fetch_cart, generate_cart_items
from shop.catalog import CatalogFetcher, normalize_query
from shop.coordinator import CartCoordinator
from shop.notifications import MSG_BACKEND_UNREACHABLE, Notifier, silent
from shop.search import DEFAULT_WINDOW, Scheduler, SearchDebouncer
from utils.logger import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of what the storefront shows.

    Fields:
      - catalog: products currently listed (full list or search result)
      - cart: enriched cart lines, in the order the store returned them
      - is_loading: a catalog request is in flight
      - auth_token: bearer token, None for an anonymous visitor
      - query: lowercased text of the last issued search, "" for the full list
    """

    catalog: Tuple[Product, ...] = ()
    cart: Tuple[EnrichedCartLine, ...] = ()
    is_loading: bool = False
    auth_token: Optional[str] = None
    query: str = ""


class Storefront:
    """
    Owns the session state and applies every update to it.

    Catalog requests (initial load and searches) are numbered as they are
    issued; a response is only shown if no newer request was issued since,
    so a slow old search can't overwrite the results of a newer one.
    Cart mutations are not serialized, the last answer from the store wins.
    """

    def __init__(
        self,
        gateway: StoreGateway,
        token: Optional[str] = None,
        notify: Notifier = silent,
        on_change: Optional[Callable[[SessionState], None]] = None,
        debounce_window: float = DEFAULT_WINDOW,
        schedule: Optional[Scheduler] = None,
    ):
        self.gateway = gateway
        self.notify = notify
        self.on_change = on_change
        self.catalog_fetcher = CatalogFetcher(gateway)
        self.coordinator = CartCoordinator(gateway, notify)
        self.debouncer = SearchDebouncer(self.run_search, debounce_window, schedule)

        self._state = SessionState(auth_token=token)
        # every product seen this session, carts are merged against it so a
        # filtered listing doesn't hide cart lines
        self._products: Dict[str, Product] = {}
        self._catalog_seq = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def known_products(self) -> List[Product]:
        return list(self._products.values())

    def _update(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        if self.on_change is not None:
            self.on_change(self._state)

    def _remember(self, products: List[Product]) -> None:
        for product in products:
            self._products[product.id] = product

    def _issue(self) -> int:
        self._catalog_seq += 1
        return self._catalog_seq

    def _is_latest(self, seq: int) -> bool:
        return seq == self._catalog_seq

    def _show_catalog(self, seq: int, products: List[Product]) -> None:
        self._remember(products)
        if self._is_latest(seq):
            self._update(catalog=tuple(products))
        else:
            _logger.debug(f"discarding stale catalog response #{seq}")

    # ---------------------------
    # Catalog
    # ---------------------------

    async def load(self) -> None:
        """Fetch the full catalog, then the visitor's cart if logged in."""
        seq = self._issue()
        self._update(is_loading=True, query="")
        try:
            products = await self.catalog_fetcher.fetch_all()
        except GatewayError as e:
            _logger.error(f"catalog fetch failed: {e}")
            self.notify(MSG_BACKEND_UNREACHABLE, "error")
        else:
            self._show_catalog(seq, products)
            if self._state.auth_token:
                await self.refresh_cart()
        finally:
            if self._is_latest(seq):
                self._update(is_loading=False)

    def search(self, text: str) -> None:
        """Keystroke entry point; the request goes out once typing pauses."""
        self.debouncer.push(text)

    async def run_search(self, text: str) -> None:
        query = normalize_query(text)
        seq = self._issue()
        self._update(is_loading=True, query=query)
        try:
            if query:
                products = await self.catalog_fetcher.fetch_filtered(query)
            else:
                products = await self.catalog_fetcher.fetch_all()
        except GatewayError as e:
            _logger.error(f"search for {query!r} failed: {e}")
            self.notify(MSG_BACKEND_UNREACHABLE, "error")
        else:
            self._show_catalog(seq, products)
            if self._is_latest(seq) and self._state.auth_token:
                await self.refresh_cart()
        finally:
            if self._is_latest(seq):
                self._update(is_loading=False)

    # ---------------------------
    # Cart
    # ---------------------------

    async def refresh_cart(self) -> bool:
        raw_cart = await fetch_cart(self.gateway, self._state.auth_token, self.notify)
        if raw_cart is None:
            return False
        self._update(cart=tuple(generate_cart_items(raw_cart, self.known_products)))
        return True

    async def _mutate(self, product_id: str, quantity: int, prevent_duplicate: bool) -> bool:
        cart = await self.coordinator.add_or_update(
            self._state.auth_token,
            self._state.cart,
            self.known_products,
            product_id,
            quantity,
            prevent_duplicate=prevent_duplicate,
        )
        if cart is None:
            return False
        self._update(cart=tuple(cart))
        return True

    async def add_to_cart(self, product_id: str) -> bool:
        """Add-to-cart from the product list: one unit, existing lines refused."""
        return await self._mutate(product_id, 1, prevent_duplicate=True)

    async def set_quantity(self, product_id: str, quantity: int) -> bool:
        """Quantity stepper in the cart; 0 removes the line."""
        return await self._mutate(product_id, quantity, prevent_duplicate=False)

    def close(self) -> None:
        self.debouncer.cancel()
