"""
Cart synchronization: join the remote cart (product id + quantity) with
catalog data so it can be displayed.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from gateway.client import StoreGateway
from gateway.errors import AuthError, GatewayError
from gateway.models import EnrichedCartLine, Product, RawCartLine
from shop.notifications import (
    MSG_AUTH_FALLBACK,
    MSG_CART_UNREACHABLE,
    Notifier,
)
from utils.logger import get_logger

_logger = get_logger(__name__)


def generate_cart_items(
    raw_cart: Iterable[RawCartLine], catalog: Iterable[Product]
) -> List[EnrichedCartLine]:
    """
    Build display-ready cart lines.

    Args:
        raw_cart: lines as returned by the store, in the store's order.
        catalog: products known to the client.

    Returns:
        One EnrichedCartLine per raw line whose product is in the catalog,
        in raw_cart order. Lines without catalog data are dropped.
    """
    by_id: Dict[str, Product] = {p.id: p for p in catalog}
    items = []
    for line in raw_cart:
        product = by_id.get(line.product_id)
        if product is None:
            _logger.debug(f"dropping cart line for unknown product {line.product_id}")
            continue
        items.append(EnrichedCartLine.from_product(product, line.quantity))
    return items


merge = generate_cart_items


def get_total_cart_value(cart: Sequence[EnrichedCartLine]) -> float:
    return round(sum(line.subtotal for line in cart), 2)


def get_total_items(cart: Sequence[EnrichedCartLine]) -> int:
    return sum(line.quantity for line in cart)


async def fetch_cart(
    gateway: StoreGateway, token: Optional[str], notify: Notifier
) -> Optional[List[RawCartLine]]:
    """
    GET /cart for the given token.

    Returns None for an anonymous session (no call made) and on any failure,
    after telling the user what went wrong. Never touches session state.
    """
    if not token:
        return None

    try:
        return await gateway.get_cart(token)
    except AuthError as e:
        _logger.warning(f"cart fetch rejected ({e.status_code}): {e.message}")
        notify(e.message or MSG_AUTH_FALLBACK, "error")
    except GatewayError as e:
        _logger.error(f"cart fetch failed: {e}")
        notify(MSG_CART_UNREACHABLE, "error")
    return None
