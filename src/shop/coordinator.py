from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from gateway.client import StoreGateway
from gateway.errors import AuthError, GatewayError, NotFoundError
from gateway.models import EnrichedCartLine, Product
from shop.cart import generate_cart_items
from shop.notifications import (
    MSG_ALREADY_IN_CART,
    MSG_AUTH_FALLBACK,
    MSG_BAD_QUANTITY,
    MSG_CART_UPDATE_FAILED,
    MSG_LOGIN_REQUIRED,
    MSG_PRODUCT_MISSING,
    Notifier,
)
from utils.logger import get_logger

_logger = get_logger(__name__)


def is_item_in_cart(cart: Iterable[EnrichedCartLine], product_id: str) -> bool:
    """True if a line for product_id is already in the cart."""
    return any(line.id == product_id for line in cart)


class CartCoordinator:
    """
    Validates and submits cart mutations, then merges the store's answer.

    Nothing is applied locally before the store confirms; a None result
    means "keep the cart you have". Failures are reported, never retried.
    """

    def __init__(self, gateway: StoreGateway, notify: Notifier):
        self.gateway = gateway
        self.notify = notify

    async def add_or_update(
        self,
        token: Optional[str],
        current_cart: Sequence[EnrichedCartLine],
        catalog: Iterable[Product],
        product_id: str,
        quantity: int,
        prevent_duplicate: bool = False,
    ) -> Optional[List[EnrichedCartLine]]:
        """
        Set product_id to `quantity` in the remote cart.

        Args:
            token: bearer token, None for anonymous sessions.
            current_cart: cart as displayed now, used for the duplicate check.
            catalog: products to merge the new cart against.
            product_id: product to add or update.
            quantity: absolute quantity; 0 asks the store to drop the line.
            prevent_duplicate: set for "Add to cart" from the product list,
                where an existing line must be changed from the cart instead.

        Returns:
            The new enriched cart, or None if nothing changed.
        """
        if not token:
            self.notify(MSG_LOGIN_REQUIRED, "warning")
            return None

        if prevent_duplicate and is_item_in_cart(current_cart, product_id):
            self.notify(MSG_ALREADY_IN_CART, "warning")
            return None

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            self.notify(MSG_BAD_QUANTITY, "warning")
            return None

        try:
            raw_cart = await self.gateway.update_cart(token, product_id, quantity)
        except NotFoundError as e:
            _logger.warning(f"cart update for unknown product {product_id}")
            self.notify(e.message or MSG_PRODUCT_MISSING, "error")
            return None
        except AuthError as e:
            _logger.warning(f"cart update rejected ({e.status_code}): {e.message}")
            self.notify(e.message or MSG_AUTH_FALLBACK, "error")
            return None
        except GatewayError as e:
            _logger.error(f"cart update failed: {e}")
            self.notify(MSG_CART_UPDATE_FAILED, "error")
            return None

        _logger.info(f"cart now has {len(raw_cart)} lines after setting {product_id}={quantity}")
        return generate_cart_items(raw_cart, catalog)
