# user visible notifications emitted by the shop layer
from typing import Callable, Literal

Severity = Literal["warning", "error"]

# (message, severity) -> None. In the app this is App.notify
Notifier = Callable[[str, Severity], None]

MSG_BACKEND_UNREACHABLE = (
    "Could not fetch products. Check that the backend is running, "
    "reachable and returns valid JSON."
)
MSG_CART_UNREACHABLE = (
    "Could not fetch cart details. Check that the backend is running, "
    "reachable and returns valid JSON."
)
MSG_CART_UPDATE_FAILED = (
    "Could not update cart. Check that the backend is running, "
    "reachable and returns valid JSON."
)
MSG_AUTH_FALLBACK = "Your session has expired. Please log in again."
MSG_LOGIN_REQUIRED = "Login to add an item to the Cart"
MSG_ALREADY_IN_CART = (
    "Item already in cart. Use the cart sidebar to update quantity or remove item."
)
MSG_PRODUCT_MISSING = "Product doesn't exist"
MSG_BAD_QUANTITY = "Quantity must be a whole number of zero or more."


def silent(message: str, severity: Severity) -> None:
    """Notifier that drops everything, for headless use."""
