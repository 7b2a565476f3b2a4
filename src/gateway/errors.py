from typing import Optional


class GatewayError(Exception):
    """
    Base class for every failure reported by the remote store.

    `message` is the text the backend put in its error body, if any.
    """

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message or f"HTTP {status_code}")
        self.message = message
        self.status_code = status_code


class NetworkError(GatewayError):
    """
    backend unreachable, 5xx, or a body that is not the JSON we expect
    """


class NotFoundError(GatewayError):
    """
    404. On search this means zero matches, on cart updates an unknown product
    """


class AuthError(GatewayError):
    """
    400/401 on the cart endpoints, the token is missing, invalid or expired
    """
