import json
from typing import Dict, List, Optional, Tuple

import httpx

from gateway.client import StoreGateway

ENDPOINT = "http://store.test/api/v1"
TOKEN = "token-123"

BALL = {
    "_id": "p1",
    "name": "Ball",
    "category": "Sports",
    "cost": 10,
    "rating": 4,
    "image": "https://i.imgur.com/ball.jpg",
}
PHONE = {
    "_id": "p2",
    "name": "iPhone XR",
    "category": "Phones",
    "cost": 100,
    "rating": 5,
    "image": "https://i.imgur.com/lulqWzW.jpg",
}
BAT = {
    "_id": "p3",
    "name": "Cricket Bat",
    "category": "Sports",
    "cost": 35.5,
    "rating": 3,
    "image": "https://i.imgur.com/bat.jpg",
}


class FakeStore:
    """
    In-memory store backend, served to StoreGateway through httpx.MockTransport.
    `fail` maps (method, path) to a canned (status, body) response.
    """

    def __init__(self, products=(BALL, PHONE, BAT), cart=(), token: str = TOKEN):
        self.products: List[dict] = list(products)
        self.cart: List[dict] = [dict(line) for line in cart]
        self.token = token
        self.calls: List[Tuple[str, str]] = []
        self.requests: List[httpx.Request] = []
        self.fail: Dict[Tuple[str, str], Tuple[int, Optional[dict]]] = {}

    def gateway(self) -> StoreGateway:
        return StoreGateway(ENDPOINT, transport=httpx.MockTransport(self.handler))

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1")
        self.calls.append((request.method, path))
        self.requests.append(request)

        if (request.method, path) in self.fail:
            status, body = self.fail[(request.method, path)]
            return httpx.Response(status, json=body)

        if path == "/products":
            return httpx.Response(200, json=self.products)

        if path == "/products/search":
            value = request.url.params["value"]
            matches = [
                p
                for p in self.products
                if value in p["name"].lower() or value in p["category"].lower()
            ]
            if not matches:
                return httpx.Response(404, json={"success": False, "message": "Not found"})
            return httpx.Response(200, json=matches)

        if path == "/cart":
            if request.headers.get("Authorization") != f"Bearer {self.token}":
                return httpx.Response(
                    401,
                    json={
                        "success": False,
                        "message": "Protected route, Oauth2 Bearer token not found",
                    },
                )
            if request.method == "POST":
                return self._update_cart(json.loads(request.content))
            return httpx.Response(200, json=self.cart)

        return httpx.Response(500, json={"success": False, "message": "boom"})

    def _update_cart(self, body: dict) -> httpx.Response:
        pid, qty = body["productId"], body["qty"]
        if pid not in {p["_id"] for p in self.products}:
            return httpx.Response(
                404, json={"success": False, "message": "Product doesn't exist"}
            )
        lines = [line for line in self.cart if line["productId"] != pid]
        if qty > 0:
            existing = [line for line in self.cart if line["productId"] == pid]
            if existing:
                # keep position of lines being updated
                idx = self.cart.index(existing[0])
                lines.insert(idx, {"productId": pid, "qty": qty})
            else:
                lines.append({"productId": pid, "qty": qty})
        self.cart = lines
        return httpx.Response(200, json=self.cart)


class Notifications:
    """Notifier that records (message, severity) pairs."""

    def __init__(self):
        self.items: List[Tuple[str, str]] = []

    def __call__(self, message: str, severity: str) -> None:
        self.items.append((message, severity))

    @property
    def severities(self) -> List[str]:
        return [s for _, s in self.items]


class FakeTimer:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock; timers only fire from advance_to."""

    def __init__(self):
        self.now = 0
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance_to(self, t):
        due = sorted(
            (tm for tm in self.timers if not tm.cancelled and tm.when <= t),
            key=lambda tm: tm.when,
        )
        for timer in due:
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = t
