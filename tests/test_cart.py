import unittest

from fakes import BALL, PHONE, TOKEN, FakeStore, Notifications
from gateway.models import EnrichedCartLine, Product, RawCartLine
from shop.cart import (
    fetch_cart,
    generate_cart_items,
    get_total_cart_value,
    get_total_items,
    merge,
)
from shop.notifications import MSG_AUTH_FALLBACK, MSG_CART_UNREACHABLE

P1 = Product.from_json(BALL)
P2 = Product.from_json(PHONE)


class MergeTestCase(unittest.TestCase):
    def test_empty_raw_cart(self):
        self.assertEqual(generate_cart_items([], [P1, P2]), [])

    def test_empty_catalog_drops_everything(self):
        self.assertEqual(generate_cart_items([RawCartLine("p1", 1)], []), [])

    def test_keeps_raw_cart_order(self):
        items = generate_cart_items(
            [RawCartLine("p2", 1), RawCartLine("p1", 2)], [P1, P2]
        )
        self.assertEqual([i.id for i in items], ["p2", "p1"])
        self.assertEqual([i.quantity for i in items], [1, 2])

    def test_drops_orphans(self):
        raw = [RawCartLine("p1", 1), RawCartLine("gone", 4), RawCartLine("p2", 2)]
        items = generate_cart_items(raw, [P1, P2])
        self.assertEqual([i.id for i in items], ["p1", "p2"])
        self.assertLessEqual(len(items), len(raw))

    def test_enriched_line_carries_product_fields(self):
        (line,) = generate_cart_items([RawCartLine("p2", 3)], [P1, P2])
        self.assertEqual(
            line,
            EnrichedCartLine(
                id="p2",
                name="iPhone XR",
                category="Phones",
                cost=100.0,
                rating=5,
                image=PHONE["image"],
                quantity=3,
            ),
        )
        self.assertEqual(line.product_id, "p2")
        self.assertEqual(line.subtotal, 300.0)

    def test_merge_is_pure(self):
        raw = [RawCartLine("p1", 1)]
        catalog = [P1]
        self.assertEqual(merge(raw, catalog), merge(raw, catalog))
        self.assertEqual(raw, [RawCartLine("p1", 1)])
        self.assertEqual(catalog, [P1])

    def test_totals(self):
        items = generate_cart_items(
            [RawCartLine("p1", 3), RawCartLine("p2", 1)], [P1, P2]
        )
        self.assertEqual(get_total_cart_value(items), 130.0)
        self.assertEqual(get_total_items(items), 4)
        self.assertEqual(get_total_cart_value([]), 0)


class FetchCartTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = FakeStore(cart=[{"productId": "p1", "qty": 2}])
        self.gateway = self.store.gateway()
        self.notify = Notifications()

    async def test_no_token_no_call(self):
        self.assertIsNone(await fetch_cart(self.gateway, None, self.notify))
        self.assertEqual(self.store.calls, [])
        self.assertEqual(self.notify.items, [])

    async def test_returns_raw_lines(self):
        lines = await fetch_cart(self.gateway, TOKEN, self.notify)
        self.assertEqual(lines, [RawCartLine("p1", 2)])
        self.assertEqual(self.notify.items, [])

    async def test_auth_error_reports_server_message(self):
        self.assertIsNone(await fetch_cart(self.gateway, "expired", self.notify))
        self.assertEqual(
            self.notify.items,
            [("Protected route, Oauth2 Bearer token not found", "error")],
        )

    async def test_auth_error_without_message_uses_fallback(self):
        self.store.fail[("GET", "/cart")] = (400, {"success": False})
        self.assertIsNone(await fetch_cart(self.gateway, TOKEN, self.notify))
        self.assertEqual(self.notify.items, [(MSG_AUTH_FALLBACK, "error")])

    async def test_other_failure_is_generic(self):
        self.store.fail[("GET", "/cart")] = (503, {"success": False, "message": "down"})
        self.assertIsNone(await fetch_cart(self.gateway, TOKEN, self.notify))
        self.assertEqual(self.notify.items, [(MSG_CART_UNREACHABLE, "error")])


if __name__ == "__main__":
    unittest.main()
