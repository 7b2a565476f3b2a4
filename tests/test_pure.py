import unittest

from fakes import BALL
from gateway.models import EnrichedCartLine, Product
from utils.pure import (
    cart_rows,
    format_cost,
    format_rating,
    generate_markdown_table,
    product_markdown,
)


class PureTestCase(unittest.TestCase):
    def test_markdown_table_first_row_as_header(self):
        table = generate_markdown_table(None, [["User", "alice"], ["Items", 2]], ["l", "r"])
        self.assertEqual(
            table.splitlines(),
            ["| User | alice |", "| :--- | ---: |", "| Items | 2 |"],
        )

    def test_markdown_table_empty_and_bad_aligns(self):
        self.assertEqual(generate_markdown_table(["a"], []), "")
        with self.assertRaises(ValueError):
            generate_markdown_table(["a", "b"], [[1, 2]], ["l"])

    def test_formatting(self):
        self.assertEqual(format_cost(1234.5), "$1,234.50")
        self.assertEqual(format_rating(3), "★★★☆☆")
        self.assertEqual(format_rating(9), "★★★★★")

    def test_product_card_and_cart_rows(self):
        product = Product.from_json(BALL)
        self.assertTrue(product_markdown(product).startswith("# Ball"))
        rows = cart_rows([EnrichedCartLine.from_product(product, 3)])
        self.assertEqual(rows, [["Ball", "3", "$10.00", "$30.00"]])


if __name__ == "__main__":
    unittest.main()
