from typing import List, Literal, Optional, Sequence

from gateway.models import EnrichedCartLine, Product

_ALIGN = {"l": ":---", "c": ":---:", "r": "---:"}


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[object]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table. With headers=None the first row is the header.
    Alignments default to centered.
    """
    if not rows:
        return ""
    if not headers:
        headers, rows = rows[0], rows[1:]

    aligns = aligns or ["c"] * len(headers)
    if len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    def line(cells) -> str:
        return "| " + " | ".join(map(str, cells)) + " |"

    return "\n".join(
        [line(headers), line(_ALIGN[a] for a in aligns), *(line(r) for r in rows)]
    )


def format_cost(cost: float) -> str:
    return f"${cost:,.2f}"


def format_rating(rating: int) -> str:
    rating = max(0, min(5, rating))
    return "★" * rating + "☆" * (5 - rating)


def product_markdown(product: Product) -> str:
    """Product card as markdown: title, then a two column field table."""
    table = generate_markdown_table(
        None,
        [
            ["Category", product.category],
            ["Cost", format_cost(product.cost)],
            ["Rating", format_rating(product.rating)],
            ["Image", product.image],
        ],
        ["l", "l"],
    )
    return f"# {product.name}\n\n{table}"


def cart_rows(cart: Sequence[EnrichedCartLine]) -> List[List[str]]:
    return [
        [line.name, str(line.quantity), format_cost(line.cost), format_cost(line.subtotal)]
        for line in cart
    ]
