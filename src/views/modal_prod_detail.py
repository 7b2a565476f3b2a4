from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Markdown

from gateway.models import Product
from utils.pure import product_markdown


class ProdDetailModal(ModalScreen[bool]):
    """
    product card with an "Add to Cart" button
    dismisses with True if the visitor asked to add it
    """

    BINDINGS = [Binding("escape", "go_back", "Go Back", show=True)]

    def __init__(self, product: Product) -> None:
        super().__init__()
        self.product = product

    def compose(self) -> ComposeResult:
        with Vertical(id="div-prod-detail"):
            yield Markdown(product_markdown(self.product))
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Add to Cart", id="btn-addcart", variant="primary")

    def on_mount(self):
        self.query_one("#btn-addcart").focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-addcart")

    def action_go_back(self):
        self.dismiss(False)
