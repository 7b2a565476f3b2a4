from typing import Optional, Tuple

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Input, Label, LoadingIndicator

from gateway.models import Product
from shop.session import SessionState
from utils.pure import format_cost, format_rating
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class ProdSearchScreen(BaseScreen):
    """
    product listing with the search bar
    """

    BINDINGS = [
        Binding("a", "add_selected", "Add to Cart", show=True),
        Binding("slash", "focus_search", "Search", show=True, key_display="/"),
    ]

    def __init__(self):
        super().__init__()
        self._shown: Optional[Tuple[Product, ...]] = None

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Input(id="input-search", placeholder="Search for items/categories")
        yield LoadingIndicator(id="loading-products")
        yield Label("No products found", id="label-no-products")
        yield DataTable(id="table-products")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Name", "Category", "Cost", "Rating")

        self.query_one("#input-search").focus()
        self.render_session(self.app.storefront.state)

    def render_session(self, state: SessionState) -> None:
        super().render_session(state)
        self.query_one("#loading-products").display = state.is_loading
        self.query_one("#label-no-products").display = (
            not state.catalog and not state.is_loading
        )

        # redrawing resets the cursor, only do it when the listing changed
        if state.catalog == self._shown:
            return
        self._shown = state.catalog
        table = self.query_one(DataTable)
        table.clear()
        for product in state.catalog:
            table.add_row(
                product.name,
                product.category,
                format_cost(product.cost),
                format_rating(product.rating),
                key=product.id,
            )

    @on(Input.Changed, "#input-search")
    def handle_search_changed(self, message: Input.Changed) -> None:
        self.app.storefront.search(message.value)

    def _selected_product(self) -> Optional[Product]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return next((p for p in self._shown or () if p.id == row_key.value), None)

    @on(DataTable.RowSelected, "#table-products")
    @work()
    async def handle_product_selected(self) -> None:
        product = self._selected_product()
        if product is None:
            return
        if await self.app.push_screen_wait(ProdDetailModal(product)):
            await self.app.storefront.add_to_cart(product.id)

    @work()
    async def action_add_selected(self) -> None:
        product = self._selected_product()
        if product is not None:
            await self.app.storefront.add_to_cart(product.id)

    def action_focus_search(self) -> None:
        self.query_one("#input-search").focus()
