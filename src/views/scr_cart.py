from typing import Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Label, Rule

from gateway.models import EnrichedCartLine
from shop.cart import get_total_cart_value
from shop.session import SessionState
from utils.pure import cart_rows, format_cost
from views.base_screen import BaseScreen
from views.modal_dialog import DialogModal


class CartScreen(BaseScreen):
    """
    cart lines with a quantity stepper
    """

    BINDINGS = [
        Binding("plus", "step(1)", "More", show=True, key_display="+"),
        Binding("minus", "step(-1)", "Less", show=True, key_display="-"),
        Binding("delete", "remove", "Remove", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._lines: tuple = ()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield DataTable(id="table-cart")
        yield Label("Total Cart Value: $0.00", id="label-cart-total")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Refresh", id="btn-refresh")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.add_columns("Item", "Qty", "Cost", "Subtotal")
        self.render_session(self.app.storefront.state)

    def render_session(self, state: SessionState) -> None:
        super().render_session(state)
        total = self.query_one("#label-cart-total")
        if not state.auth_token:
            total.update("Log in to use the cart.")
        elif not state.cart:
            total.update("Cart is empty.")
        else:
            total.update(f"Total Cart Value: {format_cost(get_total_cart_value(state.cart))}")

        if state.cart == self._lines:
            return
        self._lines = state.cart
        table = self.query_one(DataTable)
        row = table.cursor_row
        table.clear()
        for line, cells in zip(state.cart, cart_rows(state.cart)):
            table.add_row(*cells, key=line.id)
        if state.cart:
            table.move_cursor(row=min(row, len(state.cart) - 1))

    def _selected_line(self) -> Optional[EnrichedCartLine]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return next((line for line in self._lines if line.id == row_key.value), None)

    @work()
    async def action_step(self, delta: int) -> None:
        line = self._selected_line()
        if line is None:
            return
        quantity = line.quantity + delta
        if quantity <= 0:
            await self._confirm_remove(line)
            return
        await self.app.storefront.set_quantity(line.id, quantity)

    @work()
    async def action_remove(self) -> None:
        line = self._selected_line()
        if line is not None:
            await self._confirm_remove(line)

    async def _confirm_remove(self, line: EnrichedCartLine) -> None:
        confirmed = await self.app.push_screen_wait(
            DialogModal(
                f"Remove {line.name} from the cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        )
        if confirmed:
            await self.app.storefront.set_quantity(line.id, 0)

    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True, group="cart-refresh")
    async def handle_refresh(self) -> None:
        await self.app.storefront.refresh_cart()
