from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import Resize, ScreenResume
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView, Markdown

from shop.cart import get_total_cart_value, get_total_items
from shop.session import SessionState
from utils.pure import format_cost, generate_markdown_table
from views.modal_dialog import QuitDialogModal
from views.modal_resize import ResizeScreenPromptModal


class Sidebar(Container):
    def compose(self) -> ComposeResult:
        yield Label("User Info", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Label("Menu", id="label-info-2")
        yield ListView(
            *[
                ListItem(Label(v), id="list-menu-item-" + k)
                for k, v in self.app.MENU.items()
            ],
            id="list-menu",
        )

    def on_mount(self):
        self.highlight_item(self.app.current_mode)

    async def show_session(self, state: SessionState) -> None:
        if state.auth_token:
            rows = [
                ["User", self.app.settings.username or "Customer"],
                ["Items", get_total_items(state.cart)],
                ["Total", format_cost(get_total_cart_value(state.cart))],
            ]
        else:
            rows = [["User", "Guest"], ["Cart", "log in to use"]]
        await self.query_one(Markdown).update(
            generate_markdown_table(None, rows, ["l", "l"])
        )

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.id.removeprefix("list-menu-item-")
        if self.app.current_mode != selected_mode:
            await self.app.switch_mode(selected_mode)

    def highlight_item(self, mode_str: str):
        for item in self.query_one("#list-menu").children:
            item.highlighted = item.id == "list-menu-item-" + mode_str


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.

    Subclasses redraw themselves in render_session, which the app calls
    whenever the storefront state changes.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    MIN_WIDTH = 60
    MIN_HEIGHT = 20

    def compose(self) -> ComposeResult:
        yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    def render_session(self, state: SessionState) -> None:
        self.update_sidebar(state)

    @work(exclusive=True, group="sidebar")
    async def update_sidebar(self, state: SessionState) -> None:
        await self.query_one(Sidebar).show_session(state)

    @on(ScreenResume)
    def handle_resume(self):
        self.query_one(Sidebar).highlight_item(self.app.current_mode)
        self.render_session(self.app.storefront.state)

    async def on_resize(self, event: Resize) -> None:
        if event.size.width < self.MIN_WIDTH or event.size.height < self.MIN_HEIGHT:
            self.app.push_screen(ResizeScreenPromptModal(self.MIN_WIDTH, self.MIN_HEIGHT))

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
