from typing import Optional

from textual import on, work
from textual.app import App
from textual.binding import Binding

from gateway.client import StoreGateway
from shop.notifications import Severity
from shop.search import Scheduler
from shop.session import SessionState, Storefront
from utils.config import Settings, load_settings
from utils.logger import get_logger
from utils.messages import QuitRequestedMessage, SessionChangedMessage
from views.base_screen import BaseScreen
from views.scr_cart import CartScreen
from views.scr_prod_search import ProdSearchScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
        Binding("f1", "switch_mode('products')", "Products", show=True),
        Binding("f2", "switch_mode('cart')", "Cart", show=True),
    ]

    MODES = {
        "products": ProdSearchScreen,
        "cart": CartScreen,
    }

    MENU = {"products": "Products", "cart": "Cart"}

    CSS = """
    Sidebar {
        dock: left;
        width: 28;
        padding: 0 1;
    }
    #loading-products {
        height: 3;
    }
    #label-no-products, #label-cart-total {
        width: 100%;
        content-align: center middle;
        padding: 1;
    }
    #div-prod-detail, #div-dialog {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
    }
    ProdDetailModal, DialogModal, ResizeScreenPromptModal {
        align: center middle;
    }
    """

    settings: Settings
    storefront: Storefront

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[StoreGateway] = None,
        schedule: Optional[Scheduler] = None,
    ):
        super().__init__()
        self.settings = settings or load_settings()
        gateway = gateway or StoreGateway(
            self.settings.api_endpoint, timeout=self.settings.request_timeout
        )
        self.storefront = Storefront(
            gateway,
            token=self.settings.auth_token,
            notify=self.notify_user,
            on_change=self.handle_state_change,
            debounce_window=self.settings.debounce_seconds,
            schedule=schedule,
        )

    async def on_mount(self) -> None:
        self.title = "Storefront"
        await self.switch_mode("products")
        self.load_catalog()

    @work(exclusive=True, group="catalog")
    async def load_catalog(self) -> None:
        await self.storefront.load()

    def notify_user(self, message: str, severity: Severity) -> None:
        self.notify(message, severity=severity)

    def handle_state_change(self, state: SessionState) -> None:
        self.post_message(SessionChangedMessage())

    @on(SessionChangedMessage)
    def handle_session_changed(self) -> None:
        # messages don't travel down to screens, hand the state over directly
        if isinstance(self.screen, BaseScreen):
            self.screen.render_session(self.storefront.state)

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.storefront.close()
        self.exit()


def main() -> None:
    settings = load_settings()
    _logger.info(f"Using store at {settings.api_endpoint}")
    StorefrontApp(settings).run()


if __name__ == "__main__":
    main()
