"""OmniSearch CLI - Demo Textual Application."""

import time
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Input

from omnisearch import SearchFunction
from omnisearch.config import get_settings
from omnisearch_cli import catalog
from omnisearch_cli.components import StatusBar
from omnisearch_cli.widget import SearchFunctionView


class OmniSearchApp(App):
    """Instant search demo over a small product catalog."""

    TITLE = "OmniSearch"
    SUB_TITLE = "Instant search demo"
    CSS_PATH = Path(__file__).parent / "styles" / "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "reset", "Show local", show=True, priority=True),
        Binding("ctrl+l", "clear_cache", "Clear cache", show=True),
        Binding("/", "focus_search", "Search", show=False),
    ]

    def __init__(
        self,
        search_function: Optional[SearchFunction] = None,
        initial_show_local_list: Optional[bool] = None,
    ):
        super().__init__()
        self.search_function = search_function or SearchFunction(
            catalog.mock_remote_search,
            catalog.match_product,
            initial_data=catalog.LOCAL_PRODUCTS,
            debounce_duration=get_settings().debounce_seconds,
        )
        self.initial_show_local_list = initial_show_local_list

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="main"):
            # Add products to the local collection by hand
            with Horizontal(id="add-section"):
                yield Input(placeholder="Test: add product name", id="add-input")

            yield SearchFunctionView(
                self.search_function,
                item_renderer=self._render_item,
                hint_text="Search products instantly...",
                initial_show_local_list=self.initial_show_local_list,
                id="search-view",
            )

        yield StatusBar(id="status-bar")
        yield Footer()

    @staticmethod
    def _render_item(item):
        if isinstance(item, catalog.Product):
            return catalog.render_product(item)
        return str(item)

    def on_mount(self) -> None:
        self.query_one(SearchFunctionView).field.focus()
        self._update_status()

    def on_unmount(self) -> None:
        self.search_function.dispose()

    def on_search_function_view_result_received(
        self, event: SearchFunctionView.ResultReceived
    ) -> None:
        self._update_status(event.result)

    def _update_status(self, result=None) -> None:
        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.local_count = len(self.search_function.local_data)
        status_bar.is_loading = self.search_function.is_loading
        if result is not None:
            status_bar.source = result.source.value
            status_bar.result_count = len(result.items)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Add a product typed into the add field."""
        if event.input.id != "add-input" or not event.value:
            return

        product = catalog.Product(
            id=str(time.time_ns()),
            name=event.value,
            description="Test product added locally",
            price=99.99,
            category="Test",
        )
        self.search_function.add_items([product])
        event.input.value = ""
        self._update_status()
        self.query_one("#status-bar", StatusBar).set_message(f"Added: {product.name}")

    def action_focus_search(self) -> None:
        """Focus the search field."""
        self.query_one(SearchFunctionView).field.focus()

    def action_reset(self) -> None:
        """Drop a pending remote search and show the local list again."""
        view = self.query_one(SearchFunctionView)
        if view.field.value:
            view.field.value = ""
        else:
            self.search_function.search("")

    def action_clear_cache(self) -> None:
        """Empty the local collection."""
        self.search_function.clear_local_data()
        self._update_status()
        self.query_one("#status-bar", StatusBar).set_message("Local data cleared")


def run_app(search_function: Optional[SearchFunction] = None):
    """Run the OmniSearch demo app."""
    app = OmniSearchApp(search_function)
    app.run()


if __name__ == "__main__":
    run_app()
