"""Results view component."""

from typing import Any, Callable, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import ListItem, ListView, Static

from omnisearch import SearchResult

ItemRenderer = Callable[[Any], "str | Text"]
StateRenderer = Callable[[SearchResult], "str | Text"]
ErrorRenderer = Callable[[str], "str | Text"]


class ResultItem(ListItem):
    """Single result row."""

    def __init__(self, item: Any, renderer: ItemRenderer, is_remote: bool = False) -> None:
        super().__init__()
        self.item = item
        self.renderer = renderer
        self.is_remote = is_remote

    def compose(self) -> ComposeResult:
        text = Text()
        rendered = self.renderer(self.item)
        text.append_text(rendered if isinstance(rendered, Text) else Text(str(rendered)))
        if self.is_remote:
            text.append("  remote", style="dim blue")
        else:
            text.append("  local", style="dim green")
        yield Static(text, classes="result-item")


class ResultsView(Vertical):
    """Renders the latest snapshot of a search function."""

    result: reactive[Optional[SearchResult]] = reactive(None, always_update=True)

    LOADING_TEXT = "Searching remote sources..."
    EMPTY_TEXT = "No results found"

    def __init__(
        self,
        renderer: ItemRenderer = str,
        show_refresh_button: bool = True,
        loading_renderer: Optional[StateRenderer] = None,
        empty_renderer: Optional[StateRenderer] = None,
        error_renderer: Optional[ErrorRenderer] = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self.renderer = renderer
        self.show_refresh_button = show_refresh_button
        self.loading_renderer = loading_renderer or self._default_loading
        self.empty_renderer = empty_renderer or self._default_empty
        self.error_renderer = error_renderer or self._default_error
        self.has_input = False
        self.state = "idle"

    def compose(self) -> ComposeResult:
        yield Static("", id="results-message")
        yield ListView(id="results-items")

    def _default_loading(self, result: SearchResult) -> str:
        return f"[yellow]⟳[/] {self.LOADING_TEXT}"

    def _default_empty(self, result: SearchResult) -> str:
        text = f"[dim]{self.EMPTY_TEXT}[/]"
        if self.show_refresh_button and result.is_local:
            text += "\n[dim]Press Enter to search remotely[/]"
        return text

    def _default_error(self, error: str) -> Text:
        return Text(f"Error: {error}", style="red")

    def state_for(self, result: Optional[SearchResult]) -> str:
        """Decide what to show for a snapshot."""
        if result is None:
            return "idle"
        if result.is_loading and result.is_remote:
            return "loading"
        if result.has_error:
            return "error"
        if not result.items and self.has_input:
            return "empty"
        return "results"

    def watch_result(self, result: Optional[SearchResult]) -> None:
        """Update the view when a new snapshot arrives."""
        self.state = self.state_for(result)
        message = self.query_one("#results-message", Static)
        items = self.query_one("#results-items", ListView)

        items.clear()
        message.display = self.state != "results"
        items.display = self.state == "results"

        if self.state == "idle":
            message.update("")
        elif self.state == "loading":
            message.update(self.loading_renderer(result))
        elif self.state == "error":
            message.update(self.error_renderer(result.error))
        elif self.state == "empty":
            message.update(self.empty_renderer(result))
        else:
            for item in result.items:
                items.append(ResultItem(item, self.renderer, is_remote=result.is_remote))
