"""Search field and results bound to a `SearchFunction`."""

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message

from omnisearch import SearchFunction, SearchResult, Subscription
from omnisearch.config import get_settings
from omnisearch_cli.components import ResultsView, SearchField
from omnisearch_cli.components.results_view import ErrorRenderer, ItemRenderer, StateRenderer


class SearchFunctionView(Vertical):
    """
    Text input plus result list driven by a search function.

    Every keystroke calls `search()`; Enter or ctrl+r calls
    `force_remote_search()`. The view renders whatever snapshot the
    search function emitted last.
    """

    BINDINGS = [
        Binding("ctrl+r", "refresh", "Search remotely", show=True),
    ]

    class ResultReceived(Message):
        """Forwarded for every snapshot so the app can react to it."""

        def __init__(self, result: SearchResult) -> None:
            self.result = result
            super().__init__()

    def __init__(
        self,
        search_function: SearchFunction,
        item_renderer: ItemRenderer = str,
        hint_text: Optional[str] = None,
        show_refresh_button: Optional[bool] = None,
        initial_show_local_list: Optional[bool] = None,
        loading_renderer: Optional[StateRenderer] = None,
        empty_renderer: Optional[StateRenderer] = None,
        error_renderer: Optional[ErrorRenderer] = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        settings = get_settings()
        self.search_function = search_function
        self.item_renderer = item_renderer
        self.hint_text = hint_text or "Search..."
        self.show_refresh_button = (
            settings.show_refresh_button if show_refresh_button is None else show_refresh_button
        )
        self.initial_show_local_list = (
            settings.initial_show_local_list
            if initial_show_local_list is None
            else initial_show_local_list
        )
        self.loading_renderer = loading_renderer
        self.empty_renderer = empty_renderer
        self.error_renderer = error_renderer
        self._subscription: Optional[Subscription] = None

    def compose(self) -> ComposeResult:
        yield SearchField(placeholder=self.hint_text, id="search-field")
        yield ResultsView(
            renderer=self.item_renderer,
            show_refresh_button=self.show_refresh_button,
            loading_renderer=self.loading_renderer,
            empty_renderer=self.empty_renderer,
            error_renderer=self.error_renderer,
            id="results-view",
        )

    @property
    def field(self) -> SearchField:
        return self.query_one("#search-field", SearchField)

    @property
    def results_view(self) -> ResultsView:
        return self.query_one("#results-view", ResultsView)

    def on_mount(self) -> None:
        self._subscription = self.search_function.results_stream.subscribe(self._on_result)
        if self.initial_show_local_list:
            self.search_function.search("")

    def on_unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_result(self, result: SearchResult) -> None:
        self.results_view.has_input = bool(self.field.value)
        self.results_view.result = result
        self.post_message(self.ResultReceived(result))

    def on_search_field_query_changed(self, event: SearchField.QueryChanged) -> None:
        self.search_function.search(event.query)

    def on_search_field_remote_requested(self, event: SearchField.RemoteRequested) -> None:
        if self.show_refresh_button:
            self.search_function.force_remote_search(event.query)

    def action_refresh(self) -> None:
        """Force a remote search for the current input."""
        self.field.request_remote()
