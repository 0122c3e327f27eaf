"""Search field component."""

from textual.widgets import Input
from textual.message import Message


class SearchField(Input):
    """Search input that reports every keystroke.

    Debouncing happens in the search function, not here.
    """

    class QueryChanged(Message):
        """Emitted on every change of the input value."""

        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    class RemoteRequested(Message):
        """Emitted when the user asks for a remote search."""

        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def __init__(
        self,
        placeholder: str = "Search...",
        id: str | None = None,
    ) -> None:
        super().__init__(placeholder=placeholder, id=id)

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key - force a remote search."""
        event.stop()
        self.request_remote()

    def request_remote(self) -> None:
        if self.value:
            self.post_message(self.RemoteRequested(self.value))
