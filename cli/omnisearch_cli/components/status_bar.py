"""Status bar component."""

from typing import Optional

from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Static


class StatusBar(Static):
    """Status bar showing result source, loading state and cache size."""

    source: reactive[str] = reactive("")
    result_count: reactive[int] = reactive(0)
    local_count: reactive[int] = reactive(0)
    is_loading: reactive[bool] = reactive(False)
    message: reactive[str] = reactive("")

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_timer: Optional[Timer] = None

    def render(self) -> str:
        parts = []

        if self.source == "remote":
            parts.append("[blue]● Remote[/]")
        elif self.source == "local":
            parts.append("[green]● Local[/]")
        else:
            parts.append("[dim]● Idle[/]")

        parts.append(f"[dim]{self.result_count:,} results[/]")
        parts.append(f"[dim]{self.local_count:,} cached[/]")

        if self.is_loading:
            parts.append("[yellow]⟳ Searching...[/]")

        if self.message:
            parts.append(f"[cyan]{self.message}[/]")

        return " │ ".join(parts)

    def set_message(self, message: str, duration: float = 3.0) -> None:
        """
        Show `message`, replacing any message still on screen.

        The newest message owns the clear timer; a zero duration keeps it
        until the next call.
        """
        if self._message_timer is not None:
            self._message_timer.stop()
            self._message_timer = None

        self.message = message
        if duration > 0:
            self._message_timer = self.set_timer(duration, self._expire_message)

    def _expire_message(self) -> None:
        self._message_timer = None
        self.message = ""
