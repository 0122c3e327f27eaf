"""CLI components."""

from .search_field import SearchField
from .results_view import ResultsView, ResultItem
from .status_bar import StatusBar

__all__ = [
    "SearchField",
    "ResultsView",
    "ResultItem",
    "StatusBar",
]
