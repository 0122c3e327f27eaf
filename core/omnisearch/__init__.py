"""OmniSearch - instant local search with a debounced remote fallback."""

__version__ = "0.1.0"

from omnisearch.exceptions import (
    ConfigurationError,
    OmniSearchError,
    RemoteSearchError,
    SearchFunctionClosedError,
    StreamClosedError,
)
from omnisearch.matchers import contains_ignore_case, field_matcher
from omnisearch.models import SearchResult, SearchSource
from omnisearch.remote import HttpRemoteSearch
from omnisearch.search_function import SearchFunction
from omnisearch.stream import ResultStream, Subscription, wait_for_result

__all__ = [
    "__version__",
    "ConfigurationError",
    "OmniSearchError",
    "RemoteSearchError",
    "SearchFunctionClosedError",
    "StreamClosedError",
    "contains_ignore_case",
    "field_matcher",
    "SearchResult",
    "SearchSource",
    "HttpRemoteSearch",
    "SearchFunction",
    "ResultStream",
    "Subscription",
    "wait_for_result",
]
