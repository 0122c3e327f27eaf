"""Result snapshots emitted by a search function."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class SearchSource(str, Enum):
    """Where the items of a snapshot came from."""

    LOCAL = "local"
    REMOTE = "remote"
    NONE = "none"


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """One immutable emission on the result stream."""

    items: tuple[T, ...]
    is_loading: bool
    query: str
    error: Optional[str] = None
    source: SearchSource = SearchSource.NONE

    def __post_init__(self) -> None:
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def is_local(self) -> bool:
        return self.source is SearchSource.LOCAL

    @property
    def is_remote(self) -> bool:
        return self.source is SearchSource.REMOTE

    @property
    def has_error(self) -> bool:
        return bool(self.error)

    def to_dict(self) -> dict:
        """Convert to a plain dict (items are left as-is)."""
        return {
            "query": self.query,
            "items": list(self.items),
            "is_loading": self.is_loading,
            "error": self.error,
            "source": self.source.value,
        }
