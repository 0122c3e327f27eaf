"""Ready-made match functions for `SearchFunction`."""

from operator import attrgetter
from typing import Any, Callable, Union

Getter = Union[str, Callable[[Any], Any]]


def contains_ignore_case(item: Any, query: str) -> bool:
    """Match when `str(item)` contains the query, ignoring case."""
    if not query:
        return True
    return query.lower() in str(item).lower()


def field_matcher(*getters: Getter, case_sensitive: bool = False) -> Callable[[Any, str], bool]:
    """
    Build a match function that checks several fields of an item.

    Each getter is either an attribute name or a callable taking the item.
    The item matches when any field contains the query. Missing or `None`
    fields never match.

    Example:
        match = field_matcher("name", "description", "category")
    """
    if not getters:
        raise ValueError("field_matcher needs at least one field")

    resolved = [attrgetter(g) if isinstance(g, str) else g for g in getters]

    def _match(item: Any, query: str) -> bool:
        if not query:
            return True

        needle = query if case_sensitive else query.lower()
        for get in resolved:
            try:
                value = get(item)
            except AttributeError:
                continue
            if value is None:
                continue
            haystack = str(value) if case_sensitive else str(value).lower()
            if needle in haystack:
                return True
        return False

    return _match
