"""Helpers for resolving descriptive text from several sources."""

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

Strategy = Callable[[], Optional[T]]


def first_present(strategies: Iterable[Strategy], default: T) -> T:
    """
    Return the first non-empty value produced by a strategy.

    Strategies are called lazily in order; None, empty strings and empty
    lists count as absent. Falls back to default when every strategy comes
    up empty.

    Example:
        >>> first_present([lambda: None, lambda: "vision"], "fallback")
        'vision'
    """
    for strategy in strategies:
        value = strategy()
        if value:
            return value
    return default
