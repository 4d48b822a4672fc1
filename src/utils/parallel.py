"""Thread-pool helpers for independent, read-only filesystem work."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_in_threads(func: Callable[[T], R], items: Iterable[T], workers: int = 1) -> List[R]:
    """Apply ``func`` to every item, concurrently when ``workers > 1``.

    Results come back in input order regardless of completion order.
    """

    items_list = list(items)
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if workers == 1 or len(items_list) < 2:
        return [func(item) for item in items_list]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, items_list))
