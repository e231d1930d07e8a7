"""Partition ordered work, execute it sequentially and recombine it in order."""

from typing import Callable, List, Sequence, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")
C = TypeVar("C")


def partition(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split ``items`` into contiguous groups of at most ``size`` elements.

    Concatenating the groups yields ``items`` again; only the last group
    may be shorter.

    Raises:
        ValueError: If ``size`` is smaller than one.
    """
    if size < 1:
        raise ValueError(f"Partition size must be at least 1, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def run_sequentially(
    items: Sequence[T],
    work: Callable[[int, T], R],
    combine: Callable[[List[R]], C],
) -> C:
    """
    Run ``work`` over each item in order, then ``combine`` the ordered results.

    Items are processed one at a time; ``work`` receives the 1-based index.
    An exception from ``work`` stops the run before ``combine``.
    """
    results: List[R] = []
    for index, item in enumerate(items, start=1):
        logger.debug("Running step", index=index, total=len(items))
        results.append(work(index, item))
    return combine(results)
