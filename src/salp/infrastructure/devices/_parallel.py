"""
Fork-join execution over a disjoint index partition.

`parallel_for` runs ``body(start, stop)`` over ``[0, length)``, either once on
the caller's thread (below the threshold) or over disjoint contiguous chunks
on a thread pool (at or above it). It returns only after every chunk has
finished; the first worker exception is re-raised on the caller's thread.

Safety
------
Parallel execution is lock-free and correct only because every body call
writes exclusively to indices inside its own ``[start, stop)`` chunk and
reads nothing outside the same indices of its operands. Operations that need
cross-index reads (prefix sums, stencils, reductions with ordering
constraints) must not be expressed through this helper.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)


def chunk_ranges(length: int, n_chunks: int) -> List[Tuple[int, int]]:
    """
    Split ``[0, length)`` into at most `n_chunks` disjoint contiguous ranges.

    Chunk sizes differ by at most one element, the ranges are ordered, and
    together they cover every index exactly once.
    """
    if length <= 0:
        return []
    n_chunks = max(1, min(int(n_chunks), length))
    base, extra = divmod(length, n_chunks)

    ranges = []
    start = 0
    for i in range(n_chunks):
        stop = start + base + (1 if i < extra else 0)
        ranges.append((start, stop))
        start = stop
    return ranges


def parallel_for(
    length: int,
    body: Callable[[int, int], None],
    *,
    threshold: int,
    max_workers: int,
) -> int:
    """
    Execute `body` over ``[0, length)`` sequentially or fork-join.

    Parameters
    ----------
    length : int
        Number of indices to visit.
    body : Callable[[int, int], None]
        Called as ``body(start, stop)``; must only touch indices in
        ``[start, stop)``.
    threshold : int
        Lengths at or above this value run on a thread pool.
    max_workers : int
        Upper bound on worker threads (and chunks).

    Returns
    -------
    int
        Number of chunks executed (1 for sequential execution, 0 when
        `length` is 0).
    """
    if length <= 0:
        return 0

    if length < threshold:
        body(0, length)
        return 1

    ranges = chunk_ranges(length, max_workers)
    logger.debug(
        "Fork-join over %d elements in %d chunks", length, len(ranges)
    )
    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures = [pool.submit(body, start, stop) for start, stop in ranges]
        for f in futures:
            f.result()
    return len(ranges)
