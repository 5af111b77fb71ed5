#!/usr/bin/env python3
"""
Step 2: Work Partitioning

Splits the fragment list into one contiguous range per worker. Ranges are
fixed up front (no work stealing): sizes differ by at most one and the
earliest ranges take the remainder.
"""

import os
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def available_parallelism() -> int:
    return os.cpu_count() or 1


def clamp_worker_count(worker_count: Optional[int], item_count: Optional[int] = None) -> int:
    """
    Clamp a worker-count hint to ``[1, available_parallelism()]``.

    When ``item_count`` is given the result never exceeds it either, so no
    worker is started with an empty range. ``None`` means "use every core".
    """
    limit = available_parallelism()
    if worker_count is None:
        worker_count = limit
    worker_count = max(1, min(worker_count, limit))
    if item_count is not None:
        worker_count = max(1, min(worker_count, item_count))
    return worker_count


def partition_files(files: Sequence[T], worker_count: int) -> List[List[T]]:
    """
    Split ``files`` into ``worker_count`` contiguous ranges.

    Args:
        files: Items in processing order
        worker_count: Number of ranges, at least 1

    Returns:
        List of ranges; concatenated they equal ``files``
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")

    base_size, remainder = divmod(len(files), worker_count)
    partitions = []
    start = 0

    for index in range(worker_count):
        size = base_size + (1 if index < remainder else 0)
        partitions.append(list(files[start : start + size]))
        start += size

    return partitions
