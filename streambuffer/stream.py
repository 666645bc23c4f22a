"""Consume splitters sequentially or in parallel.

Parallel consumption splits a splitter fork/join style into leaf partitions
before any element is consumed, then drains each leaf on an executor. Results
are joined in partition encounter order.
"""

from __future__ import annotations

import os
from concurrent.futures import Executor, ThreadPoolExecutor
from itertools import chain
from typing import Generator, List, Optional

from . import log
from .errors import InvalidArgument
from .splitter import Splitter

get_module_logger = log.logger_getter("streambuffer.stream")


def suggest_target_size(estimate: int, parallelism: int) -> int:
    """Leaf partition size giving roughly four partitions per worker"""
    if parallelism < 1:
        raise InvalidArgument(f"parallelism must be at least one, got {parallelism}")
    return max(1, estimate // (parallelism * 4))


def partitions(
    splitter: Splitter, target_size: Optional[int] = None
) -> Generator[Splitter, None, None]:
    """Split a splitter until each partition's estimate is at most target_size
    or it refuses to split, yielding the partitions in encounter order."""
    if target_size is None:
        target_size = suggest_target_size(splitter.estimate_size(), os.cpu_count() or 1)
    while splitter.estimate_size() > target_size:
        prefix = splitter.try_split()
        if prefix is None:
            break
        yield from partitions(prefix, target_size)
    yield splitter


def drain(splitter: Splitter) -> list:
    items: list = []
    splitter.for_each_remaining(items.append)
    return items


def collect(
    splitter: Splitter,
    parallel: bool = False,
    executor: Optional[Executor] = None,
    max_workers: Optional[int] = None,
) -> List:
    """Collect every element of a splitter into a list.

    When ``parallel`` is true the partitions are drained on ``executor``, or on a
    thread pool of ``max_workers`` threads created for this call. Any error
    raised while draining a partition propagates to the caller.
    """
    logger = get_module_logger()
    if not parallel:
        return drain(splitter)

    if executor is not None and max_workers is not None:
        logger.warning("max_workers=%d only sizes partitions when an executor is given", max_workers)
    workers = max_workers or os.cpu_count() or 1
    target_size = suggest_target_size(splitter.estimate_size(), workers)
    leaves = list(partitions(splitter, target_size))
    logger.debug(
        "collecting %d partition(s) (target size %d) with %d worker(s)",
        len(leaves),
        target_size,
        workers,
    )

    if executor is None:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(drain, leaves))
    else:
        results = list(executor.map(drain, leaves))
    return list(chain.from_iterable(results))
