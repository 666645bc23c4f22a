from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Generic, List, Optional, TypeVar

import loggingdecorators as logdec

from . import log
from .definitions import UNKNOWN_SIZE, Characteristic, Comparator, natural_order
from .errors import InvalidArgument
from .splitter import Splitter, iterate, splitter_of

T = TypeVar("T")

get_module_logger = log.logger_getter("streambuffer.batching")


class StreamBuffer(Generic[T]):
    """Buffer a source splitter into groups of up to ``preferred_length`` elements.

    Each group is a list holding consecutive elements of the source. A group is
    only shorter than ``preferred_length`` when the source ran out, and the
    elements left at the end of the source are absorbed into the last group
    rather than forming a group of fewer than ``min_size`` elements. The only
    group which can hold fewer than ``min_size`` elements is the sole group of
    a source with fewer than ``min_size`` elements in total.

    Splitting a StreamBuffer splits its source, so every partition is batched
    independently and absorbs its own trailing elements.

    Use :func:`buffer` to create one.
    """

    @logdec.on_init(logger=log.logger_getter("init_logger"), level=log.DEBUG)
    def __init__(
        self,
        source: Splitter[T],
        estimated_size: int,
        min_size: int,
        preferred_length: int,
    ):
        check_parameters(min_size, preferred_length)
        self.log = get_module_logger()
        self._source = source
        self._est = estimated_size
        self._min_size = min_size
        self._preferred_length = preferred_length
        self._characteristics = source.characteristics() & ~(
            Characteristic.SIZED | Characteristic.SUBSIZED
        )
        # look-ahead past the current group, only needed to enforce min_size > 1
        self._pre_buffer: Optional[Deque[T]] = (
            deque(maxlen=min_size) if min_size > 1 else None
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(min_size={self._min_size}, preferred_length={self._preferred_length}, source={self._source})"

    def __iter__(self):
        return iterate(self)

    @property
    def min_size(self) -> int:
        return self._min_size

    @property
    def preferred_length(self) -> int:
        return self._preferred_length

    def try_advance(self, action: Callable[[List[T]], Any]) -> bool:
        group: List[T] = []
        if self._pre_buffer is not None:
            group.extend(self._pre_buffer)
            self._pre_buffer.clear()

        has_elements = True
        while has_elements and len(group) < self._preferred_length:
            has_elements = self._source.try_advance(group.append)

        if self._pre_buffer is not None:
            # check whether enough elements follow this group to make another
            # group of at least min_size
            pulled = 0
            while has_elements and pulled < self._min_size:
                has_elements = self._source.try_advance(self._pre_buffer.append)
                pulled += 1
            if not has_elements and self._pre_buffer:
                self.log.debug(
                    "absorbing %d trailing element(s) into final group of %d",
                    len(self._pre_buffer),
                    len(group),
                )
                group.extend(self._pre_buffer)
                self._pre_buffer.clear()

        if not group:
            return False
        if 0 < self._est < UNKNOWN_SIZE:
            self._est -= 1
        self.log.debug("emitting group of %d element(s)", len(group))
        action(group)
        return True

    def for_each_remaining(self, action: Callable[[List[T]], Any]) -> None:
        while self.try_advance(action):
            pass

    def try_split(self) -> Optional[StreamBuffer[T]]:
        """Split off a StreamBuffer over a prefix of the remaining source.

        Refuses to split when the source estimates no more than two groups'
        worth of elements, when the source itself refuses to split, or when
        look-ahead elements are held (they precede anything the source could
        split off).
        """
        remaining = self._source.estimate_size()
        if remaining <= self._preferred_length * 2:
            self.log.debug(f"{self}: not splitting {remaining} remaining element(s)")
            return None
        if self._pre_buffer:
            self.log.debug(
                f"{self}: not splitting with {len(self._pre_buffer)} look-ahead element(s) held"
            )
            return None
        candidate = self._source.try_split()
        if candidate is None:
            self.log.debug(f"{self}: source refused to split")
            return None
        self._est = estimate_size(self._preferred_length, self._source)
        self.log.debug(f"{self}: split off {candidate}")
        return StreamBuffer(
            candidate,
            estimate_size(self._preferred_length, candidate),
            self._min_size,
            self._preferred_length,
        )

    def estimate_size(self) -> int:
        return self._est

    def exact_size_if_known(self) -> int:
        return -1

    def characteristics(self) -> Characteristic:
        return self._characteristics

    def has_characteristics(self, flags: Characteristic) -> bool:
        return (self._characteristics & flags) == flags

    def get_comparator(self) -> Comparator:
        """Order groups by their first elements using the source's ordering"""
        compare = self._source.get_comparator() or natural_order

        def compare_first(a: List[T], b: List[T]) -> int:
            return compare(a[0], b[0])

        return compare_first


def check_parameters(min_size: int, preferred_length: int) -> None:
    for name, value in (("min_size", min_size), ("preferred_length", preferred_length)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidArgument(f"{name} must be at least one, got {value}")
    if preferred_length < min_size:
        raise InvalidArgument(
            f"preferred_length ({preferred_length}) must not be less than min_size ({min_size})"
        )


def estimate_size(preferred_length: int, splitter: Splitter) -> int:
    """Estimate the number of groups a splitter will produce, or UNKNOWN_SIZE"""
    estimated = splitter.estimate_size()
    if estimated != UNKNOWN_SIZE:
        estimated = estimated // preferred_length
    return estimated


def buffer(source: Any, min_size: int, preferred_length: int) -> StreamBuffer:
    """Batch a source into groups of consecutive elements.

    :param source: any iterable, or a Splitter
    :param min_size: the minimum size of each group, except when the whole
        source holds fewer elements than this. Elements left over at the end of
        the source are added to the last group instead of forming a smaller one.
    :param preferred_length: the maximum length of each group, before any
        trailing elements are absorbed
    :raises InvalidArgument: if either size is less than one, or
        preferred_length is less than min_size
    """
    check_parameters(min_size, preferred_length)
    splitter = splitter_of(source)
    return StreamBuffer(
        splitter, estimate_size(preferred_length, splitter), min_size, preferred_length
    )
