"""Splittable pull-based sources of elements.

A splitter hands out its elements one at a time through ``try_advance`` and
can be asked to ``try_split`` off a prefix of whatever it has not yet
produced, so that the two halves can be consumed independently.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence, Set, Sized
from itertools import islice
from typing import (
    Any,
    Callable,
    Generator,
    Iterable,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from .definitions import UNKNOWN_SIZE, Characteristic, Comparator
from .errors import IllegalStateError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

# batch sizes used when splitting a source of unknown size
BATCH_UNIT = 1 << 10
MAX_BATCH = 1 << 25

_SIZED = Characteristic.SIZED | Characteristic.SUBSIZED
_END = object()


@runtime_checkable
class Splitter(Protocol[T_co]):
    """Responsible for producing, estimating and partitioning a sequence of elements"""

    def try_advance(self, action: Callable[[T_co], Any]) -> bool:
        ...

    def for_each_remaining(self, action: Callable[[T_co], Any]) -> None:
        ...

    def try_split(self) -> Optional[Splitter[T_co]]:
        ...

    def estimate_size(self) -> int:
        ...

    def exact_size_if_known(self) -> int:
        ...

    def characteristics(self) -> Characteristic:
        ...

    def has_characteristics(self, flags: Characteristic) -> bool:
        ...

    def get_comparator(self) -> Optional[Comparator]:
        ...


def iterate(splitter: Splitter[T]) -> Generator[T, None, None]:
    """Pull the remaining elements of a splitter as an ordinary iterator"""
    pending: deque = deque()
    while splitter.try_advance(pending.append):
        yield pending.popleft()


def sorted_comparator(
    characteristics: Characteristic, comparator: Optional[Comparator]
) -> Optional[Comparator]:
    if Characteristic.SORTED not in characteristics:
        raise IllegalStateError("splitter is not sorted")
    return comparator


class SequenceSplitter:
    """Produce the elements of a random-access sequence between two indices.

    Splitting halves the remaining index range: the split-off splitter covers
    the lower half and this one keeps the upper half. The splitter is always
    sized; it is ORDERED unless other characteristics are given.
    """

    def __init__(
        self,
        seq: Sequence,
        lo: int = 0,
        hi: Optional[int] = None,
        characteristics: Characteristic = Characteristic.ORDERED,
        comparator: Optional[Comparator] = None,
    ) -> None:
        self._seq = seq
        self._index = lo
        self._fence = len(seq) if hi is None else hi
        self._characteristics = characteristics | _SIZED
        self._comparator = comparator

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}([{self._index}:{self._fence}])"

    def __iter__(self):
        return iterate(self)

    def try_advance(self, action: Callable[[Any], Any]) -> bool:
        if self._index < self._fence:
            item = self._seq[self._index]
            self._index += 1
            action(item)
            return True
        return False

    def for_each_remaining(self, action: Callable[[Any], Any]) -> None:
        seq, index, fence = self._seq, self._index, self._fence
        self._index = fence
        for k in range(index, fence):
            action(seq[k])

    def try_split(self) -> Optional[SequenceSplitter]:
        lo = self._index
        mid = (lo + self._fence) // 2
        if lo >= mid:
            return None
        self._index = mid
        return SequenceSplitter(
            self._seq, lo, mid, self._characteristics, self._comparator
        )

    def estimate_size(self) -> int:
        return self._fence - self._index

    def exact_size_if_known(self) -> int:
        return self.estimate_size()

    def characteristics(self) -> Characteristic:
        return self._characteristics

    def has_characteristics(self, flags: Characteristic) -> bool:
        return (self._characteristics & flags) == flags

    def get_comparator(self) -> Optional[Comparator]:
        return sorted_comparator(self._characteristics, self._comparator)


class IteratorSplitter:
    """Produce the elements of any iterable, whose size may be unknown.

    An iterator can't be divided in place, so splitting copies the next batch
    of elements into a SequenceSplitter with the same characteristics.
    Successive batches grow by BATCH_UNIT up to MAX_BATCH elements.
    """

    def __init__(
        self,
        iterable: Iterable,
        size: Optional[int] = None,
        characteristics: Characteristic = Characteristic.NONE,
        comparator: Optional[Comparator] = None,
    ) -> None:
        self._it = iter(iterable)
        if size is None:
            self._est = UNKNOWN_SIZE
            self._characteristics = characteristics & ~_SIZED
        else:
            self._est = size
            self._characteristics = characteristics | _SIZED
        self._comparator = comparator
        self._batch = 0

    def __repr__(self) -> str:
        size = "unknown" if self._est == UNKNOWN_SIZE else self._est
        return f"{self.__class__.__name__}(size={size})"

    def __iter__(self):
        return iterate(self)

    def try_advance(self, action: Callable[[Any], Any]) -> bool:
        item = next(self._it, _END)
        if item is _END:
            return False
        if self._est != UNKNOWN_SIZE and self._est > 0:
            self._est -= 1
        action(item)
        return True

    def for_each_remaining(self, action: Callable[[Any], Any]) -> None:
        for item in self._it:
            action(item)
        if self._est != UNKNOWN_SIZE:
            self._est = 0

    def try_split(self) -> Optional[SequenceSplitter]:
        if self._est <= 1:
            return None
        n = min(self._batch + BATCH_UNIT, self._est, MAX_BATCH)
        batch = tuple(islice(self._it, n))
        if not batch:
            return None
        self._batch = len(batch)
        if self._est != UNKNOWN_SIZE:
            self._est = max(self._est - len(batch), 0)
        return SequenceSplitter(
            batch, characteristics=self._characteristics, comparator=self._comparator
        )

    def estimate_size(self) -> int:
        return self._est

    def exact_size_if_known(self) -> int:
        return self._est if Characteristic.SIZED in self._characteristics else -1

    def characteristics(self) -> Characteristic:
        return self._characteristics

    def has_characteristics(self, flags: Characteristic) -> bool:
        return (self._characteristics & flags) == flags

    def get_comparator(self) -> Optional[Comparator]:
        return sorted_comparator(self._characteristics, self._comparator)


def splitter_of(
    source: Any,
    characteristics: Characteristic = Characteristic.NONE,
    comparator: Optional[Comparator] = None,
) -> Splitter:
    """Adapt an iterable to the Splitter protocol; splitters are returned as-is"""
    if isinstance(source, Splitter):
        return source
    if isinstance(source, (tuple, range, str, bytes, frozenset)):
        characteristics |= Characteristic.IMMUTABLE
    if isinstance(source, Sequence):
        return SequenceSplitter(
            source, characteristics=characteristics | Characteristic.ORDERED, comparator=comparator
        )
    if isinstance(source, Set):
        characteristics |= Characteristic.DISTINCT
    size = len(source) if isinstance(source, Sized) else None
    return IteratorSplitter(
        source, size=size, characteristics=characteristics, comparator=comparator
    )
