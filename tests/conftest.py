"""
pytest configuration and fixtures
=================================
Shared test sources and helpers
"""

import logging
from collections.abc import Sequence

import pytest

from streambuffer import SequenceSplitter


class UnsplittableSplitter(SequenceSplitter):
    """A sequence source which always refuses to split"""

    def try_split(self):
        return None


class PoisonedSequence(Sequence):
    """The integers 0..size-1, raising when the poisoned index is read"""

    def __init__(self, size, poisoned):
        self._size = size
        self._poisoned = poisoned

    def __len__(self):
        return self._size

    def __getitem__(self, index):
        if isinstance(index, slice):
            raise TypeError("slicing not supported")
        if index == self._poisoned:
            raise RuntimeError(f"bad element at {index}")
        return index


def failing_source(count):
    """Yield 1..count then fail"""
    yield from range(1, count + 1)
    raise RuntimeError("source failed")


def is_consecutive(values):
    start = values[0]
    return all(value == start + k for k, value in enumerate(values))


def flatten(groups):
    return [item for group in groups for item in group]


@pytest.fixture
def six_elements():
    return ["E1", "E2", "E3", "E4", "E5", "E6"]


@pytest.fixture
def four_elements():
    return ["E1", "E2", "E3", "E4"]


@pytest.fixture
def restore_logging(monkeypatch):
    """Undo any logging configuration applied during a test"""
    from streambuffer import log

    monkeypatch.setattr(log, "_log", log._log)
    monkeypatch.setattr(log, "_is_initialised", log._is_initialised)

    names = [None, "streambuffer", "init_logger"]
    saved = []
    for name in names:
        logger = logging.getLogger(name)
        saved.append((logger, logger.level, list(logger.handlers), logger.propagate))
    yield
    for logger, level, handlers, propagate in saved:
        logger.setLevel(level)
        logger.handlers[:] = handlers
        logger.propagate = propagate
