"""Sequential and parallel consumption of batched sources."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import PoisonedSequence, flatten, is_consecutive
from streambuffer import InvalidArgument, SequenceSplitter, buffer, collect, partitions
from streambuffer.stream import drain, suggest_target_size


class TestParallel:
    def test_parallel_groups_are_consecutive_and_complete(self):
        expected_size = 5000
        groups = collect(buffer(range(expected_size), 5, 5), parallel=True)

        assert all(is_consecutive(group) for group in groups)
        assert all(5 <= len(group) <= 9 for group in groups)
        assert len(flatten(groups)) == expected_size
        assert sorted(flatten(groups)) == list(range(expected_size))

    def test_parallel_unknown_size_source(self):
        source = (k for k in range(5000))
        groups = collect(buffer(source, 5, 5), parallel=True, max_workers=4)

        assert all(is_consecutive(group) for group in groups)
        assert flatten(groups) == list(range(5000))

    def test_parallel_preserves_encounter_order(self):
        groups = collect(buffer(range(1000), 2, 3), parallel=True, max_workers=3)
        assert flatten(groups) == list(range(1000))

    def test_external_executor(self):
        with ThreadPoolExecutor(max_workers=2) as executor:
            groups = collect(buffer(range(300), 1, 10), parallel=True, executor=executor)
        assert len(flatten(groups)) == 300

    def test_max_workers_with_executor_warns(self, caplog):
        caplog.set_level(logging.WARNING, logger="streambuffer.stream")
        with ThreadPoolExecutor(max_workers=2) as executor:
            groups = collect(
                buffer(range(100), 1, 4), parallel=True, executor=executor, max_workers=3
            )

        assert len(flatten(groups)) == 100
        assert "max_workers=3 only sizes partitions when an executor is given" in caplog.text

    def test_source_error_propagates(self):
        with pytest.raises(RuntimeError, match="bad element at 4321"):
            collect(buffer(PoisonedSequence(5000, 4321), 5, 5), parallel=True)

    def test_empty_source(self):
        assert collect(buffer([], 3, 4), parallel=True) == []


class TestSequential:
    def test_collect_sequentially(self):
        assert collect(buffer(range(7), 2, 3)) == [[0, 1, 2], [3, 4, 5, 6]]

    def test_drain_remaining(self):
        splitter = SequenceSplitter(range(5))
        splitter.try_advance(lambda item: None)
        assert drain(splitter) == [1, 2, 3, 4]


class TestPartitions:
    def test_partitions_cover_source_in_order(self):
        leaves = list(partitions(SequenceSplitter(range(100)), target_size=10))

        assert len(leaves) > 1
        assert all(leaf.estimate_size() <= 10 for leaf in leaves)
        assert [item for leaf in leaves for item in leaf] == list(range(100))

    def test_partition_buffers(self):
        leaves = list(partitions(buffer(range(100), 1, 4), target_size=3))

        assert len(leaves) > 1
        groups = [group for leaf in leaves for group in leaf]
        assert flatten(groups) == list(range(100))
        assert all(is_consecutive(group) for group in groups)

    def test_small_source_is_one_partition(self):
        leaves = list(partitions(buffer(range(8), 1, 4), target_size=1))
        assert len(leaves) == 1

    @pytest.mark.parametrize(
        "estimate, parallelism, expected", [(1000, 4, 62), (3, 4, 1), (0, 1, 1)]
    )
    def test_suggest_target_size(self, estimate, parallelism, expected):
        assert suggest_target_size(estimate, parallelism) == expected

    def test_suggest_target_size_needs_workers(self):
        with pytest.raises(InvalidArgument):
            suggest_target_size(100, 0)
