"""Tests for ordered partitioning and sequential execution."""

import pytest

from blueprint.core.partition import partition, run_sequentially


class TestPartition:
    """Tests for the partition function."""

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 6, 7, 50])
    def test_concatenation_restores_items(self, size):
        items = [f"doc{i}.md" for i in range(28)]
        groups = partition(items, size)
        assert [item for group in groups for item in group] == items
        assert all(len(group) == size for group in groups[:-1])
        assert 0 < len(groups[-1]) <= size

    def test_uneven_last_group(self):
        assert partition(list("abcde"), 2) == [["a", "b"], ["c", "d"], ["e"]]

    def test_empty_input(self):
        assert partition([], 3) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="at least 1"):
            partition(["a"], 0)


class TestRunSequentially:
    """Tests for the run_sequentially function."""

    def test_results_are_combined_in_order(self):
        seen = []

        def work(index, item):
            seen.append(index)
            return item.upper()

        result = run_sequentially(["a", "b", "c"], work, lambda results: "".join(results))
        assert result == "ABC"
        assert seen == [1, 2, 3]

    def test_failure_stops_before_combine(self):
        combined = []

        def work(index, item):
            if index == 2:
                raise RuntimeError("step failed")
            return item

        with pytest.raises(RuntimeError, match="step failed"):
            run_sequentially(["a", "b", "c"], work, combined.append)
        assert combined == []
