from __future__ import annotations

import math

import pytest

from moviedb.batching import MAX_BATCH_SIZE, partition


@pytest.mark.parametrize("n", [1, 24, 25, 26, 50, 51, 123])
def test_partition_sizes_and_order(n):
    """ceil(N/25) 個に分かれ、最後以外は25件、連結すると元に戻る。"""

    items = list(range(n))
    batches = partition(items, MAX_BATCH_SIZE)

    assert len(batches) == math.ceil(n / MAX_BATCH_SIZE)
    assert all(len(b) == MAX_BATCH_SIZE for b in batches[:-1])
    assert len(batches[-1]) == (n % MAX_BATCH_SIZE or MAX_BATCH_SIZE)
    assert [x for b in batches for x in b] == items


def test_partition_empty_input_has_no_batches():
    assert partition([], 25) == []


def test_partition_rejects_non_positive_size():
    with pytest.raises(ValueError):
        partition([1, 2, 3], 0)
