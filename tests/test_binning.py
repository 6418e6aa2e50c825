import random

import pytest

from data_profiling import histogram
from data_profiling.binning import bin_count


def test_square_root_rule_and_clamp():
    hist = histogram([1, 2, 3, 4, 5])
    # ceil(sqrt(5)) = 3 bins; the maximum lands in the last bin
    assert hist.counts == [2, 1, 2]
    assert hist.bin_edges[0] == 1
    assert hist.bin_edges[-1] == 5
    assert len(hist.bin_edges) == 4
    assert hist.labels == ["1-2", "2-4", "4-5"]


def test_bin_count_capped():
    assert bin_count(1) == 1
    assert bin_count(10) == 4
    assert bin_count(1000) == 20
    assert bin_count(1000, max_bins=8) == 8
    assert len(histogram(range(1000)).counts) == 20


def test_zero_width_range_single_bin():
    hist = histogram([7.0, 7.0, 7.0])
    assert hist.counts == [3]
    assert hist.bin_edges == [7.0, 7.0]


def test_empty_input():
    hist = histogram([])
    assert hist.counts == []
    assert hist.bin_edges == []
    assert hist.labels == []


def test_non_finite_values_ignored():
    hist = histogram([1.0, float("nan"), 2.0, float("inf")])
    assert sum(hist.counts) == 2


@pytest.mark.parametrize("n", [1, 2, 17, 250])
def test_counts_sum_to_input_length(n):
    rng = random.Random(n)
    values = [rng.uniform(-50, 50) for _ in range(n)]
    assert sum(histogram(values).counts) == n


def test_narrow_bins_label_with_two_decimals():
    assert histogram([0.1, 0.2, 0.3, 0.4]).labels == ["0.10-0.25", "0.25-0.40"]


def test_labels_round_half_up():
    assert histogram([0.5, 2.5, 4.5, 6.5]).labels == ["1-4", "4-7"]
