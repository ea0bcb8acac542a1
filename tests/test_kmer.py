"""Tests for k-mer composition vectors (k = 1, 2, 3)."""

import numpy as np
import pytest

from protcomp.alphabet import ALPHABET, index_of, kmer_index
from protcomp.kmer import composition_matrix, compute, feature_labels, kmer_counts

SEQS = [
    "A",
    "AC",
    "MKTAYIAKQRQISFVKSHFSRQ",
    "ACDEFGHIKLMNPQRSTVWY" * 3,
    "WWWWWWWWC",
]


def test_scenario_homopolymer():
    """'AAAA': every window is the all-A k-mer."""
    res = compute("AAAA")
    assert res.counts[1][index_of("A")] == 4
    assert res.counts[2][index_of("AA")] == 3
    assert res.counts[3][index_of("AAA")] == 2
    for k in (1, 2, 3):
        assert res.frequencies[k][0] == 1.0
        assert res.counts[k].sum() == res.counts[k][0]
        assert np.count_nonzero(res.frequencies[k]) == 1


def test_scenario_empty():
    """Empty sequence: no windows, all zeros, no NaN."""
    res = compute("")
    assert res.length == 0
    for k in (1, 2, 3):
        assert res.total_windows[k] == 0
        assert res.counts[k].sum() == 0
        assert np.all(res.frequencies[k] == 0.0)
        assert not np.isnan(res.frequencies[k]).any()


def test_scenario_unknown_character():
    """'AB': B is outside the alphabet, so only the 'A' window counts."""
    res = compute("AB")
    assert res.counts[1][index_of("A")] == 1
    assert res.counts[1].sum() == 1
    assert res.frequencies[1][index_of("A")] == 1.0
    assert res.total_windows[2] == 1
    assert res.valid_windows[2] == 0
    assert np.all(res.counts[2] == 0)
    assert np.all(res.frequencies[2] == 0.0)


def test_counts_sum_to_total_windows():
    for seq in SEQS:
        res = compute(seq)
        for k in (1, 2, 3):
            assert res.total_windows[k] == max(0, len(seq) - k + 1)
            assert res.counts[k].sum() == res.total_windows[k]


def test_frequencies_sum_to_one():
    for seq in SEQS:
        res = compute(seq)
        for k in (1, 2, 3):
            if res.total_windows[k] > 0:
                assert abs(res.frequencies[k].sum() - 1.0) < 1e-9


def test_short_sequences_have_zero_frequencies():
    res = compute("AC")
    assert res.total_windows[3] == 0
    assert np.all(res.frequencies[3] == 0.0)
    assert res.frequencies[2][index_of("AC")] == 1.0


def test_windows_with_unknown_characters_are_skipped():
    """'ACXDE': windows touching X add nothing at any order."""
    res = compute("ACXDE")
    assert res.counts[1].sum() == 4
    assert res.counts[2][index_of("AC")] == 1
    assert res.counts[2][index_of("DE")] == 1
    assert res.counts[2].sum() == 2
    assert res.counts[3].sum() == 0
    assert res.valid_windows[3] == 0
    assert res.total_windows[3] == 3


def test_non_ascii_characters_count_as_unknown():
    res = compute("AÄA")
    assert res.counts[1][index_of("A")] == 2
    assert res.counts[2].sum() == 0


def test_counts_match_naive_window_scan():
    """Vectorised counting agrees with a plain sliding-window loop."""
    seq = "MKTAYIAKQRQISFVKSHFSRQXLEERLGLIEVQ"
    for k in (1, 2, 3):
        idx = kmer_index(k)
        expected = np.zeros(20 ** k, dtype=np.int64)
        for i in range(len(seq) - k + 1):
            kmer = seq[i:i + k]
            if set(kmer) <= set(ALPHABET):
                expected[idx[kmer]] += 1
        counts, total, valid = kmer_counts(seq, k)
        assert np.array_equal(counts, expected)
        assert total == len(seq) - k + 1
        assert valid == expected.sum()


def test_result_vectors_are_read_only():
    res = compute("MKT")
    with pytest.raises(ValueError):
        res.counts[1][0] = 5
    with pytest.raises(ValueError):
        res.frequencies[2][0] = 0.5


def test_subset_of_orders():
    res = compute("MKT", orders=(1, 2))
    assert res.orders == (1, 2)
    assert 3 not in res.frequencies


def test_composition_matrix_shape_and_rows():
    X, labels, lengths = composition_matrix(["AAAA", "", "MKT"])
    assert X.shape == (3, 20 + 400 + 8000)
    assert len(labels) == X.shape[1]
    assert labels[:2] == ["A", "C"]
    assert labels[20] == "AA"
    assert labels[420] == "AAA"
    assert lengths == [4, 0, 3]
    assert X[0, 0] == 1.0 and X[0, 20] == 1.0 and X[0, 420] == 1.0
    assert np.all(X[1] == 0.0)
    assert np.isclose(X[2, :20].sum(), 1.0)
    assert feature_labels((1,)) == list(ALPHABET)
