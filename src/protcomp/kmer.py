"""K-mer composition of protein sequences.

Provides functions to convert amino-acid sequences into k-mer count and
frequency vectors for k = 1, 2, 3 (20, 400 and 8000 columns).
A k-mer is a contiguous substring of length k; a window is one k-mer
occurrence at a given start position.
Example:
  k = 2
  Sequence: "ACAC"
  Windows: "AC", "CA", "AC"  (3 windows)
  Counts:  AC -> 2 (column 1), CA -> 1 (column 20), everything else 0
  Frequencies: AC -> 0.6667, CA -> 0.3333

Windows containing a character outside the 20-letter alphabet (X, B, U, *,
...) are skipped entirely. Frequencies are counts divided by the number of
valid windows; with no valid window the frequency vector is all zeros.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .alphabet import ALPHABET_SIZE, all_kmers, position_table, check_k

DEFAULT_ORDERS: Tuple[int, ...] = (1, 2, 3)


@dataclass(frozen=True)
class CompositionResult:
    """Counts and frequencies for one sequence, keyed by k.

    Attributes:
      length: Length of the (normalized) sequence.
      counts: k -> int64 vector of length 20**k.
      frequencies: k -> float64 vector of length 20**k.
      total_windows: k -> max(0, length - k + 1).
      valid_windows: k -> number of windows made only of alphabet letters.
    """
    length: int
    counts: Dict[int, np.ndarray]
    frequencies: Dict[int, np.ndarray]
    total_windows: Dict[int, int]
    valid_windows: Dict[int, int]

    @property
    def orders(self) -> Tuple[int, ...]:
        return tuple(sorted(self.counts))


def _positions(seq: str) -> np.ndarray:
    """Alphabet position of every character, -1 where it is not a residue."""
    # one byte per character; non-ASCII characters become '?' (unknown)
    codes = np.frombuffer(seq.encode("ascii", errors="replace"), dtype=np.uint8)
    return position_table()[codes]


def _window_indices(pos: np.ndarray, k: int) -> np.ndarray:
    """Canonical indices of the valid windows of width k."""
    windows = pos.shape[0] - k + 1
    if windows <= 0:
        return np.zeros(0, dtype=np.int64)
    idx = np.zeros(windows, dtype=np.int64)
    valid = np.ones(windows, dtype=bool)
    for offset in range(k):
        p = pos[offset:offset + windows]
        idx = idx * ALPHABET_SIZE + p
        valid &= p >= 0
    return idx[valid]


def _count(pos: np.ndarray, k: int) -> Tuple[np.ndarray, int, int]:
    hits = _window_indices(pos, k)
    counts = np.bincount(hits, minlength=ALPHABET_SIZE ** k).astype(np.int64)
    total = max(0, pos.shape[0] - k + 1)
    return counts, total, int(hits.shape[0])


def _frequencies(counts: np.ndarray, valid: int) -> np.ndarray:
    freqs = np.zeros(counts.shape[0], dtype=np.float64)
    if valid > 0:
        freqs = counts / float(valid)
    return freqs


def kmer_counts(seq: str, k: int) -> Tuple[np.ndarray, int, int]:
    """
    Count the k-mers of one sequence.
    Returns: (counts, total_windows, valid_windows)
    """
    check_k(k)
    return _count(_positions(seq), k)


def compute(seq: str, orders: Sequence[int] = DEFAULT_ORDERS) -> CompositionResult:
    """Compute count and frequency vectors of `seq` for each k in `orders`.

    `seq` is expected to be normalized already (see sequence.normalize);
    lower-case or whitespace characters would simply count as unknown.
    """
    pos = _positions(seq)
    counts: Dict[int, np.ndarray] = {}
    freqs: Dict[int, np.ndarray] = {}
    totals: Dict[int, int] = {}
    valids: Dict[int, int] = {}
    for k in orders:
        check_k(k)
        c, total, valid = _count(pos, k)
        f = _frequencies(c, valid)
        c.flags.writeable = False
        f.flags.writeable = False
        counts[k], freqs[k], totals[k], valids[k] = c, f, total, valid
    return CompositionResult(
        length=len(seq),
        counts=counts,
        frequencies=freqs,
        total_windows=totals,
        valid_windows=valids,
    )


def feature_labels(orders: Sequence[int] = DEFAULT_ORDERS) -> List[str]:
    """Column labels matching the layout of composition_matrix()."""
    labels: List[str] = []
    for k in orders:
        labels.extend(all_kmers(k))
    return labels


def composition_matrix(seqs: Iterable[str], orders: Sequence[int] = DEFAULT_ORDERS) -> Tuple[np.ndarray, List[str], List[int]]:
    """
    Vectorize multiple sequences into an (n_samples, sum(20**k)) dense matrix
    of frequencies.
    Returns: (X, column_labels, lengths)
    """
    seqs = list(seqs)
    labels = feature_labels(orders)
    X = np.zeros((len(seqs), len(labels)), dtype=np.float64)
    lengths: List[int] = []
    for r, s in enumerate(seqs):
        res = compute(s, orders)
        if labels:
            X[r, :] = np.concatenate([res.frequencies[k] for k in orders])
        lengths.append(res.length)
    return X, labels, lengths
