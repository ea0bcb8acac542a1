"""Amino-acid alphabet and canonical k-mer indexing.

The 20 one-letter codes below fix every downstream column order.
A k-mer's canonical index is its position in the lexicographic
enumeration of all 20^k k-mers (first residue varies slowest):

  index("AC")  = 0*20 + 1       = 1
  index("YY")  = 19*20 + 19     = 399
  index("ACD") = 0*400 + 1*20 + 2 = 22

The counting pass and the CSV header are both derived from this closed
form, so a column label and the value written under it always agree.
"""

from functools import lru_cache
from itertools import product
from typing import Dict, List, Tuple

import numpy as np

ALPHABET: Tuple[str, ...] = tuple("ACDEFGHIKLMNPQRSTVWY")
ALPHABET_SET = frozenset(ALPHABET)
ALPHABET_SIZE = len(ALPHABET)
MAX_K = 3

_POSITION: Dict[str, int] = {aa: i for i, aa in enumerate(ALPHABET)}


def alphabet() -> Tuple[str, ...]:
    """The 20 amino-acid codes in canonical order."""
    return ALPHABET


def check_k(k: int) -> None:
    if k not in range(1, MAX_K + 1):
        raise ValueError(f"k must be between 1 and {MAX_K}, got {k!r}")


@lru_cache(maxsize=None)
def _kmers(k: int) -> Tuple[str, ...]:
    return tuple("".join(p) for p in product(ALPHABET, repeat=k))


def all_kmers(k: int) -> List[str]:
    """Lexicographic k-mers over the amino-acid alphabet (20**k of them)."""
    check_k(k)
    return list(_kmers(k))


@lru_cache(maxsize=None)
def _kmer_index(k: int) -> Dict[str, int]:
    return {kmer: i for i, kmer in enumerate(_kmers(k))}


def kmer_index(k: int) -> Dict[str, int]:
    """Map each k-mer to its column index [0..20^k-1].

    Built once per k and shared; callers must not mutate it.
    """
    check_k(k)
    return _kmer_index(k)


def index_of(kmer: str) -> int:
    """Closed-form canonical index of a k-mer.

    Raises KeyError for a character outside the alphabet.
    """
    idx = 0
    for ch in kmer:
        idx = idx * ALPHABET_SIZE + _POSITION[ch]
    return idx


@lru_cache(maxsize=None)
def position_table() -> np.ndarray:
    """ASCII code -> alphabet position lookup, -1 for anything else."""
    table = np.full(128, -1, dtype=np.int64)
    for aa, i in _POSITION.items():
        table[ord(aa)] = i
    table.flags.writeable = False
    return table
