"""Sequence normalization and strict validation.

Two separate policies live in this package:
  - normalize() is total and is applied to every input.
  - validate() is strict and only gates the single-sequence workflow.
The counting pass in kmer.py never validates; it skips windows that hold
characters outside the alphabet.
"""

import re
from typing import Optional

from .alphabet import ALPHABET_SET
from .errors import EmptyInput, InvalidCharacter, SequenceError

_WHITESPACE = re.compile(r"\s+")


def normalize(raw: str) -> str:
    """Drop all whitespace and upper-case the rest."""
    return _WHITESPACE.sub("", raw).upper()


def find_violation(seq: str) -> Optional[SequenceError]:
    """Return the first validation error in `seq`, or None if it is valid."""
    if not seq:
        return EmptyInput()
    for i, ch in enumerate(seq, start=1):
        if ch not in ALPHABET_SET:
            return InvalidCharacter(ch, i)
    return None


def validate(seq: str) -> str:
    """Return `seq` unchanged, or raise EmptyInput / InvalidCharacter."""
    err = find_violation(seq)
    if err is not None:
        raise err
    return seq
