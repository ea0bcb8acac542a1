"""Exception types raised by protcomp.

Strict validation and I/O are the only places that fail; the counting and
serialization passes never raise on in-alphabet input.
"""

from typing import Optional

from .alphabet import ALPHABET


class ProtcompError(Exception):
    """Base class for every error raised by this package."""


class SequenceError(ProtcompError, ValueError):
    """A single input sequence was rejected by strict validation."""


class EmptyInput(SequenceError):
    def __init__(self) -> None:
        super().__init__("Sequence is empty.")


class InvalidCharacter(SequenceError):
    """First character outside the alphabet, with its 1-based position."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(
            f"Invalid character {char!r} at position {position}. "
            f"Allowed: {''.join(ALPHABET)}."
        )


class MalformedBatchEntry(ProtcompError):
    """A batch record that cannot yield a composition (e.g. empty sequence).

    The batch driver records these instead of raising them, and still emits
    an all-zero row so output rows stay aligned with input records.
    """

    def __init__(self, index: int, record_id: str, reason: str) -> None:
        self.index = index
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"record {index} ({record_id or '<no id>'}): {reason}")


class IoFailure(ProtcompError):
    """A collaborator (file system, annotation service) failed."""


class BatchAborted(ProtcompError):
    """A batch run stopped early; everything produced so far is kept."""

    def __init__(self, message: str, partial_table: str, done: int, total: int,
                 cause: Optional[BaseException] = None) -> None:
        self.partial_table = partial_table
        self.done = done
        self.total = total
        self.cause = cause
        super().__init__(f"{message} after {done}/{total} records")


class BatchCancelled(BatchAborted):
    """The caller asked the batch to stop at a chunk boundary."""
