"""
Batch featurization: FASTA records -> one CSV table.

The driver walks the records in input order and appends one row per record.
After every `chunk_size` records it awaits `asyncio.sleep(0)`, handing
control back to the event loop so a host application stays responsive
during long batches. All state lives on the BatchJob, so nothing is lost
across a yield.

Usage:

    table = await run_batch(records, chunk_size=200, progress_every=50,
                            on_progress=lambda done, total: print(done, total))

    # or, outside an event loop
    table = build_table(parse_fasta(text))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Mapping, Optional, Protocol

from .alphabet import ALPHABET_SET
from .errors import BatchAborted, BatchCancelled, MalformedBatchEntry
from .fasta import Record, parse_fasta
from .kmer import compute
from .sequence import normalize, validate
from .table import FULL_COLUMNS, ColumnSet, check_float_digits, data_row, header_row, record_metadata

_LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 200
DEFAULT_PROGRESS_EVERY = 50

ProgressCallback = Callable[[int, int], None]


class CancelToken(Protocol):
    """Anything with is_set(), e.g. threading.Event or asyncio.Event."""

    def is_set(self) -> bool: ...


@dataclass
class BatchJob:
    """Records of one batch run, the cursor into them, and the rows so far."""
    records: List[Record]
    columns: ColumnSet = FULL_COLUMNS
    float_digits: Optional[int] = None
    cursor: int = 0
    rows: List[str] = field(default_factory=list)
    malformed: List[MalformedBatchEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def done(self) -> bool:
        return self.cursor >= self.total

    def table(self) -> str:
        """Header plus every row produced so far."""
        return "\n".join([header_row(self.columns)] + self.rows)

    def step(self) -> None:
        """Featurize the record under the cursor and advance."""
        record = self.records[self.cursor]
        seq = normalize(record.sequence)
        result = compute(seq, self.columns.orders)

        reason = None
        if not seq:
            reason = "empty sequence"
        elif ALPHABET_SET.isdisjoint(seq):
            reason = "no residues from the alphabet"
        if reason is not None:
            entry = MalformedBatchEntry(self.cursor, record.id, reason)
            _LOGGER.warning("%s; writing an all-zero row", entry)
            self.malformed.append(entry)

        meta = record_metadata(record, self.columns)
        self.rows.append(data_row(meta, result, self.columns, self.float_digits))
        self.cursor += 1


def _check_positive(name: str, value: int) -> None:
    if int(value) < 1:
        raise ValueError(f"{name} must be >= 1, got {value!r}")


async def run_batch_job(job: BatchJob, *, chunk_size: int = DEFAULT_CHUNK_SIZE,
                        progress_every: int = DEFAULT_PROGRESS_EVERY,
                        on_progress: Optional[ProgressCallback] = None,
                        cancel: Optional[CancelToken] = None) -> BatchJob:
    """Drive `job` to completion, yielding to the event loop between chunks.

    Raises BatchCancelled when `cancel` is set at a chunk boundary and
    BatchAborted when `on_progress` fails; both carry the partial table.
    """
    _check_positive("chunk_size", chunk_size)
    _check_positive("progress_every", progress_every)
    check_float_digits(job.float_digits)
    total = job.total

    if cancel is not None and cancel.is_set():
        raise BatchCancelled("batch cancelled", job.table(), job.cursor, total)

    while not job.done:
        job.step()
        n_done = job.cursor

        if on_progress is not None and (n_done % progress_every == 0 or n_done == total):
            try:
                on_progress(n_done, total)
            except Exception as exc:
                raise BatchAborted("progress callback failed", job.table(), n_done, total,
                                   cause=exc) from exc

        if n_done % chunk_size == 0 and not job.done:
            await asyncio.sleep(0)  # yield
            if cancel is not None and cancel.is_set():
                raise BatchCancelled("batch cancelled", job.table(), n_done, total)

    if job.malformed:
        _LOGGER.info("batch finished: %d rows, %d malformed", total, len(job.malformed))
    return job


async def run_batch(records: Iterable[Record], *, columns: ColumnSet = FULL_COLUMNS,
                    float_digits: Optional[int] = None,
                    chunk_size: int = DEFAULT_CHUNK_SIZE,
                    progress_every: int = DEFAULT_PROGRESS_EVERY,
                    on_progress: Optional[ProgressCallback] = None,
                    cancel: Optional[CancelToken] = None) -> str:
    """Featurize `records` into one CSV table (header + one row per record)."""
    job = BatchJob(records=list(records), columns=columns, float_digits=float_digits)
    await run_batch_job(job, chunk_size=chunk_size, progress_every=progress_every,
                        on_progress=on_progress, cancel=cancel)
    return job.table()


def build_table(records: Iterable[Record], **kwargs) -> str:
    """Synchronous run_batch() for callers without an event loop."""
    return asyncio.run(run_batch(records, **kwargs))


def featurize_text(text: str, **kwargs) -> str:
    """Parse FASTA text and featurize every record."""
    return build_table(parse_fasta(text), **kwargs)


def featurize_single(raw: str, gene_name: str = "", float_digits: Optional[int] = None,
                     meta: Optional[Mapping[str, str]] = None) -> str:
    """
    Featurize one pasted sequence into a two-line CSV (header + row).

    Unlike the batch path this validates strictly: raises EmptyInput or
    InvalidCharacter (with .char and 1-based .position) on bad input.
    `meta` may carry 'id', 'description' and 'header'.
    """
    check_float_digits(float_digits)
    seq = validate(normalize(raw))
    meta = meta or {}
    record = Record(
        header=meta.get("header", ""),
        id=meta.get("id", ""),
        description=meta.get("description", ""),
        sequence=seq,
    )
    values = record_metadata(record, FULL_COLUMNS, overrides={"GeneName": gene_name})
    row = data_row(values, compute(seq, FULL_COLUMNS.orders), FULL_COLUMNS, float_digits)
    return "\n".join([header_row(FULL_COLUMNS), row])
