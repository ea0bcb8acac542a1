"""
CSV rendering of composition vectors.

A table is one header line followed by one line per record:

  ID,Description,Header,GeneName,A,C,...,Y,AA,AC,...,YY,AAA,...,YYY

Both the header and every data row are derived from the same ColumnSet, so
a label and the value under it can never drift apart. Fields containing a
comma, double quote or line break are quoted RFC 4180 style.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .alphabet import check_k
from .errors import IoFailure
from .fasta import Record, extract_gene
from .kmer import CompositionResult, feature_labels as kmer_feature_labels
from .sequence import normalize

# Metadata column name -> how to read it from a Record
METADATA_FIELDS: Dict[str, Callable[[Record], str]] = {
    "ID": lambda r: r.id,
    "Description": lambda r: r.description,
    "Header": lambda r: r.header,
    "GeneName": lambda r: extract_gene(r.header),
    "Length": lambda r: str(len(normalize(r.sequence))),
}


@dataclass(frozen=True)
class ColumnSet:
    """Which metadata columns and which k-orders a table carries."""
    metadata: Tuple[str, ...] = ("ID", "Description", "Header", "GeneName")
    orders: Tuple[int, ...] = (1, 2, 3)

    def __post_init__(self) -> None:
        unknown = [m for m in self.metadata if m not in METADATA_FIELDS]
        if unknown:
            raise ValueError(
                f"unknown metadata column(s) {unknown}; known: {', '.join(METADATA_FIELDS)}"
            )
        for k in self.orders:
            check_k(k)
        if list(self.orders) != sorted(set(self.orders)):
            raise ValueError(f"orders must be strictly increasing, got {self.orders!r}")

    def feature_labels(self) -> List[str]:
        return kmer_feature_labels(self.orders)

    def labels(self) -> List[str]:
        return list(self.metadata) + self.feature_labels()

    @property
    def width(self) -> int:
        return len(self.metadata) + sum(20 ** k for k in self.orders)


# Full feature table: 4 metadata columns + 20 + 400 + 8000 features
FULL_COLUMNS = ColumnSet()
# Compact table: gene name + amino-acid and dipeptide composition
SUMMARY_COLUMNS = ColumnSet(metadata=("GeneName",), orders=(1, 2))

LAYOUTS: Dict[str, ColumnSet] = {
    "full": FULL_COLUMNS,
    "summary": SUMMARY_COLUMNS,
}


def check_float_digits(float_digits: Optional[int]) -> None:
    if float_digits is not None and int(float_digits) < 0:
        raise ValueError(f"float_digits must be >= 0 or None, got {float_digits!r}")


def format_value(x: float, float_digits: Optional[int] = None) -> str:
    """Render one frequency: repr(float) or fixed to `float_digits` decimals."""
    if float_digits is None:
        return repr(float(x))
    return f"{float(x):.{float_digits}f}"


def render_fields(fields: Sequence[str]) -> str:
    """Join fields into one CSV line with minimal RFC 4180 quoting."""
    buf = io.StringIO()
    # both CR and LF in the terminator, so any field holding either gets quoted
    writer = csv.writer(buf, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(fields)
    return buf.getvalue()[:-2]


def header_row(columns: ColumnSet = FULL_COLUMNS) -> str:
    return render_fields(columns.labels())


def feature_values(result: CompositionResult, columns: ColumnSet = FULL_COLUMNS,
                   float_digits: Optional[int] = None) -> List[str]:
    """Rendered frequency values in header order."""
    values: List[str] = []
    for k in columns.orders:
        values.extend(format_value(x, float_digits) for x in result.frequencies[k])
    return values


def data_row(metadata: Sequence[str], result: CompositionResult,
             columns: ColumnSet = FULL_COLUMNS, float_digits: Optional[int] = None) -> str:
    """One data line: metadata values followed by the frequency vectors."""
    if len(metadata) != len(columns.metadata):
        raise ValueError(
            f"expected {len(columns.metadata)} metadata values "
            f"({', '.join(columns.metadata)}), got {len(metadata)}"
        )
    missing = [k for k in columns.orders if k not in result.frequencies]
    if missing:
        raise ValueError(f"composition has no order(s) {missing}")
    fields = [str(v) for v in metadata] + feature_values(result, columns, float_digits)
    if len(fields) != columns.width:
        raise ValueError(f"row has {len(fields)} fields, header has {columns.width}")
    return render_fields(fields)


def record_metadata(record: Record, columns: ColumnSet = FULL_COLUMNS,
                    overrides: Optional[Mapping[str, str]] = None) -> List[str]:
    """Metadata values of `record` for the given column set.

    `overrides` replaces individual fields (e.g. a user-supplied gene name).
    """
    overrides = overrides or {}
    values: List[str] = []
    for name in columns.metadata:
        if name in overrides:
            values.append(overrides[name])
        else:
            values.append(METADATA_FIELDS[name](record))
    return values


def write_table(path: Union[str, Path], table: str) -> Path:
    """Write a finished table as UTF-8. File-system errors become IoFailure."""
    p = Path(path)
    try:
        if p.parent and not p.parent.exists():
            p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8", newline="") as fh:
            fh.write(table)
            fh.write("\n")
    except OSError as exc:
        raise IoFailure(f"could not write table to {p}: {exc}") from exc
    return p
