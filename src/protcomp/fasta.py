"""
FASTA record parsing.

A record starts at a line beginning with '>'. The rest of that line is the
header; its first whitespace-delimited token is the record ID and the
remainder is the free-text description. Every following non-header line is
stripped and appended to the sequence body until the next header.

  >sp|P69905|HBA_HUMAN Hemoglobin subunit alpha OS=Homo sapiens GN=HBA1
  MVLSPADKTN VKAAWGKVGA
  HAGEYGAEAL

gives id="sp|P69905|HBA_HUMAN", description="Hemoglobin subunit alpha
OS=Homo sapiens GN=HBA1", sequence="MVLSPADKTNVKAAWGKVGAHAGEYGAEAL" (the
space is removed later by normalize()).

Text before the first header is ignored. A header with no body lines still
yields a record with an empty sequence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .errors import IoFailure

HEADER_MARKER = ">"
BOM = "\ufeff"

# UniProt-style gene tag, e.g. "... OS=Homo sapiens OX=9606 GN=HBA1 PE=1 SV=2"
_GENE_TAG = re.compile(r"GN=(\S+)")


@dataclass(frozen=True)
class Record:
    header: str
    id: str
    description: str
    sequence: str


def _make_record(header: str, chunks: List[str]) -> Record:
    parts = header.split(None, 1)
    rid = parts[0] if parts else ""
    desc = parts[1].strip() if len(parts) > 1 else ""
    return Record(header=header, id=rid, description=desc, sequence="".join(chunks))


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """Yield records lazily from an iterable of lines (single pass)."""
    header: Optional[str] = None
    seq_chunks: List[str] = []

    for lineno, line in enumerate(lines):
        if lineno == 0:
            line = line.lstrip(BOM)
        if line.startswith(HEADER_MARKER):
            # flush previous record
            if header is not None:
                yield _make_record(header, seq_chunks)
            header = line[len(HEADER_MARKER):].strip()
            seq_chunks = []
        elif header is not None:
            seq_chunks.append(line.strip())

    # flush last record
    if header is not None:
        yield _make_record(header, seq_chunks)


def parse_fasta(text: str) -> List[Record]:
    """Split a multi-record FASTA string into Records (empty list if no header)."""
    return list(iter_records(text.splitlines()))


def extract_gene(header: str) -> str:
    """Gene name from a UniProt 'GN=' tag, or '' when absent."""
    m = _GENE_TAG.search(header)
    return m.group(1) if m else ""


def read_fasta(path: Union[str, Path]) -> List[Record]:
    """Read and parse a FASTA file. File-system errors become IoFailure."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8-sig", errors="replace") as fh:
            return list(iter_records(fh))
    except OSError as exc:
        raise IoFailure(f"could not read FASTA file {p}: {exc}") from exc
