"""
Optional protein annotation lookup.

The composition pipeline never depends on annotations; they only decorate
what a caller shows next to a record. A source is anything with an async
`lookup(query)` that returns an AnnotationRecord or None (nothing found).
This package ships no network client.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol

from .errors import IoFailure


@dataclass(frozen=True)
class AnnotationRecord:
    """Best-effort metadata for one protein; every field may be missing."""
    accession: Optional[str] = None
    entry_id: Optional[str] = None
    protein_name: Optional[str] = None
    organism: Optional[str] = None
    length: Optional[int] = None
    mass: Optional[int] = None
    function: Optional[str] = None
    subcellular_location: Optional[str] = None
    disease: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class AnnotationSource(Protocol):
    async def lookup(self, query: str) -> Optional[AnnotationRecord]: ...


async def fetch_annotation(source: AnnotationSource, query: str) -> Optional[AnnotationRecord]:
    """Look `query` up (an accession, entry id or gene name).

    Blank queries return None without calling the source. Any failure of the
    source is re-raised as IoFailure.
    """
    query = query.strip()
    if not query:
        return None
    try:
        return await source.lookup(query)
    except IoFailure:
        raise
    except Exception as exc:
        raise IoFailure(f"annotation lookup for {query!r} failed: {exc}") from exc
