"""Quick preview of a FASTA batch before the full table is built.

preview_summary() gives a JSON-ready dict; preview_text() renders the same
dict as a plain-text report, notebook-printout style.
"""

import json
from typing import Any, Dict, List, Sequence

from .alphabet import ALPHABET, all_kmers
from .fasta import Record, extract_gene
from .kmer import compute
from .sequence import normalize
from .table import SUMMARY_COLUMNS

SNIPPET_LEN = 30
# amino-acid columns shown in the per-sequence and head-row previews
PREVIEW_WIDTH = 10


def _snippet(seq: str) -> str:
    return seq[:SNIPPET_LEN] + ("..." if len(seq) > SNIPPET_LEN else "")


def _compact(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"))


def _summary_row(record: Record) -> Dict[str, Any]:
    res = compute(normalize(record.sequence), SUMMARY_COLUMNS.orders)
    row: Dict[str, Any] = {"GeneName": extract_gene(record.header)}
    for k in SUMMARY_COLUMNS.orders:
        row.update(zip(all_kmers(k), res.frequencies[k].tolist()))
    return row


def preview_summary(records: Sequence[Record], n_preview: int = 3, n_head: int = 5) -> Dict[str, Any]:
    """
    Summarize a batch: counts, the first few sequences, and the composition
    of the first one. All values are plain Python types (json.dumps-able).
    """
    records = list(records)
    first_seq = normalize(records[0].sequence) if records else ""
    first = compute(first_seq, (1, 2))
    dipeptides = all_kmers(2)
    shown_aa = ALPHABET[:PREVIEW_WIDTH]

    sequences_preview: List[Dict[str, Any]] = []
    feature_preview: List[Dict[str, float]] = []
    for i, r in enumerate(records[:n_preview], start=1):
        s = normalize(r.sequence)
        sequences_preview.append({"index": i, "length": len(s), "first30": _snippet(s)})
        aa = compute(s, (1,)).frequencies[1][:PREVIEW_WIDTH].tolist()
        feature_preview.append(dict(zip(shown_aa, aa)))

    return {
        "total_sequences": len(records),
        "first_sequences_preview": sequences_preview,
        "first_gene_names": [extract_gene(r.header) for r in records[:n_preview]],
        "amino_acids": list(ALPHABET),
        "aa_composition_first_sequence": dict(zip(ALPHABET, first.frequencies[1].tolist())),
        "total_dipeptides": len(dipeptides),
        "first10_dipeptides": dipeptides[:10],
        "dipeptide_composition_first_sequence_first10":
            dict(zip(dipeptides[:10], first.frequencies[2][:10].tolist())),
        "feature_vector_preview_first3_first10": feature_preview,
        "feature_table_shape": [len(records), SUMMARY_COLUMNS.width],
        "head_columns": SUMMARY_COLUMNS.labels(),
        "head_rows": [_summary_row(r) for r in records[:n_head]],
    }


def preview_text(p: Dict[str, Any]) -> str:
    """Render a preview_summary() dict as a plain-text report."""
    lines: List[str] = []
    lines.append(f"Total sequences read: {p['total_sequences']}")
    lines.append(f"First {len(p['first_sequences_preview'])} sequences preview:")
    for s in p["first_sequences_preview"]:
        lines.append(f"Seq{s['index']} length={s['length']}, first 30 aa: {s['first30']}")
    lines.append(f"\nFirst {len(p['first_gene_names'])} extracted gene names:\n"
                 f"{_compact(p['first_gene_names'])}")
    lines.append(f"\nList of amino acids considered: {_compact(p['amino_acids'])}")
    lines.append(f"\nAmino acid composition example for first sequence:\n"
                 f"{_compact(p['aa_composition_first_sequence'])}")
    lines.append(f"\nTotal dipeptides considered: {p['total_dipeptides']}")
    lines.append(f"First 10 dipeptides: {_compact(p['first10_dipeptides'])}")
    lines.append(f"\nDipeptide composition example for first sequence (first 10 values):\n"
                 f"{_compact(p['dipeptide_composition_first_sequence_first10'])}")
    lines.append("\nGenerating full feature table...")
    for i, vec in enumerate(p["feature_vector_preview_first3_first10"], start=1):
        lines.append(f"\nFeature vector preview for sequence {i}:\n{_compact(vec)}")
    rows, cols = p["feature_table_shape"]
    lines.append(f"\nFeature table shape: ({rows}, {cols})")

    shown = ["GeneName"] + list(p["amino_acids"][:PREVIEW_WIDTH])
    lines.append(f"First {len(p['head_rows'])} rows of feature table "
                 f"(GeneName + first {PREVIEW_WIDTH} AA cols):")
    lines.append("\t".join(shown))
    for row in p["head_rows"]:
        lines.append("\t".join(str(row[c]) for c in shown))
    return "\n".join(lines)
