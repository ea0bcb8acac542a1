"""Tests for the batch preview summary."""

import json

from protcomp.fasta import parse_fasta
from protcomp.preview import preview_summary, preview_text


def test_preview_summary():
    text = (">a GN=G1\nAAAA\n>b\n" + "MKTAYIAKQR" * 4 + "\n>c GN=G3\nAC\n>d\nW\n")
    p = preview_summary(parse_fasta(text), n_preview=3, n_head=2)
    assert p["total_sequences"] == 4
    assert p["first_sequences_preview"][0] == {"index": 1, "length": 4, "first30": "AAAA"}
    assert p["first_sequences_preview"][1]["first30"] == ("MKTAYIAKQR" * 3) + "..."
    assert p["first_gene_names"] == ["G1", "", "G3"]
    assert p["aa_composition_first_sequence"]["A"] == 1.0
    assert p["aa_composition_first_sequence"]["C"] == 0.0
    assert p["total_dipeptides"] == 400
    assert p["first10_dipeptides"][:2] == ["AA", "AC"]
    assert p["dipeptide_composition_first_sequence_first10"]["AA"] == 1.0
    assert p["feature_table_shape"] == [4, 1 + 20 + 400]
    assert len(p["head_rows"]) == 2
    assert p["head_rows"][0]["GeneName"] == "G1"
    assert p["head_columns"][:2] == ["GeneName", "A"]
    json.dumps(p)


def test_preview_of_empty_batch():
    p = preview_summary([])
    assert p["total_sequences"] == 0
    assert p["head_rows"] == []
    assert all(v == 0.0 for v in p["aa_composition_first_sequence"].values())


def test_feature_vector_preview():
    text = ">a GN=G1\nAAAA\n>b\nAC\n>c\nWW\n>d\nKK\n"
    p = preview_summary(parse_fasta(text), n_preview=3)
    vecs = p["feature_vector_preview_first3_first10"]
    assert len(vecs) == 3
    assert list(vecs[0]) == list("ACDEFGHIKL")
    assert vecs[0]["A"] == 1.0
    assert vecs[1]["A"] == vecs[1]["C"] == 0.5
    # W sits outside the first ten amino acids
    assert sum(vecs[2].values()) == 0.0


def test_preview_text_report():
    text = ">a GN=G1\nAAAA\n>b\n" + "MKTAYIAKQR" * 4 + "\n>c GN=G3\nAC\n>d\nW\n"
    report = preview_text(preview_summary(parse_fasta(text), n_preview=3, n_head=2))
    lines = report.splitlines()
    assert lines[0] == "Total sequences read: 4"
    assert "Seq1 length=4, first 30 aa: AAAA" in lines
    assert "Total dipeptides considered: 400" in lines
    assert "Feature vector preview for sequence 1:" in lines
    assert "Feature vector preview for sequence 3:" in lines
    assert "Feature table shape: (4, 421)" in lines
    head = lines.index("GeneName\tA\tC\tD\tE\tF\tG\tH\tI\tK\tL")
    assert lines[head + 1].split("\t")[:2] == ["G1", "1.0"]
    assert len(lines) == head + 3
