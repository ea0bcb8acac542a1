"""Tests for FASTA record parsing."""

import pytest

from protcomp.errors import IoFailure
from protcomp.fasta import Record, extract_gene, iter_records, parse_fasta, read_fasta

UNIPROT = """>sp|P69905|HBA_HUMAN Hemoglobin subunit alpha OS=Homo sapiens OX=9606 GN=HBA1 PE=1 SV=2
MVLSPADKTNVKAAWGKVGA
  HAGEYGAEAL  
>sp|P68871|HBB_HUMAN Hemoglobin subunit beta OS=Homo sapiens GN=HBB
MVHLTPEEKS
"""


def test_parse_two_records():
    recs = parse_fasta(UNIPROT)
    assert len(recs) == 2
    first = recs[0]
    assert first.id == "sp|P69905|HBA_HUMAN"
    assert first.description == "Hemoglobin subunit alpha OS=Homo sapiens OX=9606 GN=HBA1 PE=1 SV=2"
    assert first.header == first.id + " " + first.description
    assert first.sequence == "MVLSPADKTNVKAAWGKVGAHAGEYGAEAL"
    assert recs[1].sequence == "MVHLTPEEKS"


def test_header_without_body_and_without_description():
    recs = parse_fasta(">only\n>next desc\nMKT\n")
    assert recs[0] == Record(header="only", id="only", description="", sequence="")
    assert recs[1].id == "next"
    assert recs[1].description == "desc"


def test_text_before_first_header_is_ignored():
    recs = parse_fasta("junk line\nMORE\n>a\nMK\r\nTA\r\n")
    assert len(recs) == 1
    assert recs[0].sequence == "MKTA"


def test_no_header_gives_no_records():
    assert parse_fasta("") == []
    assert parse_fasta("MKTAYIAKQR\n") == []


def test_iter_records_is_lazy():
    lines = iter([">a", "MK", ">b", "TA"])
    gen = iter_records(lines)
    assert next(gen).id == "a"
    assert next(gen).sequence == "TA"
    with pytest.raises(StopIteration):
        next(gen)


def test_extract_gene():
    assert extract_gene("sp|P69905|HBA_HUMAN Hemoglobin OS=Homo sapiens GN=HBA1 PE=1") == "HBA1"
    assert extract_gene("no gene tag here") == ""


def test_read_fasta(tmp_path):
    p = tmp_path / "in.fasta"
    p.write_text(UNIPROT, encoding="utf-8")
    recs = read_fasta(p)
    assert [r.id for r in recs] == ["sp|P69905|HBA_HUMAN", "sp|P68871|HBB_HUMAN"]


def test_read_missing_file_is_io_failure(tmp_path):
    with pytest.raises(IoFailure):
        read_fasta(tmp_path / "missing.fasta")


def test_byte_order_mark_does_not_hide_first_record(tmp_path):
    """A UTF-8 BOM before the first '>' must not swallow that record."""
    text = "\ufeff>a first\nMK\n>b second\nTA\n"
    p = tmp_path / "bom.fasta"
    p.write_text(text, encoding="utf-8")
    assert [r.id for r in read_fasta(p)] == ["a", "b"]
    recs = parse_fasta(text)
    assert [r.id for r in recs] == ["a", "b"]
    assert recs[0].header == "a first"
