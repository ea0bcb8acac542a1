"""Tests for reading finished tables back with pandas."""

import io

import numpy as np
import pytest

from protcomp.batch import featurize_text
from protcomp.errors import IoFailure
from protcomp.frame import feature_columns, metadata_columns, order_sums, read_table, top_kmers
from protcomp.table import SUMMARY_COLUMNS, write_table

TEXT = ">p1 Kinase, putative GN=NA\nAAAC\n>p2 empty\n>p3 GN=G3\nACAC\n"


def test_read_full_table(tmp_path):
    path = write_table(tmp_path / "t.csv", featurize_text(TEXT))
    df = read_table(path)
    assert df.shape == (3, 4 + 20 + 400 + 8000)
    assert metadata_columns(df) == ["ID", "Description", "Header", "GeneName"]
    cols = feature_columns(df)
    assert [len(cols[k]) for k in (1, 2, 3)] == [20, 400, 8000]
    # dipeptide "ID" comes back renamed but still counts as a feature
    assert "ID.1" in cols[2]
    assert df["GeneName"].tolist() == ["NA", "", "G3"]
    assert df["Description"][0] == "Kinase, putative GN=NA"


def test_order_sums_and_top_kmers():
    df = read_table(io.StringIO(featurize_text(TEXT, columns=SUMMARY_COLUMNS)))
    sums = order_sums(df)
    assert list(sums.columns) == ["k1", "k2"]
    assert np.allclose(sums["k1"].to_numpy(), [1.0, 0.0, 1.0])
    top = top_kmers(df, 1, n=2)
    assert list(top.index) == ["A", "C"]
    assert np.isclose(top["A"], (0.75 + 0.0 + 0.5) / 3)
    with pytest.raises(ValueError):
        top_kmers(df, 3)


def test_missing_table_is_io_failure(tmp_path):
    with pytest.raises(IoFailure):
        read_table(tmp_path / "nope.csv")
