"""
pandas helpers for finished composition tables.

Downstream tooling usually reads the CSV back into a DataFrame; these
helpers keep metadata columns as strings (a gene called "NA" stays "NA")
and split the feature columns by k-mer length.

Metadata always precedes the features, and the first feature column is the
first k-mer of the lowest order ("A", "AA" or "AAA"). Columns are split by
position rather than by name: the dipeptide "ID" shares its name with the
ID metadata column, and pandas reads the second one back as "ID.1".
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np
import pandas as pd

from .errors import IoFailure

_FIRST_KMERS = {"A", "AA", "AAA"}


def _split(columns) -> Tuple[List[str], List[str]]:
    cols = [str(c) for c in columns]
    start = next((i for i, c in enumerate(cols) if c in _FIRST_KMERS), len(cols))
    return cols[:start], cols[start:]


def kmer_name(col: str) -> str:
    """Column label without the suffix pandas adds to duplicate names."""
    return col.split(".", 1)[0]


def metadata_columns(df: pd.DataFrame) -> List[str]:
    return _split(df.columns)[0]


def feature_columns(df: pd.DataFrame) -> Dict[int, List[str]]:
    """k -> feature column names present in `df`, in table order."""
    out: Dict[int, List[str]] = {}
    for col in _split(df.columns)[1]:
        out.setdefault(len(kmer_name(col)), []).append(col)
    return out


def read_table(source: Union[str, Path, io.StringIO]) -> pd.DataFrame:
    """Load a table written by table.write_table (or a StringIO of one)."""
    try:
        head = pd.read_csv(source, nrows=0)
        if isinstance(source, io.StringIO):
            source.seek(0)
        meta, _ = _split(head.columns)
        return pd.read_csv(source, dtype={c: str for c in meta}, keep_default_na=False)
    except OSError as exc:
        raise IoFailure(f"could not read table {source}: {exc}") from exc


def order_sums(df: pd.DataFrame) -> pd.DataFrame:
    """Per-row sum of the frequencies of each k (1.0, or 0.0 for empty rows)."""
    cols = feature_columns(df)
    return pd.DataFrame({f"k{k}": df[names].astype(np.float64).sum(axis=1)
                         for k, names in cols.items()})


def top_kmers(df: pd.DataFrame, k: int, n: int = 10) -> pd.Series:
    """The `n` k-mers with the highest mean frequency across rows."""
    names = feature_columns(df).get(k, [])
    if not names:
        raise ValueError(f"table has no k={k} columns")
    means = df[names].astype(np.float64).mean(axis=0)
    means.index = [kmer_name(c) for c in means.index]
    return means.sort_values(ascending=False).head(n)
