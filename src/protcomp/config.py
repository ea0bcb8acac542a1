"""
Batch configuration.

A YAML config may set any of:

  chunk_size: 200        # records between event-loop yields
  progress_every: 50     # records between progress reports
  float_digits: 6        # omit / null for full precision
  layout: full           # 'full' (ID, Description, Header, GeneName + k=1..3)
                         # or 'summary' (GeneName + k=1..2)
  metadata: [ID, GeneName]   # optional override of the layout's metadata
  orders: [1, 2]             # optional override of the layout's k-orders
  input: proteins.fasta      # used by scripts/run_from_yaml.py
  output: features.csv

Nothing here is persisted; the config is read once per run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from .batch import DEFAULT_CHUNK_SIZE, DEFAULT_PROGRESS_EVERY
from .table import LAYOUTS, ColumnSet, check_float_digits

_KNOWN_KEYS = {"chunk_size", "progress_every", "float_digits", "layout",
               "metadata", "orders", "input", "output"}


@dataclass
class BatchConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    progress_every: int = DEFAULT_PROGRESS_EVERY
    float_digits: Optional[int] = None
    layout: str = "full"
    metadata: Optional[Tuple[str, ...]] = None
    orders: Optional[Tuple[int, ...]] = None
    input: Optional[str] = None
    output: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.layout not in LAYOUTS:
            raise ValueError(f"unknown layout {self.layout!r}; choose from {sorted(LAYOUTS)}")
        if int(self.chunk_size) < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size!r}")
        if int(self.progress_every) < 1:
            raise ValueError(f"progress_every must be >= 1, got {self.progress_every!r}")
        check_float_digits(self.float_digits)

    def columns(self) -> ColumnSet:
        base = LAYOUTS[self.layout]
        return ColumnSet(
            metadata=self.metadata if self.metadata is not None else base.metadata,
            orders=self.orders if self.orders is not None else base.orders,
        )

    def batch_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for batch.run_batch / batch.build_table."""
        return {
            "columns": self.columns(),
            "float_digits": self.float_digits,
            "chunk_size": self.chunk_size,
            "progress_every": self.progress_every,
        }

    def cli_args(self) -> List[str]:
        """Flags that make scripts/featurize.py run with this config."""
        args = [
            "--layout", self.layout,
            "--chunk-size", str(self.chunk_size),
            "--progress-every", str(self.progress_every),
        ]
        if self.float_digits is not None:
            args.extend(["--float-digits", str(self.float_digits)])
        if self.metadata is not None:
            args.extend(["--metadata", ",".join(self.metadata)])
        if self.orders is not None:
            args.extend(["--orders", ",".join(str(k) for k in self.orders)])
        return args


def split_names(value: str) -> Tuple[str, ...]:
    """'ID, GeneName' -> ('ID', 'GeneName'); an empty string gives ()."""
    return tuple(p.strip() for p in value.split(",") if p.strip())


def split_orders(value: str) -> Tuple[int, ...]:
    """'1,2' -> (1, 2)."""
    try:
        return tuple(int(p) for p in split_names(value))
    except ValueError as exc:
        raise ValueError(f"orders must be comma-separated integers, got {value!r}") from exc


def config_from_mapping(cfg: Mapping[str, Any]) -> BatchConfig:
    """Build a BatchConfig from a parsed mapping; unknown keys land in .extra."""
    if not isinstance(cfg, Mapping):
        raise ValueError("config must be a mapping")
    d = dict(cfg)
    extra = {k: d.pop(k) for k in list(d) if k not in _KNOWN_KEYS}

    float_digits = d.get("float_digits")
    metadata = d.get("metadata")
    orders = d.get("orders")
    # a comma-separated string is accepted too, as given on the command line
    if isinstance(metadata, str):
        metadata = split_names(metadata)
    if isinstance(orders, str):
        orders = split_orders(orders)
    if metadata is not None and not isinstance(metadata, (list, tuple)):
        raise ValueError("'metadata' must be a list of column names")
    if orders is not None and not isinstance(orders, (list, tuple)):
        raise ValueError("'orders' must be a list of k values")

    return BatchConfig(
        chunk_size=int(d.get("chunk_size", DEFAULT_CHUNK_SIZE)),
        progress_every=int(d.get("progress_every", DEFAULT_PROGRESS_EVERY)),
        float_digits=int(float_digits) if float_digits is not None else None,
        layout=str(d.get("layout", "full")),
        metadata=tuple(str(m) for m in metadata) if metadata is not None else None,
        orders=tuple(int(k) for k in orders) if orders is not None else None,
        input=d.get("input"),
        output=d.get("output"),
        extra=extra,
    )


def load_config(path: Union[str, Path]) -> BatchConfig:
    """Read a YAML config file. An empty file gives the defaults."""
    with open(path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)

    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Top-level YAML in {path} must be a mapping")
    try:
        return config_from_mapping(cfg)
    except ValueError as exc:
        raise ValueError(f"{path}: {exc}") from exc
