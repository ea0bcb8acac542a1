#!/usr/bin/env python3
"""
scripts/featurize.py

Date: 2026-10-17

Turn protein sequences into k-mer composition CSV tables.

Two modes:
  * --fasta FILE     batch mode, one row per FASTA record (noisy residues
                     are skipped, empty records give all-zero rows)
  * --sequence SEQ   single pasted sequence, strictly validated

Usage examples (from repo root):

    PYTHONPATH=src python3 scripts/featurize.py --fasta data/uniprot.fasta \\
        --out results/uniprot_features.csv --float-digits 6

    PYTHONPATH=src python3 scripts/featurize.py --fasta data/uniprot.fasta \\
        --layout summary --preview-json results/uniprot_preview.json

    PYTHONPATH=src python3 scripts/featurize.py --sequence "MKT AYIAKQR" \\
        --gene HBA1 --out results/single.csv
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from protcomp.batch import build_table, featurize_single
from protcomp.config import BatchConfig, load_config, split_names, split_orders
from protcomp.errors import BatchAborted, ProtcompError
from protcomp.fasta import read_fasta
from protcomp.preview import preview_summary, preview_text
from protcomp.table import LAYOUTS, write_table


def _progress(done: int, total: int) -> None:
    print(f"[INFO] {done}/{total} records")


def _merge_cli(cfg: BatchConfig, args: argparse.Namespace) -> BatchConfig:
    """CLI flags win over the YAML config."""
    return BatchConfig(
        chunk_size=args.chunk_size if args.chunk_size is not None else cfg.chunk_size,
        progress_every=args.progress_every if args.progress_every is not None else cfg.progress_every,
        float_digits=args.float_digits if args.float_digits is not None else cfg.float_digits,
        layout=args.layout if args.layout is not None else cfg.layout,
        metadata=args.metadata if args.metadata is not None else cfg.metadata,
        orders=args.orders if args.orders is not None else cfg.orders,
        input=args.fasta or cfg.input,
        output=args.out or cfg.output,
    )


def run_fasta(cfg: BatchConfig, preview_json: Optional[str] = None,
              preview_txt: Optional[str] = None) -> str:
    records = read_fasta(cfg.input)
    print(f"[INFO] Read {len(records)} records from {cfg.input}")

    if preview_json or preview_txt:
        preview = preview_summary(records)
    if preview_json:
        os.makedirs(os.path.dirname(preview_json) or ".", exist_ok=True)
        with open(preview_json, "w", encoding="utf-8") as fh:
            json.dump(preview, fh, indent=2)
        print(f"[OK] Wrote preview to {preview_json}")
    if preview_txt:
        os.makedirs(os.path.dirname(preview_txt) or ".", exist_ok=True)
        with open(preview_txt, "w", encoding="utf-8") as fh:
            fh.write(preview_text(preview) + "\n")
        print(f"[OK] Wrote preview report to {preview_txt}")

    columns = cfg.columns()
    print(f"[INFO] Building {len(records)} x {columns.width} table (layout={cfg.layout})")
    return build_table(records, on_progress=_progress, **cfg.batch_kwargs())


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Protein k-mer composition (k=1..3) to CSV.")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--fasta", help="Multi-record FASTA file (batch mode).")
    src.add_argument("--sequence", help="Single sequence (strictly validated).")
    ap.add_argument("--gene", default="", help="Gene name for --sequence mode.")
    ap.add_argument("--config", help="YAML batch config (see protcomp.config).")
    ap.add_argument("--out", help="Output CSV path (default: print to stdout).")
    ap.add_argument("--float-digits", type=int, default=None,
                    help="Round frequencies to this many decimals (default: full precision).")
    ap.add_argument("--layout", choices=sorted(LAYOUTS), default=None,
                    help="Column layout for batch mode (default: full).")
    ap.add_argument("--chunk-size", type=int, default=None,
                    help="Records between event-loop yields (default: 200).")
    ap.add_argument("--progress-every", type=int, default=None,
                    help="Records between progress lines (default: 50).")
    ap.add_argument("--preview-json", default=None,
                    help="Also write a JSON preview of the batch to this path.")
    ap.add_argument("--preview-text", default=None,
                    help="Also write a plain-text preview report to this path.")
    ap.add_argument("--metadata", type=split_names, default=None,
                    help="Comma-separated metadata columns, overriding the layout "
                         "(ID, Description, Header, GeneName, Length).")
    ap.add_argument("--orders", type=split_orders, default=None,
                    help="Comma-separated k-mer lengths, overriding the layout (e.g. 1,2).")
    args = ap.parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else BatchConfig()
        cfg = _merge_cli(cfg, args)

        if args.sequence is not None:
            table = featurize_single(args.sequence, gene_name=args.gene,
                                     float_digits=cfg.float_digits)
        elif cfg.input:
            table = run_fasta(cfg, preview_json=args.preview_json,
                              preview_txt=args.preview_text)
        else:
            ap.error("one of --fasta, --sequence or a config with 'input' is required")
            return 2
    except BatchAborted as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        if cfg.output:
            write_table(cfg.output + ".partial", exc.partial_table)
            print(f"[INFO] Partial table saved to {cfg.output}.partial", file=sys.stderr)
        return 1
    except (ProtcompError, ValueError, OSError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if cfg.output:
        try:
            path = write_table(cfg.output, table)
        except ProtcompError as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 1
        print(f"[OK] Wrote {len(table.splitlines()) - 1} data rows to {path}")
    else:
        print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
