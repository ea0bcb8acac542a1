#!/usr/bin/env python3
"""
scripts/summarize_table.py

Date: 2026-10-17

Sanity-check and summarize a composition table written by featurize.py.

Reports the table shape, metadata columns, how many rows have an all-zero
feature vector (empty or fully unknown sequences), and the most frequent
k-mers for each k.

Usage:
    PYTHONPATH=src python3 scripts/summarize_table.py --input results/uniprot_features.csv --top 5
"""

import argparse

from protcomp.frame import feature_columns, metadata_columns, order_sums, read_table, top_kmers


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Summarize a k-mer composition CSV.")
    ap.add_argument("--input", required=True, help="CSV written by scripts/featurize.py")
    ap.add_argument("--top", type=int, default=10, help="How many k-mers to list per k (default 10).")
    return ap.parse_args()


def main():
    args = parse_args()

    df = read_table(args.input)
    feats = feature_columns(df)
    if not feats:
        raise SystemExit(f"No k-mer columns found in {args.input}")

    print(f"[INFO] Loaded {len(df)} rows x {len(df.columns)} columns from {args.input}")
    print(f"[INFO] Metadata columns: {metadata_columns(df)}")
    print(f"[INFO] Feature columns: " + ", ".join(f"k={k}: {len(v)}" for k, v in sorted(feats.items())))

    sums = order_sums(df)
    k_min = min(feats)
    n_zero = int((sums[f"k{k_min}"] == 0.0).sum())
    print(f"[INFO] Rows with all-zero k={k_min} composition: {n_zero}")

    for k in sorted(feats):
        print(f"\nTop {args.top} {k}-mers by mean frequency:")
        for kmer, val in top_kmers(df, k, args.top).items():
            print(f"  {kmer:<4} {val:.5f}")


if __name__ == "__main__":
    main()
