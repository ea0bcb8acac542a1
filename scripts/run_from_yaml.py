#!/usr/bin/env python3
"""
scripts/run_from_yaml.py

Date: 2026-10-17

Run a batch of featurization jobs defined in one or more YAML config files.

Each YAML file should look like:

  layout: full          # optional, default full
  float_digits: 6       # optional, default full precision
  chunk_size: 200       # optional, default 200
  progress_every: 50    # optional, default 50
  jobs:
    - input: data/swissprot_human.fasta
      output: results/swissprot_human.csv
    # or with per-job overrides:
    # - input: data/phage.fasta
    #   output: results/phage_summary.csv
    #   layout: summary
    #   float_digits: 4
    #   orders: [1, 2]
    #   metadata: [ID, Length]

Usage examples:

  # Run one config
  PYTHONPATH=src python3 scripts/run_from_yaml.py experiments/swissprot.yml

  # Just show what would be run, without executing
  PYTHONPATH=src python3 scripts/run_from_yaml.py --dry-run experiments/swissprot.yml
"""

import argparse
import os
import sys
import subprocess
from typing import Any, Dict, List

import yaml

from protcomp.config import config_from_mapping

_DEFAULT_KEYS = ("layout", "float_digits", "chunk_size", "progress_every", "metadata", "orders")


def _normalize_jobs(raw_jobs: Any) -> List[Dict[str, Any]]:
    """
    Normalize the 'jobs' entry from the YAML into a list of dicts
    each having at least an 'input' field.

    Accepts:
      - ["a.fasta", "b.fasta", ...]
      - [{"input": "a.fasta", "output": "a.csv"}, {"fasta": "b.fasta"}, ...]
    """
    if not isinstance(raw_jobs, list):
        raise ValueError("'jobs' must be a list in the YAML config")

    norm: List[Dict[str, Any]] = []
    for j in raw_jobs:
        if isinstance(j, str):
            norm.append({"input": j})
        elif isinstance(j, dict):
            d = dict(j)  # shallow copy
            # allow 'fasta' or 'input'
            if "input" not in d and "fasta" in d:
                d["input"] = d.pop("fasta")
            if "input" not in d:
                raise ValueError(f"Job entry {j!r} is missing 'input'/'fasta'")
            norm.append(d)
        else:
            raise ValueError(f"Unsupported job entry in YAML: {j!r}")
    return norm


def _default_output(input_path: str) -> str:
    stem = os.path.splitext(os.path.basename(input_path))[0]
    return os.path.join("results", f"{stem}__kmer123.csv")


def run_config(config_path: str, dry_run: bool = False) -> bool:
    with open(config_path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)

    if not isinstance(cfg, dict):
        raise ValueError(f"Top-level YAML in {config_path} must be a mapping")

    defaults = {k: cfg[k] for k in _DEFAULT_KEYS if k in cfg}
    jobs = _normalize_jobs(cfg.get("jobs", []))
    if not jobs:
        raise ValueError(f"{config_path}: 'jobs' list is empty")

    print(f"[CONFIG] {config_path}")
    print(f"  defaults = {defaults}")
    print(f"  inputs   = {[j['input'] for j in jobs]}")

    env = os.environ.copy()  # keep existing PYTHONPATH etc.

    for idx, j in enumerate(jobs):
        merged = {**defaults, **j}
        merged.setdefault("output", _default_output(merged["input"]))
        # validates before anything runs, column overrides included
        job_cfg = config_from_mapping(merged)
        job_cfg.columns()

        cmd = [
            sys.executable,
            "scripts/featurize.py",
            "--fasta", job_cfg.input,
            "--out", job_cfg.output,
        ] + job_cfg.cli_args()

        print(f"\n[RUN {idx+1}/{len(jobs)}] {' '.join(cmd)}")
        if dry_run:
            continue

        result = subprocess.run(cmd, env=env)
        if result.returncode != 0:
            print(f"[ERROR] Command failed with exit code {result.returncode}", file=sys.stderr)
            return False
    return True


def main() -> None:
    ap = argparse.ArgumentParser(description="Run featurization jobs defined in YAML config files.")
    ap.add_argument("configs", nargs="+", help="One or more YAML config files")
    ap.add_argument("--dry-run", action="store_true",
                    help="Print the commands that would be run, but do not execute them.")
    args = ap.parse_args()

    for cfg_path in args.configs:
        if not run_config(cfg_path, dry_run=args.dry_run):
            sys.exit(1)


if __name__ == "__main__":
    main()
