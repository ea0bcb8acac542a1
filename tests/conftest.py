"""Pytest configuration file to set up import paths.
This ensures that the src/ directory is on sys.path when running tests,
so the protcomp modules import without installing the package.
For example, the kmer.py module provides the k-mer composition vectors of protein sequences"""

import os
import sys

# Ensure project's src/ is on sys.path for imports during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)
