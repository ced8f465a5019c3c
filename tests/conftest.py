"""
Pytest configuration and shared fixtures.
"""

import os
import random

import pytest

# Plots are written to files only
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture
def cyclic_sequence():
    """Sequence whose graph is an Eulerian circuit."""
    return "ACGTAC"


@pytest.fixture
def repeat_sequence():
    """Sequence with every 3-mer of the cycle repeated."""
    return "ACGTACGTAC"


@pytest.fixture
def linear_sequence():
    """Sequence whose graph is an Eulerian path."""
    return "ACGTT"


@pytest.fixture
def random_sequences():
    """Reproducible random DNA sequences of mixed lengths."""
    rng = random.Random(42)
    return ["".join(rng.choice("ACGT") for _ in range(length)) for length in (2, 17, 200, 1000)]


@pytest.fixture
def write_fasta(tmp_path):
    """Write FASTA text to a file and return its path."""
    def _write(text, name="input.fasta"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write
