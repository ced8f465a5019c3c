"""
Integration tests for the reconstruction pipeline and its CLI.
"""

import json
import os

import pytest

from assembly_errors import InvalidParameter, MalformedInput
from dbg_assembler import assemble, main, run_dbg_assembly, write_sequence_to_fasta
from fasta_loader import load_fasta_sequence


class TestAssemble:
    """Test the in-memory pipeline."""

    def test_stage_outputs(self, linear_sequence):
        """Every stage's output is kept on the result."""
        result = assemble(linear_sequence, 3)
        assert len(result.kmers) == 3
        assert result.graph.edge_count == 3
        assert len(result.walk) == 4
        assert result.sequence == linear_sequence
        assert result.k == 3

    def test_to_dict(self, repeat_sequence):
        """Summary dictionary reports counts and walk shape."""
        summary = assemble(repeat_sequence, 3).to_dict()
        assert summary["kmers"] == {"total": 8, "unique": 4}
        assert summary["graph"]["node_count"] == 4
        assert summary["walk"]["type"] == "circuit"
        assert summary["reconstruction"]["sequence"] == repeat_sequence


class TestRunDbgAssembly:
    """Test the file-based pipeline."""

    def test_outputs_written(self, tmp_path, repeat_sequence):
        """FASTA, GFA and JSON outputs are written."""
        results = run_dbg_assembly(k=3, output_dir=str(tmp_path), sequence=repeat_sequence)
        for path in results["files"].values():
            assert os.path.exists(path)

        assert load_fasta_sequence(results["files"]["sequence"]) == repeat_sequence
        with open(results["files"]["results"]) as f:
            saved = json.load(f)
        assert saved["report"]["accuracy"]["pct_identity"] == 100.0
        assert saved["walk"]["type"] == "circuit"

    def test_fasta_input(self, tmp_path, write_fasta):
        """A FASTA input is loaded and uppercased."""
        path = write_fasta(">toy\nacgtt\n")
        results = run_dbg_assembly(k=3, output_dir=str(tmp_path / "out"), fasta_file=path)
        assert results["reconstruction"]["sequence"] == "ACGTT"
        assert results["walk"]["type"] == "path"

    def test_reference_file(self, tmp_path, write_fasta):
        """A separate reference is used for the accuracy report."""
        reference = write_fasta(">ref\nACGTA\n", name="ref.fasta")
        results = run_dbg_assembly(k=3, output_dir=str(tmp_path), sequence="ACGTT",
                                   reference_file=reference)
        assert results["report"]["accuracy"]["num_mismatches"] == 1

    def test_invalid_k(self, tmp_path, cyclic_sequence):
        """k out of range propagates InvalidParameter."""
        with pytest.raises(InvalidParameter):
            run_dbg_assembly(k=10, output_dir=str(tmp_path), sequence=cyclic_sequence)

    def test_malformed_input(self, tmp_path, write_fasta):
        """An empty FASTA propagates MalformedInput."""
        with pytest.raises(MalformedInput):
            run_dbg_assembly(k=3, output_dir=str(tmp_path), fasta_file=write_fasta(">x\n"))

    def test_write_fasta_wraps_lines(self, tmp_path):
        """Sequences are wrapped at 60 columns."""
        output = tmp_path / "long.fasta"
        write_sequence_to_fasta("A" * 130, str(output), name="long")
        lines = output.read_text().splitlines()
        assert lines[0] == ">long length=130"
        assert [len(line) for line in lines[1:]] == [60, 60, 10]


class TestMain:
    """Test the command-line entry point."""

    def test_success(self, tmp_path, cyclic_sequence):
        """A valid run exits 0."""
        assert main(["--sequence", cyclic_sequence, "--k", "3", "--output", str(tmp_path)]) == 0
        assert (tmp_path / "reconstructed_k3.fasta").exists()

    def test_failure(self, tmp_path, cyclic_sequence):
        """An invalid k exits 1."""
        assert main(["--sequence", cyclic_sequence, "--output", str(tmp_path)]) == 1

    def test_missing_input(self, tmp_path):
        """A missing FASTA exits 1."""
        assert main(["--input", str(tmp_path / "none.fasta"), "--k", "3",
                     "--output", str(tmp_path)]) == 1
