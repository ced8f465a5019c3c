"""
Unit tests for the FASTA loader.
"""

import pytest

from assembly_errors import MalformedInput
from fasta_loader import load_fasta_sequence


class TestLoadFasta:
    """Test reading sequences from FASTA files."""

    def test_multiline_record(self, write_fasta):
        """Sequence lines are joined without line breaks."""
        path = write_fasta(">seq1 test\nACGT\nACGT\nAC\n")
        assert load_fasta_sequence(path) == "ACGTACGTAC"

    def test_uppercases(self, write_fasta):
        """Lowercase bases are uppercased."""
        path = write_fasta(">seq1\nacgtNn\n")
        assert load_fasta_sequence(path) == "ACGTNN"

    def test_records_are_concatenated(self, write_fasta):
        """Sequence lines of every record are joined."""
        path = write_fasta(">a\nACG\n>b\nTAC\n")
        assert load_fasta_sequence(path) == "ACGTAC"

    def test_header_only(self, write_fasta):
        """A header without sequence lines is malformed."""
        path = write_fasta(">empty\n")
        with pytest.raises(MalformedInput) as excinfo:
            load_fasta_sequence(path)
        assert excinfo.value.path == path

    def test_empty_file(self, write_fasta):
        """An empty file is malformed."""
        with pytest.raises(MalformedInput):
            load_fasta_sequence(write_fasta(""))

    def test_missing_file(self, tmp_path):
        """A missing file is malformed input."""
        with pytest.raises(MalformedInput):
            load_fasta_sequence(str(tmp_path / "missing.fasta"))
