"""
Unit tests for GFA export.
"""

from debruijn_graph import build_debruijn_graph
from kmer_extractor import extract_kmers
from make_gfa import export_to_gfa, main


class TestExportGfa:
    """Test writing graphs as GFA."""

    def test_segments_and_links(self, tmp_path, repeat_sequence):
        """One S line per node and one L line per edge."""
        graph = build_debruijn_graph(extract_kmers(repeat_sequence, 3))
        output = tmp_path / "graph.gfa"
        export_to_gfa(graph, str(output))

        lines = output.read_text().splitlines()
        assert lines[0] == "H\tVN:Z:1.0"
        segments = [line for line in lines if line.startswith("S\t")]
        links = [line for line in lines if line.startswith("L\t")]
        assert segments == ["S\t1\tAC", "S\t2\tCG", "S\t3\tGT", "S\t4\tTA"]
        assert len(links) == graph.edge_count
        assert links[0] == "L\t1\t+\t2\t+\t1M"

    def test_main(self, tmp_path, cyclic_sequence):
        """The CLI writes a GFA file and exits 0."""
        output = tmp_path / "cli.gfa"
        assert main(["--sequence", cyclic_sequence, "--k", "3", "--output", str(output)]) == 0
        assert output.exists()

    def test_main_bad_k(self, tmp_path, cyclic_sequence):
        """The CLI exits 1 when k is too large."""
        output = tmp_path / "cli.gfa"
        assert main(["--sequence", cyclic_sequence, "--k", "31", "--output", str(output)]) == 1
        assert not output.exists()
