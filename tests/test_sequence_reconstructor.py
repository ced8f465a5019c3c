"""
Unit tests for sequence reconstruction and the full round trip.
"""

import pytest

from assembly_errors import EmptyWalk, InvalidParameter
from dbg_assembler import assemble
from eulerian_walk import Walk, WalkType
from sequence_reconstructor import ReconstructionResult, reconstruct_sequence, sequence_from_walk


class TestReconstruct:
    """Test linearizing walks."""

    def test_plain_labels(self):
        """First node in full, then the last character of each node."""
        assert sequence_from_walk(["AC", "CG", "GT", "TA", "AC"]) == "ACGTAC"

    def test_single_node(self):
        """A one-node walk spells the node."""
        result = reconstruct_sequence(["ACG"])
        assert result.sequence == "ACG"
        assert result.k == 4

    def test_length_invariant(self):
        """Output length is walk length + k - 2."""
        walk = Walk(nodes=("ACG", "CGT", "GTT"), walk_type=WalkType.PATH, k=4)
        result = reconstruct_sequence(walk)
        assert result.sequence == "ACGTT"
        assert len(result) == len(walk) + result.k - 2

    def test_empty_walk(self):
        """An empty walk raises EmptyWalk."""
        with pytest.raises(EmptyWalk):
            reconstruct_sequence([])
        with pytest.raises(EmptyWalk):
            reconstruct_sequence(Walk(nodes=()))
        with pytest.raises(EmptyWalk):
            sequence_from_walk([])

    def test_k_mismatch(self):
        """k must match the node label length."""
        with pytest.raises(InvalidParameter):
            reconstruct_sequence(["AC", "CG"], k=4)

    def test_result_checks_length(self):
        """ReconstructionResult enforces its length invariant."""
        with pytest.raises(InvalidParameter):
            ReconstructionResult(sequence="ACGT", walk=Walk(nodes=("AC", "CG")), k=3)


class TestRoundTrip:
    """Test reconstruct(walk(build(extract(sequence, k)))) == sequence."""

    def test_scenario_a(self, cyclic_sequence):
        """ACGTAC with k=3 is a circuit and reconstructs exactly."""
        result = assemble(cyclic_sequence, 3)
        assert result.kmers.sequences == ["ACG", "CGT", "GTA", "TAC"]
        assert set(result.graph.labels) == {"AC", "CG", "GT", "TA"}
        assert result.walk.walk_type is WalkType.CIRCUIT
        assert result.sequence == "ACGTAC"

    def test_scenario_b(self, repeat_sequence):
        """Repeated k-mers still reconstruct the 10-character sequence."""
        result = assemble(repeat_sequence, 3)
        assert max(result.graph.edge_multiplicities().values()) >= 2
        assert result.sequence == repeat_sequence

    def test_k_two_boundary(self, random_sequences):
        """k=2 works on any sequence of length >= 2."""
        for sequence in random_sequences:
            assert assemble(sequence, 2).sequence == sequence

    @pytest.mark.parametrize("k", [3, 5, 11])
    def test_random_sequences(self, random_sequences, k):
        """Round trip is exact across k values."""
        for sequence in random_sequences:
            if k > len(sequence):
                continue
            assert assemble(sequence, k).sequence == sequence

    def test_k_equal_to_length(self):
        """A single k-mer reconstructs itself."""
        assert assemble("ACGTA", 5).sequence == "ACGTA"

    def test_k_too_large(self, cyclic_sequence):
        """k > len(sequence) raises InvalidParameter."""
        with pytest.raises(InvalidParameter):
            assemble(cyclic_sequence, len(cyclic_sequence) + 1)

    def test_idempotent(self, random_sequences):
        """Two runs on identical input give identical walks."""
        first = assemble(random_sequences[3], 4)
        second = assemble(random_sequences[3], 4)
        assert first.walk == second.walk
        assert first.sequence == second.sequence
