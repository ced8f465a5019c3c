#!/usr/bin/env python3
"""
Sequence Reconstructor

Turns an Eulerian walk of (k-1)-mers back into a sequence.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from assembly_errors import EmptyWalk, InvalidParameter
from eulerian_walk import Walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconstructionResult:
    """A reconstructed sequence and the walk it came from."""
    sequence: str
    walk: Walk
    k: int

    def __post_init__(self):
        expected = len(self.walk) + self.k - 2
        if len(self.sequence) != expected:
            raise InvalidParameter(
                "reconstructed length {} != walk length + k - 2 = {}".format(
                    len(self.sequence), expected),
                k=self.k)

    def __len__(self):
        return len(self.sequence)

    def __str__(self):
        return self.sequence


def sequence_from_walk(nodes: Sequence[str]) -> str:
    """
    Generate a sequence from a walk of (k-1)-mers.

    Args:
        nodes: Node labels in walk order

    Returns:
        The first node followed by the last character of every later node
    """
    if not nodes:
        raise EmptyWalk("cannot reconstruct a sequence from an empty walk")

    # Start with the first node, then add one character per step
    return nodes[0] + "".join(node[-1] for node in nodes[1:])


def reconstruct_sequence(walk, k: Optional[int] = None) -> ReconstructionResult:
    """
    Reconstruct the sequence spelled by an Eulerian walk.

    Args:
        walk: Walk, or a plain list of node labels
        k: k-mer length; taken from the walk or its labels when omitted

    Returns:
        ReconstructionResult with len(sequence) == len(walk) + k - 2

    Raises:
        EmptyWalk: If the walk has no nodes
        InvalidParameter: If k disagrees with the node label length
    """
    if not isinstance(walk, Walk):
        walk = Walk(nodes=tuple(walk))
    if not walk.nodes:
        raise EmptyWalk("cannot reconstruct a sequence from an empty walk")

    if k is None:
        k = walk.k if walk.k is not None else len(walk.nodes[0]) + 1
    elif walk.k is not None and walk.k != k:
        raise InvalidParameter("k={} does not match walk k={}".format(k, walk.k), k=k)

    for label in walk.nodes:
        if len(label) != k - 1:
            raise InvalidParameter(
                "walk node {!r} has length {}, expected {}".format(label, len(label), k - 1),
                k=k)

    sequence = sequence_from_walk(walk.nodes)
    logger.info("Reconstructed sequence of length {} from {} nodes".format(
        len(sequence), len(walk)))
    return ReconstructionResult(sequence=sequence, walk=walk, k=k)
