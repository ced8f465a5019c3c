#!/usr/bin/env python3
"""
Assembly Metrics

Quality measures for a reconstructed sequence and structural statistics of
the De Bruijn graph it was read from.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, List

import Levenshtein
import numpy as np

from debruijn_graph import DeBruijnGraph

logger = logging.getLogger(__name__)


def json_serializable(obj):
    """
    Convert numpy types to Python native types for JSON serialization.

    Args:
        obj: Object to convert

    Returns:
        JSON serializable object
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, Enum):
        return obj.value
    return obj


def count_mismatches(reference: str, assembled: str) -> int:
    """Reference positions not matched base-for-base by the assembly."""
    matches = sum(1 for a, b in zip(reference, assembled) if a == b)
    return len(reference) - matches


def percent_identity(reference: str, assembled: str) -> float:
    """
    Position-wise identity of an assembly against its reference.

    Args:
        reference: Ground-truth sequence (the denominator)
        assembled: Reconstructed sequence

    Returns:
        Percentage of reference positions matched, 0-100
    """
    if not reference:
        return 0.0
    if reference == assembled:
        return 100.0
    matches = len(reference) - count_mismatches(reference, assembled)
    return matches / len(reference) * 100


def edit_distance(reference: str, assembled: str) -> int:
    """Levenshtein distance between reference and assembly."""
    return Levenshtein.distance(reference, assembled)


def n50(lengths: List[int]) -> int:
    """Length L such that contigs of length >= L hold half of all bases."""
    return _nx(lengths, 0.5)


def _nx(lengths, fraction):
    total_length = sum(lengths)
    cumulative_length = 0
    for length in sorted(lengths, reverse=True):
        cumulative_length += length
        if cumulative_length >= total_length * fraction:
            return length
    return 0


def calculate_assembly_metrics(contigs: List[str]) -> Dict:
    """
    Calculate basic assembly metrics.

    Args:
        contigs: List of assembled contig sequences

    Returns:
        Dictionary of metrics
    """
    if not contigs:
        return {
            "num_contigs": 0,
            "total_length": 0,
            "min_length": 0,
            "max_length": 0,
            "mean_length": 0,
            "n50": 0,
            "n90": 0,
            "gc_content": 0
        }

    lengths = [len(contig) for contig in contigs]
    total_length = sum(lengths)

    gc_count = sum(contig.count('G') + contig.count('C') for contig in contigs)
    gc_content = (gc_count / total_length) * 100 if total_length > 0 else 0

    return {
        "num_contigs": len(contigs),
        "total_length": total_length,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "mean_length": total_length / len(contigs),
        "n50": n50(lengths),
        "n90": _nx(lengths, 0.9),
        "gc_content": gc_content
    }


def count_tips(graph: DeBruijnGraph) -> int:
    """Dead-end nodes: edges only in, or only out."""
    return sum(
        1 for node in graph.nodes
        if (node.in_degree == 0 and node.out_degree > 0)
        or (node.in_degree > 0 and node.out_degree == 0))


@dataclass
class GraphStatistics:
    """Shape of a De Bruijn graph, as consumed by reports."""
    k: int
    node_count: int
    edge_count: int
    avg_in_degree: float
    avg_out_degree: float
    balanced_nodes: int
    tips: int
    weak_components: int
    max_edge_multiplicity: int

    def to_dict(self):
        return asdict(self)


def graph_statistics(graph: DeBruijnGraph) -> GraphStatistics:
    """
    Summarize a De Bruijn graph.

    Args:
        graph: De Bruijn graph

    Returns:
        GraphStatistics
    """
    in_degrees = np.array([node.in_degree for node in graph.nodes])
    out_degrees = np.array([node.out_degree for node in graph.nodes])
    multiplicities = graph.edge_multiplicities()

    return GraphStatistics(
        k=graph.k,
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        avg_in_degree=float(in_degrees.mean()) if graph.node_count else 0.0,
        avg_out_degree=float(out_degrees.mean()) if graph.node_count else 0.0,
        balanced_nodes=int(np.sum(out_degrees == in_degrees)),
        tips=count_tips(graph),
        weak_components=graph.weakly_connected_component_count(),
        max_edge_multiplicity=max(multiplicities.values()) if multiplicities else 0,
    )


def assembly_report(reference: str, assembled: str, graph: DeBruijnGraph, walk=None) -> Dict:
    """
    Collect assembly, accuracy, graph and walk metrics in one dictionary.

    Args:
        reference: Ground-truth sequence
        assembled: Reconstructed sequence
        graph: Graph the assembly was read from
        walk: Optional Walk the assembly was spelled from

    Returns:
        Nested dictionary ready for JSON output
    """
    report = {
        "assembly": calculate_assembly_metrics([assembled] if assembled else []),
        "accuracy": {
            "reference_length": len(reference),
            "assembled_length": len(assembled),
            "exact_match": reference == assembled,
            "pct_identity": percent_identity(reference, assembled),
            "num_mismatches": count_mismatches(reference, assembled),
            "edit_distance": edit_distance(reference, assembled),
        },
        "graph": graph_statistics(graph).to_dict(),
    }
    if walk is not None:
        report["path"] = {
            "type": walk.walk_type.value if walk.walk_type else None,
            "start": walk.start,
            "end": walk.end,
            "length": walk.edge_count,
        }

    logger.info("Identity {:.2f}%, edit distance {}, N50 {}".format(
        report["accuracy"]["pct_identity"], report["accuracy"]["edit_distance"],
        report["assembly"]["n50"]))
    return report
