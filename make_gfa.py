#!/usr/bin/env python3
"""
GFA Exporter

This script writes a De Bruijn graph in GFA format for visualization in Bandage.
"""

import argparse
import logging
import sys

from debruijn_graph import DeBruijnGraph, build_debruijn_graph
from fasta_loader import load_fasta_sequence
from kmer_extractor import extract_kmers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def export_to_gfa(graph: DeBruijnGraph, output_file: str) -> None:
    """
    Export the De Bruijn graph to GFA format for visualization.

    Nodes are written in creation order and numbered from 1; every edge,
    parallel ones included, becomes its own link.

    Args:
        graph: De Bruijn graph
        output_file: Path to output GFA file
    """
    overlap = graph.k - 2
    with open(output_file, 'w') as f:
        # Write header
        f.write("H\tVN:Z:1.0\n")

        # Write nodes (segments)
        for node in graph.nodes:
            f.write(f"S\t{node.id + 1}\t{node.label}\n")

        # Write edges (links); the orientation is always + for a DBG
        for edge in graph.edges:
            f.write(f"L\t{edge.source + 1}\t+\t{edge.target + 1}\t+\t{overlap}M\n")

    logger.info(f"Exported graph with {graph.node_count} nodes and {graph.edge_count} edges to {output_file}")


def main(argv=None):
    """Main entry point for the program."""
    parser = argparse.ArgumentParser(description="Export De Bruijn graph to GFA format")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Input FASTA file")
    source.add_argument("--sequence", help="Sequence given directly on the command line")
    parser.add_argument("--output", required=True, help="Output GFA file")
    parser.add_argument("--k", type=int, default=31, help="k-mer size (default: 31)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sequence = args.sequence.upper() if args.sequence else load_fasta_sequence(args.input)
        graph = build_debruijn_graph(extract_kmers(sequence, args.k))
        export_to_gfa(graph, args.output)

        logger.info(f"GFA export completed successfully: {args.output}")

    except Exception as e:
        logger.error(f"GFA export failed: {e}")
        logger.debug("Traceback:", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
