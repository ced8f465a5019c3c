#!/usr/bin/env python3
"""
De Bruijn Graph (DBG) Sequence Reconstructor

This module reconstructs a sequence from the k-mers that cover it: it builds
a De Bruijn graph, finds an Eulerian walk with Hierholzer's algorithm and
spells the walk back out, writing the sequence as FASTA output.
"""

import os
import sys
import json
import argparse
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from assembly_metrics import assembly_report, graph_statistics, json_serializable
from debruijn_graph import DeBruijnGraph, build_debruijn_graph
from eulerian_walk import Walk, find_eulerian_walk
from fasta_loader import load_fasta_sequence
from kmer_extractor import KmerList, extract_kmers
from make_gfa import export_to_gfa
from sequence_reconstructor import ReconstructionResult, reconstruct_sequence

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_K = 31


@dataclass
class AssemblyResult:
    """Outputs of every pipeline stage for one (sequence, k) run."""
    kmers: KmerList
    graph: DeBruijnGraph
    walk: Walk
    reconstruction: ReconstructionResult

    @property
    def k(self) -> int:
        return self.kmers.k

    @property
    def sequence(self) -> str:
        return self.reconstruction.sequence

    def to_dict(self) -> Dict:
        return {
            "k": self.k,
            "kmers": {
                "total": len(self.kmers),
                "unique": len(self.kmers.counts())
            },
            "graph": graph_statistics(self.graph).to_dict(),
            "walk": {
                "type": self.walk.walk_type.value,
                "start": self.walk.start,
                "end": self.walk.end,
                "nodes": len(self.walk)
            },
            "reconstruction": {
                "length": len(self.reconstruction),
                "sequence": self.sequence
            }
        }


def assemble(sequence: str, k: int) -> AssemblyResult:
    """
    Run extraction, graph building, walking and reconstruction.

    Args:
        sequence: Source sequence
        k: k-mer size

    Returns:
        AssemblyResult holding each stage's output

    Raises:
        InvalidParameter: k out of range
        NoEulerianWalk: Degree balance rules out a walk
        DisconnectedGraph: Graph is not weakly connected
    """
    kmers = extract_kmers(sequence, k)
    graph = build_debruijn_graph(kmers)
    walk = find_eulerian_walk(graph)
    reconstruction = reconstruct_sequence(walk, k)
    return AssemblyResult(kmers=kmers, graph=graph, walk=walk, reconstruction=reconstruction)


def write_sequence_to_fasta(sequence: str, output_file: str, name: str = "reconstructed") -> None:
    """
    Write a sequence to a FASTA file.

    Args:
        sequence: Sequence to write
        output_file: Path to output FASTA file
        name: Record name for the header line
    """
    with open(output_file, 'w') as f:
        f.write(">{} length={}\n".format(name, len(sequence)))

        # Write sequence with 60 characters per line
        for j in range(0, len(sequence), 60):
            f.write(sequence[j:j+60] + "\n")

    logger.info("Wrote sequence of length {} to {}".format(len(sequence), output_file))


def run_dbg_assembly(k: int, output_dir: str, fasta_file: Optional[str] = None,
                     sequence: Optional[str] = None, reference_file: Optional[str] = None) -> Dict:
    """
    Run the complete reconstruction pipeline and write its outputs.

    Args:
        k: k-mer size
        output_dir: Directory for output files
        fasta_file: Input FASTA file (used when sequence is not given)
        sequence: Input sequence
        reference_file: Optional ground-truth FASTA; defaults to the input

    Returns:
        Dictionary of results and metrics
    """
    if sequence is None:
        if fasta_file is None:
            raise ValueError("either fasta_file or sequence is required")
        sequence = load_fasta_sequence(fasta_file)
    else:
        sequence = sequence.upper()

    # Create output directory if it doesn't exist
    os.makedirs(output_dir, exist_ok=True)

    # 1. Extract k-mers
    kmers = extract_kmers(sequence, k)

    # 2. Build De Bruijn graph and export it before walking
    graph = build_debruijn_graph(kmers)
    graph_file = os.path.join(output_dir, "debruijn_graph_k{}.gfa".format(k))
    export_to_gfa(graph, graph_file)

    # 3. Find the Eulerian walk and spell it out
    walk = find_eulerian_walk(graph)
    reconstruction = reconstruct_sequence(walk, k)
    result = AssemblyResult(kmers=kmers, graph=graph, walk=walk, reconstruction=reconstruction)

    # 4. Write outputs
    sequence_file = os.path.join(output_dir, "reconstructed_k{}.fasta".format(k))
    write_sequence_to_fasta(result.sequence, sequence_file, name="reconstructed_k{}".format(k))

    reference = load_fasta_sequence(reference_file) if reference_file else sequence

    results = result.to_dict()
    results["report"] = assembly_report(reference, result.sequence, graph, walk)
    results["files"] = {
        "sequence": sequence_file,
        "graph": graph_file
    }

    results_file = os.path.join(output_dir, "assembly_results_k{}.json".format(k))
    with open(results_file, 'w') as f:
        json.dump(results, f, indent=2, default=json_serializable)
    results["files"]["results"] = results_file

    logger.info("Reconstruction complete. Results saved to {}".format(results_file))
    return results


def main(argv=None):
    """Main entry point for the program."""
    parser = argparse.ArgumentParser(description="De Bruijn Graph Sequence Reconstructor")

    # Required arguments
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Input FASTA file")
    source.add_argument("--sequence", help="Sequence given directly on the command line")
    parser.add_argument("--output", required=True, help="Output directory")

    # Optional arguments
    parser.add_argument("--k", type=int, default=DEFAULT_K,
                        help="k-mer size (default: {})".format(DEFAULT_K))
    parser.add_argument("--reference", help="Ground-truth FASTA file (default: the input)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        results = run_dbg_assembly(
            k=args.k,
            output_dir=args.output,
            fasta_file=args.input,
            sequence=args.sequence,
            reference_file=args.reference
        )
        logger.info("Reconstruction completed successfully: identity {:.2f}%".format(
            results["report"]["accuracy"]["pct_identity"]))
    except Exception as e:
        logger.error("Reconstruction failed: {}".format(e))
        logger.debug("Traceback:", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
