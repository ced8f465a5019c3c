#!/usr/bin/env python3
"""
Assembly Runner

Runs the reconstruction pipeline over a range of k values and compares the
resulting graphs: size, degree balance, connectivity and whether an Eulerian
walk exists. Small k tends to collapse repeats; large k tends to disconnect
the graph.
"""

import os
import sys
import argparse
import logging
import json
from typing import Dict, List

import matplotlib.pyplot as plt
import pandas as pd

from assembly_errors import AssemblyError
from assembly_metrics import edit_distance, graph_statistics, json_serializable, percent_identity
from debruijn_graph import build_debruijn_graph
from eulerian_walk import classify_degree_balance, find_eulerian_walk
from fasta_loader import load_fasta_sequence
from kmer_extractor import extract_kmers
from sequence_reconstructor import reconstruct_sequence

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_K_VALUES = [3, 5, 7, 10, 15, 20, 25]


def evaluate_k(sequence: str, k: int) -> Dict:
    """
    Run the pipeline for one k and describe the outcome.

    Infeasible graphs are recorded, not raised: the row's ``status`` names
    the error and the reconstruction columns stay empty.

    Args:
        sequence: Ground-truth sequence
        k: k-mer size

    Returns:
        Dictionary with one value per comparison column
    """
    kmers = extract_kmers(sequence, k)
    graph = build_debruijn_graph(kmers)
    stats = graph_statistics(graph)
    balance = classify_degree_balance(graph)

    row = {
        "k": k,
        "num_kmers": len(kmers),
        "unique_kmers": len(kmers.counts()),
        "num_nodes": stats.node_count,
        "num_edges": stats.edge_count,
        "avg_degree": (stats.avg_in_degree + stats.avg_out_degree) / 2,
        "balanced_nodes": stats.balanced_nodes,
        "tips": stats.tips,
        "weak_components": stats.weak_components,
        "graph_connected": stats.weak_components == 1,
        "walk_type": balance.walk_type.value if balance.walk_type else None,
        "status": "ok",
        "reconstructed_length": None,
        "pct_identity": None,
        "edit_distance": None,
    }

    try:
        walk = find_eulerian_walk(graph)
    except AssemblyError as e:
        row["status"] = type(e).__name__
        logger.info("k={}: {}".format(k, e))
        return row

    reconstructed = reconstruct_sequence(walk, k).sequence
    row["reconstructed_length"] = len(reconstructed)
    row["pct_identity"] = percent_identity(sequence, reconstructed)
    row["edit_distance"] = edit_distance(sequence, reconstructed)
    return row


def sweep_k_values(sequence: str, k_values: List[int]) -> pd.DataFrame:
    """
    Evaluate every usable k value against the same sequence.

    Args:
        sequence: Ground-truth sequence
        k_values: k sizes to test; values outside 1 < k <= len(sequence) are skipped

    Returns:
        DataFrame with one row per tested k, sorted by k
    """
    rows = []
    for k in sorted(set(k_values)):
        if k <= 1 or k > len(sequence):
            logger.warning("Skipping k={}: need 1 < k <= {}".format(k, len(sequence)))
            continue
        logger.info("Testing k={}".format(k))
        rows.append(evaluate_k(sequence, k))

    columns = list(rows[0].keys()) if rows else ["k"]
    return pd.DataFrame(rows, columns=columns)


def compare_k_values(df: pd.DataFrame, output_file: str) -> None:
    """
    Plot graph shape and reconstruction quality against k.

    Args:
        df: Table returned by sweep_k_values
        output_file: Path to output figure (PDF or PNG); a CSV with the same
            stem is written beside it
    """
    if df.empty:
        logger.error("No data for comparison")
        return

    plt.figure(figsize=(12, 10))

    # Plot 1: Graph size vs k
    plt.subplot(2, 2, 1)
    plt.plot(df["k"], df["num_nodes"], 'o-', label="nodes")
    plt.plot(df["k"], df["num_edges"], 's-', label="edges")
    plt.xlabel("k-mer size")
    plt.ylabel("Count")
    plt.title("Graph size vs k-mer size")
    plt.legend()
    plt.grid(True)

    # Plot 2: Balanced nodes vs k
    plt.subplot(2, 2, 2)
    plt.plot(df["k"], df["balanced_nodes"] / df["num_nodes"], 'o-')
    plt.xlabel("k-mer size")
    plt.ylabel("Fraction of balanced nodes")
    plt.title("Degree balance vs k-mer size")
    plt.grid(True)

    # Plot 3: Weak components vs k
    plt.subplot(2, 2, 3)
    plt.plot(df["k"], df["weak_components"], 'o-')
    plt.xlabel("k-mer size")
    plt.ylabel("Weakly connected components")
    plt.title("Connectivity vs k-mer size")
    plt.grid(True)

    # Plot 4: Identity vs k (infeasible k values are left blank)
    plt.subplot(2, 2, 4)
    plt.plot(df["k"], df["pct_identity"].astype(float), 'o-')
    plt.xlabel("k-mer size")
    plt.ylabel("Percent identity")
    plt.title("Reconstruction identity vs k-mer size")
    plt.grid(True)

    plt.tight_layout()
    plt.savefig(output_file)
    plt.close()
    logger.info("Comparison plots saved to {}".format(output_file))

    # Save tabular data
    csv_file = os.path.splitext(output_file)[0] + ".csv"
    df.to_csv(csv_file, index=False)
    logger.info("Comparison data saved to {}".format(csv_file))


def run_k_sweep(sequence: str, k_values: List[int], output_dir: str) -> pd.DataFrame:
    """
    Sweep k values and write the comparison figure, CSV and JSON summary.

    Args:
        sequence: Ground-truth sequence
        k_values: k sizes to test
        output_dir: Directory for output files

    Returns:
        The comparison DataFrame
    """
    os.makedirs(output_dir, exist_ok=True)

    df = sweep_k_values(sequence, k_values)
    compare_k_values(df, os.path.join(output_dir, "k_comparison.pdf"))

    feasible = df[df["status"] == "ok"] if "status" in df else df.iloc[0:0]
    summary = {
        "sequence_length": len(sequence),
        "k_values": df["k"].tolist(),
        "feasible_k_values": feasible["k"].tolist(),
        "connected_k_values": df[df["graph_connected"]]["k"].tolist() if "graph_connected" in df else [],
        "best_balance_k": df.loc[df["balanced_nodes"].idxmax(), "k"] if not df.empty else None,
    }
    summary_file = os.path.join(output_dir, "k_comparison.json")
    with open(summary_file, 'w') as f:
        json.dump(summary, f, indent=2, default=json_serializable)

    logger.info("Feasible k values: {}".format(summary["feasible_k_values"]))
    return df


def main(argv=None):
    """Main entry point for the program."""
    parser = argparse.ArgumentParser(description="Compare De Bruijn reconstructions across k values")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Input FASTA file")
    source.add_argument("--sequence", help="Sequence given directly on the command line")
    parser.add_argument("--output", required=True, help="Output directory")
    parser.add_argument("--k-values", type=int, nargs="+", default=DEFAULT_K_VALUES,
                        help="k-mer sizes to test (default: {})".format(
                            " ".join(str(k) for k in DEFAULT_K_VALUES)))
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sequence = args.sequence.upper() if args.sequence else load_fasta_sequence(args.input)
        df = run_k_sweep(sequence, args.k_values, args.output)
        if df.empty:
            logger.error("No usable k values for a sequence of length {}".format(len(sequence)))
            return 1
        logger.info("k sweep completed successfully")

    except Exception as e:
        logger.error("k sweep failed: {}".format(e))
        logger.debug("Traceback:", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
