#!/usr/bin/env python3
"""
FASTA Loader

Reads a FASTA file into the single uppercase sequence the pipeline expects.
"""

import logging
import os

from Bio import SeqIO

from assembly_errors import MalformedInput

logger = logging.getLogger(__name__)


def load_fasta_sequence(fasta_file):
    """
    Read a FASTA file and join the sequence lines of every record.

    Args:
        fasta_file: Path to FASTA file

    Returns:
        One uppercase string with no line breaks

    Raises:
        MalformedInput: If the file holds no sequence lines or cannot be parsed
    """
    if not os.path.exists(fasta_file):
        raise MalformedInput("FASTA file not found: {}".format(fasta_file), path=fasta_file)

    parts = []
    records = 0
    try:
        for record in SeqIO.parse(fasta_file, "fasta"):
            records += 1
            parts.append(str(record.seq))
    except ValueError as e:
        raise MalformedInput("Could not parse {}: {}".format(fasta_file, e), path=fasta_file) from e

    sequence = "".join(parts).upper()
    if not sequence:
        raise MalformedInput("No sequence lines found in {}".format(fasta_file), path=fasta_file)

    logger.info("Loaded {} bp from {} record(s) in {}".format(len(sequence), records, fasta_file))
    return sequence
