#!/usr/bin/env python3
"""
K-mer Extractor

Slides a window of length k across a sequence and records every k-mer
occurrence, in order and with multiplicity. Each k-mer knows its (k-1)-mer
prefix and suffix, which become the nodes of the De Bruijn graph.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from assembly_errors import InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Kmer:
    """A single k-mer occurrence and its start offset in the source."""
    sequence: str
    offset: int

    def __post_init__(self):
        if len(self.sequence) < 2:
            raise InvalidParameter(
                "k-mer {!r} is shorter than 2 characters".format(self.sequence),
                k=len(self.sequence))

    @property
    def k(self) -> int:
        return len(self.sequence)

    @property
    def prefix(self) -> str:
        return self.sequence[:-1]

    @property
    def suffix(self) -> str:
        return self.sequence[1:]


@dataclass(frozen=True)
class KmerList:
    """
    Ordered k-mer occurrences produced from one source.

    Attributes:
        kmers: K-mers in left-to-right order (repeats kept)
        k: Length shared by every k-mer
        source: The sequence the k-mers were cut from, if any
    """
    kmers: Tuple[Kmer, ...]
    k: int
    source: Optional[str] = None

    def __post_init__(self):
        if self.k < 2:
            raise InvalidParameter("k must be at least 2, got {}".format(self.k), k=self.k)
        if not self.kmers:
            raise InvalidParameter("k-mer list is empty", k=self.k)
        for kmer in self.kmers:
            if kmer.k != self.k:
                raise InvalidParameter(
                    "k-mer {!r} at offset {} has length {}, expected {}".format(
                        kmer.sequence, kmer.offset, kmer.k, self.k),
                    k=self.k)

    @classmethod
    def from_strings(cls, kmers: Iterable[str]) -> "KmerList":
        """
        Build a k-mer list from plain strings, e.g. an artificial k-mer set.

        Offsets are the positions in the input order.

        Args:
            kmers: K-mer strings, all of the same length

        Returns:
            KmerList with no source sequence
        """
        records = tuple(Kmer(sequence, offset) for offset, sequence in enumerate(kmers))
        if not records:
            raise InvalidParameter("k-mer list is empty")
        return cls(kmers=records, k=records[0].k)

    def __len__(self):
        return len(self.kmers)

    def __iter__(self):
        return iter(self.kmers)

    def __getitem__(self, index):
        return self.kmers[index]

    @property
    def sequences(self):
        return [kmer.sequence for kmer in self.kmers]

    @property
    def prefixes(self):
        return [kmer.prefix for kmer in self.kmers]

    @property
    def suffixes(self):
        return [kmer.suffix for kmer in self.kmers]

    def counts(self) -> Dict[str, int]:
        """Multiplicity of each distinct k-mer, in order of first appearance."""
        return dict(Counter(self.sequences))

    def frequency_table(self) -> pd.DataFrame:
        """K-mer frequency table with one row per distinct k-mer."""
        counts = self.counts()
        return pd.DataFrame({"kmer": list(counts.keys()), "count": list(counts.values())})


def extract_kmers(sequence: str, k: int) -> KmerList:
    """
    Extract all overlapping k-mers from a sequence.

    Args:
        sequence: Non-empty symbol sequence
        k: k-mer length, 1 < k <= len(sequence)

    Returns:
        KmerList holding len(sequence) - k + 1 k-mers in order

    Raises:
        InvalidParameter: If k is out of range or the sequence is empty
    """
    if not isinstance(sequence, str) or not sequence:
        raise InvalidParameter("sequence must be a non-empty string", k=k)
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidParameter("k must be an integer, got {!r}".format(k), k=k)

    n = len(sequence)
    if k <= 1 or k > n:
        raise InvalidParameter(
            "k must satisfy 1 < k <= {} (sequence length), got {}".format(n, k),
            k=k, sequence_length=n)

    kmers = tuple(Kmer(sequence[i:i + k], i) for i in range(n - k + 1))

    logger.info("Extracted {} k-mers (k={}) from sequence of length {}".format(
        len(kmers), k, n))
    return KmerList(kmers=kmers, k=k, source=sequence)
