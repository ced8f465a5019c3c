#!/usr/bin/env python3
"""
De Bruijn Graph

Directed multigraph built from a k-mer list. Every distinct (k-1)-mer is one
node; every k-mer occurrence is one edge from its prefix node to its suffix
node. Repeated k-mers give parallel edges, which are never merged.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import networkx as nx
import pandas as pd

from assembly_errors import InvalidParameter
from kmer_extractor import KmerList

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A (k-1)-mer node with its outgoing edge ids in insertion order."""
    id: int
    label: str
    out_edges: List[int] = field(default_factory=list)
    in_degree: int = 0
    out_degree: int = 0

    @property
    def balance(self) -> int:
        return self.out_degree - self.in_degree

    @property
    def degree(self) -> int:
        return self.in_degree + self.out_degree


@dataclass
class Edge:
    """One k-mer occurrence. The id keeps parallel edges apart."""
    id: int
    source: int
    target: int
    kmer: str
    consumed: bool = False


class DeBruijnGraph:
    """
    De Bruijn multigraph keyed by (k-1)-mer labels.

    Nodes are kept in creation order and edges in id order, so iterating the
    graph is deterministic for identical input.
    """

    def __init__(self, k: int):
        if k < 2:
            raise InvalidParameter("k must be at least 2, got {}".format(k), k=k)
        self.k = k
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._index: Dict[str, int] = {}

    def __repr__(self):
        return "DeBruijnGraph(k={}, nodes={}, edges={})".format(
            self.k, self.node_count, self.edge_count)

    def __contains__(self, label):
        return label in self._index

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def consumed_count(self) -> int:
        return sum(1 for edge in self.edges if edge.consumed)

    @property
    def labels(self) -> List[str]:
        return [node.label for node in self.nodes]

    def add_node(self, label: str) -> Node:
        """
        Return the node for a label, creating it on first sight.

        Args:
            label: (k-1)-mer label

        Returns:
            The existing or newly created node
        """
        node_id = self._index.get(label)
        if node_id is not None:
            return self.nodes[node_id]

        if len(label) != self.k - 1:
            raise InvalidParameter(
                "node label {!r} has length {}, expected {}".format(label, len(label), self.k - 1),
                k=self.k)
        node = Node(id=len(self.nodes), label=label)
        self.nodes.append(node)
        self._index[label] = node.id
        return node

    def add_edge(self, kmer: str) -> Edge:
        """Append one edge prefix -> suffix for a k-mer occurrence."""
        if len(kmer) != self.k:
            raise InvalidParameter(
                "k-mer {!r} has length {}, expected {}".format(kmer, len(kmer), self.k),
                k=self.k)
        source = self.add_node(kmer[:-1])
        target = self.add_node(kmer[1:])

        edge = Edge(id=len(self.edges), source=source.id, target=target.id, kmer=kmer)
        self.edges.append(edge)

        source.out_edges.append(edge.id)
        source.out_degree += 1
        target.in_degree += 1
        return edge

    def node(self, key) -> Node:
        """Look a node up by label or by id."""
        if isinstance(key, str):
            return self.nodes[self._index[key]]
        return self.nodes[key]

    def edge(self, edge_id: int) -> Edge:
        return self.edges[edge_id]

    def out_edges(self, key) -> List[Edge]:
        return [self.edges[edge_id] for edge_id in self.node(key).out_edges]

    def edge_multiplicities(self) -> Dict[Tuple[str, str], int]:
        """Number of parallel edges per (source label, target label) pair."""
        return dict(Counter(
            (self.nodes[edge.source].label, self.nodes[edge.target].label)
            for edge in self.edges))

    def degree_table(self) -> pd.DataFrame:
        """Per-node in-degree, out-degree and balance, in node creation order."""
        return pd.DataFrame({
            "node": [node.label for node in self.nodes],
            "in_degree": [node.in_degree for node in self.nodes],
            "out_degree": [node.out_degree for node in self.nodes],
            "balance": [node.balance for node in self.nodes],
        })

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Convert to a networkx MultiDiGraph keyed by node label.

        Each networkx edge carries the edge id as its key and the k-mer as
        an attribute, so parallel edges survive the conversion.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.label, in_degree=node.in_degree, out_degree=node.out_degree)
        for edge in self.edges:
            graph.add_edge(self.nodes[edge.source].label, self.nodes[edge.target].label,
                           key=edge.id, kmer=edge.kmer)
        return graph

    def weak_components(self) -> List[List[str]]:
        """
        Weakly connected components over nodes with nonzero degree.

        Returns:
            Components as label lists, each in node creation order, ordered
            by their earliest created node
        """
        graph = self.to_networkx()
        graph.remove_nodes_from([node.label for node in self.nodes if node.degree == 0])

        components = []
        for component in nx.weakly_connected_components(graph):
            ids = sorted(self._index[label] for label in component)
            components.append([self.nodes[node_id].label for node_id in ids])
        components.sort(key=lambda labels: self._index[labels[0]])
        return components

    def weakly_connected_component_count(self) -> int:
        return len(self.weak_components())


def build_debruijn_graph(kmers: KmerList, k: Optional[int] = None) -> DeBruijnGraph:
    """
    Construct a De Bruijn graph from k-mers.

    Args:
        kmers: KmerList, or any sequence of equal-length k-mer strings
        k: k-mer length; taken from the k-mer list when omitted

    Returns:
        DeBruijnGraph with one edge per k-mer occurrence
    """
    if not isinstance(kmers, KmerList):
        kmers = KmerList.from_strings(kmers)
    if k is not None and k != kmers.k:
        raise InvalidParameter("k={} does not match k-mer length {}".format(k, kmers.k), k=k)

    graph = DeBruijnGraph(kmers.k)
    for kmer in kmers:
        graph.add_edge(kmer.sequence)

    logger.info("Built De Bruijn graph with {} nodes and {} edges".format(
        graph.node_count, graph.edge_count))
    return graph
