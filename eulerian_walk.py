#!/usr/bin/env python3
"""
Eulerian Walk

Finds a walk through a De Bruijn graph that uses every edge exactly once,
using Hierholzer's algorithm.

The walker first checks two preconditions and refuses to traverse when
either fails:

- degree balance: every node is balanced, or exactly one node has one more
  outgoing than incoming edge (the source) and exactly one has one more
  incoming than outgoing (the sink);
- connectivity: all nodes with edges lie in one weakly connected component.

Traversal keeps one cursor per node into its insertion-ordered adjacency
list, so each edge is looked at once and the whole pass is O(V + E).
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from assembly_errors import (
    AssemblyError,
    DisconnectedGraph,
    GraphAlreadyWalked,
    InvalidParameter,
    NoEulerianWalk,
)
from debruijn_graph import DeBruijnGraph, Node

logger = logging.getLogger(__name__)


class WalkType(Enum):
    """Shape of an Eulerian walk."""
    CIRCUIT = "circuit"
    PATH = "path"


class WalkerState(Enum):
    """Lifecycle of an EulerianWalker."""
    IDLE = "idle"
    CHECKING = "checking_feasibility"
    INFEASIBLE = "infeasible"
    TRAVERSING = "traversing"
    DONE = "done"


@dataclass(frozen=True)
class DegreeBalance:
    """
    Degree-balance classification of the nodes that carry edges.

    Attributes:
        balanced: Labels with out-degree == in-degree
        sources: Labels with out-degree - in-degree == +1
        sinks: Labels with out-degree - in-degree == -1
        infeasible: Labels with |out-degree - in-degree| >= 2
    """
    balanced: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    sinks: Tuple[str, ...] = ()
    infeasible: Tuple[str, ...] = ()

    @property
    def walk_type(self) -> Optional[WalkType]:
        """CIRCUIT or PATH when a walk can exist, otherwise None."""
        if self.infeasible:
            return None
        if not self.sources and not self.sinks:
            return WalkType.CIRCUIT
        if len(self.sources) == 1 and len(self.sinks) == 1:
            return WalkType.PATH
        return None

    @property
    def feasible(self) -> bool:
        return self.walk_type is not None


@dataclass(frozen=True)
class Walk:
    """
    Ordered node labels of an Eulerian walk.

    A walk over a graph with E edges holds E + 1 labels.
    """
    nodes: Tuple[str, ...]
    walk_type: Optional[WalkType] = None
    k: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        if self.k is not None:
            for label in self.nodes:
                if len(label) != self.k - 1:
                    raise InvalidParameter(
                        "walk node {!r} has length {}, expected {}".format(
                            label, len(label), self.k - 1),
                        k=self.k)

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __getitem__(self, index):
        return self.nodes[index]

    @property
    def start(self) -> Optional[str]:
        return self.nodes[0] if self.nodes else None

    @property
    def end(self) -> Optional[str]:
        return self.nodes[-1] if self.nodes else None

    @property
    def edge_count(self) -> int:
        return max(len(self.nodes) - 1, 0)


def classify_degree_balance(graph: DeBruijnGraph) -> DegreeBalance:
    """
    Classify every node with nonzero degree by out-degree minus in-degree.

    Args:
        graph: De Bruijn graph

    Returns:
        DegreeBalance with labels in node creation order
    """
    balanced, sources, sinks, infeasible = [], [], [], []
    for node in graph.nodes:
        if node.degree == 0:
            continue
        balance = node.balance
        if balance == 0:
            balanced.append(node.label)
        elif balance == 1:
            sources.append(node.label)
        elif balance == -1:
            sinks.append(node.label)
        else:
            infeasible.append(node.label)

    return DegreeBalance(
        balanced=tuple(balanced),
        sources=tuple(sources),
        sinks=tuple(sinks),
        infeasible=tuple(infeasible),
    )


def check_feasibility(graph: DeBruijnGraph) -> DegreeBalance:
    """
    Check the degree-balance precondition of an Eulerian walk.

    Args:
        graph: De Bruijn graph

    Returns:
        The DegreeBalance classification, whose walk_type is set

    Raises:
        NoEulerianWalk: If the graph has neither a circuit nor a path shape
    """
    balance = classify_degree_balance(graph)
    if balance.feasible:
        return balance

    reasons = []
    if balance.infeasible:
        reasons.append("nodes with |balance| >= 2: {}".format(", ".join(balance.infeasible)))
    if balance.sources or balance.sinks:
        reasons.append("{} source candidate(s) [{}] and {} sink candidate(s) [{}]".format(
            len(balance.sources), ", ".join(balance.sources),
            len(balance.sinks), ", ".join(balance.sinks)))

    raise NoEulerianWalk(
        "No Eulerian walk: " + "; ".join(reasons),
        sources=balance.sources,
        sinks=balance.sinks,
        infeasible=balance.infeasible,
        k=graph.k,
        node_count=graph.node_count,
        edge_count=graph.edge_count,
    )


def check_connectivity(graph: DeBruijnGraph) -> List[List[str]]:
    """
    Check that all nodes with edges form one weakly connected component.

    Returns:
        The weak components (a single one on success)

    Raises:
        DisconnectedGraph: If there is more than one component
    """
    components = graph.weak_components()
    if len(components) > 1:
        sizes = [len(component) for component in components]
        raise DisconnectedGraph(
            "Graph has {} weakly connected components (sizes {}), first nodes {}".format(
                len(components), sizes, [component[0] for component in components]),
            component_sizes=sizes,
            k=graph.k,
            node_count=graph.node_count,
            edge_count=graph.edge_count,
        )
    return components


def select_start_node(graph: DeBruijnGraph, balance: DegreeBalance) -> Node:
    """
    Choose where the walk starts.

    The unique source candidate when there is one. For a circuit, the first
    created node with outgoing edges, which is the prefix of the first k-mer
    when the graph was built from a sequence.
    """
    if balance.sources:
        return graph.node(balance.sources[0])
    for node in graph.nodes:
        if node.out_degree > 0:
            return node
    raise InvalidParameter("graph has no edges", k=graph.k)


class EulerianWalker:
    """
    Runs the feasibility checks and Hierholzer's algorithm on one graph.

    The walker only flips edge ``consumed`` flags and advances its own
    per-node cursors; it never adds or removes nodes or edges. A graph can be
    walked once.

    Example:
        >>> walker = EulerianWalker(graph)
        >>> walk = walker.run()
        >>> walker.state
        <WalkerState.DONE: 'done'>
    """

    def __init__(self, graph: DeBruijnGraph):
        self.graph = graph
        self.state = WalkerState.IDLE
        self.balance: Optional[DegreeBalance] = None
        self.start: Optional[Node] = None
        self.walk: Optional[Walk] = None

    def check(self) -> DegreeBalance:
        """Run both precondition checks without touching any edge."""
        self.state = WalkerState.CHECKING

        if self.graph.edge_count == 0:
            self.state = WalkerState.INFEASIBLE
            raise InvalidParameter("graph has no edges", k=self.graph.k)

        consumed = self.graph.consumed_count
        if consumed:
            self.state = WalkerState.INFEASIBLE
            raise GraphAlreadyWalked(
                "{} edge(s) already consumed by an earlier walk".format(consumed),
                k=self.graph.k,
                node_count=self.graph.node_count,
                edge_count=self.graph.edge_count,
            )

        try:
            balance = check_feasibility(self.graph)
            check_connectivity(self.graph)
        except AssemblyError as e:
            self.state = WalkerState.INFEASIBLE
            logger.warning("Eulerian walk infeasible: {}".format(e))
            raise

        self.balance = balance
        logger.info("Degree balance: {} balanced, {} source, {} sink -> {}".format(
            len(balance.balanced), len(balance.sources), len(balance.sinks),
            balance.walk_type.value))
        return balance

    def run(self) -> Walk:
        """
        Compute the Eulerian walk.

        Returns:
            Walk with graph.edge_count + 1 node labels

        Raises:
            NoEulerianWalk: Degree balance fails
            DisconnectedGraph: More than one weak component
            GraphAlreadyWalked: Edges were consumed before this run
        """
        if self.state is WalkerState.DONE:
            return self.walk

        balance = self.check()
        self.start = select_start_node(self.graph, balance)
        self.state = WalkerState.TRAVERSING

        nodes = self._traverse(self.start.id)

        if len(nodes) != self.graph.edge_count + 1 or self.graph.consumed_count != self.graph.edge_count:
            raise AssemblyError(
                "Traversal ended with {} of {} edges consumed".format(
                    self.graph.consumed_count, self.graph.edge_count))

        labels = [self.graph.nodes[node_id].label for node_id in nodes]
        self.walk = Walk(nodes=labels, walk_type=balance.walk_type, k=self.graph.k)
        self.state = WalkerState.DONE

        logger.info("Eulerian {} found: {} nodes from {} to {}".format(
            self.walk.walk_type.value, len(self.walk), self.walk.start, self.walk.end))
        return self.walk

    def _traverse(self, start_id: int) -> List[int]:
        nodes = self.graph.nodes
        edges = self.graph.edges
        cursors = [0] * len(nodes)
        debug = logger.isEnabledFor(logging.DEBUG)

        stack = [start_id]
        walk = deque()

        while stack:
            node = nodes[stack[-1]]
            cursor = cursors[node.id]
            if cursor < len(node.out_edges):
                # Follow the next unconsumed outgoing edge
                edge = edges[node.out_edges[cursor]]
                cursors[node.id] = cursor + 1
                edge.consumed = True
                stack.append(edge.target)
                if debug:
                    logger.debug("Edge {}: {} -> {} (stack size {})".format(
                        edge.id, node.label, nodes[edge.target].label, len(stack)))
            else:
                # Exhausted: backtrack and record the node
                walk.appendleft(stack.pop())

        return list(walk)


def find_eulerian_walk(graph: DeBruijnGraph) -> Walk:
    """
    Find an Eulerian walk through a De Bruijn graph.

    Args:
        graph: Graph built by build_debruijn_graph, not walked before

    Returns:
        Walk over every edge exactly once
    """
    return EulerianWalker(graph).run()
