#!/usr/bin/env python3
"""
Assembly Errors

Exceptions raised by the De Bruijn reconstruction pipeline. All of them are
terminal: they are raised before any edge of a graph has been consumed, so a
caller never receives a partial walk.
"""


class AssemblyError(Exception):
    """Base class for every error raised by the assembly pipeline."""


class InvalidParameter(AssemblyError, ValueError):
    """k (or a k-mer set) is outside the range the pipeline accepts."""

    def __init__(self, message, k=None, sequence_length=None):
        super().__init__(message)
        self.k = k
        self.sequence_length = sequence_length


class MalformedInput(AssemblyError, ValueError):
    """The input loader found no usable sequence."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class GraphError(AssemblyError):
    """
    Base class for graph preconditions that rule out an Eulerian walk.

    Args:
        message: Human readable description
        k: k-mer length the graph was built with
        node_count: Number of nodes in the graph
        edge_count: Number of edges in the graph
    """

    def __init__(self, message, k=None, node_count=None, edge_count=None):
        details = "k={}, nodes={}, edges={}".format(k, node_count, edge_count)
        super().__init__("{} ({})".format(message, details))
        self.k = k
        self.node_count = node_count
        self.edge_count = edge_count


class NoEulerianWalk(GraphError):
    """Degree balance rules out both an Eulerian path and circuit."""

    def __init__(self, message, sources=(), sinks=(), infeasible=(), **kwargs):
        super().__init__(message, **kwargs)
        self.sources = list(sources)
        self.sinks = list(sinks)
        self.infeasible = list(infeasible)


class DisconnectedGraph(GraphError):
    """Edges are spread over more than one weakly connected component."""

    def __init__(self, message, component_sizes=(), **kwargs):
        super().__init__(message, **kwargs)
        self.component_sizes = list(component_sizes)

    @property
    def component_count(self):
        return len(self.component_sizes)


class GraphAlreadyWalked(GraphError):
    """The graph has consumed edges left over from an earlier walk."""


class EmptyWalk(AssemblyError):
    """Reconstruction was asked to linearize a walk with no nodes."""
