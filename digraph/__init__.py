"""
In-memory directed graph engine.

This package provides vertex and edge storage, body mutation, ordered
traversal, transitive dependency collection and cycle detection that reports
the vertices taking part in each cycle.
"""
from digraph.config import GraphConfig
from digraph.cycles import CycleStatus
from digraph.graph import DiGraph, SelfReferencingEdgeError
from digraph.traversal import TraversalMode
from digraph.vertex import RawRecord, Vertex, VertexId

__all__ = [
    "DiGraph",
    "GraphConfig",
    "CycleStatus",
    "SelfReferencingEdgeError",
    "TraversalMode",
    "Vertex",
    "VertexId",
    "RawRecord",
]
