# conftest.py
import pytest
from typing import Any, Callable, Dict, List, Optional

from digraph import DiGraph, GraphConfig, Vertex

# Custom test markers
def pytest_configure(config):
    """Configure custom markers."""
    markers = [
        "cycles: marks cycle detection tests",
        "slow: marks tests as slow",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)

# Basic fixtures
@pytest.fixture
def make_vertex() -> Callable[..., Vertex]:
    """Provide a factory for vertices with optional adjacency and body."""
    def _make_vertex(vertex_id: str, adjacent_to: Optional[List[str]] = None,
                     body: Optional[Dict[str, Any]] = None) -> Vertex:
        return Vertex(id=vertex_id, adjacent_to=adjacent_to or [], body=body if body is not None else {})
    return _make_vertex

@pytest.fixture
def graph() -> DiGraph:
    """Provide an empty graph."""
    return DiGraph()

@pytest.fixture
def strict_graph() -> DiGraph:
    """Provide an empty graph rejecting self-referencing edges."""
    return DiGraph(graph_config=GraphConfig(strict_self_loops=True))

@pytest.fixture
def build_graph(make_vertex) -> Callable[..., DiGraph]:
    """Provide a builder taking vertex ids then ``(from, to)`` edges."""
    def _build_graph(ids: List[str], edges: Optional[List[tuple]] = None) -> DiGraph:
        digraph = DiGraph()
        digraph.add_vertices(*(make_vertex(vertex_id) for vertex_id in ids))
        for from_id, to_id in edges or []:
            digraph.add_edge(from_id, to_id)
        return digraph
    return _build_graph

@pytest.fixture
def four_cycle(build_graph) -> DiGraph:
    """Provide a -> b -> c -> d -> a."""
    return build_graph(
        ["a", "b", "c", "d"],
        [("a", "b"), ("b", "c"), ("c", "d"), ("d", "a")],
    )
