"""
Tests for edge creation and removal, including the self-loop policy.
"""
import pytest

from digraph import SelfReferencingEdgeError


class TestAddEdge:
    """Tests for DiGraph.add_edge."""

    def test_add_edges_in_arrival_order(self, graph, make_vertex):
        """Test that edges are appended in the order they are added."""
        vertex_a, vertex_b, vertex_c = make_vertex("a"), make_vertex("b"), make_vertex("c")
        graph.add_vertices(vertex_a, vertex_b, vertex_c)

        graph.add_edge("b", "a")
        assert vertex_b.adjacent_to == ["a"]

        graph.add_edge("b", "c")
        graph.add_vertices(vertex_a, vertex_b, vertex_c)
        assert vertex_b.adjacent_to == ["a", "c"]

    def test_add_edge_requires_both_vertices(self, graph, make_vertex):
        """Test that edges to or from unknown vertices are ignored."""
        vertex_a = make_vertex("a")
        graph.add_vertex(vertex_a)

        graph.add_edge("a", "b")
        graph.add_edge("b", "a")

        assert vertex_a.adjacent_to == []
        assert list(graph.to_dict()) == ["a"]

    def test_add_edge_is_idempotent(self, graph, make_vertex):
        """Test that the same edge is never stored twice."""
        graph.add_vertices(make_vertex("a"), make_vertex("b"), make_vertex("c"))
        graph.add_edge("b", "a")
        graph.add_edge("b", "a")
        graph.add_edge("b", "c")
        graph.add_edge("b", "c")
        graph.add_edge("b", "a")

        assert graph.get_vertex("b").adjacent_to == ["a", "c"]

    def test_self_loop_is_ignored_by_default(self, graph, make_vertex):
        """Test that an edge from a vertex to itself leaves it untouched."""
        vertex_a = make_vertex("a")
        graph.add_vertex(vertex_a)

        graph.add_edge("a", "a")

        assert vertex_a.adjacent_to == []
        assert not graph.has_cycles()

    def test_self_loop_raises_in_strict_mode(self, strict_graph, make_vertex):
        """Test that strict graphs reject self-referencing edges."""
        vertex_a = make_vertex("a")
        strict_graph.add_vertex(vertex_a)

        with pytest.raises(SelfReferencingEdgeError) as excinfo:
            strict_graph.add_edge("a", "a")

        assert excinfo.value.vertex_id == "a"
        assert isinstance(excinfo.value, ValueError)
        assert vertex_a.adjacent_to == []

    def test_strict_mode_allows_regular_edges(self, strict_graph, make_vertex):
        """Test that strict mode only affects self-referencing edges."""
        strict_graph.add_vertices(make_vertex("a"), make_vertex("b"))
        strict_graph.add_edge("a", "b")
        assert strict_graph.get_vertex("a").adjacent_to == ["b"]


class TestDeleteEdge:
    """Tests for DiGraph.delete_edge."""

    def test_delete_edge(self, build_graph):
        """Test that only the requested edge is removed."""
        digraph = build_graph(["a", "b", "c"], [("a", "b"), ("a", "c")])

        digraph.delete_edge("a", "b")

        assert digraph.get_vertex("a").adjacent_to == ["c"]
        assert digraph.has_vertex("b")

    def test_delete_missing_edge_is_noop(self, build_graph):
        """Test that deleting absent edges or vertices changes nothing."""
        digraph = build_graph(["a", "b"], [("a", "b")])

        digraph.delete_edge("b", "a")
        digraph.delete_edge("z", "a")
        digraph.delete_edge("a", "z")

        assert digraph.get_vertex("a").adjacent_to == ["b"]
        assert digraph.get_vertex("b").adjacent_to == []
