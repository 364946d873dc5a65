"""
Tests for replacing and editing vertex bodies.
"""
import pytest


class TestUpdateVertexBody:
    """Tests for wholesale body replacement."""

    def test_update_only_target_vertex(self, graph, make_vertex):
        """Test that updating one body leaves the others, and dependents, alone."""
        vertex_a = make_vertex("a")
        vertex_e = make_vertex("e", adjacent_to=["a"])
        vertex_b = make_vertex("b")
        graph.add_vertices(vertex_a, vertex_b, vertex_e)

        graph.update_vertex_body("b", {"body": []})

        assert vertex_b.body == {"body": []}
        assert vertex_a.body == {}
        assert vertex_e.body == {}

    def test_update_missing_vertex_is_noop(self, graph, make_vertex):
        """Test that updating an unknown vertex does not create it."""
        graph.add_vertex(make_vertex("a"))
        graph.update_vertex_body("z", {"x": 1})
        assert not graph.has_vertex("z")

    def test_update_keeps_adjacency(self, build_graph):
        """Test that a new body does not touch edges."""
        digraph = build_graph(["a", "b"], [("a", "b")])
        digraph.update_vertex_body("a", {"component": "<div />"})
        assert digraph.get_vertex("a").adjacent_to == ["b"]
        assert digraph.get_vertex("a").body == {"component": "<div />"}


class TestMergeVertexBody:
    """Tests for in-place body edits."""

    def test_merge_edits_in_place(self, graph, make_vertex):
        """Test that the transform works on the stored body object."""
        body = {"count": 1}
        graph.add_vertex(make_vertex("a", body=body))

        def bump(current):
            current["count"] += 1
            current["touched"] = True

        graph.merge_vertex_body("a", bump)

        assert graph.get_vertex("a").body is body
        assert body == {"count": 2, "touched": True}

    def test_merge_missing_vertex_does_not_call_transform(self, graph):
        """Test that the transform is never invoked for unknown ids."""
        calls = []
        graph.merge_vertex_body("z", calls.append)
        assert calls == []

    def test_merge_error_propagates_without_rollback(self, graph, make_vertex):
        """Test that a failing transform raises and keeps its partial edits."""
        graph.add_vertex(make_vertex("a", body={"steps": []}))

        def failing(current):
            current["steps"].append("first")
            raise RuntimeError("Simulated error")

        with pytest.raises(RuntimeError, match="Simulated error"):
            graph.merge_vertex_body("a", failing)

        assert graph.get_vertex("a").body == {"steps": ["first"]}

    def test_merge_with_copy_swap(self, graph, make_vertex):
        """Test that a transform can edit a copy and write it back as its last step."""
        body = {"name": "lib", "version": 1}
        graph.add_vertex(make_vertex("a", body=body))

        def swapping(current):
            draft = dict(current)
            draft["version"] = 2
            draft["tags"] = ["stable"]
            current.clear()
            current.update(draft)

        graph.merge_vertex_body("a", swapping)

        assert graph.get_vertex("a").body is body
        assert body == {"name": "lib", "version": 2, "tags": ["stable"]}
