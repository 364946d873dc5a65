"""
Directed graph of vertices keyed by id.

This module holds the vertex store and everything that mutates it: edges,
vertex bodies, deletion with edge cleanup, and the dependency queries built
on top of adjacency lists.
"""
from typing import Any, Callable, Dict, Iterator, List, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field

from digraph import cycles, traversal
from digraph.config import GraphConfig
from digraph.cycles import CycleStatus
from digraph.traversal import TraversalMode, check_depth, deep_walk
from digraph.vertex import RawRecord, Vertex, VertexId

logger = logging.getLogger("digraph.graph")


class SelfReferencingEdgeError(ValueError):
    """Raised by ``add_edge(a, a)`` when the graph is configured as strict."""

    def __init__(self, vertex_id: VertexId):
        self.vertex_id = vertex_id
        super().__init__(f"Vertex '{vertex_id}' cannot have an edge to itself")


class DiGraph(BaseModel):
    """
    In-memory directed graph.

    This class provides methods to:
    1. Add, look up and delete vertices (first write wins on duplicate ids)
    2. Add and delete edges between existing vertices
    3. Replace or edit vertex bodies in place
    4. Walk the graph breadth-first or depth-first
    5. Collect direct and transitive children and parents
    6. Detect cycles and report the vertices involved in each of them

    Vertices are shared, not copied: ``to_dict`` hands back the live vertex
    objects and a vertex passed to ``add_vertex`` is the one stored. Walks are
    lazy generators; the graph must not be structurally changed while one of
    them is still being consumed.
    """
    vertices: Dict[VertexId, Vertex] = Field(default_factory=dict)  # Insertion ordered
    graph_config: GraphConfig = Field(default_factory=GraphConfig)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_raw(cls, record: RawRecord, graph_config: Optional[GraphConfig] = None) -> "DiGraph":
        """
        Build a graph from a raw ``id -> {id, adjacentTo, body}`` record.

        Entries are added in record order with ``add_vertex`` semantics.
        Adjacency entries are not checked against the record; ids that do not
        resolve stay inert.

        Args:
            record: Mapping of ids to ``Vertex`` instances or plain mappings
            graph_config: Optional behaviour switches for the new graph

        Returns:
            The new graph
        """
        graph = cls(graph_config=graph_config or GraphConfig())
        for entry in record.values():
            graph.add_vertex(Vertex.model_validate(entry))
        logger.info(f"Imported {len(graph.vertices)} vertices from a record of {len(record)} entries")
        return graph

    def to_dict(self) -> Dict[VertexId, Vertex]:
        """
        Return the id to vertex mapping in insertion order.

        The dict is new but its vertices are the graph's own: mutating them
        mutates the graph.
        """
        return dict(self.vertices)

    def to_record(self) -> Dict[VertexId, Vertex]:
        """Same as ``to_dict``, kept under the name the record export has always used."""
        return self.to_dict()

    def to_raw(self) -> Dict[VertexId, Dict[str, Any]]:
        """Flat export record accepted by ``from_raw``."""
        return {vertex_id: vertex.to_raw() for vertex_id, vertex in self.vertices.items()}

    # Vertex store

    def has_vertex(self, vertex_id: VertexId) -> bool:
        return vertex_id in self.vertices

    def get_vertex(self, vertex_id: VertexId) -> Optional[Vertex]:
        """Get a vertex by id."""
        return self.vertices.get(vertex_id)

    def add_vertex(self, vertex: Vertex) -> None:
        """Add ``vertex`` unless its id is already taken."""
        if vertex.id in self.vertices:
            logger.debug(f"Vertex {vertex.id} already in graph, keeping the original")
            return
        self.vertices[vertex.id] = vertex

    def add_vertices(self, *vertices: Vertex) -> None:
        """Add several vertices; within the batch the first occurrence of an id wins."""
        unique: Dict[VertexId, Vertex] = {}
        for vertex in vertices:
            unique.setdefault(vertex.id, vertex)
        for vertex in unique.values():
            self.add_vertex(vertex)

    def delete_vertex(self, vertex_id: VertexId) -> None:
        """
        Remove a vertex and every edge pointing to it.

        Vertices depending on the deleted one are kept, with one adjacency
        entry less.
        """
        if self.vertices.pop(vertex_id, None) is None:
            logger.debug(f"Vertex {vertex_id} not in graph, nothing to delete")
            return
        detached = 0
        for vertex in self.vertices.values():
            if vertex_id in vertex.adjacent_to:
                vertex.adjacent_to.remove(vertex_id)
                detached += 1
        logger.info(f"Deleted vertex {vertex_id} and detached it from {detached} vertices")

    # Edges

    def add_edge(self, from_id: VertexId, to_id: VertexId) -> None:
        """
        Add an edge ``from_id -> to_id`` between two existing vertices.

        The edge is appended once; adding it again changes nothing. An edge
        from a vertex to itself is ignored, or rejected with
        ``SelfReferencingEdgeError`` when ``strict_self_loops`` is set.
        """
        if from_id == to_id:
            if self.graph_config.strict_self_loops:
                raise SelfReferencingEdgeError(from_id)
            logger.debug(f"Ignoring self-referencing edge on {from_id}")
            return

        from_vertex = self.vertices.get(from_id)
        if from_vertex is None or to_id not in self.vertices:
            logger.debug(f"Skipping edge {from_id} -> {to_id}: missing endpoint")
            return
        if to_id not in from_vertex.adjacent_to:
            from_vertex.adjacent_to.append(to_id)

    def delete_edge(self, from_id: VertexId, to_id: VertexId) -> None:
        from_vertex = self.vertices.get(from_id)
        if from_vertex is not None and to_id in from_vertex.adjacent_to:
            from_vertex.adjacent_to.remove(to_id)

    # Bodies

    def update_vertex_body(self, vertex_id: VertexId, body: Any) -> None:
        """Replace the body of a vertex; no-op when the vertex is missing."""
        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            logger.debug(f"Cannot update body of missing vertex {vertex_id}")
            return
        vertex.body = body

    def merge_vertex_body(self, vertex_id: VertexId, transform: Callable[[Any], None]) -> None:
        """
        Edit the body of a vertex in place.

        ``transform`` receives the current body and mutates it. Anything it
        raises reaches the caller as is, and edits made before the error are
        kept. Callers wanting all-or-nothing edits should work on a copy and
        write it back as their last step.
        """
        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            logger.debug(f"Cannot merge body of missing vertex {vertex_id}")
            return
        transform(vertex.body)

    # Traversal

    def traverse(self,
                 root_id: Optional[VertexId] = None,
                 mode: Optional[Union[TraversalMode, str]] = None) -> Iterator[Vertex]:
        """
        Walk the graph, yielding each vertex once.

        Args:
            root_id: Start vertex. Missing ids produce an empty walk; ``None``
                walks the whole graph in insertion order.
            mode: ``"bfs"`` or ``"dfs"``, defaults to the configured mode

        Returns:
            A single-pass generator of vertices
        """
        walk_mode = TraversalMode(mode) if mode is not None else self.graph_config.default_traversal
        return traversal.traverse(self.vertices, root_id, walk_mode)

    # Dependencies

    def get_children(self, vertex_id: VertexId) -> List[Vertex]:
        """
        Direct dependencies of a vertex, in adjacency order.

        Example: given A -> B, ``get_children("A") == [B]``
        """
        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            return []
        return [self.vertices[child_id] for child_id in vertex.adjacent_to if child_id in self.vertices]

    def get_parents(self, vertex_id: VertexId) -> List[Vertex]:
        """
        Vertices depending directly on a vertex, in insertion order.

        Example: given A -> B, ``get_parents("B") == [A]``
        """
        if vertex_id not in self.vertices:
            return []
        return [vertex for vertex in self.vertices.values() if vertex_id in vertex.adjacent_to]

    def get_deep_children(self, vertex_id: VertexId, depth_limit: Optional[int] = None) -> Iterator[VertexId]:
        """Lazily yield ids reachable from ``vertex_id``, direct children being depth 1."""
        check_depth("depth_limit", depth_limit)
        return deep_walk(vertex_id, self._child_ids, self.has_vertex, depth_limit)

    def get_deep_parents(self, vertex_id: VertexId, depth_limit: Optional[int] = None) -> Iterator[VertexId]:
        """Lazily yield ids of vertices that reach ``vertex_id``, direct parents being depth 1."""
        check_depth("depth_limit", depth_limit)
        return deep_walk(vertex_id, self._parent_ids, self.has_vertex, depth_limit)

    def _child_ids(self, vertex_id: VertexId) -> List[VertexId]:
        return list(self.vertices[vertex_id].adjacent_to)

    def _parent_ids(self, vertex_id: VertexId) -> List[VertexId]:
        return [vertex.id for vertex in self.get_parents(vertex_id)]

    def mutual_path_exists_between_vertices(self, first_id: VertexId, second_id: VertexId) -> bool:
        """Check that ``first_id`` reaches ``second_id`` and ``second_id`` reaches ``first_id``."""
        first = self.vertices.get(first_id)
        second = self.vertices.get(second_id)
        if first is None or second is None:
            return False
        if second_id in first.adjacent_to and first_id in second.adjacent_to:
            return True
        return (
            any(reached == second_id for reached in self.get_deep_children(first_id))
            and any(reached == first_id for reached in self.get_deep_children(second_id))
        )

    # Cycles

    def _resolve_max_depth(self, max_depth: Optional[int]) -> Optional[int]:
        if max_depth is None:
            max_depth = self.graph_config.max_cycle_depth
        check_depth("max_depth", max_depth)
        return max_depth

    def find_cycles(self, max_depth: Optional[int] = None) -> List[List[VertexId]]:
        """
        Find all distinct cycles.

        Args:
            max_depth: Largest cycle length to look for; defaults to the
                configured bound, unbounded if none

        Returns:
            One list of vertex ids per cycle
        """
        return cycles.find_cycles(self, self._resolve_max_depth(max_depth))

    def has_cycles(self, max_depth: Optional[int] = None) -> bool:
        """Check for at least one cycle, stopping at the first one found."""
        return cycles.has_cycles(self, self._resolve_max_depth(max_depth))

    def cycle_status(self, max_depth: Optional[int] = None) -> CycleStatus:
        return CycleStatus.CYCLE_DETECTED if self.has_cycles(max_depth) else CycleStatus.NO_CYCLE

    @property
    def is_acyclic(self) -> bool:
        return not self.has_cycles()

    def __str__(self) -> str:
        return f"DiGraph(vertices={len(self.vertices)})"
