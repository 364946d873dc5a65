"""
Cycle detection for ``DiGraph``.

Every edge ``root -> adjacent`` is checked by walking depth-first from
``adjacent`` and watching for ``root``. The walk prefix that leads back to
the root is a candidate cycle path; vertices that were only passed through
on the way are trimmed by a mutual reachability test, and candidates with
the same vertex set are reported once.
"""
import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterator, List, Mapping, Optional, Set, Tuple

from digraph.vertex import Vertex, VertexId

if TYPE_CHECKING:
    from digraph.graph import DiGraph

logger = logging.getLogger("digraph.cycles")


class CycleStatus(Enum):
    """Status of cycle detection."""
    NO_CYCLE = 0
    CYCLE_DETECTED = 1


def iter_root_edges(vertices: Mapping[VertexId, Vertex]) -> Iterator[Tuple[Vertex, Vertex]]:
    """Yield every ``(root, adjacent)`` pair whose target exists, in store order."""
    for root in list(vertices.values()):
        for adjacent_id in root.adjacent_to:
            adjacent = vertices.get(adjacent_id)
            # Self entries can only arrive through raw records and are inert
            if adjacent is not None and adjacent_id != root.id:
                yield root, adjacent


def walk_towards_root(vertices: Mapping[VertexId, Vertex],
                      root_id: VertexId,
                      start: Vertex,
                      max_depth: Optional[int] = None) -> Iterator[VertexId]:
    """
    Depth-first walk from ``start`` that never expands ``root_id``.

    ``start`` sits at level 0: the root's adjacency list and the start's own
    adjacency list already account for two levels of ``max_depth``. A vertex
    at level ``L`` is expanded only while ``L + 1 <= max_depth - 1``, so a
    cycle of ``n`` vertices is reachable iff ``max_depth >= n``.

    Each id is yielded once. Under a depth bound the shallowest level seen
    per vertex is kept, and a vertex reached again by a shorter route is
    expanded again from that level.
    """
    def can_expand(level: int) -> bool:
        return max_depth is None or level + 1 <= max_depth - 1

    best_level: Dict[VertexId, int] = {start.id: 0}
    yield start.id
    if start.id == root_id or not can_expand(0):
        return

    stack: List[Tuple[Iterator[VertexId], int]] = [(iter(start.adjacent_to), 1)]
    while stack:
        pending, level = stack[-1]
        next_id = next(pending, None)
        if next_id is None:
            stack.pop()
            continue
        if next_id not in vertices:
            continue
        known_level = best_level.get(next_id)
        if known_level is None:
            best_level[next_id] = level
            yield next_id
        elif max_depth is None or level >= known_level:
            continue
        else:
            best_level[next_id] = level
        # Back at the root: this is the cycle signal, going further would loop
        if next_id == root_id:
            continue
        if can_expand(level):
            stack.append((iter(vertices[next_id].adjacent_to), level + 1))


def find_cycle_path(vertices: Mapping[VertexId, Vertex],
                    root: Vertex,
                    adjacent: Vertex,
                    max_depth: Optional[int] = None) -> Optional[List[VertexId]]:
    """
    Return ``[root, ...]`` up to the first return to ``root``, or None.

    The path may still contain vertices that were visited on the way without
    being part of the cycle.
    """
    walked: List[VertexId] = []
    for vertex_id in walk_towards_root(vertices, root.id, adjacent, max_depth):
        if vertex_id == root.id:
            return [root.id] + walked
        walked.append(vertex_id)
    return None


def keep_cycle_members(graph: "DiGraph", path: List[VertexId]) -> List[VertexId]:
    """Drop ids that share no mutual path with any other id of ``path``."""
    return [
        vertex_id for vertex_id in path
        if any(
            other_id != vertex_id and graph.mutual_path_exists_between_vertices(vertex_id, other_id)
            for other_id in path
        )
    ]


def find_cycles(graph: "DiGraph", max_depth: Optional[int] = None) -> List[List[VertexId]]:
    """
    Find every distinct cycle of ``graph``.

    Args:
        graph: Graph to scan
        max_depth: Largest cycle length to look for, ``None`` for no bound

    Returns:
        One list of vertex ids per cycle, root first then walk order. Two
        groups are the same cycle only when their vertex sets are equal;
        overlapping groups are kept apart.
    """
    if max_depth == 0:
        return []

    cycles: List[List[VertexId]] = []
    seen: Set[FrozenSet[VertexId]] = set()
    for root, adjacent in iter_root_edges(graph.vertices):
        path = find_cycle_path(graph.vertices, root, adjacent, max_depth)
        if path is None:
            continue
        members = keep_cycle_members(graph, path)
        key = frozenset(members)
        if not members or key in seen:
            continue
        seen.add(key)
        cycles.append(members)
        logger.debug(f"Cycle found through edge {root.id} -> {adjacent.id}: {members}")

    if cycles:
        logger.warning(f"Detected {len(cycles)} cycles in the graph")
    else:
        logger.info(f"No cycles detected among {len(graph.vertices)} vertices")
    return cycles


def has_cycles(graph: "DiGraph", max_depth: Optional[int] = None) -> bool:
    """Stop at the first edge whose walk leads back to its root."""
    if max_depth == 0:
        return False
    for root, adjacent in iter_root_edges(graph.vertices):
        if find_cycle_path(graph.vertices, root, adjacent, max_depth) is not None:
            logger.debug(f"Cycle signal on edge {root.id} -> {adjacent.id}")
            return True
    return False
