"""
Lazy walks over a vertex mapping.

All walks use explicit worklists rather than recursion: a deque for
breadth-first order and a stack of adjacency iterators for depth-first
order. The iterator stack checks the visited set at the moment each sibling
is reached, which gives the same order a recursive preorder walk would.
"""
from collections import deque
from enum import Enum
from typing import Callable, Deque, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from digraph.vertex import Vertex, VertexId

VertexMap = Mapping[VertexId, Vertex]
NeighbourFn = Callable[[VertexId], Iterable[VertexId]]


class TraversalMode(str, Enum):
    """Order in which ``traverse`` visits vertices."""
    BFS = "bfs"
    DFS = "dfs"


def walk_bfs(vertices: VertexMap, root_id: VertexId, visited: Set[VertexId]) -> Iterator[Vertex]:
    """Breadth-first walk from ``root_id``, skipping and extending ``visited``."""
    if root_id not in vertices or root_id in visited:
        return
    visited.add(root_id)
    queue: Deque[VertexId] = deque([root_id])
    while queue:
        vertex = vertices[queue.popleft()]
        yield vertex
        for adjacent_id in vertex.adjacent_to:
            if adjacent_id in vertices and adjacent_id not in visited:
                visited.add(adjacent_id)
                queue.append(adjacent_id)


def walk_dfs(vertices: VertexMap, root_id: VertexId, visited: Set[VertexId]) -> Iterator[Vertex]:
    """Depth-first preorder walk from ``root_id``, skipping and extending ``visited``."""
    if root_id not in vertices or root_id in visited:
        return
    visited.add(root_id)
    yield vertices[root_id]
    stack: List[Iterator[VertexId]] = [iter(vertices[root_id].adjacent_to)]
    while stack:
        adjacent_id = next(stack[-1], None)
        if adjacent_id is None:
            stack.pop()
            continue
        if adjacent_id not in vertices or adjacent_id in visited:
            continue
        visited.add(adjacent_id)
        yield vertices[adjacent_id]
        stack.append(iter(vertices[adjacent_id].adjacent_to))


def check_depth(name: str, depth: Optional[int]) -> None:
    """Reject negative depth bounds before a lazy walk is handed out."""
    if depth is not None and depth < 0:
        raise ValueError(f"{name} must be non-negative, got {depth}")


_WALKERS = {
    TraversalMode.BFS: walk_bfs,
    TraversalMode.DFS: walk_dfs,
}


def traverse(vertices: VertexMap,
             root_id: Optional[VertexId] = None,
             mode: TraversalMode = TraversalMode.BFS) -> Iterator[Vertex]:
    """
    Walk the graph once, yielding each reachable vertex exactly once.

    Args:
        vertices: Id to vertex mapping, iterated in insertion order
        root_id: Vertex to start from. When omitted every vertex is used as a
            starting point in mapping order, sharing one visited set.
        mode: Breadth-first or depth-first order

    Returns:
        A single-pass generator of vertices
    """
    walker = _WALKERS[TraversalMode(mode)]
    visited: Set[VertexId] = set()
    if root_id is not None:
        yield from walker(vertices, root_id, visited)
        return
    for vertex_id in list(vertices):
        if vertex_id not in visited:
            yield from walker(vertices, vertex_id, visited)


def deep_walk(root_id: VertexId,
              neighbours: NeighbourFn,
              exists: Callable[[VertexId], bool],
              depth_limit: Optional[int] = None) -> Iterator[VertexId]:
    """
    Yield ids transitively reachable from ``root_id`` through ``neighbours``.

    Depth-first order, each id at most once. The root itself is not marked as
    visited up front, so it shows up only when a cycle leads back to it.
    Direct neighbours are at depth 1; nothing deeper than ``depth_limit`` is
    yielded.
    """
    if depth_limit == 0 or not exists(root_id):
        return

    visited: Set[VertexId] = set()
    stack: List[Tuple[Iterator[VertexId], int]] = [(iter(neighbours(root_id)), 1)]
    while stack:
        pending, depth = stack[-1]
        next_id = next(pending, None)
        if next_id is None:
            stack.pop()
            continue
        if next_id in visited or not exists(next_id):
            continue
        visited.add(next_id)
        yield next_id
        if depth_limit is None or depth < depth_limit:
            stack.append((iter(neighbours(next_id)), depth + 1))
