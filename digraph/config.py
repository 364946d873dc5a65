"""Configuration for graph behaviour that callers may want to switch."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from digraph.traversal import TraversalMode


class GraphConfig(BaseModel):
    """
    Behaviour switches for a ``DiGraph``.

    Attributes:
        strict_self_loops: Raise ``SelfReferencingEdgeError`` on ``add_edge(a, a)``
            instead of silently ignoring it
        default_traversal: Walk order used when ``traverse`` gets no mode
        max_cycle_depth: Depth bound used by cycle queries called without one
            (``None`` means unbounded)
    """
    strict_self_loops: bool = False
    default_traversal: TraversalMode = TraversalMode.BFS
    max_cycle_depth: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)
