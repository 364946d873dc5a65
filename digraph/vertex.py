"""
Vertex model for the directed graph.

A vertex owns its adjacency list and carries an opaque body. The graph never
looks inside the body: it is stored, handed back and replaced, nothing else.
"""
from typing import Any, Dict, Generic, List, Mapping, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

VertexId = str

# Left unbound so pydantic passes the body through without copying it
BodyT = TypeVar("BodyT")


class Vertex(BaseModel, Generic[BodyT]):
    """A graph vertex: its id, the ids it points to, and its payload."""
    id: VertexId
    adjacent_to: List[VertexId] = Field(default_factory=list, alias="adjacentTo")
    body: BodyT = Field(default_factory=dict)  # type: ignore[assignment]

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    def to_raw(self) -> Dict[str, Any]:
        """Flat record form, as consumed by ``DiGraph.from_raw``."""
        return {
            "id": self.id,
            "adjacentTo": list(self.adjacent_to),
            "body": self.body,
        }

    def __str__(self) -> str:
        return f"Vertex({self.id}, adjacent_to={self.adjacent_to})"


RawVertex = Union[Vertex, Mapping[str, Any]]
RawRecord = Mapping[VertexId, RawVertex]
