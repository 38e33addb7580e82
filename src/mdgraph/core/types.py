"""
Core type definitions for mdgraph.

Nodes and edges are pydantic models so that the local builder and the remote
service share one validated wire shape. The snapshot that bundles them is an
immutable container: a new parse always produces a new snapshot.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class NodeKind(StrEnum):
    """Categories of nodes in the document graph."""
    HEADING = "heading"
    LINK = "link"


class EdgeKind(StrEnum):
    """Types of relationships between nodes."""
    HIERARCHY = "hierarchy"
    REFERENCE = "reference"


class BackendKind(StrEnum):
    """Interchangeable rendering technologies."""
    PLANAR = "planar"
    SPATIAL = "spatial"


class SessionState(StrEnum):
    EMPTY = "empty"
    LOADED = "loaded"
    SWITCHING = "switching"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HeadingNode(_WireModel):
    """A Markdown heading line."""
    id: str
    text: str
    level: int = Field(ge=1, le=6)
    source_line: int = Field(ge=1)
    kind: Literal["heading"] = "heading"


class ReferenceNode(_WireModel):
    """A unique link target. Every occurrence of the same URL maps here."""
    id: str
    text: str
    url: str
    kind: Literal["link"] = "link"

    @staticmethod
    def id_for(url: str) -> str:
        return f"link-{url}"


GraphNode = Annotated[Union[HeadingNode, ReferenceNode], Field(discriminator="kind")]

NODE_ADAPTER: TypeAdapter = TypeAdapter(GraphNode)


class GraphEdge(_WireModel):
    """Directed relationship between two nodes."""
    source: str
    target: str
    kind: EdgeKind


class GraphStats(_WireModel):
    """Document and graph counters reported alongside a parse."""
    node_count: int = 0
    edge_count: int = 0
    line_count: int = 0
    word_count: int = 0
    char_count: int = 0


class NodeDetail(_WireModel):
    """Payload surfaced to any UI when a node is selected."""
    title: str
    kind: NodeKind
    level: Optional[int] = None
    source_line: Optional[int] = None
    url: Optional[str] = None
    body_html: str = ""


class SectionIndex(Mapping[str, str]):
    """
    Read-only mapping from heading id to the body text of its section.

    Lookups through ``get`` never fail: unknown ids return an empty string.
    """

    def __init__(self, sections: Optional[Mapping[str, str]] = None):
        self._sections = MappingProxyType(dict(sections or {}))

    def get(self, node_id: str, default: str = "") -> str:  # type: ignore[override]
        return self._sections.get(node_id, default)

    def __getitem__(self, node_id: str) -> str:
        return self._sections[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"SectionIndex({dict(self._sections)!r})"

    def to_dict(self) -> Dict[str, str]:
        return dict(self._sections)


@dataclass(frozen=True)
class GraphSnapshot:
    """
    One complete parse result.

    Nodes and edges are tuples so a rendering backend holding a reference
    never observes in-place mutation.
    """

    nodes: Tuple[Union[HeadingNode, ReferenceNode], ...] = ()
    edges: Tuple[GraphEdge, ...] = ()
    sections: SectionIndex = field(default_factory=SectionIndex)
    _by_id: Mapping[str, Union[HeadingNode, ReferenceNode]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        if not isinstance(self.sections, SectionIndex):
            object.__setattr__(self, "sections", SectionIndex(self.sections))
        object.__setattr__(self, "_by_id", MappingProxyType({n.id: n for n in self.nodes}))

    @classmethod
    def empty(cls) -> "GraphSnapshot":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def has_node(self, node_id: str) -> bool:
        return node_id in self._by_id

    def get_node(self, node_id: str) -> Optional[Union[HeadingNode, ReferenceNode]]:
        return self._by_id.get(node_id)

    def headings(self) -> List[HeadingNode]:
        return [n for n in self.nodes if isinstance(n, HeadingNode)]

    def references(self) -> List[ReferenceNode]:
        return [n for n in self.nodes if isinstance(n, ReferenceNode)]

    def edges_of_kind(self, kind: EdgeKind) -> List[GraphEdge]:
        return [e for e in self.edges if e.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_wire() for n in self.nodes],
            "edges": [e.to_wire() for e in self.edges],
            "sections": self.sections.to_dict(),
        }
