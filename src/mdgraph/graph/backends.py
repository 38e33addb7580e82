"""
Rendering Backends.

A rendering backend consumes nodes and edges plus a node-click callback and
owns its own layout and viewport. Two interchangeable implementations are
provided:

- ``PlanarBackend``: 2D D3 force layout rendered to SVG.
- ``SpatialBackend``: 3D force graph rendered with 3d-force-graph.

The session controller only talks to the ``RenderingBackend`` protocol and
creates instances through ``create_backend``, so new backends can be added
with ``register_backend`` alone.
"""

import json
import logging
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

from ..core.errors import BackendInitError
from ..core.types import BackendKind, GraphEdge, HeadingNode, NodeDetail, ReferenceNode
from .templates import PLANAR_TEMPLATE, SPATIAL_TEMPLATE

logger = logging.getLogger(__name__)

GraphNode = Union[HeadingNode, ReferenceNode]
NodeClickHandler = Callable[[GraphNode], None]


@runtime_checkable
class RenderingBackend(Protocol):
    """Capability interface every rendering backend provides."""

    @property
    def name(self) -> str:
        ...

    @property
    def is_initialized(self) -> bool:
        ...

    async def initialize(self) -> None:
        """Acquire scene resources. May suspend."""
        ...

    def render(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge], on_node_click: NodeClickHandler) -> None:
        ...

    def clear(self) -> None:
        ...

    async def destroy(self) -> None:
        """Release every resource. Idempotent, safe before ``initialize``."""
        ...

    def dispatch_click(self, node_id: str) -> None:
        """Route a click event from the view to the wired callback."""
        ...

    def to_html(self, details: Optional[Mapping[str, NodeDetail]] = None) -> str:
        ...


class ForceGraphBackend:
    """
    Shared implementation for force-directed HTML scenes.

    Subclasses provide the template and default layout options.
    """

    kind: BackendKind
    template: str = ""
    default_options: Dict[str, Any] = {}

    def __init__(self, **options: Any):
        self.options: Dict[str, Any] = {**self.default_options, **options}
        self._scene: Optional[Dict[str, Any]] = None
        self._nodes: Sequence[GraphNode] = ()
        self._edges: Sequence[GraphEdge] = ()
        self._on_node_click: Optional[NodeClickHandler] = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def is_initialized(self) -> bool:
        return self._scene is not None

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    async def initialize(self) -> None:
        if self._scene is not None:
            await self.destroy()
        self._scene = self._create_scene()
        logger.debug(f"{self.name} backend initialized")

    def _create_scene(self) -> Dict[str, Any]:
        height = self.options.get("height")
        if not isinstance(height, (int, float)) or height <= 0:
            raise BackendInitError(f"{self.name}: viewport height must be positive, got {height!r}")
        return dict(self.options)

    def _require_scene(self) -> Dict[str, Any]:
        if self._scene is None:
            raise BackendInitError(f"{self.name} backend is not initialized")
        return self._scene

    def render(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge], on_node_click: NodeClickHandler) -> None:
        self._require_scene()
        self._nodes = nodes
        self._edges = edges
        self._on_node_click = on_node_click

    def clear(self) -> None:
        self._nodes = ()
        self._edges = ()

    async def destroy(self) -> None:
        if self._scene is not None:
            logger.debug(f"{self.name} backend destroyed")
        self.clear()
        self._on_node_click = None
        self._scene = None

    def dispatch_click(self, node_id: str) -> None:
        self._require_scene()
        node = next((n for n in self._nodes if n.id == node_id), None)
        if node is None:
            logger.debug(f"{self.name}: click on unrendered node {node_id}")
            return
        if self._on_node_click is not None:
            self._on_node_click(node)

    def _node_payload(self, node: GraphNode) -> Dict[str, Any]:
        return node.to_wire()

    def _scene_options(self) -> Dict[str, Any]:
        return dict(self._scene or self.options)

    def to_html(self, details: Optional[Mapping[str, NodeDetail]] = None) -> str:
        """Generate a self-contained HTML document for the current render."""
        graph_data = {
            "nodes": [self._node_payload(n) for n in self._nodes],
            "edges": [e.to_wire() for e in self._edges],
            "details": {k: v.to_wire() for k, v in (details or {}).items()},
            "options": self._scene_options(),
        }
        # Keep embedded markup from closing the script element
        json_data = json.dumps(graph_data).replace("</", "<\\/")
        return self.template.replace("__GRAPH_DATA__", json_data)


class PlanarBackend(ForceGraphBackend):
    """2D force layout rendered with D3."""

    kind = BackendKind.PLANAR
    template = PLANAR_TEMPLATE
    default_options = {
        "height": 600,
        "linkDistance": 100,
        "charge": -300,
        "collisionRadius": 30,
        "zoomExtent": [0.1, 4],
    }


class SpatialBackend(ForceGraphBackend):
    """3D force graph; supports camera view commands."""

    kind = BackendKind.SPATIAL
    template = SPATIAL_TEMPLATE
    default_options = {
        "height": 600,
        "linkDistance": 150,
        "charge": -1000,
        "collisionRadius": 30,
        "particleSpeed": 0.005,
    }

    def _create_scene(self) -> Dict[str, Any]:
        scene = super()._create_scene()
        scene["viewCommands"] = []
        return scene

    def _node_payload(self, node: GraphNode) -> Dict[str, Any]:
        payload = node.to_wire()
        if isinstance(node, HeadingNode):
            payload["val"] = (20 - node.level * 2) * 100
        else:
            payload["val"] = 15 * 100
        return payload

    def reset_camera(self) -> None:
        self._queue_view_command("reset_camera")

    def zoom_to_fit(self) -> None:
        self._queue_view_command("zoom_to_fit")

    def _queue_view_command(self, command: str) -> None:
        # One pending entry per command, most recent last
        commands = self._require_scene()["viewCommands"]
        if command in commands:
            commands.remove(command)
        commands.append(command)

    @property
    def view_commands(self) -> List[str]:
        return list((self._scene or {}).get("viewCommands", []))


BackendFactory = Callable[..., RenderingBackend]

_REGISTRY: Dict[str, BackendFactory] = {
    BackendKind.PLANAR.value: PlanarBackend,
    BackendKind.SPATIAL.value: SpatialBackend,
}


def register_backend(kind: str, factory: BackendFactory) -> None:
    """Register a backend factory under a kind name."""
    _REGISTRY[str(kind)] = factory


def available_backends() -> List[str]:
    return sorted(_REGISTRY)


def create_backend(kind: str, **options: Any) -> RenderingBackend:
    """Instantiate a registered backend. Unknown kinds raise ``BackendInitError``."""
    factory = _REGISTRY.get(str(kind))
    if factory is None:
        raise BackendInitError(f"Unknown rendering backend: {kind}")
    return factory(**options)
