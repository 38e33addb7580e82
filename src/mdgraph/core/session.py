"""
Session Controller.

Owns the current graph snapshot, the selected node and the active rendering
backend, and orchestrates the transitions between them:

- load: remote parse first, local parse on any remote failure
- clear: drop the snapshot and the backend's scene contents
- select: resolve a node id into a detail payload
- switch backend: bring up the target before tearing down the current one

The controller is single-threaded and driven from an asyncio event loop.
Remote calls run in a worker thread so the loop stays responsive; all state
changes happen on the loop.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Union

from ..graph.backends import RenderingBackend, create_backend
from ..graph.detail import MarkdownInlineRenderer, build_detail
from ..parsing.base import ParseResult, ParseSource
from ..parsing.markdown import MarkdownParser
from ..parsing.remote import RemoteParseClient
from .errors import BackendInitError, ParseInputError, SessionBusyError, UnknownNodeSelected
from .types import BackendKind, GraphSnapshot, GraphStats, HeadingNode, NodeDetail, ReferenceNode, SessionState

logger = logging.getLogger(__name__)

BackendFactory = Callable[..., RenderingBackend]


class SessionController:
    """
    State machine for one interactive graph session.

    States are ``empty``, ``loaded`` and ``switching``. While a backend
    switch is in flight, ``load_content``, ``select``, ``clear`` and a second
    ``switch_backend`` are rejected with ``SessionBusyError``.
    """

    def __init__(
        self,
        backend: Union[BackendKind, str] = BackendKind.PLANAR,
        remote_client: Optional[RemoteParseClient] = None,
        parser: Optional[MarkdownParser] = None,
        renderer: Optional[MarkdownInlineRenderer] = None,
        backend_factory: BackendFactory = create_backend,
        backend_options: Optional[Dict[str, Any]] = None,
    ):
        self._remote = remote_client
        self._parser = parser or MarkdownParser()
        self._renderer = renderer or MarkdownInlineRenderer()
        self._backend_factory = backend_factory
        self._backend_options = dict(backend_options or {})

        self._active_kind = str(backend)
        self._backend: RenderingBackend = backend_factory(self._active_kind, **self._backend_options)

        self._snapshot = GraphSnapshot.empty()
        self._loaded = False
        self._selected_id: Optional[str] = None
        self._selected_detail: Optional[NodeDetail] = None
        self._filename: Optional[str] = None
        self._stats: Optional[GraphStats] = None
        self._source: Optional[ParseSource] = None
        self._metadata: Dict[str, Any] = {}

        self._switching = False
        self._issued = 0
        self._adopted = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self._switching:
            return SessionState.SWITCHING
        return SessionState.LOADED if self._loaded else SessionState.EMPTY

    @property
    def snapshot(self) -> GraphSnapshot:
        return self._snapshot

    @property
    def active_backend(self) -> str:
        return self._active_kind

    @property
    def backend(self) -> RenderingBackend:
        return self._backend

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_detail(self) -> Optional[NodeDetail]:
        return self._selected_detail

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def stats(self) -> Optional[GraphStats]:
        return self._stats

    @property
    def source(self) -> Optional[ParseSource]:
        return self._source

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Initialize the active backend and render whatever is loaded."""
        if self._backend.is_initialized:
            return
        await self._initialize(self._backend, self._active_kind)
        self._render_current()

    async def close(self) -> None:
        await self._backend.destroy()

    async def __aenter__(self) -> "SessionController":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def load_content(
        self,
        text: str,
        filename: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[ParseResult]:
        """
        Parse ``text`` and adopt the result as the current snapshot.

        Returns the adopted result, or None when a newer load was adopted
        while this one was waiting on the remote service.
        """
        self._reject_while_switching("load content")
        if not isinstance(text, str) or not text:
            raise ParseInputError("Markdown content must be a non-empty string")

        self._issued += 1
        ticket = self._issued

        result = await self._parse(text, filename, metadata)

        if ticket < self._adopted:
            logger.debug(f"Discarding superseded parse #{ticket} (current #{self._adopted})")
            return None

        self._adopted = ticket
        self._snapshot = result.snapshot
        self._stats = result.stats
        self._source = result.source
        self._metadata = dict(result.metadata)
        # The caller's filename wins over whatever the service reports
        self._filename = filename or result.filename
        self._loaded = True
        self._clear_selection()

        if not self._switching:
            self._render_current()
        return result

    async def _parse(self, text: str, filename: Optional[str], metadata: Optional[Dict[str, Any]]) -> ParseResult:
        if self._remote is not None and self._remote.is_configured:
            outcome = await asyncio.to_thread(self._remote.parse, text, filename, metadata)
            if outcome.is_ok():
                return outcome.unwrap()
            logger.warning(f"Remote parse failed, falling back to local parse: {outcome.unwrap_err()}")
        return self._parser.parse_document(text, filename, metadata)

    def clear(self) -> None:
        """Drop the snapshot. Pending loads issued before this call are discarded."""
        self._reject_while_switching("clear")
        self._adopted = self._issued + 1
        self._issued = self._adopted
        if not self._loaded:
            return
        self._snapshot = GraphSnapshot.empty()
        self._loaded = False
        self._filename = None
        self._stats = None
        self._source = None
        self._metadata = {}
        self._clear_selection()
        if self._backend.is_initialized:
            self._backend.clear()

    def select(self, node_id: str, strict: bool = False) -> Optional[NodeDetail]:
        """
        Select a node and return its detail payload.

        Unknown ids leave the selection untouched and return None, or raise
        ``UnknownNodeSelected`` when ``strict`` is set.
        """
        self._reject_while_switching("select")
        node = self._snapshot.get_node(node_id)
        if node is None:
            if strict:
                raise UnknownNodeSelected(node_id)
            logger.debug(f"Ignoring selection of unknown node {node_id}")
            return None

        self._selected_id = node_id
        self._selected_detail = self._detail(node)
        return self._selected_detail

    async def switch_backend(self, target: Union[BackendKind, str]) -> bool:
        """
        Move the session to another rendering backend.

        Returns False when ``target`` is already active. If the target fails
        to initialize, the current backend stays active and rendered and the
        ``BackendInitError`` is re-raised.
        """
        target = str(target)
        self._reject_while_switching("switch backend")
        if target == self._active_kind:
            return False

        self._switching = True
        try:
            candidate = await self._create_initialized(target)
            previous = self._backend
            try:
                await previous.destroy()
            except Exception as e:
                # The candidate is already live, so it is adopted regardless
                logger.error(f"Teardown of {self._active_kind} backend failed: {e}")
            self._backend = candidate
            self._active_kind = target
            logger.debug(f"Switched backend to {target}")
        finally:
            self._switching = False
            self._render_current()
        return True

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    def detail_for(self, node_id: str) -> Optional[NodeDetail]:
        """Detail payload for a node without changing the selection."""
        node = self._snapshot.get_node(node_id)
        return self._detail(node) if node is not None else None

    def detail_map(self) -> Dict[str, NodeDetail]:
        return {node.id: self._detail(node) for node in self._snapshot.nodes}

    def export_html(self) -> str:
        """Self-contained document of the active backend's current render."""
        return self._backend.to_html(self.detail_map())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _detail(self, node: Union[HeadingNode, ReferenceNode]) -> NodeDetail:
        return build_detail(node, self._snapshot.sections, self._renderer)

    def _clear_selection(self) -> None:
        self._selected_id = None
        self._selected_detail = None

    def _reject_while_switching(self, action: str) -> None:
        if self._switching:
            raise SessionBusyError(f"Cannot {action} while a backend switch is in progress")

    def _handle_node_click(self, node: Union[HeadingNode, ReferenceNode]) -> None:
        try:
            self.select(node.id)
        except SessionBusyError as e:
            logger.debug(f"Click on {node.id} ignored: {e}")

    def _render_current(self) -> None:
        if not self._backend.is_initialized:
            return
        if self._snapshot.is_empty:
            self._backend.clear()
            return
        self._backend.render(self._snapshot.nodes, self._snapshot.edges, self._handle_node_click)

    async def _initialize(self, backend: RenderingBackend, kind: str) -> None:
        try:
            await backend.initialize()
        except BackendInitError:
            raise
        except Exception as e:
            raise BackendInitError(f"{kind} backend failed to initialize: {e}") from e

    async def _create_initialized(self, kind: str) -> RenderingBackend:
        candidate: Optional[RenderingBackend] = None
        try:
            candidate = self._backend_factory(kind, **self._backend_options)
            await self._initialize(candidate, kind)
            return candidate
        except Exception as e:
            logger.error(f"Backend switch to {kind} failed: {e}")
            if candidate is not None:
                await candidate.destroy()
            if isinstance(e, BackendInitError):
                raise
            raise BackendInitError(f"{kind} backend failed to initialize: {e}") from e
