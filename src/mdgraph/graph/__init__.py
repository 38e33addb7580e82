from .backends import (
    PlanarBackend,
    RenderingBackend,
    SpatialBackend,
    available_backends,
    create_backend,
    register_backend,
)
from .detail import MarkdownInlineRenderer, build_detail

__all__ = [
    "PlanarBackend",
    "RenderingBackend",
    "SpatialBackend",
    "available_backends",
    "create_backend",
    "register_backend",
    "MarkdownInlineRenderer",
    "build_detail",
]
