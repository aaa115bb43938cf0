"""Omni graph construction and validation."""

from .builder import OmniGraphBuilder, build
from .errors import (
    DuplicateEdgeError,
    DuplicateNodeError,
    DuplicateOptionError,
    GraphError,
    GraphErrorKind,
    InvalidOptionError,
    SelfLoopError,
    UnknownChainError,
    UnknownEndpointError,
)
from .graph import OmniGraph
from .loader import load_declaration

__all__ = [
    "build",
    "load_declaration",
    "OmniGraph",
    "OmniGraphBuilder",
    # Errors
    "GraphError",
    "GraphErrorKind",
    "DuplicateNodeError",
    "UnknownChainError",
    "UnknownEndpointError",
    "SelfLoopError",
    "DuplicateEdgeError",
    "InvalidOptionError",
    "DuplicateOptionError",
]
