"""Data models for the omnichain topology."""

from .graph_nodes import EndpointPoint
from .graph_edges import (
    Edge,
    EdgeConfig,
    ExecutorOptionType,
    MessageTypeOption,
)
from .declaration import (
    ConnectionSpec,
    ContractSpec,
    OmniGraphDeclaration,
    PointSpec,
)

__all__ = [
    # Nodes
    "EndpointPoint",
    # Edges
    "Edge",
    "EdgeConfig",
    "ExecutorOptionType",
    "MessageTypeOption",
    # Declaration
    "ConnectionSpec",
    "ContractSpec",
    "OmniGraphDeclaration",
    "PointSpec",
]
