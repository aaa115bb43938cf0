"""Typed errors raised while building an omni graph.

Every error carries a kind tag and the fields that identify the offending
declaration entry, so re-running a build with the same input reproduces an
equal error.
"""

from enum import Enum
from typing import Any

from omnigraph.models.graph_edges import ExecutorOptionType
from omnigraph.models.graph_nodes import EndpointPoint


class GraphErrorKind(str, Enum):
    """Types of graph validation failures."""

    DUPLICATE_NODE = "duplicate_node"
    UNKNOWN_CHAIN = "unknown_chain"
    UNKNOWN_ENDPOINT = "unknown_endpoint"
    SELF_LOOP = "self_loop"
    DUPLICATE_EDGE = "duplicate_edge"
    INVALID_OPTION = "invalid_option"
    DUPLICATE_OPTION = "duplicate_option"


class GraphError(Exception):
    """Base class for graph validation failures."""

    kind: GraphErrorKind

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphError):
            return NotImplemented
        return self.kind == other.kind and self.details == other.details

    def __hash__(self) -> int:
        return hash((self.kind, repr(sorted(self.details.items()))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class DuplicateNodeError(GraphError):
    kind = GraphErrorKind.DUPLICATE_NODE

    def __init__(self, chain_id: int, contract_name: str):
        super().__init__(
            f"Contract '{contract_name}' declared twice on chain {chain_id}",
            chain_id=chain_id,
            contract_name=contract_name,
        )


class UnknownChainError(GraphError):
    kind = GraphErrorKind.UNKNOWN_CHAIN

    def __init__(self, chain_id: int | str):
        super().__init__(
            f"Chain {chain_id!r} is not a recognized chain",
            chain_id=chain_id,
        )


class UnknownEndpointError(GraphError):
    """An edge references a node that was never declared."""

    kind = GraphErrorKind.UNKNOWN_ENDPOINT

    def __init__(self, edge_index: int, which: str, point: EndpointPoint):
        super().__init__(
            f"Edge {edge_index}: '{which}' endpoint {point} is not a declared contract",
            edge_index=edge_index,
            which=which,
            chain_id=point.chain_id,
            contract_name=point.contract_name,
        )


class SelfLoopError(GraphError):
    kind = GraphErrorKind.SELF_LOOP

    def __init__(self, chain_id: int, contract_name: str):
        super().__init__(
            f"Contract '{contract_name}' on chain {chain_id} is connected to itself",
            chain_id=chain_id,
            contract_name=contract_name,
        )


class DuplicateEdgeError(GraphError):
    kind = GraphErrorKind.DUPLICATE_EDGE

    def __init__(self, source: EndpointPoint, target: EndpointPoint):
        super().__init__(
            f"Connection {source} -> {target} declared more than once",
            source=source.key,
            target=target.key,
        )


class InvalidOptionError(GraphError):
    """An enforced option has an out-of-range or inconsistent field."""

    kind = GraphErrorKind.INVALID_OPTION

    def __init__(self, edge_index: int, option_index: int, field: str, reason: str):
        super().__init__(
            f"Edge {edge_index}, option {option_index}: invalid '{field}': {reason}",
            edge_index=edge_index,
            option_index=option_index,
            field=field,
            reason=reason,
        )


class DuplicateOptionError(GraphError):
    kind = GraphErrorKind.DUPLICATE_OPTION

    def __init__(
        self,
        edge_index: int,
        msg_type: int,
        option_type: ExecutorOptionType,
        index: int | None,
    ):
        super().__init__(
            f"Edge {edge_index}: option for msgType {msg_type} "
            f"({option_type.name}, index={index}) declared more than once",
            edge_index=edge_index,
            msg_type=msg_type,
            option_type=option_type,
            index=index,
        )
