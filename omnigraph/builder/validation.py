"""Invariant checks for an omni graph declaration.

Each step is a full pass over the declaration, and the steps run in a
fixed order so the same input always fails with the same error:

1. Node uniqueness (then chain recognition, when a registry is injected)
2. Edge endpoint resolution
3. No self-loops
4. Edge uniqueness
5. Per-option field validation
6. Option uniqueness per edge
"""

from omnigraph.builder.errors import (
    DuplicateEdgeError,
    DuplicateNodeError,
    DuplicateOptionError,
    InvalidOptionError,
    SelfLoopError,
    UnknownChainError,
    UnknownEndpointError,
)
from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_edges import Edge, ExecutorOptionType, MessageTypeOption
from omnigraph.models.graph_nodes import EndpointPoint


def validate(
    nodes: tuple[EndpointPoint, ...],
    edges: tuple[Edge, ...],
    chains: ChainRegistry | None = None,
) -> None:
    """Raise the first violated invariant, if any."""
    _check_unique_nodes(nodes)
    if chains is not None:
        _check_known_chains(nodes, chains)
    _check_endpoints(nodes, edges)
    _check_self_loops(edges)
    _check_unique_edges(edges)
    _check_option_fields(edges)
    _check_unique_options(edges)


def _check_unique_nodes(nodes: tuple[EndpointPoint, ...]) -> None:
    seen: set[tuple[int, str]] = set()
    for point in nodes:
        if point.key in seen:
            raise DuplicateNodeError(point.chain_id, point.contract_name)
        seen.add(point.key)


def _check_known_chains(nodes: tuple[EndpointPoint, ...], chains: ChainRegistry) -> None:
    for point in nodes:
        if point.chain_id not in chains:
            raise UnknownChainError(point.chain_id)


def _check_endpoints(nodes: tuple[EndpointPoint, ...], edges: tuple[Edge, ...]) -> None:
    declared = {point.key for point in nodes}
    for edge_index, edge in enumerate(edges):
        if edge.source.key not in declared:
            raise UnknownEndpointError(edge_index, "from", edge.source)
        if edge.target.key not in declared:
            raise UnknownEndpointError(edge_index, "to", edge.target)


def _check_self_loops(edges: tuple[Edge, ...]) -> None:
    for edge in edges:
        if edge.source.key == edge.target.key:
            raise SelfLoopError(edge.source.chain_id, edge.source.contract_name)


def _check_unique_edges(edges: tuple[Edge, ...]) -> None:
    seen: set[tuple[tuple[int, str], tuple[int, str]]] = set()
    for edge in edges:
        if edge.key in seen:
            raise DuplicateEdgeError(edge.source, edge.target)
        seen.add(edge.key)


def _check_option_fields(edges: tuple[Edge, ...]) -> None:
    for edge_index, edge in enumerate(edges):
        for option_index, option in enumerate(edge.config.enforced_options):
            problem = _option_problem(option)
            if problem is not None:
                field, reason = problem
                raise InvalidOptionError(edge_index, option_index, field, reason)


def _check_unique_options(edges: tuple[Edge, ...]) -> None:
    for edge_index, edge in enumerate(edges):
        seen: set[tuple[int, ExecutorOptionType, int | None]] = set()
        for option in edge.config.enforced_options:
            if option.key in seen:
                raise DuplicateOptionError(
                    edge_index, option.msg_type, option.option_type, option.index
                )
            seen.add(option.key)


def _option_problem(option: MessageTypeOption) -> tuple[str, str] | None:
    """Return the first (field, reason) violation of an option, if any."""
    if option.msg_type < 1:
        return "msg_type", f"must be a positive integer, got {option.msg_type}"
    if option.gas < 0:
        return "gas", f"must be non-negative, got {option.gas}"
    if option.value < 0:
        return "value", f"must be non-negative, got {option.value}"

    if option.option_type == ExecutorOptionType.COMPOSE:
        if option.index is None:
            return "index", "required for COMPOSE options"
        if option.index < 0:
            return "index", f"must be non-negative, got {option.index}"
    elif option.index is not None:
        return "index", f"only allowed for COMPOSE options, not {option.option_type.name}"

    return None
