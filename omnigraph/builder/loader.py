"""Load an omni graph from its literal declaration."""

from typing import Any

import structlog

from omnigraph.builder.builder import build
from omnigraph.builder.errors import UnknownChainError
from omnigraph.builder.graph import OmniGraph
from omnigraph.chains import ChainRegistry
from omnigraph.models.declaration import OmniGraphDeclaration, PointSpec
from omnigraph.models.graph_edges import Edge
from omnigraph.models.graph_nodes import EndpointPoint

logger = structlog.get_logger()


def resolve_point(spec: PointSpec, chains: ChainRegistry | None) -> EndpointPoint:
    """Turn a declared contract reference into a node, resolving chain names."""
    if isinstance(spec.eid, int):
        chain_id = spec.eid
    else:
        chain_id = chains.id_of(spec.eid) if chains is not None else None
        if chain_id is None:
            raise UnknownChainError(spec.eid)
    return EndpointPoint(chain_id=chain_id, contract_name=spec.contract_name)


def load_declaration(
    data: dict[str, Any] | OmniGraphDeclaration,
    chains: ChainRegistry | None = None,
) -> OmniGraph:
    """Parse a declaration and build the graph.

    Raises:
        pydantic.ValidationError: The declaration is malformed
        GraphError: The declaration violates a graph invariant
    """
    declaration = (
        data
        if isinstance(data, OmniGraphDeclaration)
        else OmniGraphDeclaration.from_dict(data)
    )

    nodes = [resolve_point(c.contract, chains) for c in declaration.contracts]
    edges = [
        Edge(
            source=resolve_point(c.source, chains),
            target=resolve_point(c.target, chains),
            config=c.config,
        )
        for c in declaration.connections
    ]

    logger.debug(
        "Declaration parsed",
        contract_count=len(nodes),
        connection_count=len(edges),
    )
    return build(nodes, edges, chains)
