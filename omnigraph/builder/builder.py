"""Omni Graph Builder - validating constructor for the topology.

``build`` normalizes a literal declaration (Edge objects, tuples or
mappings) and hands it to OmniGraph, which runs the ordered invariant
checks in ``validation``. The first violation is raised as a GraphError;
no graph is returned unless every check passes.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Union

import structlog

from omnigraph.builder.errors import GraphError
from omnigraph.builder.graph import OmniGraph
from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_edges import Edge, EdgeConfig
from omnigraph.models.graph_nodes import EndpointPoint

logger = structlog.get_logger()

EdgeDeclaration = Union[
    Edge,
    tuple[EndpointPoint, EndpointPoint, EdgeConfig],
    tuple[EndpointPoint, EndpointPoint],
]


def build(
    nodes: Iterable[EndpointPoint],
    edges: Iterable[EdgeDeclaration],
    chains: ChainRegistry | None = None,
) -> OmniGraph:
    """Validate a declaration and materialize the graph.

    Args:
        nodes: Contract deployments, in declaration order
        edges: Edge objects or ``(from, to[, config])`` tuples
        chains: Recognized chain ids; when omitted any chain id is accepted

    Returns:
        The validated, immutable graph

    Raises:
        GraphError: The first violated invariant
    """
    node_list = tuple(_coerce_point(n) for n in nodes)
    edge_list = tuple(_coerce_edge(e) for e in edges)

    try:
        graph = OmniGraph(node_list, edge_list, chains)
    except GraphError as e:
        logger.warning("Omni graph rejected", kind=e.kind.value, **e.details)
        raise

    logger.info(
        "Omni graph built",
        node_count=len(node_list),
        edge_count=len(edge_list),
        chain_count=len(graph.chain_ids),
    )
    return graph


def _coerce_point(point: EndpointPoint | Mapping[str, Any]) -> EndpointPoint:
    if isinstance(point, EndpointPoint):
        return point
    return EndpointPoint.model_validate(point)


def _coerce_edge(edge: EdgeDeclaration | Mapping[str, Any]) -> Edge:
    if isinstance(edge, Edge):
        return edge
    if isinstance(edge, Mapping):
        return Edge.model_validate(edge)

    source, target, *rest = edge
    config = rest[0] if rest else EdgeConfig()
    if isinstance(config, Mapping):
        config = EdgeConfig.model_validate(config)
    return Edge(source=_coerce_point(source), target=_coerce_point(target), config=config)


class OmniGraphBuilder:
    """Fluent builder for an OmniGraph.

    Collects contracts and connections in declaration order; nothing is
    validated until ``build`` is called.
    """

    def __init__(self, chains: ChainRegistry | None = None):
        self._chains = chains
        self._nodes: list[EndpointPoint] = []
        self._edges: list[Edge] = []
        self._logger = logger.bind(component="OmniGraphBuilder")

    def add_contract(self, point: EndpointPoint) -> "OmniGraphBuilder":
        """Declare a contract deployment."""
        self._nodes.append(point)
        return self

    def add_contracts(self, points: Iterable[EndpointPoint]) -> "OmniGraphBuilder":
        for point in points:
            self.add_contract(point)
        return self

    def connect(
        self,
        source: EndpointPoint,
        target: EndpointPoint,
        config: EdgeConfig | None = None,
    ) -> "OmniGraphBuilder":
        """Declare a directed connection."""
        self._edges.append(
            Edge(source=source, target=target, config=config or EdgeConfig())
        )
        return self

    def connect_bidirectional(
        self,
        a: EndpointPoint,
        b: EndpointPoint,
        config: EdgeConfig | None = None,
    ) -> "OmniGraphBuilder":
        """Declare ``a -> b`` and ``b -> a`` with the same config."""
        return self.connect(a, b, config).connect(b, a, config)

    def connect_mesh(
        self,
        points: Iterable[EndpointPoint],
        config: EdgeConfig | None = None,
    ) -> "OmniGraphBuilder":
        """Connect every ordered pair of distinct points."""
        points = list(points)
        for source in points:
            for target in points:
                if source.key != target.key:
                    self.connect(source, target, config)
        return self

    def build(self) -> OmniGraph:
        """Validate and build the graph."""
        self._logger.debug(
            "Building omni graph",
            node_count=len(self._nodes),
            edge_count=len(self._edges),
        )
        return build(self._nodes, self._edges, self._chains)
