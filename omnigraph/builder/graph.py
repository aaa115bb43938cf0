"""Omni Graph - the validated omnichain topology.

The graph is the single artifact handed to the wiring process. It holds:

1. **Nodes**: every contract deployment, one per (chain, contract name)
2. **Edges**: every enabled directed connection with its enforced options

Constructing an OmniGraph runs every invariant check first, so no instance
with an unchecked invariant can exist. It is read-only afterwards. Lookups
are served from indexes built once at construction.
"""

from types import MappingProxyType
from typing import Any

from omnigraph.builder.validation import validate
from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_edges import Edge, ExecutorOptionType, MessageTypeOption
from omnigraph.models.graph_nodes import EndpointPoint

NodeKey = tuple[int, str]


class OmniGraph:
    """Immutable, validated graph of deployments and connections."""

    __slots__ = ("_nodes", "_edges", "_node_index", "_edge_index", "_outgoing")

    def __init__(
        self,
        nodes: tuple[EndpointPoint, ...],
        edges: tuple[Edge, ...],
        chains: ChainRegistry | None = None,
    ):
        nodes = tuple(nodes)
        edges = tuple(edges)
        validate(nodes, edges, chains)

        outgoing: dict[NodeKey, list[Edge]] = {point.key: [] for point in nodes}
        for edge in edges:
            outgoing[edge.source.key].append(edge)

        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_edges", edges)
        object.__setattr__(
            self, "_node_index", MappingProxyType({p.key: p for p in nodes})
        )
        object.__setattr__(
            self, "_edge_index", MappingProxyType({e.key: e for e in edges})
        )
        object.__setattr__(
            self,
            "_outgoing",
            MappingProxyType({k: tuple(v) for k, v in outgoing.items()}),
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OmniGraph is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("OmniGraph is immutable")

    @property
    def nodes(self) -> tuple[EndpointPoint, ...]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def chain_ids(self) -> tuple[int, ...]:
        """Distinct chain ids, in node declaration order."""
        return tuple(dict.fromkeys(p.chain_id for p in self._nodes))

    def resolve(self, chain_id: int, contract_name: str) -> EndpointPoint | None:
        """Get a node by chain id and contract name."""
        return self._node_index.get((chain_id, contract_name))

    def edges_from(self, point: EndpointPoint) -> tuple[Edge, ...]:
        """Get the outgoing edges of a node, in declaration order."""
        return self._outgoing.get(point.key, ())

    def edges_to(self, point: EndpointPoint) -> tuple[Edge, ...]:
        """Get the incoming edges of a node, in declaration order."""
        return tuple(e for e in self._edges if e.target.key == point.key)

    def edge(self, source: EndpointPoint, target: EndpointPoint) -> Edge | None:
        """Get the edge for an ordered pair of nodes."""
        return self._edge_index.get((source.key, target.key))

    def enforced_options(
        self,
        source: EndpointPoint,
        target: EndpointPoint,
        msg_type: int,
    ) -> tuple[MessageTypeOption, ...]:
        """Get every enforced option for a message type on an edge."""
        edge = self.edge(source, target)
        if edge is None:
            return ()
        return edge.config.options_for(msg_type)

    def enforced_floor(
        self,
        source: EndpointPoint,
        target: EndpointPoint,
        msg_type: int,
        option_type: ExecutorOptionType | None = None,
        index: int | None = None,
    ) -> MessageTypeOption | None:
        """Get the floor applying to a message type on an edge.

        Returns the first matching option in declaration order, narrowed by
        ``option_type`` and ``index`` when given. None means no floor is
        configured and caller-supplied values pass through unconstrained.
        """
        for option in self.enforced_options(source, target, msg_type):
            if option_type is not None and option.option_type != option_type:
                continue
            if index is not None and option.index != index:
                continue
            return option
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the graph to the literal declaration shape."""
        return {
            "contracts": [{"contract": p.to_declaration()} for p in self._nodes],
            "connections": [e.to_declaration() for e in self._edges],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OmniGraph):
            return NotImplemented
        return self._nodes == other._nodes and self._edges == other._edges

    def __hash__(self) -> int:
        return hash((self._nodes, self._edges))

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"OmniGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"
