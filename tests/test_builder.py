"""Tests for the omni graph builder validation pass."""

import pytest

from omnigraph.builder import (
    DuplicateEdgeError,
    DuplicateNodeError,
    DuplicateOptionError,
    GraphError,
    GraphErrorKind,
    InvalidOptionError,
    OmniGraph,
    OmniGraphBuilder,
    SelfLoopError,
    UnknownChainError,
    UnknownEndpointError,
    build,
)
from omnigraph.models.graph_edges import Edge, EdgeConfig, ExecutorOptionType
from omnigraph.models.graph_nodes import EndpointPoint


class TestBuildSuccess:
    """Tests for valid declarations."""

    def test_two_chain_scenario(self, optsep_oapp, basesep_oapp, receive_option):
        """Bidirectional two-chain OApp builds and exposes its floors."""
        config = EdgeConfig(enforced_options=(receive_option,))
        graph = build(
            [optsep_oapp, basesep_oapp],
            [
                (optsep_oapp, basesep_oapp, config),
                (basesep_oapp, optsep_oapp, config),
            ],
        )

        assert isinstance(graph, OmniGraph)
        floor = graph.enforced_floor(optsep_oapp, basesep_oapp, 1)
        assert floor is not None
        assert floor.gas == 100_000
        assert floor.value == 0
        assert graph.enforced_floor(optsep_oapp, basesep_oapp, 2) is None

    def test_accepts_edge_objects(self, optsep_oapp, basesep_oapp, edge_config):
        """Edge instances and tuples are interchangeable."""
        edge = Edge(source=optsep_oapp, target=basesep_oapp, config=edge_config)
        from_edge = build([optsep_oapp, basesep_oapp], [edge])
        from_tuple = build(
            [optsep_oapp, basesep_oapp], [(optsep_oapp, basesep_oapp, edge_config)]
        )

        assert from_edge == from_tuple

    def test_edge_without_config(self, optsep_oapp, basesep_oapp):
        """A two-item tuple declares a connection with no enforced options."""
        graph = build([optsep_oapp, basesep_oapp], [(optsep_oapp, basesep_oapp)])

        assert graph.edges[0].config.enforced_options == ()

    def test_same_contract_name_on_different_chains(self, optsep_oapp, basesep_oapp):
        """Contract names only need to be unique per chain."""
        graph = build([optsep_oapp, basesep_oapp], [])

        assert len(graph.nodes) == 2

    def test_different_contracts_on_same_chain(self, optsep_oapp):
        """A chain may host several differently named contracts."""
        other = EndpointPoint(chain_id=optsep_oapp.chain_id, contract_name="MyOFT")
        graph = build([optsep_oapp, other], [(optsep_oapp, other)])

        assert graph.edge(optsep_oapp, other) is not None

    def test_empty_declaration(self):
        graph = build([], [])

        assert graph.nodes == ()
        assert graph.edges == ()

    def test_same_msg_type_with_different_option_types(
        self, optsep_oapp, basesep_oapp, make_option
    ):
        """(msgType, optionType, index) is the option identity, not msgType alone."""
        config = EdgeConfig(
            enforced_options=(
                make_option(msg_type=1),
                make_option(msg_type=1, option_type=ExecutorOptionType.COMPOSE, index=0),
                make_option(msg_type=1, option_type=ExecutorOptionType.COMPOSE, index=1),
            )
        )
        graph = build([optsep_oapp, basesep_oapp], [(optsep_oapp, basesep_oapp, config)])

        assert len(graph.enforced_options(optsep_oapp, basesep_oapp, 1)) == 3


class TestNodeValidation:
    """Tests for node uniqueness and chain recognition."""

    def test_duplicate_node(self, optsep_oapp, basesep_oapp):
        """Two equal (chain, contract) pairs are rejected."""
        duplicate = EndpointPoint(chain_id=optsep_oapp.chain_id, contract_name="MyOApp")

        with pytest.raises(DuplicateNodeError) as exc_info:
            build([optsep_oapp, basesep_oapp, duplicate], [])

        assert exc_info.value.kind == GraphErrorKind.DUPLICATE_NODE
        assert exc_info.value.details == {
            "chain_id": optsep_oapp.chain_id,
            "contract_name": "MyOApp",
        }

    def test_unknown_chain_with_registry(self, chains, optsep_oapp):
        stray = EndpointPoint(chain_id=99999, contract_name="MyOApp")

        with pytest.raises(UnknownChainError) as exc_info:
            build([optsep_oapp, stray], [], chains)

        assert exc_info.value.details == {"chain_id": 99999}

    def test_any_chain_without_registry(self):
        stray = EndpointPoint(chain_id=99999, contract_name="MyOApp")

        graph = build([stray], [])

        assert graph.resolve(99999, "MyOApp") == stray

    def test_duplicate_node_reported_before_unknown_chain(self, chains):
        stray = EndpointPoint(chain_id=99999, contract_name="MyOApp")

        with pytest.raises(DuplicateNodeError):
            build([stray, stray], [], chains)


class TestEdgeValidation:
    """Tests for endpoint resolution, self-loops and edge uniqueness."""

    def test_unknown_target(self, optsep_oapp, basesep_oapp, arbsep_oapp):
        """Edges must reference declared nodes."""
        with pytest.raises(UnknownEndpointError) as exc_info:
            build(
                [optsep_oapp, basesep_oapp],
                [
                    (optsep_oapp, basesep_oapp),
                    (optsep_oapp, arbsep_oapp),
                ],
            )

        assert exc_info.value.details["edge_index"] == 1
        assert exc_info.value.details["which"] == "to"

    def test_unknown_source(self, optsep_oapp, arbsep_oapp):
        with pytest.raises(UnknownEndpointError) as exc_info:
            build([optsep_oapp], [(arbsep_oapp, optsep_oapp)])

        assert exc_info.value.details["edge_index"] == 0
        assert exc_info.value.details["which"] == "from"

    def test_self_loop(self, optsep_oapp, basesep_oapp):
        """A contract never sends a cross-chain message to itself."""
        with pytest.raises(SelfLoopError) as exc_info:
            build([optsep_oapp, basesep_oapp], [(optsep_oapp, optsep_oapp)])

        assert exc_info.value.kind == GraphErrorKind.SELF_LOOP
        assert exc_info.value.details["chain_id"] == optsep_oapp.chain_id

    def test_self_loop_by_value(self, optsep_oapp):
        """Endpoints are compared by (chain, contract), not object identity."""
        same = EndpointPoint(chain_id=optsep_oapp.chain_id, contract_name="MyOApp")

        with pytest.raises(SelfLoopError):
            build([optsep_oapp], [(optsep_oapp, same)])

    def test_self_loop_regardless_of_options(self, optsep_oapp, make_option):
        """Self-loops are rejected even when the options are also invalid."""
        config = EdgeConfig(enforced_options=(make_option(gas=-1),))

        with pytest.raises(SelfLoopError):
            build([optsep_oapp], [(optsep_oapp, optsep_oapp, config)])

    def test_duplicate_edge(self, optsep_oapp, basesep_oapp, edge_config):
        """The same ordered pair may only be declared once."""
        with pytest.raises(DuplicateEdgeError) as exc_info:
            build(
                [optsep_oapp, basesep_oapp],
                [
                    (optsep_oapp, basesep_oapp, edge_config),
                    (optsep_oapp, basesep_oapp, edge_config),
                ],
            )

        assert exc_info.value.details == {
            "source": optsep_oapp.key,
            "target": basesep_oapp.key,
        }

    def test_reverse_direction_is_not_duplicate(self, optsep_oapp, basesep_oapp):
        graph = build(
            [optsep_oapp, basesep_oapp],
            [(optsep_oapp, basesep_oapp), (basesep_oapp, optsep_oapp)],
        )

        assert len(graph.edges) == 2

    def test_endpoints_resolved_before_self_loops(
        self, optsep_oapp, basesep_oapp, arbsep_oapp
    ):
        """A dangling endpoint on edge 1 wins over a self-loop on edge 0."""
        with pytest.raises(UnknownEndpointError) as exc_info:
            build(
                [optsep_oapp, basesep_oapp],
                [(optsep_oapp, optsep_oapp), (optsep_oapp, arbsep_oapp)],
            )

        assert exc_info.value.details["edge_index"] == 1

    def test_self_loops_checked_before_duplicate_edges(self, optsep_oapp, basesep_oapp):
        """A self-loop on edge 2 wins over a duplicate pair on edges 0 and 1."""
        with pytest.raises(SelfLoopError):
            build(
                [optsep_oapp, basesep_oapp],
                [
                    (optsep_oapp, basesep_oapp),
                    (optsep_oapp, basesep_oapp),
                    (basesep_oapp, basesep_oapp),
                ],
            )

    def test_duplicate_edges_checked_before_options(
        self, optsep_oapp, basesep_oapp, make_option
    ):
        bad = EdgeConfig(enforced_options=(make_option(gas=-1),))

        with pytest.raises(DuplicateEdgeError):
            build(
                [optsep_oapp, basesep_oapp],
                [(optsep_oapp, basesep_oapp, bad), (optsep_oapp, basesep_oapp)],
            )


class TestOptionValidation:
    """Tests for per-option field checks and option uniqueness."""

    def _build_with(self, optsep_oapp, basesep_oapp, *options):
        config = EdgeConfig(enforced_options=options)
        return build([optsep_oapp, basesep_oapp], [(optsep_oapp, basesep_oapp, config)])

    def test_compose_requires_index(self, optsep_oapp, basesep_oapp, make_option):
        option = make_option(option_type=ExecutorOptionType.COMPOSE)

        with pytest.raises(InvalidOptionError) as exc_info:
            self._build_with(optsep_oapp, basesep_oapp, option)

        assert exc_info.value.details["field"] == "index"
        assert exc_info.value.details["option_index"] == 0

    def test_receive_rejects_index(self, optsep_oapp, basesep_oapp, make_option):
        option = make_option(index=0)

        with pytest.raises(InvalidOptionError) as exc_info:
            self._build_with(optsep_oapp, basesep_oapp, option)

        assert exc_info.value.details["field"] == "index"

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"gas": -1}, "gas"),
            ({"value": -5}, "value"),
            ({"msg_type": 0}, "msg_type"),
            ({"option_type": ExecutorOptionType.COMPOSE, "index": -1}, "index"),
        ],
    )
    def test_invalid_fields(self, optsep_oapp, basesep_oapp, make_option, overrides, field):
        """Each out-of-range field is named in the error."""
        valid = make_option(msg_type=7)
        with pytest.raises(InvalidOptionError) as exc_info:
            self._build_with(optsep_oapp, basesep_oapp, valid, make_option(**overrides))

        assert exc_info.value.kind == GraphErrorKind.INVALID_OPTION
        assert exc_info.value.details["edge_index"] == 0
        assert exc_info.value.details["option_index"] == 1
        assert exc_info.value.details["field"] == field

    def test_zero_gas_and_value_allowed(self, optsep_oapp, basesep_oapp, make_option):
        graph = self._build_with(optsep_oapp, basesep_oapp, make_option(gas=0, value=0))

        assert graph.enforced_floor(optsep_oapp, basesep_oapp, 1).gas == 0

    def test_duplicate_option(self, optsep_oapp, basesep_oapp, make_option):
        with pytest.raises(DuplicateOptionError) as exc_info:
            self._build_with(
                optsep_oapp,
                basesep_oapp,
                make_option(gas=100_000),
                make_option(gas=200_000),
            )

        assert exc_info.value.details == {
            "edge_index": 0,
            "msg_type": 1,
            "option_type": ExecutorOptionType.DIRECT_RECEIVE,
            "index": None,
        }

    def test_invalid_option_reported_before_duplicate(
        self, optsep_oapp, basesep_oapp, make_option
    ):
        """Field checks run over the whole edge before uniqueness."""
        with pytest.raises(InvalidOptionError):
            self._build_with(
                optsep_oapp,
                basesep_oapp,
                make_option(),
                make_option(),
                make_option(gas=-1, msg_type=3),
            )

    def test_option_fields_checked_on_every_edge_before_uniqueness(
        self, optsep_oapp, basesep_oapp, make_option
    ):
        """An invalid field on edge 1 wins over a duplicate option on edge 0."""
        duplicated = EdgeConfig(enforced_options=(make_option(), make_option()))
        invalid = EdgeConfig(enforced_options=(make_option(gas=-1),))

        with pytest.raises(InvalidOptionError) as exc_info:
            build(
                [optsep_oapp, basesep_oapp],
                [
                    (optsep_oapp, basesep_oapp, duplicated),
                    (basesep_oapp, optsep_oapp, invalid),
                ],
            )

        assert exc_info.value.details["edge_index"] == 1
        assert exc_info.value.details["field"] == "gas"

    def test_option_errors_point_at_edge(
        self, optsep_oapp, basesep_oapp, edge_config, make_option
    ):
        bad = EdgeConfig(enforced_options=(make_option(gas=-1),))

        with pytest.raises(InvalidOptionError) as exc_info:
            build(
                [optsep_oapp, basesep_oapp],
                [(optsep_oapp, basesep_oapp, edge_config), (basesep_oapp, optsep_oapp, bad)],
            )

        assert exc_info.value.details["edge_index"] == 1


class TestDeterminism:
    """Same input, same outcome."""

    def test_same_graph_twice(self, optsep_oapp, basesep_oapp, edge_config):
        nodes = [optsep_oapp, basesep_oapp]
        edges = [(optsep_oapp, basesep_oapp, edge_config), (basesep_oapp, optsep_oapp, edge_config)]

        assert build(nodes, edges) == build(nodes, edges)

    def test_same_error_twice(self, optsep_oapp, basesep_oapp, make_option):
        nodes = [optsep_oapp, basesep_oapp]
        config = EdgeConfig(enforced_options=(make_option(), make_option()))
        edges = [(optsep_oapp, basesep_oapp, config)]

        errors = []
        for _ in range(2):
            with pytest.raises(GraphError) as exc_info:
                build(nodes, edges)
            errors.append(exc_info.value)

        assert errors[0] == errors[1]
        assert errors[0].to_dict() == errors[1].to_dict()


class TestOmniGraphBuilder:
    """Tests for the fluent builder."""

    def test_bidirectional(self, chains, optsep_oapp, basesep_oapp, edge_config):
        graph = (
            OmniGraphBuilder(chains)
            .add_contract(optsep_oapp)
            .add_contract(basesep_oapp)
            .connect_bidirectional(optsep_oapp, basesep_oapp, edge_config)
            .build()
        )

        assert graph.edge(optsep_oapp, basesep_oapp) is not None
        assert graph.edge(basesep_oapp, optsep_oapp) is not None

    def test_mesh(self, optsep_oapp, basesep_oapp, arbsep_oapp):
        points = [optsep_oapp, basesep_oapp, arbsep_oapp]
        graph = OmniGraphBuilder().add_contracts(points).connect_mesh(points).build()

        assert len(graph.edges) == 6

    def test_builder_validates(self, optsep_oapp, basesep_oapp):
        builder = (
            OmniGraphBuilder()
            .add_contracts([optsep_oapp, basesep_oapp])
            .connect(optsep_oapp, basesep_oapp)
            .connect(optsep_oapp, basesep_oapp)
        )

        with pytest.raises(DuplicateEdgeError):
            builder.build()

    def test_builder_uses_registry(self, chains):
        stray = EndpointPoint(chain_id=1, contract_name="MyOApp")

        with pytest.raises(UnknownChainError):
            OmniGraphBuilder(chains).add_contract(stray).build()
