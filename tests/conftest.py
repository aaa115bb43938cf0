"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_edges import EdgeConfig, ExecutorOptionType, MessageTypeOption
from omnigraph.models.graph_nodes import EndpointPoint

OPTSEP = 40232
BASESEP = 40245
ARBSEP = 40231


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test installs."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def chains() -> ChainRegistry:
    """Registry of the chains used across tests."""
    return ChainRegistry(
        {
            "OPTSEP_V2_TESTNET": OPTSEP,
            "BASESEP_V2_TESTNET": BASESEP,
            "ARBSEP_V2_TESTNET": ARBSEP,
        }
    )


@pytest.fixture
def optsep_oapp() -> EndpointPoint:
    return EndpointPoint(chain_id=OPTSEP, contract_name="MyOApp")


@pytest.fixture
def basesep_oapp() -> EndpointPoint:
    return EndpointPoint(chain_id=BASESEP, contract_name="MyOApp")


@pytest.fixture
def arbsep_oapp() -> EndpointPoint:
    return EndpointPoint(chain_id=ARBSEP, contract_name="MyOApp")


@pytest.fixture
def receive_option() -> MessageTypeOption:
    """Plain receive floor for msgType 1."""
    return MessageTypeOption(
        msg_type=1,
        option_type=ExecutorOptionType.DIRECT_RECEIVE,
        gas=100_000,
        value=0,
    )


@pytest.fixture
def compose_option() -> MessageTypeOption:
    """Compose floor for msgType 2, slot 0."""
    return MessageTypeOption(
        msg_type=2,
        option_type=ExecutorOptionType.COMPOSE,
        index=0,
        gas=100_000,
        value=0,
    )


@pytest.fixture
def edge_config(
    receive_option: MessageTypeOption,
    compose_option: MessageTypeOption,
) -> EdgeConfig:
    return EdgeConfig(enforced_options=(receive_option, compose_option))


@pytest.fixture
def make_option():
    """Factory for options with receive defaults."""

    def _make(**overrides) -> MessageTypeOption:
        data = {
            "msg_type": 1,
            "option_type": ExecutorOptionType.DIRECT_RECEIVE,
            "gas": 100_000,
            "value": 0,
        }
        data.update(overrides)
        return MessageTypeOption(**data)

    return _make
