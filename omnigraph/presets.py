"""Pre-defined chains and declarations for common deployments."""

from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_edges import EdgeConfig, ExecutorOptionType, MessageTypeOption
from omnigraph.models.graph_nodes import EndpointPoint

TESTNET_CHAINS = ChainRegistry(
    {
        "OPTSEP_V2_TESTNET": 40232,
        "BASESEP_V2_TESTNET": 40245,
    }
)

OPTIMISM_SEPOLIA_OAPP = EndpointPoint(chain_id=40232, contract_name="MyOApp")
BASE_SEPOLIA_OAPP = EndpointPoint(chain_id=40245, contract_name="MyOApp")

DEFAULT_EDGE_CONFIG = EdgeConfig(
    enforced_options=(
        MessageTypeOption(
            msg_type=1,
            option_type=ExecutorOptionType.DIRECT_RECEIVE,
            gas=100_000,
            value=0,
        ),
        MessageTypeOption(
            msg_type=2,
            option_type=ExecutorOptionType.COMPOSE,
            index=0,
            gas=100_000,
            value=0,
        ),
    )
)

# Two-chain OApp connected both ways, chains referenced by name
MY_OAPP_DECLARATION = {
    "contracts": [
        {"contract": {"eid": "OPTSEP_V2_TESTNET", "contractName": "MyOApp"}},
        {"contract": {"eid": "BASESEP_V2_TESTNET", "contractName": "MyOApp"}},
    ],
    "connections": [
        {
            "from": {"eid": "OPTSEP_V2_TESTNET", "contractName": "MyOApp"},
            "to": {"eid": "BASESEP_V2_TESTNET", "contractName": "MyOApp"},
            "config": DEFAULT_EDGE_CONFIG.to_declaration(),
        },
        {
            "from": {"eid": "BASESEP_V2_TESTNET", "contractName": "MyOApp"},
            "to": {"eid": "OPTSEP_V2_TESTNET", "contractName": "MyOApp"},
            "config": DEFAULT_EDGE_CONFIG.to_declaration(),
        },
    ],
}
