"""Graph Node models for the omnichain topology.

A node is one deployed contract instance on one chain:
- chain_id: endpoint identifier of the chain (``eid`` in declarations)
- contract_name: logical name of the deployed contract artifact

The contract address is resolved later by the deployment tooling and is
never stored on the node.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class EndpointPoint(BaseModel):
    """One contract deployment on one chain."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chain_id: StrictInt = Field(..., alias="eid", description="Endpoint id of the chain")
    contract_name: str = Field(
        ..., alias="contractName", description="Logical contract artifact name"
    )

    @property
    def key(self) -> tuple[int, str]:
        """Identity of the node within a graph."""
        return (self.chain_id, self.contract_name)

    def to_declaration(self) -> dict[str, int | str]:
        """Convert to the literal declaration shape."""
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return f"{self.contract_name}@{self.chain_id}"
