"""Literal declaration format for an omni graph.

Mirrors the shape deployment configs are written in::

    {
        "contracts": [{"contract": {"eid": ..., "contractName": ...}}],
        "connections": [{"from": ..., "to": ..., "config": {...}}],
    }

``eid`` may be given as an endpoint id or as a chain name; names are
resolved through the injected ChainRegistry when the declaration is loaded.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .graph_edges import EdgeConfig


class PointSpec(BaseModel):
    """A contract reference as written in a declaration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    eid: StrictInt | str = Field(..., description="Endpoint id or chain name")
    contract_name: str = Field(..., alias="contractName")


class ContractSpec(BaseModel):
    """One entry of the ``contracts`` list."""

    contract: PointSpec


class ConnectionSpec(BaseModel):
    """One entry of the ``connections`` list."""

    model_config = ConfigDict(populate_by_name=True)

    source: PointSpec = Field(..., alias="from")
    target: PointSpec = Field(..., alias="to")
    config: EdgeConfig = Field(default_factory=EdgeConfig)


class OmniGraphDeclaration(BaseModel):
    """Complete literal declaration of contracts and connections."""

    contracts: list[ContractSpec] = Field(default_factory=list)
    connections: list[ConnectionSpec] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OmniGraphDeclaration":
        return cls.model_validate(data)
