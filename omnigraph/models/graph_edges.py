"""Graph Edge models for the omnichain topology.

Defines the directed connection between two contract deployments and the
execution policy it carries:
- ExecutorOptionType: how a message is executed on arrival
- MessageTypeOption: one enforced option for one message type
- EdgeConfig: the enforced options of a connection
- Edge: a directed ``from -> to`` connection

Integer fields are strict, so booleans are rejected at parse time. Range
rules (non-negative gas, compose index) are checked by the graph builder so
violations are reported with their position in the declaration.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .graph_nodes import EndpointPoint


class ExecutorOptionType(IntEnum):
    """Execution strategy for a message, by executor wire code."""

    DIRECT_RECEIVE = 1  # Execute immediately on arrival
    COMPOSE = 3  # Chain into a follow-up call slot


class MessageTypeOption(BaseModel):
    """Minimum execution parameters for one message type on one edge.

    Callers may ask for more gas or value than the floor, never less.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    msg_type: StrictInt = Field(
        ..., alias="msgType", description="Message type discriminant"
    )
    option_type: ExecutorOptionType = Field(..., alias="optionType")
    index: StrictInt | None = Field(
        default=None, description="Compose slot, only for COMPOSE options"
    )
    gas: StrictInt = Field(..., description="Destination gas budget")
    value: StrictInt = Field(
        default=0, description="Native value forwarded with the message"
    )

    @property
    def key(self) -> tuple[int, ExecutorOptionType, int | None]:
        """Identity of the option within an edge."""
        return (self.msg_type, self.option_type, self.index)

    def admits(self, gas: int, value: int = 0) -> bool:
        """Check whether a caller request meets this floor."""
        return gas >= self.gas and value >= self.value

    def to_declaration(self) -> dict[str, Any]:
        """Convert to the literal declaration shape."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        data["optionType"] = int(self.option_type)
        return data


class EdgeConfig(BaseModel):
    """Policy attached to one directed connection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enforced_options: tuple[MessageTypeOption, ...] = Field(
        default=(), alias="enforcedOptions"
    )

    def options_for(self, msg_type: int) -> tuple[MessageTypeOption, ...]:
        """Enforced options matching a message type, in declaration order."""
        return tuple(o for o in self.enforced_options if o.msg_type == msg_type)

    def to_declaration(self) -> dict[str, Any]:
        return {"enforcedOptions": [o.to_declaration() for o in self.enforced_options]}


class Edge(BaseModel):
    """Directed connection between two deployments."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: EndpointPoint = Field(..., alias="from")
    target: EndpointPoint = Field(..., alias="to")
    config: EdgeConfig = Field(default_factory=EdgeConfig)

    @property
    def key(self) -> tuple[tuple[int, str], tuple[int, str]]:
        """Identity of the edge within a graph (ordered pair)."""
        return (self.source.key, self.target.key)

    def to_declaration(self) -> dict[str, Any]:
        return {
            "from": self.source.to_declaration(),
            "to": self.target.to_declaration(),
            "config": self.config.to_declaration(),
        }

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"
