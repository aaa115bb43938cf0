"""Registry of recognized chain identifiers.

The registry is passed explicitly to the builder and the declaration
loader. Nothing in the package consults a process-wide chain list.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from omnigraph.config import OmniGraphSettings

logger = structlog.get_logger()


class ChainRegistry:
    """Immutable mapping of chain names to endpoint ids."""

    def __init__(self, chains: Mapping[str, int] | None = None):
        by_name: dict[str, int] = {}
        by_id: dict[int, str] = {}

        for name, chain_id in (chains or {}).items():
            if chain_id in by_id and by_id[chain_id] != name:
                raise ValueError(
                    f"Chain id {chain_id} registered as both '{by_id[chain_id]}' and '{name}'"
                )
            by_name[name] = chain_id
            by_id[chain_id] = name

        self._by_name = MappingProxyType(by_name)
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def from_settings(cls, settings: "OmniGraphSettings") -> "ChainRegistry":
        """Build the registry from the preset testnets plus configured chains."""
        from omnigraph.presets import TESTNET_CHAINS

        registry = TESTNET_CHAINS.merged(settings.chains)
        logger.debug("Chain registry loaded", chain_count=len(registry))
        return registry

    def merged(self, extra: Mapping[str, int]) -> "ChainRegistry":
        """Return a new registry with additional chains.

        A name already present must keep its id.
        """
        for name, chain_id in extra.items():
            known = self._by_name.get(name)
            if known is not None and known != chain_id:
                raise ValueError(
                    f"Chain '{name}' already registered with id {known}, got {chain_id}"
                )
        return ChainRegistry({**self._by_name, **extra})

    def id_of(self, name: str) -> int | None:
        """Get a chain id by name."""
        return self._by_name.get(name)

    def name_of(self, chain_id: int) -> str | None:
        """Get a chain name by id."""
        return self._by_id.get(chain_id)

    def as_mapping(self) -> Mapping[str, int]:
        return self._by_name

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._by_id

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"ChainRegistry({dict(self._by_name)!r})"
