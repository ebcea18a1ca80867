"""Static registry of supported chains and their provider capabilities.

Every component that needs to translate a logical chain name ("ethereum",
"base") into a provider-specific identifier goes through ChainRegistry, so
adding a chain is a single registration here.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from bridgefees.errors import UnsupportedChain

# Provider identifiers used in capability flags
HOP = "hop"
OPENOCEAN = "openocean"

ALL_PROVIDERS = frozenset({HOP, OPENOCEAN})


@dataclass(frozen=True)
class ChainDescriptor:
    """Identifiers and capabilities of one chain.

    Attributes:
        name: Logical chain name, unique within a registry
        chain_id: EVM chain id
        bridging_protocol_id: Chain id used by the bridging protocol
            (same as chain_id for the chains registered here)
        hop_slug: Chain name expected by the Hop API, or None if Hop does
            not serve the chain
        openocean_code: Chain code expected by the OpenOcean API, or None
        price_api_url: Alchemy "prices by symbol" endpoint for this chain
        providers: Names of quote providers that serve this chain
    """

    name: str
    chain_id: int
    bridging_protocol_id: int
    hop_slug: str | None = None
    openocean_code: str | None = None
    price_api_url: str | None = None
    providers: frozenset[str] = field(default_factory=frozenset)

    def supports(self, provider: str) -> bool:
        """True if the named provider can quote on this chain."""
        return provider in self.providers


class ChainRegistry:
    """Registry of ChainDescriptors keyed by lowercase name.

    Usage:
        registry = ChainRegistry()
        registry.register(ChainDescriptor(name="ethereum", chain_id=1, ...))

        chain = registry.get("Ethereum")   # case-insensitive
        registry.require("solana")         # raises UnsupportedChain
    """

    def __init__(self, chains: Iterable[ChainDescriptor] | None = None) -> None:
        self._chains: dict[str, ChainDescriptor] = {}
        for chain in chains or ():
            self.register(chain)

    def register(self, chain: ChainDescriptor) -> None:
        """Add a chain.

        Raises:
            ValueError: If a chain with the same name is already registered
        """
        key = chain.name.lower()
        if key in self._chains:
            raise ValueError(f"Chain already registered: {chain.name}")
        self._chains[key] = chain

    def get(self, name: str) -> ChainDescriptor | None:
        """Look up a chain by name, or None if unknown."""
        return self._chains.get(name.lower())

    def require(self, name: str) -> ChainDescriptor:
        """Look up a chain by name.

        Raises:
            UnsupportedChain: If the chain is not registered
        """
        chain = self.get(name)
        if chain is None:
            raise UnsupportedChain(f"Chain not found in registry: '{name}'")
        return chain

    def by_chain_id(self, chain_id: int) -> ChainDescriptor | None:
        for chain in self._chains.values():
            if chain.chain_id == chain_id:
                return chain
        return None

    def supports(self, name: str, provider: str) -> bool:
        chain = self.get(name)
        return chain is not None and chain.supports(provider)

    @property
    def names(self) -> list[str]:
        return [chain.name for chain in self._chains.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._chains

    def __iter__(self) -> Iterator[ChainDescriptor]:
        return iter(self._chains.values())

    def __len__(self) -> int:
        return len(self._chains)


ETHEREUM = ChainDescriptor(
    name="ethereum",
    chain_id=1,
    bridging_protocol_id=1,
    hop_slug="ethereum",
    openocean_code="eth",
    price_api_url="https://api.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=ALL_PROVIDERS,
)
BASE = ChainDescriptor(
    name="base",
    chain_id=8453,
    bridging_protocol_id=8453,
    hop_slug="base",
    openocean_code="base",
    price_api_url="https://base-mainnet.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=ALL_PROVIDERS,
)
ARBITRUM = ChainDescriptor(
    name="arbitrum",
    chain_id=42161,
    bridging_protocol_id=42161,
    hop_slug="arbitrum",
    openocean_code="arbitrum",
    price_api_url="https://arb-mainnet.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=ALL_PROVIDERS,
)
OPTIMISM = ChainDescriptor(
    name="optimism",
    chain_id=10,
    bridging_protocol_id=10,
    hop_slug="optimism",
    openocean_code="optimism",
    price_api_url="https://opt-mainnet.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=ALL_PROVIDERS,
)
POLYGON = ChainDescriptor(
    name="polygon",
    chain_id=137,
    bridging_protocol_id=137,
    hop_slug="polygon",
    openocean_code="polygon",
    price_api_url="https://polygon-mainnet.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=ALL_PROVIDERS,
)
# OpenOcean only; Hop has no BNB Chain bridge
BSC = ChainDescriptor(
    name="bsc",
    chain_id=56,
    bridging_protocol_id=56,
    openocean_code="bsc",
    price_api_url="https://bnb-mainnet.g.alchemy.com/prices/v1/tokens/by-symbol",
    providers=frozenset({OPENOCEAN}),
)

DEFAULT_CHAINS = (ETHEREUM, BASE, ARBITRUM, OPTIMISM, POLYGON, BSC)


def get_default_registry() -> ChainRegistry:
    """Build a fresh registry holding the built-in chains."""
    return ChainRegistry(DEFAULT_CHAINS)


__all__ = [
    "HOP",
    "OPENOCEAN",
    "ALL_PROVIDERS",
    "ChainDescriptor",
    "ChainRegistry",
    "ETHEREUM",
    "BASE",
    "ARBITRUM",
    "OPTIMISM",
    "POLYGON",
    "BSC",
    "DEFAULT_CHAINS",
    "get_default_registry",
]
