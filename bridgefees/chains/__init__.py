"""Chain registry: logical chain names to identifiers and capabilities."""

from bridgefees.chains.registry import (
    ALL_PROVIDERS,
    ARBITRUM,
    BASE,
    BSC,
    DEFAULT_CHAINS,
    ETHEREUM,
    HOP,
    OPENOCEAN,
    OPTIMISM,
    POLYGON,
    ChainDescriptor,
    ChainRegistry,
    get_default_registry,
)

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
