"""Runtime settings loaded from environment variables.

Configuration via environment variables:
- LIQUIDITY_THRESHOLD: Minimum raw pool liquidity for discovery (default: 10000)
- BRIDGEFEES_CHAINS: Comma-separated chains to compare (default: ethereum,base)
- <CHAIN>_SUBGRAPH_URL: Liquidity subgraph endpoint per chain
- ALCHEMY_API_KEY: API key for the price oracle
- BRIDGEFEES_USD_AMOUNT: USD notional quoted per transfer (default: 1)
- BRIDGEFEES_REQUEST_TIMEOUT: Per-call network timeout in seconds (default: 30)
- BRIDGEFEES_PRICE_BATCH_SIZE: Symbols per price request (default: 3)
- BRIDGEFEES_PRICE_BATCH_DELAY: Seconds between price batches (default: 0.25)
- BRIDGEFEES_AMBIGUOUS_SYMBOLS: Comma-separated symbols never matched across chains
- HOP_API_URL / OPENOCEAN_API_URL: Provider base URLs
- OPENOCEAN_GAS_PRICE / OPENOCEAN_SLIPPAGE: Quote parameters (default: 5 gwei / 1%)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

DEFAULT_HOP_API_URL = "https://api.hop.exchange"
DEFAULT_OPENOCEAN_API_URL = "https://open-api.openocean.finance/v4"


def _split(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Process configuration for one discovery run."""

    liquidity_threshold: str = "10000"
    chains: tuple[str, ...] = ("ethereum", "base")
    subgraph_urls: dict[str, str] = field(default_factory=dict)
    alchemy_api_key: str = ""
    usd_amount: Decimal = Decimal(1)
    request_timeout: float = 30.0
    price_batch_size: int = 3
    price_batch_delay: float = 0.25
    ambiguous_symbols: frozenset[str] = frozenset()
    hop_api_url: str = DEFAULT_HOP_API_URL
    openocean_api_url: str = DEFAULT_OPENOCEAN_API_URL
    openocean_gas_price: str = "5"
    openocean_slippage: str = "1"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        chains = _split(env.get("BRIDGEFEES_CHAINS", "ethereum,base"))
        subgraph_urls = {
            chain: env[f"{chain.upper()}_SUBGRAPH_URL"]
            for chain in chains
            if env.get(f"{chain.upper()}_SUBGRAPH_URL")
        }
        return cls(
            liquidity_threshold=env.get("LIQUIDITY_THRESHOLD", "10000"),
            chains=chains,
            subgraph_urls=subgraph_urls,
            alchemy_api_key=env.get("ALCHEMY_API_KEY", ""),
            usd_amount=Decimal(env.get("BRIDGEFEES_USD_AMOUNT", "1")),
            request_timeout=float(env.get("BRIDGEFEES_REQUEST_TIMEOUT", "30")),
            price_batch_size=int(env.get("BRIDGEFEES_PRICE_BATCH_SIZE", "3")),
            price_batch_delay=float(env.get("BRIDGEFEES_PRICE_BATCH_DELAY", "0.25")),
            ambiguous_symbols=frozenset(
                s.lower() for s in _split(env.get("BRIDGEFEES_AMBIGUOUS_SYMBOLS", ""))
            ),
            hop_api_url=env.get("HOP_API_URL", DEFAULT_HOP_API_URL),
            openocean_api_url=env.get("OPENOCEAN_API_URL", DEFAULT_OPENOCEAN_API_URL),
            openocean_gas_price=env.get("OPENOCEAN_GAS_PRICE", "5"),
            openocean_slippage=env.get("OPENOCEAN_SLIPPAGE", "1"),
        )
