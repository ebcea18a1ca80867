"""USD spot price resolution per chain.

Prices are fetched in small sequential batches with a short pause in
between to stay under the price API's rate limit. A failing batch does not
abort the run: its symbols simply stay unresolved (None).

Response shape (Alchemy "prices by symbol"):

    {"data": [{"symbol": "USDC",
               "prices": [{"currency": "usd", "value": "0.9998"}],
               "error": null}, ...]}
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any, Protocol

import httpx
import structlog

from bridgefees.chains.registry import ChainDescriptor, ChainRegistry, get_default_registry
from bridgefees.errors import InvalidInput, ProviderError
from bridgefees.math.fixed_point import to_decimal
from bridgefees.models.tokens import PriceQuote
from bridgefees.providers.http import get_json

logger = structlog.get_logger()

DEFAULT_BATCH_SIZE = 3
DEFAULT_BATCH_DELAY = 0.25

ALCHEMY_SOURCE_NAME = "Alchemy"


class PriceSource(Protocol):
    """Protocol for one batched price lookup.

    Implementations return only the symbols they could price; the oracle
    takes care of defaults and batching.
    """

    async def fetch_batch(
        self, symbols: Sequence[str], chain: ChainDescriptor
    ) -> Mapping[str, Decimal]:
        """Fetch USD prices for up to one batch of symbols on a chain.

        Returns:
            Response symbol -> positive USD price
        """
        ...


class AlchemyPriceSource:
    """PriceSource over the Alchemy prices API."""

    def __init__(self, client: httpx.AsyncClient, api_key: str):
        self._client = client
        self._api_key = api_key

    async def fetch_batch(
        self, symbols: Sequence[str], chain: ChainDescriptor
    ) -> Mapping[str, Decimal]:
        if not chain.price_api_url:
            raise ProviderError(f"No price API configured for chain '{chain.name}'")
        payload = await get_json(
            self._client,
            chain.price_api_url,
            provider=ALCHEMY_SOURCE_NAME,
            params=[("symbols", symbol) for symbol in symbols],
            headers={"accept": "application/json", "Authorization": f"Bearer {self._api_key}"},
        )
        return parse_usd_prices(payload)


def parse_usd_prices(payload: Any) -> dict[str, Decimal]:
    """Extract positive USD prices keyed by response symbol.

    Entries without a usable USD value are left out.
    """
    prices: dict[str, Decimal] = {}
    entries = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return prices
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("symbol"):
            continue
        for price in entry.get("prices") or ():
            if not isinstance(price, dict) or price.get("currency") != "usd":
                continue
            value = _positive_price(price.get("value"))
            if value is not None:
                prices[entry["symbol"]] = value
            break
    return prices


def _positive_price(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = to_decimal(value)
    except InvalidInput:
        return None
    if not price.is_finite() or price <= 0:
        return None
    return price


class PriceOracleClient:
    """Resolves USD prices for symbol sets, tolerating partial failures.

    Args:
        source: Batched price lookup
        registry: Chain registry used to resolve chain names
        batch_size: Symbols per request
        batch_delay: Seconds slept between batches of the same chain
    """

    def __init__(
        self,
        source: PriceSource,
        registry: ChainRegistry | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.source = source
        self.registry = registry or get_default_registry()
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    async def resolve_prices(self, symbols: Iterable[str], chain: str) -> dict[str, Decimal | None]:
        """Resolve prices for symbols on one chain.

        Every requested symbol is present in the result; unresolved symbols
        map to None. Response symbols are matched back to requested ones
        case-insensitively.

        Raises:
            UnsupportedChain: If the chain is not registered
        """
        descriptor = self.registry.require(chain)
        requested = list(dict.fromkeys(symbols))
        prices: dict[str, Decimal | None] = {symbol: None for symbol in requested}
        if not requested:
            return prices

        batches = [
            requested[i : i + self.batch_size] for i in range(0, len(requested), self.batch_size)
        ]
        for index, batch in enumerate(batches):
            if index > 0 and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)
            try:
                fetched = await self.source.fetch_batch(batch, descriptor)
            except Exception as err:
                logger.warning(
                    "price_batch_failed",
                    chain=descriptor.name,
                    batch=index + 1,
                    batches=len(batches),
                    symbols=batch,
                    error=str(err),
                )
                continue
            by_key = {symbol.lower(): symbol for symbol in batch}
            for response_symbol, price in fetched.items():
                requested_symbol = by_key.get(response_symbol.lower())
                if requested_symbol is not None:
                    prices[requested_symbol] = price

        resolved = sum(1 for price in prices.values() if price is not None)
        logger.info(
            "prices_resolved",
            chain=descriptor.name,
            requested=len(requested),
            resolved=resolved,
        )
        return prices

    async def resolve_price_quotes(
        self, symbols: Iterable[str], chains: Sequence[str]
    ) -> dict[str, PriceQuote]:
        """Resolve prices on every chain concurrently and join per symbol."""
        requested = list(dict.fromkeys(symbols))
        per_chain = await asyncio.gather(
            *(self.resolve_prices(requested, chain) for chain in chains)
        )
        return {
            symbol: PriceQuote(
                symbol=symbol,
                per_chain={chain: prices[symbol] for chain, prices in zip(chains, per_chain)},
            )
            for symbol in requested
        }


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_BATCH_DELAY",
    "PriceSource",
    "AlchemyPriceSource",
    "PriceOracleClient",
    "parse_usd_prices",
]
