"""End-to-end discovery run: pools -> matched tokens -> prices -> fee quotes.

One run threads a single DiscoveryResult value through every stage; nothing
is cached between runs.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from itertools import permutations

import httpx
import structlog

from bridgefees.chains.registry import ChainRegistry, get_default_registry
from bridgefees.config import Settings
from bridgefees.discovery.aggregator import match_tokens, rank_tokens
from bridgefees.discovery.subgraph import PoolSource, SubgraphClient
from bridgefees.fees.engine import FeeQuoteEngine
from bridgefees.fees.request import FeeQuoteRequest
from bridgefees.fees.result import FeeQuoteResult
from bridgefees.models.tokens import MatchedToken, PriceQuote, TokenSummary
from bridgefees.pricing.oracle import AlchemyPriceSource, PriceOracleClient
from bridgefees.providers.hop import HopAdapter, HopApiClient
from bridgefees.providers.openocean import OpenOceanAdapter, OpenOceanApiClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class TokenFeeReport:
    """Prices and per-direction fee quotes for one matched token."""

    symbol: str
    prices: PriceQuote
    quotes: dict[tuple[str, str], FeeQuoteResult] = field(default_factory=dict)

    def quote_for(self, source_chain: str, dest_chain: str) -> FeeQuoteResult | None:
        return self.quotes.get((source_chain, dest_chain))

    def summaries(self) -> dict[tuple[str, str], str]:
        """Direction -> display string of that direction's quote."""
        return {direction: result.summary() for direction, result in self.quotes.items()}


@dataclass(frozen=True)
class DiscoveryResult:
    """Everything produced by one pipeline run.

    Attributes:
        ranked: Chain -> tokens ranked by total liquidity
        matched: Tokens present on every chain, in first-chain rank order
        prices: Symbol -> per-chain USD prices
        reports: One fee report per matched token, same order as matched
    """

    ranked: dict[str, list[TokenSummary]]
    matched: list[MatchedToken]
    prices: dict[str, PriceQuote]
    reports: list[TokenFeeReport]

    def report_for(self, symbol: str) -> TokenFeeReport | None:
        key = symbol.lower()
        for report in self.reports:
            if report.symbol.lower() == key:
                return report
        return None


class DiscoveryPipeline:
    """Runs discovery, matching, pricing and fee quoting for a chain set.

    Args:
        pool_sources: Chain -> pool source, one per compared chain. Iteration
            order decides which chain supplies display symbols.
        oracle: Price resolver
        engine: Fee quote engine
        usd_amount: USD notional quoted per transfer
        ambiguous_symbols: Symbols never matched across chains
    """

    def __init__(
        self,
        pool_sources: Mapping[str, PoolSource],
        oracle: PriceOracleClient,
        engine: FeeQuoteEngine,
        usd_amount: Decimal = Decimal(1),
        ambiguous_symbols: Iterable[str] = (),
    ):
        if len(pool_sources) < 2:
            raise ValueError(f"Need at least two chains, got {list(pool_sources)}")
        self.pool_sources = dict(pool_sources)
        self.oracle = oracle
        self.engine = engine
        self.usd_amount = usd_amount
        self.ambiguous_symbols = frozenset(s.lower() for s in ambiguous_symbols)

    @property
    def chains(self) -> list[str]:
        return list(self.pool_sources)

    async def run(self, liquidity_threshold: str) -> DiscoveryResult:
        """Execute one full run.

        Raises:
            SubgraphError: If pools cannot be fetched for any chain
        """
        chains = self.chains
        ranked_lists = await asyncio.gather(
            *(self._discover(chain, liquidity_threshold) for chain in chains)
        )
        ranked = dict(zip(chains, ranked_lists))

        matched = match_tokens(ranked, self.ambiguous_symbols)
        prices = await self.oracle.resolve_price_quotes([t.symbol for t in matched], chains)

        reports = await asyncio.gather(*(self._quote_token(token, prices) for token in matched))

        logger.info(
            "discovery_run_complete",
            chains=chains,
            ranked={chain: len(tokens) for chain, tokens in ranked.items()},
            matched=len(matched),
            quoted=sum(
                1 for report in reports for result in report.quotes.values() if result.is_quote
            ),
        )
        return DiscoveryResult(ranked=ranked, matched=matched, prices=prices, reports=list(reports))

    async def _discover(self, chain: str, liquidity_threshold: str) -> list[TokenSummary]:
        pools = await self.pool_sources[chain].fetch_pools(liquidity_threshold)
        ranked = rank_tokens(pools)
        logger.info("chain_tokens_ranked", chain=chain, pools=len(pools), tokens=len(ranked))
        return ranked

    async def _quote_token(
        self, token: MatchedToken, prices: Mapping[str, PriceQuote]
    ) -> TokenFeeReport:
        price_quote = prices.get(token.symbol) or PriceQuote(
            symbol=token.symbol, per_chain={chain: None for chain in token.chains}
        )
        directions = list(permutations(token.chains, 2))
        requests = [
            FeeQuoteRequest.for_direction(token, source, dest, price_quote, self.usd_amount)
            for source, dest in directions
        ]
        results = await self.engine.quote_many(requests)
        return TokenFeeReport(
            symbol=token.symbol,
            prices=price_quote,
            quotes=dict(zip(directions, results)),
        )


def build_pipeline(
    settings: Settings,
    client: httpx.AsyncClient,
    registry: ChainRegistry | None = None,
) -> DiscoveryPipeline:
    """Wire the HTTP-backed pipeline from settings.

    The caller owns the client (and its timeout) and must keep it open for
    the duration of the run.

    Raises:
        ValueError: If a configured chain has no subgraph URL
    """
    registry = registry or get_default_registry()
    missing = [chain for chain in settings.chains if chain not in settings.subgraph_urls]
    if missing:
        raise ValueError(f"Missing subgraph URL for: {', '.join(missing)}")
    for chain in settings.chains:
        registry.require(chain)

    pool_sources = {
        chain: SubgraphClient(client, settings.subgraph_urls[chain], chain=chain)
        for chain in settings.chains
    }
    oracle = PriceOracleClient(
        AlchemyPriceSource(client, settings.alchemy_api_key),
        registry=registry,
        batch_size=settings.price_batch_size,
        batch_delay=settings.price_batch_delay,
    )
    engine = FeeQuoteEngine(
        providers=[
            HopAdapter(HopApiClient(client, settings.hop_api_url)),
            OpenOceanAdapter(
                OpenOceanApiClient(client, settings.openocean_api_url),
                gas_price=settings.openocean_gas_price,
                slippage=settings.openocean_slippage,
            ),
        ],
        registry=registry,
    )
    return DiscoveryPipeline(
        pool_sources,
        oracle,
        engine,
        usd_amount=settings.usd_amount,
        ambiguous_symbols=settings.ambiguous_symbols,
    )


async def run_discovery(settings: Settings | None = None) -> DiscoveryResult:
    """Run one discovery pass with a fresh HTTP client."""
    settings = settings or Settings.from_env()
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        pipeline = build_pipeline(settings, client)
        return await pipeline.run(settings.liquidity_threshold)


__all__ = [
    "TokenFeeReport",
    "DiscoveryResult",
    "DiscoveryPipeline",
    "build_pipeline",
    "run_discovery",
]
