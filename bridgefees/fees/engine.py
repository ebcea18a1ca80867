"""Fee quote engine: ordered providers with fallback.

Per request the engine runs this state machine (nothing is persisted):

    Start -> TryPrimaryProvider
        Success | Estimated -> Done
        failure -> TryFallbackProvider
            Success | Estimated -> Done
            failure -> Exhausted

Guards that run before any provider is called:
- missing / NaN / non-positive price -> NO_PRICE
- chain not in the registry -> UNSUPPORTED_CHAIN
- principal cannot be computed -> INVALID_INPUT

Fee values are always derived here from the provider's minimal-unit fee and
the engine's own minimal-unit principal, never from a provider percentage,
so every provider is measured with the same formula.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from decimal import Decimal

import structlog

from bridgefees.chains.registry import ChainRegistry, get_default_registry
from bridgefees.errors import InvalidInput, UnsupportedChain, UnsupportedRoute
from bridgefees.fees.config import DEFAULT_FEE_QUOTE_CONFIG, FeeQuoteConfig
from bridgefees.fees.request import FeeQuoteRequest, QuoteContext
from bridgefees.fees.result import FeeQuoteResult, FeeQuoteStatus, ProviderAttempt
from bridgefees.math.fixed_point import (
    basis_points,
    fee_usd,
    to_decimal,
    to_minimal_units,
    token_amount_for_usd,
)
from bridgefees.providers.base import ProviderQuote, QuoteProvider

logger = structlog.get_logger()


def usable_price(price: Decimal | int | str | float | None) -> Decimal | None:
    """Return the price as a Decimal if it can be used for quoting.

    None, NaN, infinities, zero, negatives and unparsable values all count
    as "no price".
    """
    if price is None:
        return None
    try:
        value = to_decimal(price)
    except InvalidInput:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


class FeeQuoteEngine:
    """Produce one FeeQuoteResult per request by trying providers in order.

    Attributes:
        providers: Providers in priority order (primary first)
        registry: Chain registry used to validate chains and capabilities
        config: Engine configuration
    """

    def __init__(
        self,
        providers: Sequence[QuoteProvider],
        registry: ChainRegistry | None = None,
        config: FeeQuoteConfig | None = None,
    ):
        self.providers = list(providers)
        self.registry = registry or get_default_registry()
        self.config = config or DEFAULT_FEE_QUOTE_CONFIG

    async def quote(self, request: FeeQuoteRequest) -> FeeQuoteResult:
        """Quote one transfer direction.

        Never raises for provider, price or input problems; every outcome is
        a FeeQuoteResult.
        """
        price = usable_price(request.token_price_usd)
        if price is None:
            logger.debug(
                "fee_quote_no_price",
                token=request.symbol,
                source=request.source_chain,
                dest=request.dest_chain,
            )
            return FeeQuoteResult.failure(
                FeeQuoteStatus.NO_PRICE,
                f"No USD price for {request.symbol} on {request.source_chain}",
            )

        try:
            source = self.registry.require(request.source_chain)
            dest = self.registry.require(request.dest_chain)
        except UnsupportedChain as err:
            return FeeQuoteResult.failure(FeeQuoteStatus.UNSUPPORTED_CHAIN, str(err))

        try:
            amount = token_amount_for_usd(
                request.usd_amount, price, request.decimals, self.config.max_amount_places
            )
            amount_raw = to_minimal_units(amount, request.decimals)
        except InvalidInput as err:
            logger.warning(
                "fee_quote_invalid_input",
                token=request.symbol,
                source=request.source_chain,
                error=str(err),
            )
            return FeeQuoteResult.failure(FeeQuoteStatus.INVALID_INPUT, str(err))

        context = QuoteContext(
            request=request,
            source=source,
            dest=dest,
            amount=amount,
            amount_raw=amount_raw,
            price_usd=price,
        )
        return await self._run_providers(context)

    async def quote_many(self, requests: Iterable[FeeQuoteRequest]) -> list[FeeQuoteResult]:
        """Quote independent requests concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.quote(request) for request in requests)))

    async def _run_providers(self, context: QuoteContext) -> FeeQuoteResult:
        request = context.request
        attempts: list[ProviderAttempt] = []
        skipped_for_chain = 0

        for provider in self.providers:
            if not (
                context.source.supports(provider.provider_id)
                and context.dest.supports(provider.provider_id)
            ):
                skipped_for_chain += 1
                continue
            if not provider.supports_token(request.symbol):
                logger.debug(
                    "fee_quote_provider_skipped",
                    provider=provider.name,
                    token=request.symbol,
                    reason="not in whitelist",
                )
                continue

            try:
                quote = await provider.quote(context)
                return self._build_result(provider, quote, context, attempts)
            except Exception as err:
                # Every provider failure means "try the next provider"
                attempt = ProviderAttempt.from_error(provider.name, err)
                attempts.append(attempt)
                logger.debug(
                    "fee_quote_provider_failed",
                    provider=provider.name,
                    token=request.symbol,
                    source=request.source_chain,
                    dest=request.dest_chain,
                    status=attempt.status.value,
                    detail=attempt.detail,
                )

        return self._exhausted(context, attempts, skipped_for_chain)

    def _build_result(
        self,
        provider: QuoteProvider,
        quote: ProviderQuote,
        context: QuoteContext,
        attempts: list[ProviderAttempt],
    ) -> FeeQuoteResult:
        fee_raw = quote.fee_raw
        if fee_raw < 0:
            if not self.config.clamp_negative_fee:
                raise UnsupportedRoute(
                    f"{provider.name} returned more than the principal for {context.symbol}"
                )
            logger.debug(
                "fee_quote_negative_fee_clamped",
                provider=provider.name,
                token=context.symbol,
                fee_raw=fee_raw,
            )
            fee_raw = 0

        bps = basis_points(fee_raw, context.amount_raw)
        usd = fee_usd(fee_raw, context.decimals, context.price_usd)
        status = FeeQuoteStatus.ESTIMATED if quote.estimated else FeeQuoteStatus.SUCCESS
        attempts.append(ProviderAttempt(provider=provider.name, status=status))

        logger.debug(
            "fee_quoted",
            provider=provider.name,
            token=context.symbol,
            source=context.source.name,
            dest=context.dest.name,
            amount_raw=context.amount_raw,
            fee_raw=fee_raw,
            fee_bps=bps,
        )
        return FeeQuoteResult.quoted(status, bps, usd, provider.name, tuple(attempts))

    def _exhausted(
        self,
        context: QuoteContext,
        attempts: list[ProviderAttempt],
        skipped_for_chain: int,
    ) -> FeeQuoteResult:
        request = context.request
        if not attempts:
            if self.providers and skipped_for_chain == len(self.providers):
                status = FeeQuoteStatus.UNSUPPORTED_CHAIN
                detail = f"No provider serves {request.source_chain} -> {request.dest_chain}"
            else:
                status = FeeQuoteStatus.UNSUPPORTED_TOKEN
                detail = f"No provider supports {request.symbol}"
        elif all(a.status == FeeQuoteStatus.PROVIDER_ERROR for a in attempts):
            status = FeeQuoteStatus.PROVIDER_ERROR
            detail = attempts[-1].detail
        else:
            status = FeeQuoteStatus.UNSUPPORTED_ROUTE
            detail = attempts[-1].detail

        logger.info(
            "fee_quote_exhausted",
            token=request.symbol,
            source=request.source_chain,
            dest=request.dest_chain,
            status=status.value,
            attempts=len(attempts),
        )
        return FeeQuoteResult.failure(status, detail, tuple(attempts))


__all__ = ["FeeQuoteEngine", "usable_price"]
