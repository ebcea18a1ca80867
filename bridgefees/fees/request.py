"""Fee quote request types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from bridgefees.chains.registry import ChainDescriptor
from bridgefees.models.tokens import MatchedToken, PriceQuote


@dataclass(frozen=True)
class FeeQuoteRequest:
    """One transfer direction of one matched token.

    Attributes:
        symbol: Token symbol
        source_chain: Chain the transfer starts on
        dest_chain: Chain the transfer ends on
        usd_amount: USD notional to transfer
        token_price_usd: USD price on the source chain, None if unresolved
        decimals: Token decimals on the source chain
        source_address: Token contract on the source chain
        dest_address: Token contract on the destination chain
    """

    symbol: str
    source_chain: str
    dest_chain: str
    usd_amount: Decimal
    token_price_usd: Decimal | None
    decimals: int
    source_address: str | None = None
    dest_address: str | None = None

    @classmethod
    def for_direction(
        cls,
        token: MatchedToken,
        source_chain: str,
        dest_chain: str,
        prices: PriceQuote | None,
        usd_amount: Decimal,
    ) -> FeeQuoteRequest:
        """Build the request for token moving source_chain -> dest_chain.

        Price and decimals come from the source side, since that is where
        the principal is denominated.

        Raises:
            KeyError: If the token has no entry for either chain
        """
        source = token.per_chain[source_chain]
        dest = token.per_chain[dest_chain]
        price = prices.price_on(source_chain) if prices is not None else None
        return cls(
            symbol=token.symbol,
            source_chain=source_chain,
            dest_chain=dest_chain,
            usd_amount=usd_amount,
            token_price_usd=price,
            decimals=source.decimals,
            source_address=source.address,
            dest_address=dest.address,
        )

    @property
    def direction(self) -> tuple[str, str]:
        return (self.source_chain, self.dest_chain)


@dataclass(frozen=True)
class QuoteContext:
    """A validated request with its principal resolved, handed to providers.

    Attributes:
        request: The originating request
        source: Registry entry for the source chain
        dest: Registry entry for the destination chain
        amount: Human token amount (truncated to provider precision)
        amount_raw: Principal in minimal units
        price_usd: Validated positive token price
    """

    request: FeeQuoteRequest
    source: ChainDescriptor
    dest: ChainDescriptor
    amount: Decimal
    amount_raw: int
    price_usd: Decimal

    @property
    def symbol(self) -> str:
        return self.request.symbol

    @property
    def decimals(self) -> int:
        return self.request.decimals


__all__ = ["FeeQuoteRequest", "QuoteContext"]
