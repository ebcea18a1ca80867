"""Token-level data structures produced by discovery and price resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from bridgefees.models.pools import PoolRecord, SubgraphToken


@dataclass(frozen=True)
class Token:
    """One chain-scoped view of a token.

    Cross-chain identity is symbol equality only: two Tokens on different
    chains are treated as the same asset when their symbols match
    case-insensitively. Contract equivalence is not verified.
    """

    symbol: str
    name: str
    decimals: int
    address: str

    @classmethod
    def from_subgraph(cls, token: SubgraphToken) -> Token:
        return cls(
            symbol=token.symbol,
            name=token.name,
            decimals=token.decimals,
            address=token.id,
        )


@dataclass
class AggregatedToken:
    """Per-symbol liquidity accumulator for one chain and one discovery run.

    Attributes:
        token: Metadata from the first pool the symbol was seen in
        total_liquidity: Sum of raw pool liquidity across all pools (int, exact)
        total_volume_usd: Sum of pool volumeUSD (Decimal, exact)
        pool_ids: Ids of every contributing pool, in encounter order
        representative_pool: Pool with the largest individual liquidity;
            the first-seen pool wins ties
    """

    token: Token
    total_liquidity: int
    total_volume_usd: Decimal
    representative_pool: PoolRecord
    pool_ids: list[str] = field(default_factory=list)

    def merge(self, pool: PoolRecord) -> None:
        """Fold another pool containing this token into the totals."""
        self.total_liquidity += pool.liquidity
        self.total_volume_usd += pool.volume_usd
        self.pool_ids.append(pool.id)
        if pool.liquidity > self.representative_pool.liquidity:
            self.representative_pool = pool

    def summary(self) -> TokenSummary:
        return TokenSummary(
            symbol=self.token.symbol,
            name=self.token.name,
            address=self.token.address,
            decimals=self.token.decimals,
            liquidity=self.total_liquidity,
            volume_usd=self.total_volume_usd,
            representative_pool_id=self.representative_pool.id,
            pool_count=len(self.pool_ids),
        )


@dataclass(frozen=True)
class TokenSummary:
    """Immutable per-chain ranking entry for a token."""

    symbol: str
    name: str
    address: str
    decimals: int
    liquidity: int
    volume_usd: Decimal
    representative_pool_id: str
    pool_count: int = 1


@dataclass(frozen=True)
class MatchedToken:
    """A symbol present on two or more chains.

    Attributes:
        symbol: Display symbol (casing from the first chain)
        name: Display name (from the first chain)
        per_chain: Chain name -> that chain's TokenSummary
    """

    symbol: str
    name: str
    per_chain: dict[str, TokenSummary]

    @property
    def chains(self) -> list[str]:
        return list(self.per_chain)

    def on(self, chain: str) -> TokenSummary | None:
        return self.per_chain.get(chain)


@dataclass(frozen=True)
class PriceQuote:
    """USD prices of one symbol across chains.

    A chain maps to None when no price could be resolved. None is never
    replaced with zero.
    """

    symbol: str
    per_chain: dict[str, Decimal | None]

    def price_on(self, chain: str) -> Decimal | None:
        return self.per_chain.get(chain)

    @property
    def is_complete(self) -> bool:
        """True if every chain has a price."""
        return all(price is not None for price in self.per_chain.values())


__all__ = [
    "Token",
    "AggregatedToken",
    "TokenSummary",
    "MatchedToken",
    "PriceQuote",
]
