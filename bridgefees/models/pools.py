"""Pydantic models for liquidity subgraph pool records.

Matches the shape returned by the Uniswap V3 subgraph `pools` query:

    pools(first: 1000, where: { liquidity_gt: $liquidityThreshold }) {
      id liquidity volumeUSD
      token0 { id symbol decimals name }
      token1 { id symbol decimals name }
    }
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from bridgefees.models.types import DecimalString, OptionalString, Uint256OrZero


class SubgraphToken(BaseModel):
    """Token metadata nested in a pool record."""

    id: str = Field(description="Token contract address on the pool's chain.")
    symbol: str
    name: OptionalString = ""
    # Subgraphs serialize decimals as a string ("18"); lax mode coerces it
    decimals: int = Field(ge=0, le=255)

    @property
    def address(self) -> str:
        return self.id


class PoolRecord(BaseModel):
    """A liquidity pool as reported by the subgraph.

    Transient: produced per discovery run, consumed once by the aggregator.
    """

    id: str
    # Missing liquidity is carried as zero rather than rejecting the pool
    liquidity: Uint256OrZero = 0
    volume_usd: DecimalString = Field(default=Decimal(0), alias="volumeUSD")
    token0: SubgraphToken
    token1: SubgraphToken

    model_config = {"populate_by_name": True}

    @property
    def tokens(self) -> tuple[SubgraphToken, SubgraphToken]:
        return (self.token0, self.token1)
