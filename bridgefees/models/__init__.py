"""Data models for pools, tokens and prices."""

from bridgefees.models.pools import PoolRecord, SubgraphToken
from bridgefees.models.tokens import (
    AggregatedToken,
    MatchedToken,
    PriceQuote,
    Token,
    TokenSummary,
)
from bridgefees.models.types import (
    UINT256_MAX,
    DecimalString,
    OptionalString,
    Uint256OrZero,
    is_valid_address,
    normalize_address,
)

__all__ = [
    # Subgraph payloads
    "PoolRecord",
    "SubgraphToken",
    # Tokens
    "Token",
    "AggregatedToken",
    "TokenSummary",
    "MatchedToken",
    "PriceQuote",
    # Types
    "DecimalString",
    "OptionalString",
    "Uint256OrZero",
    "UINT256_MAX",
    "is_valid_address",
    "normalize_address",
]
