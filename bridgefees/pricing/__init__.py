"""USD price resolution."""

from bridgefees.pricing.oracle import (
    DEFAULT_BATCH_DELAY,
    DEFAULT_BATCH_SIZE,
    AlchemyPriceSource,
    PriceOracleClient,
    PriceSource,
    parse_usd_prices,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_BATCH_DELAY",
    "PriceSource",
    "AlchemyPriceSource",
    "PriceOracleClient",
    "parse_usd_prices",
]
