"""Mathematical utilities for price and fee conversion.

This package provides exact-precision primitives:
- sqrt-price decoding (Uniswap V3 sqrtPriceX96)
- human amount <-> minimal unit conversion
- basis-point fee ratios and USD fee values
"""

from bridgefees.math.fixed_point import (
    BPS_DENOMINATOR,
    Q96,
    Q192,
    basis_points,
    fee_usd,
    from_minimal_units,
    price_from_sqrt_encoding,
    to_decimal,
    to_minimal_units,
    token_amount_for_usd,
)

__all__ = [
    "BPS_DENOMINATOR",
    "Q96",
    "Q192",
    "basis_points",
    "fee_usd",
    "from_minimal_units",
    "price_from_sqrt_encoding",
    "to_decimal",
    "to_minimal_units",
    "token_amount_for_usd",
]
