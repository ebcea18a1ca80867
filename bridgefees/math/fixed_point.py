"""Exact fixed-point conversions for prices, token amounts and fee ratios.

Nothing in this module touches binary floating point on the arithmetic
path. Integer math is used where the result is an integer (minimal units,
basis points, sqrt-price squaring) and a 78-digit Decimal context elsewhere,
which is enough headroom for uint256-sized values.

Conventions:
    - "human" amounts are Decimals in whole-token units (1.5 USDC)
    - "raw" / minimal-unit amounts are ints scaled by 10**decimals
    - all conversions into minimal units truncate toward zero so that fee
      comparisons stay conservative
"""

from __future__ import annotations

import decimal
import re
from decimal import ROUND_DOWN, ROUND_FLOOR, Decimal

from bridgefees.errors import InvalidInput

__all__ = [
    "Q96",
    "Q192",
    "BPS_DENOMINATOR",
    "PRICE_FRACTION_DIGITS",
    "MAX_AMOUNT_PLACES",
    "DECIMAL_HIGH_PREC_CONTEXT",
    "price_from_sqrt_encoding",
    "to_minimal_units",
    "from_minimal_units",
    "basis_points",
    "fee_usd",
    "token_amount_for_usd",
    "to_decimal",
]

Q96 = 2**96
Q192 = Q96 * Q96

# 1 bps = 0.01%
BPS_DENOMINATOR = 10_000

# Fractional digits kept when rendering a sqrt-encoded price
PRICE_FRACTION_DIGITS = 40

# Providers accept human amounts with at most this many fractional digits
MAX_AMOUNT_PLACES = 8

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

_UNSIGNED_INT_RE = re.compile(r"^[0-9]+$")


def _exact_context(value: Decimal) -> decimal.Context:
    """High-precision context widened so that value's coefficient is never rounded."""
    digits = len(value.as_tuple().digits)
    if digits <= DECIMAL_HIGH_PREC_CONTEXT.prec:
        return DECIMAL_HIGH_PREC_CONTEXT
    return decimal.Context(prec=digits)


def _check_decimals(decimals: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidInput(f"Decimals must be an int, got {type(decimals).__name__}")
    if decimals < 0 or decimals > 255:
        raise InvalidInput(f"Decimals out of uint8 range: {decimals}")
    return decimals


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """Convert a numeric value to Decimal without binary float artifacts.

    Floats are converted through their shortest repr ("0.1" rather than
    0.1000000000000000055...), which is what a caller writing 0.1 means.

    Raises:
        InvalidInput: If the value cannot be parsed as a number
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Not a numeric value: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except decimal.InvalidOperation as err:
            raise InvalidInput(f"Not a decimal string: '{value}'") from err
    raise InvalidInput(f"Unsupported numeric type: {type(value).__name__}")


def price_from_sqrt_encoding(sqrt_price_raw: str, decimals0: int, decimals1: int) -> str:
    """Convert a Uniswap V3 style sqrtPriceX96 into a human price string.

    Formula:
        P = (sqrtPriceX96^2 / 2^192) * 10^(decimals0 - decimals1)

    where P is the price of token0 expressed in units of token1. The ratio is
    evaluated as an exact fraction of integers and rendered with
    PRICE_FRACTION_DIGITS fractional digits (truncated), trailing zeros
    stripped and never in exponent notation.

    Args:
        sqrt_price_raw: Unsigned integer as a decimal string (uint160 range
            in practice, but any size is accepted). A non-negative int is
            also accepted.
        decimals0: Decimals of token0
        decimals1: Decimals of token1

    Returns:
        Price as a plain decimal string, e.g. "1" or "0.000000000001"

    Raises:
        InvalidInput: If sqrt_price_raw is not a non-negative integer string
    """
    if isinstance(sqrt_price_raw, int) and not isinstance(sqrt_price_raw, bool):
        sqrt_price_raw = str(sqrt_price_raw)
    if not isinstance(sqrt_price_raw, str) or not _UNSIGNED_INT_RE.match(sqrt_price_raw.strip()):
        raise InvalidInput(f"sqrtPrice must be a non-negative integer string: {sqrt_price_raw!r}")
    _check_decimals(decimals0)
    _check_decimals(decimals1)

    sqrt_price = int(sqrt_price_raw.strip())
    numerator = sqrt_price * sqrt_price
    denominator = Q192
    shift = decimals0 - decimals1
    if shift >= 0:
        numerator *= 10**shift
    else:
        denominator *= 10**-shift

    scaled = numerator * 10**PRICE_FRACTION_DIGITS // denominator
    digits = str(scaled).rjust(PRICE_FRACTION_DIGITS + 1, "0")
    integer_part = digits[:-PRICE_FRACTION_DIGITS]
    fraction_part = digits[-PRICE_FRACTION_DIGITS:].rstrip("0")
    if fraction_part:
        return f"{integer_part}.{fraction_part}"
    return integer_part


def to_minimal_units(human_amount: Decimal | int | str | float, decimals: int) -> int:
    """Scale a human token amount into minimal units, truncating.

    Args:
        human_amount: Amount in whole-token units
        decimals: Token decimals

    Returns:
        floor(human_amount * 10**decimals)

    Raises:
        InvalidInput: On negative, NaN, infinite or unparsable input
    """
    _check_decimals(decimals)
    amount = to_decimal(human_amount)
    if not amount.is_finite():
        raise InvalidInput(f"Amount must be finite: {human_amount!r}")
    if amount < 0:
        raise InvalidInput(f"Amount cannot be negative: {human_amount!r}")

    with decimal.localcontext(_exact_context(amount)) as ctx:
        ctx.rounding = ROUND_FLOOR
        scaled = amount.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def from_minimal_units(raw: int, decimals: int) -> Decimal:
    """Convert minimal units back to a human Decimal (exact)."""
    _check_decimals(decimals)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidInput(f"Raw amount must be an int, got {type(raw).__name__}")
    value = Decimal(raw)
    with decimal.localcontext(_exact_context(value)):
        return value.scaleb(-decimals)


def basis_points(fee_raw: int, total_raw: int) -> int:
    """Fee ratio in basis points: fee * 10000 // total.

    A zero total has a defined ratio of 0 rather than raising; a zero-amount
    quote is not an error condition.

    Raises:
        InvalidInput: If either operand is negative
    """
    if fee_raw < 0 or total_raw < 0:
        raise InvalidInput(f"Basis points need non-negative operands: {fee_raw}/{total_raw}")
    if total_raw == 0:
        return 0
    return fee_raw * BPS_DENOMINATOR // total_raw


def fee_usd(fee_raw: int, decimals: int, price_usd: Decimal | int | str) -> Decimal:
    """USD value of a minimal-unit fee at the given token price."""
    price = to_decimal(price_usd)
    amount = from_minimal_units(fee_raw, decimals)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return amount * price


def token_amount_for_usd(
    usd_amount: Decimal | int | str,
    price_usd: Decimal | int | str,
    decimals: int,
    max_places: int = MAX_AMOUNT_PLACES,
) -> Decimal:
    """Human token amount worth usd_amount at price_usd.

    The quotient is truncated to min(decimals, max_places) fractional
    places, which is the precision quote providers accept.

    Raises:
        InvalidInput: If the price is not positive, the USD amount is negative
            or the resulting amount does not fit the 78-digit context
    """
    _check_decimals(decimals)
    usd = to_decimal(usd_amount)
    price = to_decimal(price_usd)
    if not usd.is_finite() or usd < 0:
        raise InvalidInput(f"USD amount must be a non-negative number: {usd_amount!r}")
    if not price.is_finite() or price <= 0:
        raise InvalidInput(f"Price must be positive: {price_usd!r}")

    places = min(decimals, max_places)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT) as ctx:
        ctx.rounding = ROUND_DOWN
        try:
            amount = usd / price
            return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)
        except decimal.DecimalException as err:
            raise InvalidInput(
                f"Token amount for ${usd_amount} at price {price_usd} is out of range"
            ) from err
