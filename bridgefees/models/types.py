"""Shared type definitions for subgraph and provider payloads."""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator

# Maximum uint256 value
UINT256_MAX = 2**256 - 1


def validate_uint256(value: Any) -> int:
    """Validate that a value is a valid uint256 and return it as int.

    Subgraphs and quote APIs encode big integers as decimal strings; this
    converts them to int without ever going through float.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as a Python int

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return int_value


def validate_uint256_or_zero(value: Any) -> int:
    """Like validate_uint256, but a missing value (None or "") becomes 0."""
    if value is None or value == "":
        return 0
    return validate_uint256(value)


def validate_optional_str(value: Any) -> Any:
    """Map a null string field to the empty string."""
    return "" if value is None else value


def validate_decimal(value: Any) -> Decimal:
    """Parse a decimal string (e.g. volumeUSD). Missing values become 0."""
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    try:
        return Decimal(str(value))
    except InvalidOperation as err:
        raise ValueError(f"Not a decimal value: '{value}'") from err


# Uint256 where the subgraph may report null (treated as zero)
Uint256OrZero = Annotated[int, BeforeValidator(validate_uint256_or_zero)]

# String where the subgraph may report null (treated as "")
OptionalString = Annotated[str, BeforeValidator(validate_optional_str)]

# Arbitrary-precision decimal string on the wire, Decimal in Python
DecimalString = Annotated[Decimal, BeforeValidator(validate_decimal)]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
