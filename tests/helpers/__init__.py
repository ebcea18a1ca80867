"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token addresses per chain and decimals
- factories: Pool, token, request and context factory functions
"""

from tests.helpers.constants import (
    ADDRESSES,
    DAI,
    DAI_BASE,
    DEGEN_BASE,
    TOKEN_DECIMALS,
    UNI,
    USDC,
    USDC_BASE,
    USDT,
    WBTC,
    WETH,
    WETH_BASE,
)
from tests.helpers.factories import (
    make_context,
    make_matched_token,
    make_pool,
    make_request,
    make_summary,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    "UNI",
    "WETH_BASE",
    "USDC_BASE",
    "DAI_BASE",
    "DEGEN_BASE",
    "ADDRESSES",
    "TOKEN_DECIMALS",
    # Factories
    "make_pool",
    "make_summary",
    "make_matched_token",
    "make_request",
    "make_context",
]
