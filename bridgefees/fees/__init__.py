"""Fee quoting for cross-chain token transfers.

This module provides:
- FeeQuoteRequest / QuoteContext describing one transfer direction
- FeeQuoteEngine trying providers in priority order with fallback
- FeeQuoteResult with a closed FeeQuoteStatus and captured provider attempts

Usage:
    from bridgefees.fees import FeeQuoteEngine, FeeQuoteRequest

    engine = FeeQuoteEngine(providers=[hop_adapter, openocean_adapter])
    result = await engine.quote(request)

    if result.is_quote:
        print(result.summary())
    else:
        handle_failure(result.status, result.attempts)
"""

from bridgefees.fees.config import DEFAULT_FEE_QUOTE_CONFIG, FeeQuoteConfig
from bridgefees.fees.engine import FeeQuoteEngine, usable_price
from bridgefees.fees.request import FeeQuoteRequest, QuoteContext
from bridgefees.fees.result import (
    FeeQuoteResult,
    FeeQuoteStatus,
    ProviderAttempt,
    status_for_error,
)

__all__ = [
    # Engine
    "FeeQuoteEngine",
    "usable_price",
    # Config
    "FeeQuoteConfig",
    "DEFAULT_FEE_QUOTE_CONFIG",
    # Request
    "FeeQuoteRequest",
    "QuoteContext",
    # Result
    "FeeQuoteResult",
    "FeeQuoteStatus",
    "ProviderAttempt",
    "status_for_error",
]
