"""Error classes for discovery, pricing and fee quoting.

Provider-level errors (QuoteError subclasses) are raised by adapters and
caught by the FeeQuoteEngine, which turns them into fallback attempts.
"""


class BridgeFeesError(Exception):
    """Base error for the bridgefees package."""

    pass


class InvalidInput(BridgeFeesError, ValueError):
    """Malformed numeric string, negative amount or out-of-range decimals."""

    pass


class NoPrice(BridgeFeesError):
    """No usable USD price for a symbol on a chain."""

    pass


class SubgraphError(BridgeFeesError):
    """The liquidity subgraph returned errors or an unexpected payload."""

    pass


class QuoteError(BridgeFeesError):
    """Base error for a single provider quote attempt."""

    pass


class UnsupportedToken(QuoteError):
    """Token is not in the provider's whitelist."""

    pass


class UnsupportedChain(QuoteError):
    """Chain is unknown or not served by the provider."""

    pass


class UnsupportedRoute(QuoteError):
    """Token and chains are individually valid but no path can be quoted."""

    pass


class ProviderError(QuoteError):
    """Transport failure, timeout or unexpected response shape."""

    pass
