"""Fee quote provider adapters.

Providers are tried by the FeeQuoteEngine in priority order:
1. HopAdapter - native bridge quotes for whitelisted assets
2. OpenOceanAdapter - swap-aggregator estimate for everything else

Each adapter wraps an injected client (HopClient / OpenOceanClient) so that
tests can substitute mocks without network access.
"""

from bridgefees.providers.base import ProviderQuote, QuoteProvider, parse_raw_amount
from bridgefees.providers.hop import (
    HOP_PROVIDER_NAME,
    HOP_SUPPORTED_TOKENS,
    HopAdapter,
    HopApiClient,
    HopClient,
)
from bridgefees.providers.openocean import (
    OPENOCEAN_PROVIDER_NAME,
    OpenOceanAdapter,
    OpenOceanApiClient,
    OpenOceanClient,
)

__all__ = [
    "ProviderQuote",
    "QuoteProvider",
    "parse_raw_amount",
    "HOP_PROVIDER_NAME",
    "HOP_SUPPORTED_TOKENS",
    "HopAdapter",
    "HopApiClient",
    "HopClient",
    "OPENOCEAN_PROVIDER_NAME",
    "OpenOceanAdapter",
    "OpenOceanApiClient",
    "OpenOceanClient",
]
