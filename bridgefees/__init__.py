"""Cross-chain token discovery and bridge-fee quoting.

Discovers tokens with meaningful liquidity on two or more chains, matches
them by symbol, resolves USD prices and quotes the cost of moving each token
between chains through an ordered set of bridge / swap-quote providers.

Usage:
    from bridgefees import Settings, run_discovery

    result = await run_discovery(Settings.from_env())
    for report in result.reports:
        print(report.symbol, report.summaries())
"""

from bridgefees.config import Settings
from bridgefees.fees import FeeQuoteEngine, FeeQuoteRequest, FeeQuoteResult, FeeQuoteStatus
from bridgefees.pipeline import (
    DiscoveryPipeline,
    DiscoveryResult,
    TokenFeeReport,
    build_pipeline,
    run_discovery,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "FeeQuoteEngine",
    "FeeQuoteRequest",
    "FeeQuoteResult",
    "FeeQuoteStatus",
    "DiscoveryPipeline",
    "DiscoveryResult",
    "TokenFeeReport",
    "build_pipeline",
    "run_discovery",
]
