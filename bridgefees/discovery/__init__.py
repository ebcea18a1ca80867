"""Token discovery: pool fetching, per-chain aggregation and matching."""

from bridgefees.discovery.aggregator import aggregate_pools, match_tokens, rank_tokens
from bridgefees.discovery.subgraph import POOLS_QUERY, PoolSource, SubgraphClient

__all__ = [
    "aggregate_pools",
    "rank_tokens",
    "match_tokens",
    "POOLS_QUERY",
    "PoolSource",
    "SubgraphClient",
]
