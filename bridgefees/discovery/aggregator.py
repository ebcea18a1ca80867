"""Per-chain token aggregation and cross-chain symbol matching.

Aggregation folds raw pool records into one entry per symbol:

    for each pool, for each of (token0, token1):
        total_liquidity += pool.liquidity        (exact int)
        total_volume_usd += pool.volumeUSD       (exact Decimal)
        representative_pool = pool if pool.liquidity > current

Symbols are keyed exactly as the subgraph reports them. A pool whose two
legs share a symbol contributes to that symbol twice.

Matching intersects the lowercased symbol sets of two or more chains. Only
symbols are compared, never contract addresses, so a token that merely
shares a ticker with another chain's token is matched anyway; symbols known
to collide can be excluded with a denylist.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import structlog

from bridgefees.models.pools import PoolRecord
from bridgefees.models.tokens import AggregatedToken, MatchedToken, Token, TokenSummary

logger = structlog.get_logger()


def aggregate_pools(pools: Iterable[PoolRecord]) -> list[AggregatedToken]:
    """Aggregate pools per symbol, ranked by total liquidity (descending).

    The sort is stable: symbols with equal liquidity keep the order in which
    they were first encountered.
    """
    by_symbol: dict[str, AggregatedToken] = {}
    for pool in pools:
        for token in pool.tokens:
            entry = by_symbol.get(token.symbol)
            if entry is None:
                by_symbol[token.symbol] = AggregatedToken(
                    token=Token.from_subgraph(token),
                    total_liquidity=pool.liquidity,
                    total_volume_usd=pool.volume_usd,
                    representative_pool=pool,
                    pool_ids=[pool.id],
                )
            else:
                entry.merge(pool)

    return sorted(by_symbol.values(), key=lambda entry: entry.total_liquidity, reverse=True)


def rank_tokens(pools: Iterable[PoolRecord]) -> list[TokenSummary]:
    """Aggregate pools and freeze the ranking into TokenSummary entries."""
    return [entry.summary() for entry in aggregate_pools(pools)]


def match_tokens(
    chain_results: Mapping[str, Sequence[TokenSummary]],
    ambiguous_symbols: Iterable[str] = (),
) -> list[MatchedToken]:
    """Find symbols present on every chain in chain_results.

    Args:
        chain_results: Chain name -> ranked TokenSummary list. Iteration
            order matters: the first chain supplies display symbol/name and
            the output order.
        ambiguous_symbols: Symbols (any casing) never matched across chains

    Returns:
        One MatchedToken per common symbol, carrying the first (highest
        ranked) entry per chain

    Raises:
        ValueError: If fewer than two chains are given
    """
    if len(chain_results) < 2:
        raise ValueError(f"Matching needs at least two chains, got {len(chain_results)}")

    denied = {symbol.lower() for symbol in ambiguous_symbols}
    first_by_chain: dict[str, dict[str, TokenSummary]] = {}
    for chain, ranked in chain_results.items():
        first: dict[str, TokenSummary] = {}
        for summary in ranked:
            first.setdefault(summary.symbol.lower(), summary)
        first_by_chain[chain] = first

    chains = list(chain_results)
    lead = first_by_chain[chains[0]]
    common = set(lead)
    for chain in chains[1:]:
        common &= set(first_by_chain[chain])
    excluded = common & denied
    common -= denied

    matched: list[MatchedToken] = []
    for key, lead_summary in lead.items():
        if key not in common:
            continue
        matched.append(
            MatchedToken(
                symbol=lead_summary.symbol,
                name=lead_summary.name,
                per_chain={chain: first_by_chain[chain][key] for chain in chains},
            )
        )

    logger.warning(
        "symbol_only_matching",
        chains=chains,
        matched=len(matched),
        excluded=sorted(excluded),
        note="cross-chain identity is symbol equality; contracts are not verified",
    )
    return matched


__all__ = ["aggregate_pools", "rank_tokens", "match_tokens"]
