"""Liquidity subgraph client.

Fetches up to 1000 pools above a raw liquidity threshold from a Uniswap V3
style GraphQL endpoint and validates them into PoolRecord models.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError

from bridgefees.errors import SubgraphError
from bridgefees.models.pools import PoolRecord

logger = structlog.get_logger()

POOLS_QUERY = """
query Pools($liquidityThreshold: String!) {
  pools(first: 1000, where: { liquidity_gt: $liquidityThreshold }) {
    id
    liquidity
    volumeUSD
    token0 { id symbol decimals name }
    token1 { id symbol decimals name }
  }
}
"""


class PoolSource(Protocol):
    """Anything that can produce pool records for one chain."""

    async def fetch_pools(self, liquidity_threshold: str) -> list[PoolRecord]:
        ...


class SubgraphClient:
    """PoolSource over a GraphQL subgraph endpoint.

    Args:
        client: Injected async HTTP client (carries the timeout)
        url: Subgraph endpoint for one chain
        chain: Chain name, used in log context only
    """

    def __init__(self, client: httpx.AsyncClient, url: str, chain: str = ""):
        self._client = client
        self.url = url
        self.chain = chain

    async def fetch_pools(self, liquidity_threshold: str) -> list[PoolRecord]:
        """Fetch pools with liquidity strictly above the threshold.

        Args:
            liquidity_threshold: Raw liquidity as a decimal string

        Individual pools that fail validation are logged and dropped; the
        rest of the page is still returned.

        Raises:
            SubgraphError: On transport failure, GraphQL errors or a payload
                without a data.pools list
        """
        source = self.chain or self.url
        body = {"query": POOLS_QUERY, "variables": {"liquidityThreshold": str(liquidity_threshold)}}
        try:
            response = await self._client.post(self.url, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as err:
            raise SubgraphError(f"Subgraph request failed for {source}: {err}") from err
        except ValueError as err:
            raise SubgraphError(f"Subgraph returned a non-JSON body for {source}") from err

        records = []
        for pool in _extract_pools(payload):
            try:
                records.append(PoolRecord.model_validate(pool))
            except ValidationError as err:
                logger.warning(
                    "subgraph_pool_skipped",
                    chain=self.chain,
                    pool_id=pool.get("id") if isinstance(pool, dict) else None,
                    errors=err.error_count(),
                )

        logger.info(
            "subgraph_pools_fetched",
            chain=self.chain,
            threshold=str(liquidity_threshold),
            pools=len(records),
        )
        return records


def _extract_pools(payload: Any) -> list[Any]:
    if not isinstance(payload, dict):
        raise SubgraphError(f"Unexpected subgraph payload: {type(payload).__name__}")
    if payload.get("errors"):
        raise SubgraphError(f"Subgraph errors: {payload['errors']}")
    data = payload.get("data")
    pools = data.get("pools") if isinstance(data, dict) else None
    if not isinstance(pools, list):
        raise SubgraphError("Subgraph payload has no data.pools list")
    return pools


__all__ = ["POOLS_QUERY", "PoolSource", "SubgraphClient"]
