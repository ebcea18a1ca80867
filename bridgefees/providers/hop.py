"""Hop Protocol bridge fee adapter (primary provider).

Hop quotes a native cross-chain transfer: given a token symbol, an amount in
minimal units and two chains, it returns the total fee deducted in transit.
For L1 -> L2 transfers the bonder and destination fees are typically zero,
so the fee reduces to the AMM swap cost.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog

from bridgefees.chains.registry import HOP
from bridgefees.config import DEFAULT_HOP_API_URL
from bridgefees.errors import ProviderError, UnsupportedChain, UnsupportedToken
from bridgefees.providers.base import ProviderQuote, parse_raw_amount
from bridgefees.providers.http import get_json

if TYPE_CHECKING:
    from bridgefees.fees.request import QuoteContext

logger = structlog.get_logger()

HOP_PROVIDER_NAME = "Hop Protocol"

# Assets with a canonical Hop bridge
HOP_SUPPORTED_TOKENS = frozenset(
    {"ETH", "WETH", "USDC", "USDT", "DAI", "MATIC", "HOP", "SNX", "SUSD", "RETH", "MAGIC"}
)

# Slippage tolerance (percent) sent with quote requests
DEFAULT_HOP_SLIPPAGE = "0.5"


class HopClient(Protocol):
    """Protocol for Hop send-data lookups.

    This allows swapping between the HTTP client and a mock for testing.
    """

    async def get_send_data(
        self,
        token_symbol: str,
        amount: int,
        source_chain: str,
        dest_chain: str,
    ) -> Mapping[str, Any]:
        """Fetch the fee breakdown for a transfer.

        Args:
            token_symbol: Hop asset symbol (e.g. "USDC")
            amount: Amount in minimal units
            source_chain: Hop chain slug (e.g. "ethereum")
            dest_chain: Hop chain slug (e.g. "base")

        Returns:
            Decoded payload carrying either `totalFee` or both `amountIn`
            and `estimatedReceived`, all in minimal units
        """
        ...


class HopApiClient:
    """HopClient over the public Hop REST API (GET /v1/quote)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_HOP_API_URL,
        slippage: str = DEFAULT_HOP_SLIPPAGE,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._slippage = slippage

    async def get_send_data(
        self,
        token_symbol: str,
        amount: int,
        source_chain: str,
        dest_chain: str,
    ) -> Mapping[str, Any]:
        payload = await get_json(
            self._client,
            f"{self._base_url}/v1/quote",
            provider=HOP_PROVIDER_NAME,
            params={
                "amount": str(amount),
                "token": token_symbol,
                "fromChain": source_chain,
                "toChain": dest_chain,
                "slippage": self._slippage,
            },
            client_errors_are_unsupported=True,
        )
        if not isinstance(payload, dict):
            raise ProviderError(
                f"{HOP_PROVIDER_NAME} returned {type(payload).__name__}, not an object"
            )
        return payload


class HopAdapter:
    """Primary provider: quotes native Hop bridge transfers.

    Only tokens in the whitelist are attempted; the engine skips the
    adapter for anything else.
    """

    name = HOP_PROVIDER_NAME
    provider_id = HOP

    def __init__(self, client: HopClient, whitelist: frozenset[str] = HOP_SUPPORTED_TOKENS):
        self._client = client
        self.whitelist: frozenset[str] | None = frozenset(s.upper() for s in whitelist)

    def supports_token(self, symbol: str) -> bool:
        return self.whitelist is None or symbol.upper() in self.whitelist

    async def quote(self, context: QuoteContext) -> ProviderQuote:
        """Quote a Hop transfer.

        Raises:
            UnsupportedToken: Token is not a Hop asset
            UnsupportedChain: Either chain has no Hop slug
            UnsupportedRoute: Hop rejected the route
            ProviderError: Transport failure or unexpected payload
        """
        if not self.supports_token(context.symbol):
            raise UnsupportedToken(f"Token '{context.symbol}' is not supported by Hop")
        source_slug = context.source.hop_slug
        dest_slug = context.dest.hop_slug
        if source_slug is None:
            raise UnsupportedChain(f"Hop does not serve source chain '{context.source.name}'")
        if dest_slug is None:
            raise UnsupportedChain(f"Hop does not serve destination chain '{context.dest.name}'")

        logger.debug(
            "hop_send_data_request",
            token=context.symbol,
            amount=context.amount_raw,
            source=source_slug,
            dest=dest_slug,
        )
        send_data = await self._client.get_send_data(
            context.symbol.upper(), context.amount_raw, source_slug, dest_slug
        )
        return ProviderQuote(fee_raw=total_fee(send_data))


def total_fee(send_data: Mapping[str, Any]) -> int:
    """Extract the total fee in minimal units from Hop send data.

    Prefers the explicit `totalFee` field (SDK getSendData shape) and falls
    back to amountIn - estimatedReceived (REST quote shape).

    Raises:
        ProviderError: If neither shape is present
    """
    payload = dict(send_data)
    if "totalFee" in payload:
        return parse_raw_amount(payload, "totalFee", HOP_PROVIDER_NAME)
    if "amountIn" in payload and "estimatedReceived" in payload:
        amount_in = parse_raw_amount(payload, "amountIn", HOP_PROVIDER_NAME)
        received = parse_raw_amount(payload, "estimatedReceived", HOP_PROVIDER_NAME)
        return amount_in - received
    raise ProviderError(f"{HOP_PROVIDER_NAME} response has no fee fields")


__all__ = [
    "HOP_PROVIDER_NAME",
    "HOP_SUPPORTED_TOKENS",
    "HopClient",
    "HopApiClient",
    "HopAdapter",
    "total_fee",
]
