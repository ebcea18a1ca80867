"""OpenOcean swap-aggregator adapter (fallback provider).

OpenOcean has no native bridge quote. The fallback approximates the cost of
moving a token by quoting a swap from the source-chain contract to the
destination-chain contract on the source chain's aggregator, so both
contracts must appear in the source chain's token list. The result is
always reported as an estimate.

API notes (V4):
    GET /v4/<chain>/tokenList -> {"code": 200, "data": [{"address": ...}, ...]}
    GET /v4/<chain>/quote?inTokenAddress&outTokenAddress&amount&gasPrice&slippage
        -> {"code": 200, "data": {"outAmount": "<minimal units>", ...}}

`amount` is human-readable ("1.23"); `outAmount` is in minimal units.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog

from bridgefees.chains.registry import OPENOCEAN
from bridgefees.config import DEFAULT_OPENOCEAN_API_URL
from bridgefees.errors import ProviderError, UnsupportedChain, UnsupportedRoute
from bridgefees.models.types import normalize_address
from bridgefees.providers.base import ProviderQuote, parse_raw_amount
from bridgefees.providers.http import get_json

if TYPE_CHECKING:
    from bridgefees.fees.request import QuoteContext

logger = structlog.get_logger()

OPENOCEAN_PROVIDER_NAME = "OpenOcean"

# OpenOcean signals success in the body, not the HTTP status
OPENOCEAN_OK = 200


class OpenOceanClient(Protocol):
    """Protocol for OpenOcean API access.

    This allows swapping between the HTTP client and a mock for testing.
    """

    async def token_list(self, chain_code: str) -> Mapping[str, Any]:
        """Fetch the raw token list payload for a chain."""
        ...

    async def quote(
        self,
        chain_code: str,
        in_token: str,
        out_token: str,
        amount: str,
        gas_price: str,
        slippage: str,
    ) -> Mapping[str, Any]:
        """Fetch the raw quote payload for a swap."""
        ...


class OpenOceanApiClient:
    """OpenOceanClient over the public V4 REST API."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = DEFAULT_OPENOCEAN_API_URL):
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def token_list(self, chain_code: str) -> Mapping[str, Any]:
        return await self._get(f"{self._base_url}/{chain_code}/tokenList")

    async def quote(
        self,
        chain_code: str,
        in_token: str,
        out_token: str,
        amount: str,
        gas_price: str,
        slippage: str,
    ) -> Mapping[str, Any]:
        return await self._get(
            f"{self._base_url}/{chain_code}/quote",
            params={
                "inTokenAddress": in_token,
                "outTokenAddress": out_token,
                "amount": amount,
                "gasPrice": gas_price,
                "slippage": slippage,
            },
        )

    async def _get(self, url: str, params: Mapping[str, str] | None = None) -> Mapping[str, Any]:
        payload = await get_json(self._client, url, provider=OPENOCEAN_PROVIDER_NAME, params=params)
        if not isinstance(payload, dict):
            raise ProviderError(
                f"{OPENOCEAN_PROVIDER_NAME} returned {type(payload).__name__}, not an object"
            )
        return payload


class OpenOceanAdapter:
    """Fallback provider: estimates transfer cost from a swap quote."""

    name = OPENOCEAN_PROVIDER_NAME
    provider_id = OPENOCEAN
    whitelist: frozenset[str] | None = None

    def __init__(self, client: OpenOceanClient, gas_price: str = "5", slippage: str = "1"):
        self._client = client
        self._gas_price = gas_price
        self._slippage = slippage

    def supports_token(self, symbol: str) -> bool:
        return True

    async def quote(self, context: QuoteContext) -> ProviderQuote:
        """Estimate the transfer fee as principal - outAmount.

        Raises:
            UnsupportedChain: Source chain has no OpenOcean code
            UnsupportedRoute: A contract address is missing or unknown to the
                token list, or the quote endpoint reports a failure code
            ProviderError: Transport failure or unexpected payload
        """
        chain_code = context.source.openocean_code
        if chain_code is None:
            raise UnsupportedChain(f"OpenOcean does not serve chain '{context.source.name}'")

        in_token = context.request.source_address
        out_token = context.request.dest_address
        if not in_token or not out_token:
            raise UnsupportedRoute(f"No contract address for {context.symbol} on both chains")

        known = known_addresses(await self._client.token_list(chain_code))
        missing = [addr for addr in (in_token, out_token) if normalize_address(addr) not in known]
        if missing:
            # Either leg unknown is an unsupported route, not a separate error kind
            raise UnsupportedRoute(
                f"{context.symbol} on {context.source.name}: token list lacks {', '.join(missing)}"
            )

        amount = format(context.amount, "f")
        logger.debug(
            "openocean_quote_request",
            token=context.symbol,
            chain=chain_code,
            amount=amount,
        )
        payload = await self._client.quote(
            chain_code, in_token, out_token, amount, self._gas_price, self._slippage
        )
        if payload.get("code") != OPENOCEAN_OK or not isinstance(payload.get("data"), dict):
            raise UnsupportedRoute(
                f"OpenOcean quote failed for {context.symbol}: code={payload.get('code')}"
            )
        out_amount = parse_raw_amount(payload["data"], "outAmount", OPENOCEAN_PROVIDER_NAME)
        return ProviderQuote(fee_raw=context.amount_raw - out_amount, estimated=True)


def known_addresses(payload: Mapping[str, Any]) -> frozenset[str]:
    """Lowercased addresses from a tokenList payload.

    Raises:
        ProviderError: If the payload is not a successful token list
    """
    tokens = payload.get("data")
    if payload.get("code") != OPENOCEAN_OK or not isinstance(tokens, list):
        raise ProviderError(f"OpenOcean token list unavailable: code={payload.get('code')}")
    return frozenset(
        normalize_address(token["address"])
        for token in tokens
        if isinstance(token, dict) and isinstance(token.get("address"), str)
    )


__all__ = [
    "OPENOCEAN_PROVIDER_NAME",
    "OpenOceanClient",
    "OpenOceanApiClient",
    "OpenOceanAdapter",
    "known_addresses",
]
