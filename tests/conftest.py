"""Pytest configuration and fixtures."""

from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal
from typing import Any

import httpx
import pytest

from bridgefees.chains import ChainDescriptor, ChainRegistry, get_default_registry
from bridgefees.errors import ProviderError
from bridgefees.models import PoolRecord
from bridgefees.providers import ProviderQuote

# =============================================================================
# Mock classes for dependency injection
# =============================================================================


class MockHopClient:
    """Mock HopClient returning a fixed payload or raising.

    Usage:
        # Fee of 10_000 minimal units
        hop = MockHopClient(payload={"totalFee": "10000"})

        # Transport failure
        hop = MockHopClient(error=ProviderError("timeout"))
    """

    def __init__(
        self,
        payload: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.payload = payload if payload is not None else {"totalFee": "0"}
        self.error = error
        self.calls: list[tuple[str, int, str, str]] = []  # Track calls for assertions

    async def get_send_data(
        self, token_symbol: str, amount: int, source_chain: str, dest_chain: str
    ) -> Mapping[str, Any]:
        self.calls.append((token_symbol, amount, source_chain, dest_chain))
        if self.error is not None:
            raise self.error
        return self.payload


class MockOpenOceanClient:
    """Mock OpenOceanClient with a fixed token list and quote output.

    Usage:
        oo = MockOpenOceanClient(addresses={USDC, USDC_BASE}, out_amount=990_000)
    """

    def __init__(
        self,
        addresses: set[str] | None = None,
        out_amount: int | str = 0,
        quote_code: int = 200,
        token_list_error: Exception | None = None,
        quote_error: Exception | None = None,
    ) -> None:
        self.addresses = addresses or set()
        self.out_amount = out_amount
        self.quote_code = quote_code
        self.token_list_error = token_list_error
        self.quote_error = quote_error
        self.token_list_calls: list[str] = []
        self.quote_calls: list[dict] = []

    async def token_list(self, chain_code: str) -> Mapping[str, Any]:
        self.token_list_calls.append(chain_code)
        if self.token_list_error is not None:
            raise self.token_list_error
        return {"code": 200, "data": [{"address": addr} for addr in sorted(self.addresses)]}

    async def quote(
        self,
        chain_code: str,
        in_token: str,
        out_token: str,
        amount: str,
        gas_price: str,
        slippage: str,
    ) -> Mapping[str, Any]:
        self.quote_calls.append(
            {
                "chain": chain_code,
                "in_token": in_token,
                "out_token": out_token,
                "amount": amount,
                "gas_price": gas_price,
                "slippage": slippage,
            }
        )
        if self.quote_error is not None:
            raise self.quote_error
        if self.quote_code != 200:
            return {"code": self.quote_code, "error": "route not found"}
        return {"code": 200, "data": {"outAmount": str(self.out_amount)}}


class MockProvider:
    """Generic QuoteProvider with a scripted outcome.

    Usage:
        # Always quotes a fee of 10_000 minimal units
        provider = MockProvider(fee_raw=10_000)

        # Always fails
        provider = MockProvider(error=UnsupportedRoute("no path"))
    """

    def __init__(
        self,
        name: str = "Mock",
        provider_id: str = "hop",
        fee_raw: int = 0,
        estimated: bool = False,
        error: Exception | None = None,
        whitelist: frozenset[str] | None = None,
    ) -> None:
        self.name = name
        self.provider_id = provider_id
        self.fee_raw = fee_raw
        self.estimated = estimated
        self.error = error
        self.whitelist = whitelist
        self.calls: list = []  # QuoteContexts received

    def supports_token(self, symbol: str) -> bool:
        return self.whitelist is None or symbol.upper() in self.whitelist

    async def quote(self, context) -> ProviderQuote:
        self.calls.append(context)
        if self.error is not None:
            raise self.error
        return ProviderQuote(fee_raw=self.fee_raw, estimated=self.estimated)


class MockPriceSource:
    """Mock PriceSource serving prices from a per-chain table.

    Usage:
        source = MockPriceSource({"ethereum": {"USDC": Decimal("1.00")}})

        # Second batch (index 1) raises
        source = MockPriceSource(prices, failing_batches={1})
    """

    def __init__(
        self,
        prices: Mapping[str, Mapping[str, Decimal]] | None = None,
        failing_batches: set[int] | None = None,
    ) -> None:
        self.prices = prices or {}
        self.failing_batches = failing_batches or set()
        self.calls: list[tuple[str, list[str]]] = []

    async def fetch_batch(
        self, symbols: Sequence[str], chain: ChainDescriptor
    ) -> Mapping[str, Decimal]:
        batch_index = sum(1 for call_chain, _ in self.calls if call_chain == chain.name)
        self.calls.append((chain.name, list(symbols)))
        if batch_index in self.failing_batches:
            raise ProviderError(f"batch {batch_index} failed")
        table = self.prices.get(chain.name, {})
        return {symbol: table[symbol] for symbol in symbols if symbol in table}


class MockPoolSource:
    """Mock PoolSource returning fixed pools."""

    def __init__(self, pools: list[PoolRecord] | None = None, error: Exception | None = None):
        self.pools = pools or []
        self.error = error
        self.calls: list[str] = []

    async def fetch_pools(self, liquidity_threshold: str) -> list[PoolRecord]:
        self.calls.append(liquidity_threshold)
        if self.error is not None:
            raise self.error
        return self.pools


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler (no network)."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ChainRegistry:
    """Fresh registry with the built-in chains."""
    return get_default_registry()


@pytest.fixture
def mock_price_source() -> MockPriceSource:
    """Price source with USDC and WETH priced on ethereum and base."""
    return MockPriceSource(
        {
            "ethereum": {"USDC": Decimal("1.00"), "WETH": Decimal("2500")},
            "base": {"USDC": Decimal("0.9999"), "WETH": Decimal("2501.5")},
        }
    )
