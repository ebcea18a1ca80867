"""Tests for the Hop Protocol adapter and HTTP client."""

import asyncio

import httpx
import pytest

from bridgefees.chains import ChainDescriptor, ChainRegistry, get_default_registry
from bridgefees.errors import ProviderError, UnsupportedChain, UnsupportedRoute, UnsupportedToken
from bridgefees.providers import HOP_PROVIDER_NAME, HopAdapter, HopApiClient
from bridgefees.providers.hop import total_fee
from tests.conftest import MockHopClient, mock_http_client
from tests.helpers import make_context, make_request


class TestHopAdapter:
    """Tests for HopAdapter.quote."""

    def test_quotes_total_fee(self):
        client = MockHopClient(payload={"totalFee": "10000"})
        adapter = HopAdapter(client)

        quote = asyncio.run(adapter.quote(make_context()))

        assert quote.fee_raw == 10_000
        assert not quote.estimated
        assert client.calls == [("USDC", 1_000_000, "ethereum", "base")]

    def test_symbol_sent_uppercase(self):
        client = MockHopClient(payload={"totalFee": "1"})
        asyncio.run(HopAdapter(client).quote(make_context(make_request(symbol="usdc", decimals=6))))
        assert client.calls[0][0] == "USDC"

    def test_whitelist(self):
        adapter = HopAdapter(MockHopClient())
        assert adapter.name == HOP_PROVIDER_NAME
        assert adapter.supports_token("USDC")
        assert adapter.supports_token("susd")
        assert adapter.supports_token("rETH")
        assert not adapter.supports_token("DEGEN")

    def test_unsupported_token_raises(self):
        client = MockHopClient()
        with pytest.raises(UnsupportedToken):
            asyncio.run(HopAdapter(client).quote(make_context(make_request(symbol="DEGEN"))))
        assert client.calls == []

    def test_chain_without_slug_raises(self):
        registry = ChainRegistry(
            [
                get_default_registry().require("ethereum"),
                ChainDescriptor(name="nohop", chain_id=777, bridging_protocol_id=777),
            ]
        )
        context = make_context(make_request(dest_chain="nohop"), registry=registry)
        client = MockHopClient()

        with pytest.raises(UnsupportedChain):
            asyncio.run(HopAdapter(client).quote(context))
        assert client.calls == []

    def test_client_errors_propagate(self):
        adapter = HopAdapter(MockHopClient(error=ProviderError("boom")))
        with pytest.raises(ProviderError):
            asyncio.run(adapter.quote(make_context()))


class TestTotalFee:
    """Tests for reading the fee out of Hop payloads."""

    def test_total_fee_field(self):
        assert total_fee({"totalFee": "2500"}) == 2500

    def test_big_number_json(self):
        assert total_fee({"totalFee": {"type": "BigNumber", "hex": "0x2710"}}) == 10_000

    def test_amount_in_minus_received(self):
        assert total_fee({"amountIn": "1000000", "estimatedReceived": "990000"}) == 10_000

    def test_missing_fields(self):
        with pytest.raises(ProviderError):
            total_fee({"bonderFee": "1"})

    def test_non_integer(self):
        with pytest.raises(ProviderError):
            total_fee({"totalFee": "1.5"})


class TestHopApiClient:
    """Tests for the HTTP client against a mock transport."""

    def run_client(self, handler):
        async def run():
            async with mock_http_client(handler) as client:
                return await HopApiClient(client, "https://hop.example").get_send_data(
                    "USDC", 1_000_000, "ethereum", "base"
                )

        return asyncio.run(run())

    def test_request_params(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"totalFee": "10000"})

        assert self.run_client(handler) == {"totalFee": "10000"}
        params = seen[0].url.params
        assert seen[0].url.path == "/v1/quote"
        assert params["amount"] == "1000000"
        assert params["token"] == "USDC"
        assert params["fromChain"] == "ethereum"
        assert params["toChain"] == "base"

    def test_client_error_is_unsupported_route(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "route not supported"})

        with pytest.raises(UnsupportedRoute, match="route not supported"):
            self.run_client(handler)

    def test_server_error_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        with pytest.raises(ProviderError):
            self.run_client(handler)

    def test_timeout_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(ProviderError, match="timed out"):
            self.run_client(handler)

    def test_non_object_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["unexpected"])

        with pytest.raises(ProviderError):
            self.run_client(handler)
