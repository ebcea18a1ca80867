"""Tests for the OpenOcean fallback adapter and HTTP client."""

import asyncio

import httpx
import pytest

from bridgefees.chains import ChainDescriptor, ChainRegistry
from bridgefees.errors import ProviderError, UnsupportedChain, UnsupportedRoute
from bridgefees.providers import OPENOCEAN_PROVIDER_NAME, OpenOceanAdapter, OpenOceanApiClient
from bridgefees.providers.openocean import known_addresses
from tests.conftest import MockOpenOceanClient, mock_http_client
from tests.helpers import USDC, USDC_BASE, make_context, make_request


class TestOpenOceanAdapter:
    """Tests for OpenOceanAdapter.quote."""

    def test_fee_is_principal_minus_out_amount(self):
        client = MockOpenOceanClient(addresses={USDC, USDC_BASE}, out_amount=990_000)
        adapter = OpenOceanAdapter(client)

        quote = asyncio.run(adapter.quote(make_context()))

        assert quote.fee_raw == 10_000
        assert quote.estimated
        assert client.token_list_calls == ["eth"]
        call = client.quote_calls[0]
        assert call["chain"] == "eth"
        assert call["in_token"] == USDC
        assert call["out_token"] == USDC_BASE
        assert call["amount"] == "1.000000"
        assert call["gas_price"] == "5"
        assert call["slippage"] == "1"

    def test_no_whitelist(self):
        adapter = OpenOceanAdapter(MockOpenOceanClient())
        assert adapter.name == OPENOCEAN_PROVIDER_NAME
        assert adapter.whitelist is None
        assert adapter.supports_token("ANYTHING")

    def test_token_list_lookup_is_case_insensitive(self):
        client = MockOpenOceanClient(addresses={USDC.upper().replace("0X", "0x"), USDC_BASE})
        quote = asyncio.run(OpenOceanAdapter(client).quote(make_context()))
        assert quote.fee_raw == 1_000_000

    def test_unknown_address_is_unsupported_route(self):
        client = MockOpenOceanClient(addresses={USDC})
        with pytest.raises(UnsupportedRoute):
            asyncio.run(OpenOceanAdapter(client).quote(make_context()))
        assert client.quote_calls == []

    def test_missing_addresses_is_unsupported_route(self):
        client = MockOpenOceanClient(addresses={USDC, USDC_BASE})
        context = make_context(make_request(with_addresses=False))
        with pytest.raises(UnsupportedRoute):
            asyncio.run(OpenOceanAdapter(client).quote(context))
        assert client.token_list_calls == []

    def test_failure_code_is_unsupported_route(self):
        client = MockOpenOceanClient(addresses={USDC, USDC_BASE}, quote_code=500)
        with pytest.raises(UnsupportedRoute):
            asyncio.run(OpenOceanAdapter(client).quote(make_context()))

    def test_output_above_principal_gives_negative_fee(self):
        client = MockOpenOceanClient(addresses={USDC, USDC_BASE}, out_amount=1_000_500)
        quote = asyncio.run(OpenOceanAdapter(client).quote(make_context()))
        assert quote.fee_raw == -500

    def test_chain_without_code_raises(self, registry):
        custom = ChainRegistry(
            [
                ChainDescriptor(name="nocode", chain_id=778, bridging_protocol_id=778),
                registry.require("base"),
            ]
        )
        context = make_context(make_request(source_chain="nocode"), registry=custom)
        with pytest.raises(UnsupportedChain):
            asyncio.run(OpenOceanAdapter(MockOpenOceanClient()).quote(context))


class TestKnownAddresses:
    """Tests for token list parsing."""

    def test_lowercases(self):
        payload = {"code": 200, "data": [{"address": "0xABC"}, {"symbol": "no address"}]}
        assert known_addresses(payload) == frozenset({"0xabc"})

    def test_failure_code_raises(self):
        with pytest.raises(ProviderError):
            known_addresses({"code": 500, "data": []})


class TestOpenOceanApiClient:
    """Tests for the HTTP client against a mock transport."""

    def test_token_list_and_quote_paths(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith("/tokenList"):
                return httpx.Response(200, json={"code": 200, "data": []})
            return httpx.Response(200, json={"code": 200, "data": {"outAmount": "1"}})

        async def run():
            async with mock_http_client(handler) as client:
                api = OpenOceanApiClient(client, "https://oo.example/v4")
                await api.token_list("base")
                return await api.quote("base", USDC_BASE, USDC, "1.5", "5", "1")

        result = asyncio.run(run())

        assert result["data"]["outAmount"] == "1"
        assert seen[0].url.path == "/v4/base/tokenList"
        assert seen[1].url.path == "/v4/base/quote"
        params = seen[1].url.params
        assert params["inTokenAddress"] == USDC_BASE
        assert params["outTokenAddress"] == USDC
        assert params["amount"] == "1.5"

    def test_server_error_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        async def run():
            async with mock_http_client(handler) as client:
                return await OpenOceanApiClient(client).token_list("eth")

        with pytest.raises(ProviderError):
            asyncio.run(run())
