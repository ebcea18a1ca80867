"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_request
    # or
    from tests.helpers.factories import make_pool, make_matched_token

    pool = make_pool("0xpool", "USDC", "WETH", liquidity=1000)
"""

from decimal import Decimal

from bridgefees.chains import ChainRegistry, get_default_registry
from bridgefees.fees import FeeQuoteRequest, QuoteContext
from bridgefees.math import to_minimal_units, token_amount_for_usd
from bridgefees.models import MatchedToken, PoolRecord, TokenSummary
from tests.helpers.constants import ADDRESSES, TOKEN_DECIMALS

# Global counter for unique pool ids
_pool_counter = 0


def _address_for(symbol: str, chain: str = "ethereum") -> str:
    known = ADDRESSES.get(chain, {}).get(symbol.upper())
    if known is not None:
        return known
    # Deterministic fake address from the symbol
    return "0x" + symbol.lower().encode().hex().ljust(40, "0")[:40]


def make_pool(
    pool_id: str | None = None,
    symbol0: str = "USDC",
    symbol1: str = "WETH",
    liquidity: int | str = 1_000_000,
    volume_usd: str | None = "0",
    chain: str = "ethereum",
) -> PoolRecord:
    """Create a pool record the way the subgraph serializes it.

    Goes through model_validate with wire field names so tests exercise the
    same parsing as real payloads.

    Args:
        pool_id: Pool id (default: auto-generated)
        symbol0: Symbol of token0
        symbol1: Symbol of token1
        liquidity: Raw liquidity as int or decimal string
        volume_usd: volumeUSD as string, or None to omit the field
        chain: Chain used to look up token addresses

    Returns:
        PoolRecord instance
    """
    global _pool_counter
    if pool_id is None:
        _pool_counter += 1
        pool_id = f"0xpool{_pool_counter:04d}"

    def token(symbol: str) -> dict:
        return {
            "id": _address_for(symbol, chain),
            "symbol": symbol,
            "name": f"{symbol} Token",
            "decimals": str(TOKEN_DECIMALS.get(symbol.upper(), 18)),
        }

    data = {
        "id": pool_id,
        "liquidity": str(liquidity),
        "token0": token(symbol0),
        "token1": token(symbol1),
    }
    if volume_usd is not None:
        data["volumeUSD"] = volume_usd
    return PoolRecord.model_validate(data)


def make_summary(
    symbol: str = "USDC",
    chain: str = "ethereum",
    liquidity: int = 1_000_000,
    decimals: int | None = None,
    address: str | None = None,
) -> TokenSummary:
    """Create a ranked per-chain token entry."""
    return TokenSummary(
        symbol=symbol,
        name=f"{symbol} Token",
        address=address or _address_for(symbol, chain),
        decimals=decimals if decimals is not None else TOKEN_DECIMALS.get(symbol.upper(), 18),
        liquidity=liquidity,
        volume_usd=Decimal(0),
        representative_pool_id=f"0xpool-{chain}-{symbol.lower()}",
    )


def make_matched_token(
    symbol: str = "USDC",
    chains: tuple[str, ...] = ("ethereum", "base"),
    decimals: int | None = None,
) -> MatchedToken:
    """Create a token matched across chains."""
    return MatchedToken(
        symbol=symbol,
        name=f"{symbol} Token",
        per_chain={
            chain: make_summary(symbol, chain=chain, decimals=decimals) for chain in chains
        },
    )


def make_request(
    symbol: str = "USDC",
    source_chain: str = "ethereum",
    dest_chain: str = "base",
    price: Decimal | str | None = "1.00",
    decimals: int | None = None,
    usd_amount: Decimal | str = "1",
    with_addresses: bool = True,
) -> FeeQuoteRequest:
    """Create a fee quote request with sensible defaults ($1 of USDC, ethereum -> base)."""
    return FeeQuoteRequest(
        symbol=symbol,
        source_chain=source_chain,
        dest_chain=dest_chain,
        usd_amount=Decimal(usd_amount),
        token_price_usd=Decimal(price) if isinstance(price, str) else price,
        decimals=decimals if decimals is not None else TOKEN_DECIMALS.get(symbol.upper(), 18),
        source_address=_address_for(symbol, source_chain) if with_addresses else None,
        dest_address=_address_for(symbol, dest_chain) if with_addresses else None,
    )


def make_context(
    request: FeeQuoteRequest | None = None,
    registry: ChainRegistry | None = None,
) -> QuoteContext:
    """Resolve a request into the QuoteContext the engine hands to providers."""
    request = request or make_request()
    registry = registry or get_default_registry()
    price = Decimal(request.token_price_usd)
    amount = token_amount_for_usd(request.usd_amount, price, request.decimals)
    return QuoteContext(
        request=request,
        source=registry.require(request.source_chain),
        dest=registry.require(request.dest_chain),
        amount=amount,
        amount_raw=to_minimal_units(amount, request.decimals),
        price_usd=price,
    )
