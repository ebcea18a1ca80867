"""Base protocol and shared types for fee quote providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from bridgefees.errors import ProviderError

if TYPE_CHECKING:
    from bridgefees.fees.request import QuoteContext


@dataclass(frozen=True)
class ProviderQuote:
    """A provider's answer in minimal units of the transferred token.

    Attributes:
        fee_raw: Fee in minimal units; negative when the provider returns
            more than was sent in
        estimated: True when the figure approximates the transfer cost
            rather than quoting it directly
    """

    fee_raw: int
    estimated: bool = False


class QuoteProvider(Protocol):
    """Protocol for fee quote providers.

    Implementations translate a QuoteContext into a provider-specific call
    over an injected client and translate the response back into a
    ProviderQuote. Failures are raised as QuoteError subclasses
    (UnsupportedToken, UnsupportedChain, UnsupportedRoute, ProviderError).

    Attributes:
        name: Display name used in results
        provider_id: Capability key checked against ChainDescriptor.providers
        whitelist: Uppercase symbols the provider officially supports, or
            None if any token may be attempted
    """

    name: str
    provider_id: str
    whitelist: frozenset[str] | None

    def supports_token(self, symbol: str) -> bool:
        """True if the token may be quoted by this provider."""
        ...

    async def quote(self, context: QuoteContext) -> ProviderQuote:
        """Quote the transfer described by context.

        Args:
            context: Validated request with principal in minimal units

        Returns:
            ProviderQuote with the fee in minimal units
        """
        ...


def parse_raw_amount(payload: Any, key: str, provider: str) -> int:
    """Read a minimal-unit integer field from a provider payload.

    Raises:
        ProviderError: If the field is missing or not an integer
    """
    if not isinstance(payload, dict) or key not in payload:
        raise ProviderError(f"{provider} response missing '{key}'")
    value = payload[key]
    if isinstance(value, bool):
        raise ProviderError(f"{provider} returned non-integer {key}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, dict) and value.get("type") == "BigNumber" and "hex" in value:
        # ethers BigNumber JSON serialization
        try:
            return int(value["hex"], 16)
        except (TypeError, ValueError) as err:
            raise ProviderError(f"{provider} returned malformed {key}: {value!r}") from err
    try:
        return int(str(value))
    except ValueError as err:
        raise ProviderError(f"{provider} returned non-integer {key}: {value!r}") from err


__all__ = ["ProviderQuote", "QuoteProvider", "parse_raw_amount"]
