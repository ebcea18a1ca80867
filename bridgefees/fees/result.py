"""Fee quote result types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from bridgefees.errors import (
    InvalidInput,
    NoPrice,
    ProviderError,
    QuoteError,
    UnsupportedChain,
    UnsupportedRoute,
    UnsupportedToken,
)


class FeeQuoteStatus(str, Enum):
    """Outcome of a fee quote request."""

    SUCCESS = "success"
    ESTIMATED = "estimated"
    UNSUPPORTED_ROUTE = "unsupported_route"
    UNSUPPORTED_CHAIN = "unsupported_chain"
    UNSUPPORTED_TOKEN = "unsupported_token"
    PROVIDER_ERROR = "provider_error"
    NO_PRICE = "no_price"
    INVALID_INPUT = "invalid_input"

    @property
    def is_quote(self) -> bool:
        """True for statuses that carry fee values."""
        return self in (FeeQuoteStatus.SUCCESS, FeeQuoteStatus.ESTIMATED)

    @property
    def label(self) -> str:
        """Human-readable label used in fee summaries."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    FeeQuoteStatus.SUCCESS: "Success",
    FeeQuoteStatus.ESTIMATED: "Estimated",
    FeeQuoteStatus.UNSUPPORTED_ROUTE: "Route not supported",
    FeeQuoteStatus.UNSUPPORTED_CHAIN: "Chain not supported",
    FeeQuoteStatus.UNSUPPORTED_TOKEN: "Token not supported",
    FeeQuoteStatus.PROVIDER_ERROR: "Provider error",
    FeeQuoteStatus.NO_PRICE: "No price",
    FeeQuoteStatus.INVALID_INPUT: "Invalid input",
}

# Exception type -> status, most derived first
_ERROR_STATUS: tuple[tuple[type[Exception], FeeQuoteStatus], ...] = (
    (UnsupportedToken, FeeQuoteStatus.UNSUPPORTED_TOKEN),
    (UnsupportedChain, FeeQuoteStatus.UNSUPPORTED_CHAIN),
    (UnsupportedRoute, FeeQuoteStatus.UNSUPPORTED_ROUTE),
    (ProviderError, FeeQuoteStatus.PROVIDER_ERROR),
    (NoPrice, FeeQuoteStatus.NO_PRICE),
    (InvalidInput, FeeQuoteStatus.INVALID_INPUT),
)


def status_for_error(error: BaseException) -> FeeQuoteStatus:
    """Map an exception raised during quoting to a result status.

    Anything that is not a known QuoteError (network libraries, JSON
    decoding, unexpected bugs in a client) counts as a provider error.
    """
    for error_type, status in _ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    if isinstance(error, QuoteError):
        return FeeQuoteStatus.UNSUPPORTED_ROUTE
    return FeeQuoteStatus.PROVIDER_ERROR


@dataclass(frozen=True)
class ProviderAttempt:
    """Captured outcome of a single provider call.

    Failures are recorded here as data instead of being logged from inside
    the provider call, so callers can inspect why a fallback happened.
    """

    provider: str
    status: FeeQuoteStatus
    detail: str | None = None

    @classmethod
    def from_error(cls, provider: str, error: BaseException) -> ProviderAttempt:
        detail = str(error) or type(error).__name__
        return cls(provider=provider, status=status_for_error(error), detail=detail)


@dataclass(frozen=True)
class FeeQuoteResult:
    """Result of a fee quote request.

    Fee fields are populated only for SUCCESS and ESTIMATED. Every other
    status is a failure reason and carries an optional detail message.

    Attributes:
        status: Outcome of the request
        fee_basis_points: Fee ratio in bps (0..10000 for fee <= amount)
        fee_usd: Fee value in USD
        provider_name: Provider that produced the quote
        detail: Human-readable detail for failures
        attempts: Provider calls made for this request, in order

    Examples:
        result = FeeQuoteResult.quoted(FeeQuoteStatus.SUCCESS, 100, Decimal("0.01"), "Hop Protocol")
        assert result.is_quote
        assert result.summary() == "100 bps ($0.0100) via Hop Protocol"

        result = FeeQuoteResult.failure(FeeQuoteStatus.NO_PRICE, "no USD price")
        assert not result.is_quote
        assert result.summary() == "No price"
    """

    status: FeeQuoteStatus
    fee_basis_points: int | None = None
    fee_usd: Decimal | None = None
    provider_name: str | None = None
    detail: str | None = None
    attempts: tuple[ProviderAttempt, ...] = ()

    def __post_init__(self) -> None:
        if self.status.is_quote:
            if self.fee_basis_points is None or self.fee_usd is None or not self.provider_name:
                raise ValueError(f"{self.status.value} result requires fee values and provider")
            if self.fee_basis_points < 0 or self.fee_usd < 0:
                raise ValueError("Fee values cannot be negative")
        elif self.fee_basis_points is not None or self.fee_usd is not None:
            raise ValueError(f"{self.status.value} result cannot carry fee values")

    @property
    def is_quote(self) -> bool:
        """True if the result carries a fee."""
        return self.status.is_quote

    @property
    def is_error(self) -> bool:
        return not self.status.is_quote

    @classmethod
    def quoted(
        cls,
        status: FeeQuoteStatus,
        fee_basis_points: int,
        fee_usd: Decimal,
        provider_name: str,
        attempts: tuple[ProviderAttempt, ...] = (),
    ) -> FeeQuoteResult:
        """Create a SUCCESS or ESTIMATED result."""
        return cls(
            status=status,
            fee_basis_points=fee_basis_points,
            fee_usd=fee_usd,
            provider_name=provider_name,
            attempts=attempts,
        )

    @classmethod
    def failure(
        cls,
        status: FeeQuoteStatus,
        detail: str | None = None,
        attempts: tuple[ProviderAttempt, ...] = (),
    ) -> FeeQuoteResult:
        """Create a failure result."""
        return cls(status=status, detail=detail, attempts=attempts)

    def summary(self) -> str:
        """Render the result as a short display string.

        Quotes render as "<bps> bps ($<usd>) via <provider>" with the USD
        value rounded half-up to four places; failures render as their label.
        """
        if not self.is_quote:
            return self.status.label
        fee = self.fee_usd if self.fee_usd is not None else Decimal(0)
        usd = fee.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
        return f"{self.fee_basis_points} bps (${usd}) via {self.provider_name}"


__all__ = [
    "FeeQuoteStatus",
    "FeeQuoteResult",
    "ProviderAttempt",
    "status_for_error",
]
