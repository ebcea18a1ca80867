"""Fee quoting configuration."""

from dataclasses import dataclass

from bridgefees.math.fixed_point import MAX_AMOUNT_PLACES


@dataclass(frozen=True)
class FeeQuoteConfig:
    """Centralized configuration for the FeeQuoteEngine.

    Attributes:
        max_amount_places: Fractional digits of the human amount handed to
            providers (capped further by token decimals)
        clamp_negative_fee: If True, a quote whose output exceeds its input is
            reported as a zero fee. If False, it is treated as an
            unsupported route.
    """

    max_amount_places: int = MAX_AMOUNT_PLACES
    clamp_negative_fee: bool = True


# Default configuration instance
DEFAULT_FEE_QUOTE_CONFIG = FeeQuoteConfig()
