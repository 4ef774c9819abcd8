"""
Token resolvers for price tokens.

Maps each recognized token to its display string, derived from the ask
price of one 1000 oz bar:
- Bulk figures: the ask rounded to the configured increment
- Ranges: the ask widened by the premium band
- Per-ounce figures: spot estimated from the bulk ask, with typical
  premiums for smaller bar sizes
"""

from typing import Any, Callable, Final, Self
from pydantic import ValidationError
from pricetoken.lib.formatter import price_round, price_format, APPROXIMATE, CURRENCY_SYMBOL
from pricetoken.lib.log import LOG
from pricetoken.models.dataModel import TokenKind, Quote, ResolvedConfig

FALLBACK_PHRASE: Final[str] = "current market price"
RANGE_SEPARATOR: Final[str] = "–"

# 1000 oz bars trade 0.5-2% over spot; 1.01 removes the typical premium
REFERENCE_UNITS: Final[int] = 1000
BULK_PREMIUM_FACTOR: Final[float] = 1.01

# Typical premiums over spot for smaller bars
ONE_OZ_PREMIUM: Final[tuple[float, float]] = (1.10, 1.33)
HUNDRED_OZ_PREMIUM: Final[tuple[float, float]] = (1.02, 1.04)
HUNDRED_OZ_UNITS: Final[int] = 100


def quote_coerce(quote: Any) -> Quote | None:
    """Accept a Quote, a mapping or any object with an ``ask`` attribute.

    Args:
        quote: Candidate quote record, possibly None

    Returns:
        A Quote, or None if the record does not describe one
    """
    if quote is None or isinstance(quote, Quote):
        return quote
    try:
        return Quote.model_validate(quote, from_attributes=True)
    except ValidationError as e:
        LOG(f"Ignoring invalid quote record: {e.error_count()} error(s)")
        return None


class PriceResolver:
    """Resolver for price tokens against a single quote."""

    def __init__(self: Self, quote: Quote | None, config: ResolvedConfig) -> None:
        """Initialize resolver with the quote and configuration of one render."""
        self.quote: Quote | None = quote
        self.config: ResolvedConfig = config

    @property
    def available(self: Self) -> bool:
        return self.quote is not None and self.quote.available

    def resolve(self: Self, token_kind: TokenKind | str) -> str:
        """Resolve a token to its display value.

        Args:
            token_kind: Token to resolve

        Returns:
            Formatted price string, or the fallback phrase when the quote is
            unavailable, the token is unknown, or the figures overflow
        """
        if not self.available:
            return FALLBACK_PHRASE

        try:
            rule: Callable[[PriceResolver], str] = _RULES[TokenKind(token_kind)]
        except ValueError:
            LOG(f"Unknown price token: {token_kind}")
            return FALLBACK_PHRASE

        try:
            return rule(self)
        except (ValueError, OverflowError) as e:
            LOG(f"Cannot derive {token_kind} from ask {self.ask}: {e}")
            return FALLBACK_PHRASE

    @property
    def ask(self: Self) -> float:
        return self.quote.ask if self.quote else 0.0

    @property
    def rounded_ask(self: Self) -> float:
        return price_round(self.ask, self.config.roundingIncrement)

    @property
    def spot(self: Self) -> float:
        """Per-ounce spot estimated from the bulk bar ask."""
        return self.ask / REFERENCE_UNITS / BULK_PREMIUM_FACTOR

    def capital_requirement(self: Self) -> str:
        return price_format(self.rounded_ask)

    def capital_requirement_range(self: Self) -> str:
        band: float = self.config.premiumBandPercent / 100
        increment: float = self.config.roundingIncrement
        low: float = price_round(self.ask * (1 - band), increment)
        high: float = price_round(self.ask * (1 + band), increment)
        return f"{price_format(low)}{RANGE_SEPARATOR}{price_format(high).replace(APPROXIMATE, '', 1)}"

    def capital_requirement_plus(self: Self) -> str:
        return f"{price_format(self.rounded_ask)}+"

    def bar_price(self: Self) -> str:
        return price_format(self.rounded_ask, "")

    def spot_price(self: Self) -> str:
        return price_format(price_round(self.spot, 1))

    def one_oz_bar_range(self: Self) -> str:
        low_premium, high_premium = ONE_OZ_PREMIUM
        return _range_bare(
            price_round(self.spot * low_premium, 1),
            price_round(self.spot * high_premium, 1),
        )

    def hundred_oz_bar_range(self: Self) -> str:
        low_premium, high_premium = HUNDRED_OZ_PREMIUM
        bar: float = self.spot * HUNDRED_OZ_UNITS
        return _range_bare(
            price_round(bar * low_premium, 100),
            price_round(bar * high_premium, 100),
        )


def _range_bare(low: float, high: float) -> str:
    """Join two prices as ``$33–40``; only the low end carries the symbol."""
    return f"{price_format(low, '')}{RANGE_SEPARATOR}{price_format(high, '').replace(CURRENCY_SYMBOL, '', 1)}"


_RULES: Final[dict[TokenKind, Callable[[PriceResolver], str]]] = {
    TokenKind.CAPITAL_REQUIREMENT: PriceResolver.capital_requirement,
    TokenKind.CAPITAL_REQUIREMENT_RANGE: PriceResolver.capital_requirement_range,
    TokenKind.CAPITAL_REQUIREMENT_PLUS: PriceResolver.capital_requirement_plus,
    TokenKind.LIQUIDITY_THRESHOLD: PriceResolver.capital_requirement_plus,
    TokenKind.BAR_PRICE: PriceResolver.bar_price,
    TokenKind.SPOT_PRICE: PriceResolver.spot_price,
    TokenKind.ONE_OZ_BAR_RANGE: PriceResolver.one_oz_bar_range,
    TokenKind.HUNDRED_OZ_BAR_RANGE: PriceResolver.hundred_oz_bar_range,
}

_missing: set[TokenKind] = set(TokenKind) - set(_RULES)
if _missing:
    raise RuntimeError(
        f"No formatting rule for: {', '.join(sorted(k.value for k in _missing))}"
    )
