"""
Tests for the price token engine.

Tests cover:
- Text substitution with and without a usable quote
- Configuration overlay
- Lint helpers
- Q&A record substitution
- Rounding and range ordering across many quotes
"""

import pytest
from pydantic import ValidationError
from pricetoken.lib.parser import FALLBACK_PHRASE
from pricetoken.lib.tokens import (
    config_resolve,
    qa_substitute,
    text_hasTokens,
    text_lint,
    text_listTokens,
    text_parse,
    text_substitute,
    token_resolve,
)
from pricetoken.models.dataModel import PriceTokenConfig, QAItem, Quote, TokenKind

RANGE_KINDS = [
    TokenKind.CAPITAL_REQUIREMENT_RANGE,
    TokenKind.ONE_OZ_BAR_RANGE,
    TokenKind.HUNDRED_OZ_BAR_RANGE,
]


def dollars(text: str) -> int:
    return int(text.strip("~$+").replace("$", "").replace(",", ""))


def test_substitute_scenario():
    text = (
        "You need {{CAPITAL_REQUIREMENT}} ({{CAPITAL_REQUIREMENT_RANGE}}). "
        "A bar costs {{BAR_PRICE}}, about {{SPOT_PRICE}} per ounce."
    )
    assert text_substitute(text, {"ask": 30000}) == (
        "You need ~$30,000 (~$28,500–$31,500). "
        "A bar costs $30,000, about ~$30 per ounce."
    )


def test_substitute_without_quote():
    text = "{{CAPITAL_REQUIREMENT}} and {{SPOT_PRICE}}"
    assert text_substitute(text, None) == "current market price and current market price"


@pytest.mark.parametrize("quote", [None, {"ask": 0}, {"ask": -10}, Quote(ask=0), {}])
def test_every_kind_shares_fallback(quote):
    values = {token_resolve(kind, quote) for kind in TokenKind}
    assert values == {FALLBACK_PHRASE}


def test_unknown_token_unchanged():
    text = "Literal {{NOT_A_TOKEN}} stays"
    assert text_substitute(text, {"ask": 30000}) == text


@pytest.mark.parametrize("ask", [1, 999.99, 30000, 31234.56, 250000])
def test_text_without_tokens_unchanged(ask):
    text = "No tokens here, just {single} braces and $5.\r\n\tTabs too."
    assert text_substitute(text, Quote(ask=ask)) == text


def test_parse_reports_tokens():
    result = text_parse("{{BAR_PRICE}}/{{BAR_PRICE}}", Quote(ask=30000))
    assert result.text == "$30,000/$30,000"
    assert result.tokens == [TokenKind.BAR_PRICE, TokenKind.BAR_PRICE]


def test_config_overrides():
    text = "{{CAPITAL_REQUIREMENT_RANGE}}"
    assert text_substitute(text, {"ask": 30000}, {"premiumBandPercent": 10}) == (
        "~$27,000–$33,000"
    )
    assert text_substitute(
        "{{CAPITAL_REQUIREMENT}}", {"ask": 30499}, PriceTokenConfig(roundingIncrement=1000)
    ) == "~$30,000"


def test_config_resolve_overlays_defaults():
    resolved = config_resolve({"roundingIncrement": 50})
    assert resolved.roundingIncrement == 50
    assert resolved.premiumBandPercent == 5
    default = config_resolve()
    assert default.roundingIncrement == 100
    assert config_resolve(PriceTokenConfig()) == default


def test_complete_config_accepted():
    resolved = config_resolve({"premiumBandPercent": 10})
    assert config_resolve(resolved) is resolved
    assert text_substitute(
        "{{CAPITAL_REQUIREMENT_RANGE}}", {"ask": 30000}, resolved
    ) == "~$27,000–$33,000"


@pytest.mark.parametrize(
    "config", [{"roundingIncrement": 0}, {"premiumBandPercent": -5}]
)
def test_config_resolve_rejects_non_positive(config):
    with pytest.raises(ValidationError):
        config_resolve(config)


@pytest.mark.parametrize("kind", list(TokenKind))
@pytest.mark.parametrize("ask", [0.01, 1, 49.99, 1000, 30000, 87654.32, 1e9])
def test_resolve_never_emits_braces(kind, ask):
    value = token_resolve(kind, {"ask": ask})
    assert value
    assert "{" not in value and "}" not in value


def test_rounding_is_monotonic():
    previous = 0
    for ask in range(100, 60000, 37):
        current = dollars(token_resolve(TokenKind.BAR_PRICE, {"ask": ask}))
        assert current >= previous
        previous = current


@pytest.mark.parametrize("kind", RANGE_KINDS)
@pytest.mark.parametrize("ask", [0.5, 10, 999, 20000, 30000, 45678.9, 1e7])
def test_range_low_not_above_high(kind, ask):
    low, high = token_resolve(kind, {"ask": ask}).split("–")
    assert dollars(low) <= dollars(high)


def test_has_and_list_tokens():
    text = "{{SPOT_PRICE}} then {{ONE_OZ_BAR_RANGE}} then {{SPOT_PRICE}}"
    assert text_hasTokens(text)
    assert not text_hasTokens("{{SPOT}}")
    assert text_listTokens(text) == [
        TokenKind.SPOT_PRICE,
        TokenKind.ONE_OZ_BAR_RANGE,
        TokenKind.SPOT_PRICE,
    ]


def test_lint():
    result = text_lint("{{BAR_PRICE}} {{BAR_PRCE}}")
    assert result.tokens == [TokenKind.BAR_PRICE]
    assert result.unrecognized == ["BAR_PRCE"]
    assert not result.clean
    assert text_lint("{{BAR_PRICE}}").clean


def test_qa_substitute():
    items = [
        {"question": "How much for {{BAR_PRICE}}?", "answer": "Plan {{CAPITAL_REQUIREMENT_PLUS}}."},
        QAItem(question="Per ounce?", answer="About {{SPOT_PRICE}}."),
    ]
    rendered = qa_substitute(items, {"ask": 30000})
    assert rendered == [
        QAItem(question="How much for $30,000?", answer="Plan ~$30,000+."),
        QAItem(question="Per ounce?", answer="About ~$30."),
    ]


def test_qa_substitute_keeps_extra_fields():
    rendered = qa_substitute(
        [{"question": "{{BAR_PRICE}}", "answer": "", "slug": "bar"}], None
    )
    assert rendered[0].question == FALLBACK_PHRASE
    assert rendered[0].model_dump()["slug"] == "bar"
