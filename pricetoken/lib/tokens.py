"""
Price token engine.

Lets authored text carry placeholders such as ``{{CAPITAL_REQUIREMENT}}``
instead of hard-coded dollar amounts. Placeholders are replaced with values
derived from the live quote at render time, so copy never goes stale when
the market moves.

Every function here is a pure function of its arguments. A fresh resolved
configuration and resolver are built per call; nothing is cached.

Example:
    from pricetoken.lib.tokens import text_substitute
    text_substitute("Budget {{CAPITAL_REQUIREMENT}}.", {"ask": 30000})
    # 'Budget ~$30,000.'
"""

from typing import Any, Iterable, Mapping
from pricetoken.lib.parser import (
    BaseTokenParser,
    PriceResolver,
    contains,
    tokens_list,
    unrecognized_list,
    quote_coerce,
)
from pricetoken.lib.log import LOG
from pricetoken.models.dataModel import (
    LintResult,
    ParseResult,
    PriceTokenConfig,
    QAItem,
    ResolvedConfig,
    TokenKind,
)

ConfigLike = ResolvedConfig | PriceTokenConfig | Mapping[str, Any] | None


def config_resolve(config: ConfigLike = None) -> ResolvedConfig:
    """Overlay the supplied fields on the default configuration.

    Args:
        config: Overrides, as a partial or complete model or a mapping

    Returns:
        ResolvedConfig with every field populated

    Raises:
        pydantic.ValidationError: If an override is not strictly positive
    """
    if config is None:
        return ResolvedConfig()
    if isinstance(config, ResolvedConfig):
        return config
    partial: PriceTokenConfig = PriceTokenConfig.model_validate(config)
    return ResolvedConfig(**partial.model_dump(exclude_none=True))


def resolver_build(quote: Any, config: ConfigLike = None) -> PriceResolver:
    resolver: PriceResolver = PriceResolver(quote_coerce(quote), config_resolve(config))
    if not resolver.available:
        LOG("Quote unavailable; tokens resolve to the fallback phrase")
    return resolver


def token_resolve(kind: TokenKind | str, quote: Any = None, config: ConfigLike = None) -> str:
    """Resolve a single token to its display value."""
    return resolver_build(quote, config).resolve(kind)


def text_parse(text: str, quote: Any = None, config: ConfigLike = None) -> ParseResult:
    """Substitute all tokens, also reporting which ones were replaced."""
    return BaseTokenParser(resolver=resolver_build(quote, config)).parse(text)


def text_substitute(text: str, quote: Any = None, config: ConfigLike = None) -> str:
    """Replace every recognized token in text with its resolved value.

    Args:
        text: Authored text, e.g. "Costs {{CAPITAL_REQUIREMENT}}"
        quote: Current quote, or None if the price fetch failed
        config: Optional formatting overrides

    Returns:
        The text with all tokens replaced; non-token text is unchanged
    """
    return text_parse(text, quote, config).text


def text_hasTokens(text: str) -> bool:
    return contains(text)


def text_listTokens(text: str) -> list[TokenKind]:
    return tokens_list(text)


def text_lint(text: str) -> LintResult:
    """Report recognized tokens and brace sequences that will stay literal."""
    return LintResult(tokens=tokens_list(text), unrecognized=unrecognized_list(text))


def qa_substitute(
    items: Iterable[QAItem | Mapping[str, Any]],
    quote: Any = None,
    config: ConfigLike = None,
) -> list[QAItem]:
    """Substitute tokens in the question and answer of each Q&A record.

    One resolver serves the whole list so every record shows the same
    figures.
    """
    parser: BaseTokenParser = BaseTokenParser(resolver=resolver_build(quote, config))
    rendered: list[QAItem] = []
    for item in items:
        record: QAItem = QAItem.model_validate(item)
        rendered.append(
            record.model_copy(
                update={
                    "question": parser.parse(record.question).text,
                    "answer": parser.parse(record.answer).text,
                }
            )
        )
    return rendered
