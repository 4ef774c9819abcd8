r"""
Base parser implementation for price token substitution.

Provides the scanning and substitution engine for text containing
double-brace price tokens, using a resolver to produce replacement values.

The parser handles:
- Matching of the closed token vocabulary, case-sensitively
- Single pass, left to right substitution
- Literal preservation of malformed or unknown brace sequences
- Token listing for content lint tooling

Example:
    parser = BaseTokenParser(resolver=PriceResolver(quote, config))
    result = parser.parse("Plan for {{CAPITAL_REQUIREMENT}} in cash")
"""

from typing import Final, Protocol, runtime_checkable, Self
import re
from pricetoken.models.dataModel import ParseResult, TokenKind

OPEN_DELIMITER: Final[str] = "{{"
CLOSE_DELIMITER: Final[str] = "}}"

TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    re.escape(OPEN_DELIMITER)
    + "("
    + "|".join(re.escape(kind.value) for kind in TokenKind)
    + ")"
    + re.escape(CLOSE_DELIMITER)
)

# Any brace pair, recognized or not; used to report authoring mistakes
CANDIDATE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{([^{}]*)\}\}")


@runtime_checkable
class TokenResolver(Protocol):
    """Protocol defining the resolver interface for token substitution.

    Resolvers must never raise for a recognized token; unavailable data is
    expressed as readable fallback text.
    """

    def resolve(self: Self, token_kind: TokenKind) -> str:
        """Resolve a token to its substitution.

        Args:
            token_kind: Recognized token to resolve

        Returns:
            Display string for the token
        """
        ...


class BaseTokenParser:
    """Price token parser using resolver strategy.

    Attributes:
        resolver: Strategy for resolving token values
    """

    def __init__(self: Self, resolver: TokenResolver) -> None:
        self.resolver: TokenResolver = resolver

    def parse(self: Self, input_text: str) -> ParseResult:
        """Substitute every recognized token in the input text.

        Resolved values are inserted as-is and are never scanned again.

        Args:
            input_text: Raw text containing tokens

        Returns:
            ParseResult with processed text and the tokens replaced
        """
        if not input_text:
            return ParseResult(text="", tokens=[])

        tokens: list[TokenKind] = []

        def _substitute(match: re.Match[str]) -> str:
            kind: TokenKind = TokenKind(match.group(1))
            tokens.append(kind)
            return self.resolver.resolve(kind)

        text: str = TOKEN_PATTERN.sub(_substitute, input_text)
        return ParseResult(text=text, tokens=tokens)


def contains(text: str) -> bool:
    """Check whether text holds at least one recognized token."""
    return TOKEN_PATTERN.search(text) is not None


def tokens_list(text: str) -> list[TokenKind]:
    """List recognized tokens in order of position, duplicates included."""
    return [TokenKind(match.group(1)) for match in TOKEN_PATTERN.finditer(text)]


def unrecognized_list(text: str) -> list[str]:
    """List brace contents that are not recognized tokens.

    Catches misspellings, lowercase identifiers and padded tokens such as
    ``{{ SPOT_PRICE }}``, none of which the parser substitutes.
    """
    recognized: set[str] = {kind.value for kind in TokenKind}
    return [
        match.group(1)
        for match in CANDIDATE_PATTERN.finditer(text)
        if match.group(1) not in recognized
    ]
