"""
dataModel.py

This module defines the data models used throughout the price token engine.
The models leverage Pydantic for validation and type safety.

Features:
- The closed enumeration of recognized price tokens.
- The market quote consumed at render time.
- Partial and resolved formatting configuration.
- Parsing, lint and rendering results.

Usage:
Import these models to validate and structure data used in the engine.
"""

from pydantic import BaseModel, Field, ConfigDict, PositiveFloat, field_validator
from typing import Any, Optional
from pathlib import Path
from enum import Enum
import math


class TokenKind(Enum):
    """
    Enum of recognized price tokens.

    The value of each member is the literal identifier content authors write
    between double braces, e.g. ``{{CAPITAL_REQUIREMENT}}``.
    """

    CAPITAL_REQUIREMENT = "CAPITAL_REQUIREMENT"
    CAPITAL_REQUIREMENT_RANGE = "CAPITAL_REQUIREMENT_RANGE"
    CAPITAL_REQUIREMENT_PLUS = "CAPITAL_REQUIREMENT_PLUS"
    LIQUIDITY_THRESHOLD = "LIQUIDITY_THRESHOLD"
    BAR_PRICE = "BAR_PRICE"
    SPOT_PRICE = "SPOT_PRICE"
    ONE_OZ_BAR_RANGE = "ONE_OZ_BAR_RANGE"
    HUNDRED_OZ_BAR_RANGE = "HUNDRED_OZ_BAR_RANGE"


class Quote(BaseModel):
    """
    Current market quote for one reference bulk unit (a 1000 oz bar).

    Attributes:
        ask (float): Ask price of the bulk unit in whole dollars.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    ask: float = Field(..., description="Ask price of one bulk unit in dollars.")

    @field_validator("ask", mode="before")
    @classmethod
    def ask_notBool(cls, value: Any) -> Any:
        """Booleans are not prices, even though they coerce to numbers."""
        if isinstance(value, bool):
            raise ValueError("ask must be a number, not a boolean")
        return value

    @property
    def available(self) -> bool:
        """True only for a finite, strictly positive ask."""
        return math.isfinite(self.ask) and self.ask > 0


class PriceTokenConfig(BaseModel):
    """
    Partial formatting overrides supplied by a caller.

    Fields left as ``None`` take the defaults of ``ResolvedConfig``.

    Attributes:
        premiumBandPercent: Symmetric band around the ask for range tokens.
        roundingIncrement: Granularity, in dollars, of bulk-unit figures.
    """

    premiumBandPercent: Optional[PositiveFloat] = None
    roundingIncrement: Optional[PositiveFloat] = None


class ResolvedConfig(BaseModel):
    """
    Complete formatting configuration used for a single substitution call.
    """

    model_config = ConfigDict(frozen=True)

    premiumBandPercent: PositiveFloat = 5
    roundingIncrement: PositiveFloat = 100


class ParseResult(BaseModel):
    """Result of token substitution.

    Attributes:
        text: The processed text after substitutions
        tokens: Tokens replaced, in order of position
    """

    text: str
    tokens: list[TokenKind] = Field(default_factory=list)


class LintResult(BaseModel):
    """Result of checking authored text for token usage.

    Attributes:
        tokens: Recognized tokens, in order of position
        unrecognized: Brace contents that are not recognized tokens
    """

    tokens: list[TokenKind] = Field(default_factory=list)
    unrecognized: list[str] = Field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.unrecognized


class QAItem(BaseModel):
    """
    A single authored question/answer record.

    Attributes:
        question (str): Question text, may contain tokens.
        answer (str): Answer text, may contain tokens.
    """

    model_config = ConfigDict(extra="allow")

    question: str
    answer: str


class RenderResult(BaseModel):
    """Outcome of rendering one content file.

    Attributes:
        source: File read
        destination: File written
        tokens: Number of tokens substituted
        success: Whether the file was rendered
        error: Optional error message
    """

    source: Path
    destination: Path
    tokens: int = 0
    success: bool = True
    error: str | None = None
