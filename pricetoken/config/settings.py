"""
settings.py

This module provides application configuration management for the price
token tools.

Features:
- Centralized application configuration using Pydantic settings
- Conversion of settings and command line overrides into an explicit
  engine configuration

Usage:
Import appsettings for application configuration values. The engine itself
never reads appsettings; callers build a PriceTokenConfig and pass it in.
"""

from typing import Final, Optional
from pydantic import PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from pricetoken.models.dataModel import PriceTokenConfig

# Console instance for rich output
console: Final[Console] = Console()


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the
    PRICETOKEN_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        premiumBandPercent: Default band for range tokens
        roundingIncrement: Default rounding increment for bulk figures
        filePattern: Glob selecting content files to render
    """

    beQuiet: bool = False

    premiumBandPercent: PositiveFloat = 5
    roundingIncrement: PositiveFloat = 100

    filePattern: str = "**/*.md"

    model_config = SettingsConfigDict(
        env_prefix="PRICETOKEN_",
        case_sensitive=False,
        extra="allow",
    )


def tokenConfig_build(
    band: Optional[float] = None, increment: Optional[float] = None
) -> PriceTokenConfig:
    """
    Build the engine configuration for a command invocation.

    Explicit overrides win over the environment-driven settings.

    Args:
        band: Premium band percentage override
        increment: Rounding increment override

    Returns:
        PriceTokenConfig: Configuration to pass to the engine

    Raises:
        pydantic.ValidationError: If an override is not strictly positive
    """
    return PriceTokenConfig(
        premiumBandPercent=band if band is not None else appsettings.premiumBandPercent,
        roundingIncrement=(
            increment if increment is not None else appsettings.roundingIncrement
        ),
    )


appsettings: Final[App] = App()
