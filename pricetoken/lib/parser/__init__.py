"""
Parser package for price token substitution.

Provides the token scanner and the price resolver it delegates to.
"""

from .base import BaseTokenParser, TokenResolver, contains, tokens_list, unrecognized_list
from .resolvers import PriceResolver, FALLBACK_PHRASE, quote_coerce

__all__ = [
    "BaseTokenParser",
    "TokenResolver",
    "PriceResolver",
    "FALLBACK_PHRASE",
    "contains",
    "tokens_list",
    "unrecognized_list",
    "quote_coerce",
]
