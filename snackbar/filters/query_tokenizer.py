# snackbar/filters/query_tokenizer.py

"""Query normalisation and fallback token extraction."""

import logging

from snackbar.config.settings import Settings

logger = logging.getLogger("snackbar.filters")


class QueryTokenizer:
    """Prepare user queries for the catalog search."""

    @staticmethod
    def normalise(query: str) -> str:
        """Strip surrounding whitespace."""
        return query.strip()

    @staticmethod
    def is_searchable(query: str) -> bool:
        """True when the trimmed query is long enough to search."""
        return len(query.strip()) >= Settings.MIN_QUERY_LENGTH

    @staticmethod
    def cache_key(query: str, page_size: int) -> str:
        """Build the cache key ``lowercase(trimmed)::page_size``."""
        return f"{query.strip().lower()}::{page_size}"

    @staticmethod
    def fallback_tokens(query: str) -> list[str]:
        """Split a query into the per-token fallback searches.

        Tokens of two characters or fewer are dropped and at most
        FALLBACK_MAX_TOKENS are kept, in query order.
        """
        tokens = [
            token
            for token in query.split()
            if len(token) >= Settings.FALLBACK_MIN_TOKEN_LENGTH
        ][: Settings.FALLBACK_MAX_TOKENS]
        logger.debug("Fallback tokens for '%s': %s", query, tokens)
        return tokens
