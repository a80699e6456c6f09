# snackbar/services/catalog_query_engine.py

"""Cached, fallback-aware product search over the Open Food Facts catalog."""

import asyncio
import logging
from typing import Any
from urllib.parse import quote, urlencode

from snackbar.clients.remote_fetcher import RemoteFetcher
from snackbar.config.settings import Settings
from snackbar.filters.deduplicator import ProductDeduplicator
from snackbar.filters.product_validator import ProductValidator
from snackbar.filters.query_tokenizer import QueryTokenizer
from snackbar.models.errors import FetchError, InvalidQuery
from snackbar.models.product import Product
from snackbar.models.product_mapper import ProductMapper
from snackbar.storage.query_cache import ExpiringCache

logger = logging.getLogger("snackbar.engine")


class CatalogQueryEngine:
    """Turns user queries into bounded, de-duplicated product lists.

    ``search`` degrades every upstream failure to an empty contribution,
    while ``get_by_code`` propagates them: a direct lookup has no fallback
    to degrade to.
    """

    def __init__(
        self,
        fetcher: RemoteFetcher | None = None,
        cache: ExpiringCache | None = None,
    ) -> None:
        self.settings = Settings()
        self.fetcher = fetcher if fetcher is not None else RemoteFetcher()
        self.cache = (
            cache if cache is not None
            else ExpiringCache(self.settings.CACHE_TTL_MS)
        )
        self._base_url = self.settings.CATALOG_BASE_URL.rstrip("/")

    # ── Private helpers ──────────────────────────────────

    def _search_url(self, term: str, page_size: int) -> str:
        params = {
            "search_terms": term,
            "action": "process",
            "search_simple": "1",
            "json": "1",
            "page_size": str(page_size),
            "page": "1",
            "sort_by": self.settings.SEARCH_SORT_BY,
            "fields": ",".join(self.settings.CATALOG_FIELDS),
        }
        return f"{self._base_url}/cgi/search.pl?{urlencode(params)}"

    def _product_url(self, code: str) -> str:
        params = {
            "code": code,
            "json": "1",
            "fields": ",".join(self.settings.CATALOG_FIELDS),
        }
        return (
            f"{self._base_url}/api/v0/product/"
            f"{quote(code, safe='')}.json?{urlencode(params)}"
        )

    @staticmethod
    def _materialise(raw_records: Any) -> list[Product]:
        """Map raw records and drop any that came without a code."""
        products, _dropped = ProductValidator.validate(
            ProductMapper.map_many(raw_records)
        )
        return products

    async def _safe_search(
        self,
        term: str,
        page_size: int,
        timeout_ms: int,
    ) -> list[Product]:
        """One best-effort remote search; failures become no results."""
        url = self._search_url(term, page_size)
        try:
            data = await self.fetcher.fetch_json(url, timeout_ms=timeout_ms)
        except FetchError as exc:
            logger.warning(
                "Catalog search for '%s' degraded to no results: %s",
                term,
                exc,
            )
            return []

        if not isinstance(data, dict) or not isinstance(
            data.get("products"), list
        ):
            logger.warning(
                "Catalog search for '%s' returned an unexpected payload",
                term,
            )
            return []

        products = self._materialise(data["products"])
        logger.debug(
            "Catalog search for '%s' returned %d products",
            term,
            len(products),
        )
        return products

    async def _fallback_search(
        self,
        tokens: list[str],
        page_size: int,
    ) -> list[Product]:
        """Search each token concurrently and merge in token order."""
        timeout_ms = min(
            self.settings.REMOTE_TIMEOUT_MS,
            self.settings.FALLBACK_TIMEOUT_CAP_MS,
        )
        token_page_size = min(
            page_size, self.settings.FALLBACK_PAGE_SIZE_CAP
        )

        batches = await asyncio.gather(
            *(
                self._safe_search(token, token_page_size, timeout_ms)
                for token in tokens
            ),
            return_exceptions=True,
        )

        collected: list[list[Product]] = []
        for token, batch in zip(tokens, batches):
            if isinstance(batch, list):
                collected.append(batch)
            elif isinstance(batch, Exception):
                logger.error(
                    "Fallback search for token '%s' failed: %s",
                    token,
                    batch,
                    exc_info=batch,
                )
                collected.append([])

        merged, _removed = ProductDeduplicator.merge_by_code(collected)
        return merged[:page_size]

    # ── Public operations ────────────────────────────────

    async def search(
        self,
        query: str,
        page_size: int | None = None,
    ) -> list[Product]:
        """Search the catalog, falling back to per-token queries.

        1. Queries shorter than MIN_QUERY_LENGTH return nothing.
        2. A live cache entry for ``lowercase(query)::page_size`` wins.
        3. The full query is tried first; any hit is cached and returned.
        4. Otherwise each qualifying token is searched in parallel, the
           batches merged first-seen-wins by code, truncated and cached.
        """
        size = page_size if page_size is not None else (
            self.settings.DEFAULT_PAGE_SIZE
        )
        if size < 1:
            msg = f"page_size must be at least 1, got {size}"
            raise InvalidQuery(msg)

        trimmed = QueryTokenizer.normalise(query)
        if not QueryTokenizer.is_searchable(trimmed):
            logger.debug("Query '%s' too short, skipping search", query)
            return []

        cache_key = QueryTokenizer.cache_key(trimmed, size)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Cache hit for '%s'", cache_key)
            return list(cached)

        primary_timeout = min(
            self.settings.REMOTE_TIMEOUT_MS,
            self.settings.PRIMARY_TIMEOUT_CAP_MS,
        )
        primary = await self._safe_search(trimmed, size, primary_timeout)
        if primary:
            self.cache.set(cache_key, list(primary))
            return primary

        tokens = QueryTokenizer.fallback_tokens(trimmed)
        if not tokens:
            logger.info(
                "No results for '%s' and no fallback tokens", trimmed
            )
            return []

        logger.info(
            "No results for '%s', falling back to tokens %s",
            trimmed,
            tokens,
        )
        result = await self._fallback_search(tokens, size)
        self.cache.set(cache_key, list(result))
        return result

    async def get_by_code(self, code: str) -> Product | None:
        """Look up one product by its exact catalog code.

        Returns ``None`` when the catalog reports the product missing or
        inactive.  Transport and HTTP failures propagate as
        :class:`~snackbar.models.errors.FetchError`.
        """
        trimmed = code.strip()
        if not trimmed:
            msg = "Product code must not be empty"
            raise InvalidQuery(msg)

        data = await self.fetcher.fetch_json(
            self._product_url(trimmed),
            timeout_ms=self.settings.REMOTE_TIMEOUT_MS,
        )
        if not isinstance(data, dict):
            logger.warning("Unexpected lookup payload for code %s", trimmed)
            return None

        raw = data.get("product")
        if data.get("status") != 1 or not isinstance(raw, dict):
            logger.info("Product %s not found in catalog", trimmed)
            return None

        product = ProductMapper.map(raw)
        if not product.code:
            product = ProductMapper.map({**raw, "code": trimmed})
        return product
