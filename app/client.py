"""
News feed client.

Fetches one page at a time from ``GET /api/news`` and filters that page
locally; category and search changes never hit the server. Likes toggled here
live only as long as the client object.
"""
import logging
from typing import Any, Dict, List, Optional, Set

import httpx

logger = logging.getLogger(__name__)


class NewsFeedError(Exception):
    """Raised when a page cannot be loaded. The caller decides when to retry."""


class NewsFeedClient:
    def __init__(
        self,
        base_url: str,
        per_page: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.per_page = per_page
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

        self.articles: List[Dict[str, Any]] = []
        self.current_page = 1
        self.total_pages = 0
        self.total_news = 0
        self.error: Optional[str] = None
        self.liked: Set[str] = set()

    async def __aenter__(self) -> "NewsFeedClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_page(self, page: int = 1) -> List[Dict[str, Any]]:
        try:
            response = await self._http.get(
                "/api/news", params={"page": page, "limit": self.per_page}
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to load news page %s: %s", page, exc)
            self.error = "Failed to load news. Please try again."
            raise NewsFeedError(self.error) from exc

        self.error = None
        self.articles = data["news"]
        self.current_page = data["currentPage"]
        self.total_pages = data["totalPages"]
        self.total_news = data["totalNews"]
        return self.articles

    async def retry(self) -> List[Dict[str, Any]]:
        return await self.fetch_page(self.current_page)

    async def next_page(self) -> List[Dict[str, Any]]:
        if self.current_page >= self.total_pages:
            return self.articles
        return await self.fetch_page(self.current_page + 1)

    async def previous_page(self) -> List[Dict[str, Any]]:
        if self.current_page <= 1:
            return self.articles
        return await self.fetch_page(self.current_page - 1)

    def visible(self, category: Optional[str] = None, search: str = "") -> List[Dict[str, Any]]:
        """Filter the fetched page by category id and a title/excerpt substring."""
        needle = search.lower()
        results = []
        for article in self.articles:
            if category and category != "all" and article["category"] != category:
                continue
            if needle not in article["title"].lower() and needle not in article["excerpt"].lower():
                continue
            results.append(article)
        return results

    def featured(self) -> List[Dict[str, Any]]:
        return [article for article in self.articles if article.get("featured")]

    def regular(self, category: Optional[str] = None, search: str = "") -> List[Dict[str, Any]]:
        return [
            article for article in self.visible(category, search)
            if not article.get("featured")
        ]

    def toggle_like(self, article_id: str) -> bool:
        """Flip the local like for an article; returns True when now liked."""
        if article_id in self.liked:
            self.liked.discard(article_id)
            return False
        self.liked.add(article_id)
        return True

    def is_liked(self, article_id: str) -> bool:
        return article_id in self.liked
