"""Explicit page iteration for list endpoints.

Usage example:
    from dexpaprika_sdk.client import DexPaprikaClient
    from dexpaprika_sdk.pagination import Paginator

    client = DexPaprikaClient()
    paginator = Paginator(
        lambda page: client.pools.list_network_pools("ethereum", page=page, limit=50),
        items_key="pools",
        limit=50,
        max_pages=3,
    )
    for pool in paginator.iter_items():
        print(pool["id"])
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .domain.shaping import ApiResponse, get_field

type PageFetcher = Callable[[int], ApiResponse]


@dataclass(frozen=True)
class Page:
    """One fetched page of a list endpoint."""

    number: int
    items: list[object]
    response: ApiResponse
    total_pages: int | None = None


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _extract_items(response: object, items_key: str) -> list[object]:
    items = get_field(response, items_key)
    if isinstance(items, list):
        return list(items)
    return []


def _extract_total_pages(response: object) -> int | None:
    page_info = get_field(response, "page_info")
    if page_info is None:
        return None
    return _as_int(get_field(page_info, "total_pages"))


@dataclass
class Paginator:
    """Fetches consecutive pages until the listing is exhausted.

    Iteration stops when:
    - the page number reaches `page_info.total_pages`,
    - a page returns fewer than `limit` items (when `limit` > 0), or
    - `max_pages` pages have been fetched (0 means no bound).
    """

    fetch_page: PageFetcher
    items_key: str
    limit: int = 0
    max_pages: int = 0
    start_page: int = 0

    def iter_pages(self) -> Iterator[Page]:
        page_number = self.start_page
        fetched = 0
        while True:
            response = self.fetch_page(page_number)
            items = _extract_items(response, self.items_key)
            total_pages = _extract_total_pages(response)
            yield Page(
                number=page_number,
                items=items,
                response=response,
                total_pages=total_pages,
            )
            fetched += 1
            page_number += 1

            if self.max_pages > 0 and fetched >= self.max_pages:
                return
            if total_pages is not None and page_number >= total_pages:
                return
            if self.limit > 0 and len(items) < self.limit:
                return
            if not items:
                return

    def iter_items(self) -> Iterator[object]:
        for page in self.iter_pages():
            yield from page.items

    def collect(self) -> list[object]:
        return list(self.iter_items())
