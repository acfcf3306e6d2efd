"""Free-text search across tokens, pools and DEXes."""

from __future__ import annotations

from ..domain.shaping import ApiResponse
from .base import ResourceApi, require_non_empty


class SearchApi(ResourceApi):
    def search(self, query: str, *, shape: bool | None = None) -> ApiResponse:
        require_non_empty(query=query)
        return self._get("/search", {"query": query.strip()}, shape=shape)
