"""Ecosystem-wide statistics."""

from __future__ import annotations

from ..domain.shaping import ApiResponse
from .base import ResourceApi


class StatsApi(ResourceApi):
    def get_stats(self, *, shape: bool | None = None) -> ApiResponse:
        """Return high-level counts (chains, factories, pools, tokens)."""
        return self._get("/stats", shape=shape)
