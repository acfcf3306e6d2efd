"""Decentralised exchanges per network."""

from __future__ import annotations

from ..domain.shaping import ApiResponse, get_field
from .base import (
    SORT_ORDERS,
    ResourceApi,
    build_query_params,
    path_segment,
    require_non_empty,
    validate_allowed,
)


class DexesApi(ResourceApi):
    def list_network_dexes(
        self,
        network: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        order_by: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List the DEXes available on a network."""
        require_non_empty(network=network)
        validate_allowed(sort, SORT_ORDERS, "sort")
        params = build_query_params(
            {"page": page, "limit": limit, "sort": sort, "order_by": order_by}
        )
        return self._get(f"/networks/{path_segment(network)}/dexes", params, shape=shape)

    def find_dex(self, network: str, dex_id: str, *, shape: bool | None = None) -> object | None:
        """Search the first page of a network's DEXes for `dex_id`."""
        require_non_empty(network=network, dex_id=dex_id)
        response = self.list_network_dexes(network, shape=shape)
        dexes = get_field(response, "dexes")
        if not isinstance(dexes, list):
            return None
        for dex in dexes:
            if get_field(dex, "id") == dex_id:
                return dex
        return None

    def list_dex_pools(
        self,
        network: str,
        dex: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List the pools traded on one DEX."""
        require_non_empty(network=network, dex=dex)
        validate_allowed(sort, SORT_ORDERS, "sort")
        params = build_query_params(
            {"page": page, "limit": limit, "order_by": order_by, "sort": sort}
        )
        endpoint = f"/networks/{path_segment(network)}/dexes/{path_segment(dex)}/pools"
        return self._get(endpoint, params, shape=shape)
