"""Liquidity pools: listings, details, OHLCV candles and transactions."""

from __future__ import annotations

from ..domain.shaping import ApiResponse, get_field
from ..exceptions import NotFoundError
from .base import (
    OHLCV_INTERVALS,
    SORT_ORDERS,
    ResourceApi,
    build_query_params,
    path_segment,
    require_non_empty,
    validate_allowed,
)


class PoolsApi(ResourceApi):
    def list_top_pools(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List top pools across all networks."""
        validate_allowed(sort, SORT_ORDERS, "sort")
        params = build_query_params(
            {"page": page, "limit": limit, "order_by": order_by, "sort": sort}
        )
        return self._get("/pools", params, shape=shape)

    def list_network_pools(
        self,
        network: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List top pools on one network."""
        require_non_empty(network=network)
        validate_allowed(sort, SORT_ORDERS, "sort")
        params = build_query_params(
            {"page": page, "limit": limit, "order_by": order_by, "sort": sort}
        )
        return self._get(f"/networks/{path_segment(network)}/pools", params, shape=shape)

    def _pool_path(self, network: str, pool_address: str) -> str:
        require_non_empty(network=network, pool_address=pool_address)
        return f"/networks/{path_segment(network)}/pools/{path_segment(pool_address)}"

    def get_pool_details(
        self,
        network: str,
        pool_address: str,
        *,
        inversed: bool | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Return one pool's details; `inversed` swaps base and quote token."""
        params = build_query_params({"inversed": inversed})
        return self._get(self._pool_path(network, pool_address), params, shape=shape)

    def get_pool_ohlcv(
        self,
        network: str,
        pool_address: str,
        start: str,
        *,
        end: str | None = None,
        interval: str | None = None,
        limit: int | None = None,
        inversed: bool | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Return OHLCV candles for a pool from `start` (ISO date or unix time)."""
        endpoint = f"{self._pool_path(network, pool_address)}/ohlcv"
        require_non_empty(start=start)
        validate_allowed(interval, OHLCV_INTERVALS, "interval")
        params = build_query_params(
            {
                "start": start,
                "end": end,
                "interval": interval,
                "limit": limit,
                "inversed": inversed,
            }
        )
        return self._get(endpoint, params, shape=shape)

    def list_pool_transactions(
        self,
        network: str,
        pool_address: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        cursor: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List a pool's recent transactions, by page or by cursor."""
        endpoint = f"{self._pool_path(network, pool_address)}/transactions"
        params = build_query_params({"page": page, "limit": limit, "cursor": cursor})
        return self._get(endpoint, params, shape=shape)

    def list_recent_pool_transactions(
        self,
        network: str,
        pool_address: str,
        *,
        limit: int = 10,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Return the first page of a pool's transactions."""
        return self.list_pool_transactions(
            network, pool_address, page=0, limit=limit, shape=shape
        )

    def find_pool(
        self,
        network: str,
        pool_address: str,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Return a pool's details, raising NotFoundError when no `pool` is reported."""
        response = self.get_pool_details(network, pool_address, shape=shape)
        if get_field(response, "pool") is None:
            raise NotFoundError.for_missing_resource("Pool", pool_address, network)
        return response
