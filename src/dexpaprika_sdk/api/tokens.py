"""Token details and the pools a token trades in."""

from __future__ import annotations

from ..domain.shaping import ApiResponse, get_field
from ..exceptions import NotFoundError
from .base import (
    SORT_ORDERS,
    ResourceApi,
    build_query_params,
    path_segment,
    require_non_empty,
    validate_allowed,
)


class TokensApi(ResourceApi):
    def _token_path(self, network: str, token_address: str) -> str:
        require_non_empty(network=network, token_address=token_address)
        return f"/networks/{path_segment(network)}/tokens/{path_segment(token_address)}"

    def get_token_details(
        self,
        network: str,
        token_address: str,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        return self._get(self._token_path(network, token_address), shape=shape)

    def list_token_pools(
        self,
        network: str,
        token_address: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        address: str | None = None,
        shape: bool | None = None,
    ) -> ApiResponse:
        """List pools containing the token.

        `address` restricts the result to pools pairing it with a second token.
        """
        endpoint = f"{self._token_path(network, token_address)}/pools"
        validate_allowed(sort, SORT_ORDERS, "sort")
        params = build_query_params(
            {
                "page": page,
                "limit": limit,
                "order_by": order_by,
                "sort": sort,
                "address": address,
            }
        )
        return self._get(endpoint, params, shape=shape)

    def find_token(
        self,
        network: str,
        token_address: str,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Return a token's details, raising NotFoundError when no `token` is reported."""
        response = self.get_token_details(network, token_address, shape=shape)
        if get_field(response, "token") is None:
            raise NotFoundError.for_missing_resource("Token", token_address, network)
        return response
