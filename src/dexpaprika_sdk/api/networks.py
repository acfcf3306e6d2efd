"""Supported blockchain networks."""

from __future__ import annotations

from ..domain.shaping import ApiResponse, get_field
from .base import ResourceApi, require_non_empty


class NetworksApi(ResourceApi):
    def list_networks(self, *, shape: bool | None = None) -> ApiResponse:
        """Return every network the API indexes."""
        return self._get("/networks", shape=shape)

    def find_network(self, network_id: str, *, shape: bool | None = None) -> object | None:
        """Return the network whose `id` matches, or None."""
        require_non_empty(network_id=network_id)
        response = self.list_networks(shape=shape)
        # the endpoint answers with either a bare list or {"networks": [...]}
        networks = response if isinstance(response, list) else get_field(response, "networks")
        if not isinstance(networks, list):
            return None
        for network in networks:
            if get_field(network, "id") == network_id:
                return network
        return None
