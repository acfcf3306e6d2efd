"""CLI for the DexPaprika API.

Commands:
- stats: Ecosystem-wide counts
- networks: Supported networks
- dexes: DEXes on a network
- pools: Top pools, globally or per network
- pool: One pool's details
- token: One token's details
- search: Free-text search for tokens, pools and DEXes
- cache-clear: Remove every cached response
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .client import DexPaprikaClient
from .config import ClientConfig
from .config_file import load_client_config_file
from .domain.formatting import format_change, format_pair, format_price, format_volume
from .domain.shaping import get_field
from .exceptions import DexPaprikaApiError, DexPaprikaError
from .infrastructure.cache import DiskCache


class ClientBuilder(Protocol):
    """Protocol for constructing the API client used by commands."""

    def __call__(self, *, config: ClientConfig) -> DexPaprikaClient:
        """Build a client for the given configuration."""
        ...


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ClientConfig
    client_builder: ClientBuilder

    def build_client(self) -> DexPaprikaClient:
        return self.client_builder(config=self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the dexpaprika entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]✗ {message}[/red]")
    return typer.Exit(code=1)


def _call_api[ResultT](state: CliContext, call: Callable[[DexPaprikaClient], ResultT]) -> ResultT:
    """Run one API call with a fresh client, turning API errors into exit code 1."""
    with state.build_client() as client:
        try:
            return call(client)
        except DexPaprikaApiError as exc:
            status = f" (HTTP {exc.status_code})" if exc.status_code is not None else ""
            raise _fail(f"{exc.message}{status}") from exc


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _text(value: object) -> str:
    return "-" if value is None else str(value)


def _as_list(value: object) -> list[object]:
    return list(value) if isinstance(value, list) else []


def _items(response: object, key: str) -> list[object]:
    if isinstance(response, list):
        return list(response)
    return _as_list(get_field(response, key))


def _render_fields(title: str, fields: Iterable[tuple[str, object]]) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for name, value in fields:
        table.add_row(name, _text(value))
    rprint(table)


def _scalar_fields(value: object) -> list[tuple[str, object]]:
    if not isinstance(value, Mapping):
        return []
    return [
        (str(key), item)
        for key, item in value.items()
        if not isinstance(item, Mapping | list)
    ]


def _render_pools(title: str, pools: list[object]) -> None:
    table = Table(title=title)
    table.add_column("Pool", style="cyan", overflow="fold")
    table.add_column("DEX")
    table.add_column("Pair")
    table.add_column("Price", justify="right")
    table.add_column("Volume (USD)", justify="right")
    table.add_column("24h", justify="right")
    for pool in pools:
        price = _number(get_field(pool, "price_usd"))
        volume = _number(get_field(pool, "volume_usd"))
        change = _number(get_field(pool, "last_price_change_usd_24h"))
        table.add_row(
            _text(get_field(pool, "id")),
            _text(get_field(pool, "dex_name")),
            format_pair(_as_list(get_field(pool, "tokens"))),
            "-" if price is None else format_price(price),
            "-" if volume is None else format_volume(volume),
            "-" if change is None else format_change(change),
        )
    rprint(table)


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"dexpaprika {__version__}")
        raise typer.Exit()


def create_app(client_builder: ClientBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided client builder."""
    app = typer.Typer(
        add_completion=False,
        help="DexPaprika DEX market data: networks, DEXes, pools, tokens and search.",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file (schema_version = 1, [client] table)",
            ),
        ] = None,
        no_cache: Annotated[
            bool,
            typer.Option("--no-cache", help="Bypass the response cache"),
        ] = False,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        try:
            config = ClientConfig.from_env()
            if config_path is not None:
                config = config.with_file_overrides(load_client_config_file(config_path))
        except (DexPaprikaError, ValueError) as exc:
            raise _fail(str(exc)) from exc
        if no_cache:
            config = config.with_overrides(cache_enabled=False)
        ctx.obj = CliContext(config=config, client_builder=client_builder)

    @app.command()
    def stats(ctx: typer.Context) -> None:
        """Show ecosystem-wide statistics."""
        state = _get_context(ctx)
        response = _call_api(state, lambda client: client.stats.get_stats(shape=False))
        _render_fields("DexPaprika stats", _scalar_fields(response))

    @app.command()
    def networks(ctx: typer.Context) -> None:
        """List supported networks."""
        state = _get_context(ctx)
        response = _call_api(state, lambda client: client.networks.list_networks(shape=False))
        table = Table(title="Networks")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        for network in _items(response, "networks"):
            table.add_row(
                _text(get_field(network, "id")),
                _text(get_field(network, "display_name")),
            )
        rprint(table)

    @app.command()
    def dexes(
        ctx: typer.Context,
        network: Annotated[str, typer.Argument(help="Network ID, e.g. ethereum")],
        page: Annotated[int, typer.Option("--page", "-p", help="Page number (0-based)")] = 0,
        limit: Annotated[int, typer.Option("--limit", "-l", help="Items per page")] = 10,
    ) -> None:
        """List DEXes on a network."""
        state = _get_context(ctx)
        response = _call_api(
            state,
            lambda client: client.dexes.list_network_dexes(
                network, page=page, limit=limit, shape=False
            ),
        )
        table = Table(title=f"DEXes on {network}")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Protocol")
        for dex in _items(response, "dexes"):
            name = get_field(dex, "name") or get_field(dex, "dex_name")
            table.add_row(
                _text(get_field(dex, "id")),
                _text(name),
                _text(get_field(dex, "protocol")),
            )
        rprint(table)

    @app.command()
    def pools(
        ctx: typer.Context,
        network: Annotated[
            str | None,
            typer.Option("--network", "-n", help="Restrict to one network"),
        ] = None,
        page: Annotated[int, typer.Option("--page", "-p", help="Page number (0-based)")] = 0,
        limit: Annotated[int, typer.Option("--limit", "-l", help="Items per page")] = 10,
        order_by: Annotated[
            str | None,
            typer.Option("--order-by", help="Sort field, e.g. volume_usd"),
        ] = None,
        sort: Annotated[str | None, typer.Option("--sort", help="asc or desc")] = None,
    ) -> None:
        """List top pools, globally or on one network."""
        state = _get_context(ctx)
        if network is None:
            response = _call_api(
                state,
                lambda client: client.pools.list_top_pools(
                    page=page, limit=limit, order_by=order_by, sort=sort, shape=False
                ),
            )
            title = "Top pools"
        else:
            response = _call_api(
                state,
                lambda client: client.pools.list_network_pools(
                    network, page=page, limit=limit, order_by=order_by, sort=sort, shape=False
                ),
            )
            title = f"Top pools on {network}"
        _render_pools(title, _items(response, "pools"))

    @app.command()
    def pool(
        ctx: typer.Context,
        network: Annotated[str, typer.Argument(help="Network ID, e.g. ethereum")],
        address: Annotated[str, typer.Argument(help="Pool address")],
    ) -> None:
        """Show one pool's details."""
        state = _get_context(ctx)
        response = _call_api(
            state,
            lambda client: client.pools.get_pool_details(network, address, shape=False),
        )
        fields = _scalar_fields(response)
        fields.insert(0, ("pair", format_pair(_as_list(get_field(response, "tokens")))))
        _render_fields(f"Pool {address}", fields)

    @app.command()
    def token(
        ctx: typer.Context,
        network: Annotated[str, typer.Argument(help="Network ID, e.g. ethereum")],
        address: Annotated[str, typer.Argument(help="Token address")],
    ) -> None:
        """Show one token's details."""
        state = _get_context(ctx)
        response = _call_api(
            state,
            lambda client: client.tokens.get_token_details(network, address, shape=False),
        )
        fields = _scalar_fields(response)
        summary = get_field(response, "summary")
        price = _number(get_field(summary, "price_usd"))
        if price is not None:
            fields.append(("price", format_price(price)))
        _render_fields(f"Token {address}", fields)

    @app.command()
    def search(
        ctx: typer.Context,
        query: Annotated[str, typer.Argument(help="Token name, symbol or address")],
    ) -> None:
        """Search tokens, pools and DEXes."""
        state = _get_context(ctx)
        response = _call_api(state, lambda client: client.search.search(query, shape=False))
        tokens = _items(response, "tokens")
        found_pools = _items(response, "pools")
        found_dexes = _items(response, "dexes")
        rprint(
            f"[green]✓ Search '{query}':[/green] {len(tokens)} tokens, "
            f"{len(found_pools)} pools, {len(found_dexes)} dexes"
        )
        if tokens:
            table = Table(title="Tokens")
            table.add_column("ID", style="cyan", overflow="fold")
            table.add_column("Symbol")
            table.add_column("Name")
            table.add_column("Chain")
            for item in tokens:
                table.add_row(
                    _text(get_field(item, "id")),
                    _text(get_field(item, "symbol")),
                    _text(get_field(item, "name")),
                    _text(get_field(item, "chain")),
                )
            rprint(table)
        if found_pools:
            _render_pools("Pools", found_pools)

    @app.command(name="cache-clear")
    def cache_clear(ctx: typer.Context) -> None:
        """Remove every cached API response."""
        state = _get_context(ctx)
        with state.build_client() as client:
            cache = client.cache
            if cache is None:
                cache = DiskCache(state.config.resolved_cache_dir())
            if not cache.clear():
                raise _fail("Some cache entries could not be removed")
        rprint(f"[green]✓ Cache cleared:[/green] {state.config.resolved_cache_dir()}")

    _ = (
        main,
        stats,
        networks,
        dexes,
        pools,
        pool,
        token,
        search,
        cache_clear,
    )

    return app
