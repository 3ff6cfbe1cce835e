from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import httpx
import typer

from feedify.config import ConfigError, load_config
from feedify.observability import configure_logging, get_logger
from feedify.resolution import CachedFeedResolver, FeedifyError, FeedResolver, FetchError, HttpFetcher
from feedify.resolution.http_fetcher import build_client
from feedify.storage import Database, FeedCacheRepository

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from feedify.config import FeedifyConfig
    from feedify.resolution import Resolver

logger = get_logger(__name__)

app = typer.Typer(add_completion=False)

EXIT_CONFIG_ERROR = 1
EXIT_RESOLUTION_ERROR = 2
EXIT_FETCH_ERROR = 3


@dataclass(frozen=True, slots=True)
class ApplicationComponents:
    client: httpx.AsyncClient
    resolver: Resolver
    db: Database | None


@asynccontextmanager
async def create_application(config: FeedifyConfig, *, use_cache: bool = True) -> AsyncIterator[ApplicationComponents]:
    async with AsyncExitStack() as stack:
        client = await stack.enter_async_context(build_client(timeout_seconds=config.http.timeout_seconds, user_agent=config.http.user_agent))
        resolver: Resolver = FeedResolver(
            fetcher=HttpFetcher(client, max_attempts=config.http.max_attempts),
            confirm_limit=config.resolver.confirm_limit,
            max_hops=config.resolver.max_hops,
            allowed_schemes=config.resolver.allowed_schemes,
        )

        db: Database | None = None
        if use_cache and config.cache.enabled:
            db = stack.enter_context(Database(config.cache.path))
            cache = FeedCacheRepository(db)
            purged = cache.purge_expired()
            if purged:
                logger.debug("cache_purged", path=str(config.cache.path), entries=purged)
            resolver = CachedFeedResolver(resolver, cache, ttl_seconds=config.cache.ttl_seconds)

        yield ApplicationComponents(client=client, resolver=resolver, db=db)


def _require_url(value: str) -> str:
    if not value.strip():
        msg = "URL must not be blank"
        raise typer.BadParameter(msg)
    return value


@app.command()
def resolve(
    url: Annotated[str, typer.Argument(help="Page URL to find the feed for", callback=_require_url)],
    config: Annotated[Path | None, typer.Option("-c", "--config", help="TOML config file")] = None,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Skip the result cache")] = False,
) -> None:
    try:
        settings = load_config(config)
    except ConfigError as exc:
        typer.echo(f"config error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    configure_logging(settings.logging.level, settings.logging.format)

    try:
        feed_url = asyncio.run(_resolve_once(settings, url, use_cache=not no_cache))
    except FeedifyError as exc:
        logger.warning("resolution_failed", url=url, error_type=type(exc).__name__, error=str(exc))
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_RESOLUTION_ERROR) from exc
    except (httpx.HTTPError, FetchError) as exc:
        logger.warning("fetch_failed", url=url, error_type=type(exc).__name__, error=str(exc))
        typer.echo(f"fetch failed: {exc}", err=True)
        raise typer.Exit(code=EXIT_FETCH_ERROR) from exc

    typer.echo(feed_url)


async def _resolve_once(config: FeedifyConfig, url: str, *, use_cache: bool) -> str | None:
    async with create_application(config, use_cache=use_cache) as components:
        return await components.resolver.resolve(url)


if __name__ == "__main__":
    app()
