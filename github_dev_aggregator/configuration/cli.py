"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import json
from typing import Any, Coroutine, TypeVar

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_dev_aggregator.aggregation.service import AggregationService
from github_dev_aggregator.configuration.driver import get_aggregator_config
from github_dev_aggregator.configuration.exceptions import InvalidConfigurationError
from github_dev_aggregator.configuration.models import AggregatorConfig, LogFormat
from github_dev_aggregator.github.exceptions import RateLimitedError, UpstreamError
from github_dev_aggregator.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Aggregate and serve GitHub developer data.")

T = TypeVar("T")


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    search_query: Annotated[str | None, Option(envvar="SEARCH_QUERY", help="GitHub user search query selecting developers.")] = None,
    max_developers: Annotated[int | None, Option(envvar="MAX_DEVELOPERS", help="Maximum number of developers to list.")] = None,
    log_format: Annotated[LogFormat | None, Option(envvar="LOG_FORMAT", help="Log output format.")] = None,
    debug: Annotated[bool | None, Option("--debug/--no-debug", envvar="DEBUG", help="Enable debug mode.")] = None,
) -> None:
    """Resolve the configuration shared by every command."""
    ctx.ensure_object(dict)
    ctx.obj["options"] = {
        "github_api_url": github_api_url,
        "github_pat_token": github_pat_token,
        "search_query": search_query,
        "max_developers": max_developers,
        "log_format": log_format,
        "debug": debug,
    }


def _load_config(ctx: typer.Context, **overrides: Any) -> AggregatorConfig:
    """Reconcile the shared options, exiting with a message on invalid configuration."""
    try:
        config = get_aggregator_config(**ctx.obj["options"], **overrides)
    except InvalidConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(debug=config.debug, fmt=config.log_format)
    return config


def _run_or_exit(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run a service call, turning upstream failures into an error message and exit code 1."""
    try:
        return asyncio.run(coroutine)
    except RateLimitedError as exc:
        reset = f" (resets at {exc.reset_at.isoformat()})" if exc.reset_at else ""
        typer.echo(f"{exc.error_tag}: {exc.message}{reset}", err=True)
        raise typer.Exit(1) from exc
    except UpstreamError as exc:
        typer.echo(f"{exc.error_tag}: {exc.message}", err=True)
        raise typer.Exit(1) from exc


@typer_app.command(name="serve")
def serve_cli(
    ctx: typer.Context,
    host: Annotated[str | None, Option(envvar="HOST", help="Interface to bind.")] = None,
    port: Annotated[int | None, Option(envvar="PORT", help="Port to listen on.")] = None,
) -> None:
    """Serve the developer listing and developer details over HTTP."""
    from github_dev_aggregator.api.server import run_server

    config = _load_config(ctx, host=host, port=port)
    typer.echo(f"Serving GitHub developers matching '{config.search_query}' on {config.host}:{config.port}")
    run_server(config)


@typer_app.command(name="developers")
def developers_cli(ctx: typer.Context) -> None:
    """Print the enriched developer listing as JSON."""
    config = _load_config(ctx)
    service = AggregationService.create(config)
    developers = _run_or_exit(service.list_developers())
    typer.echo(json.dumps([developer.model_dump(mode="json") for developer in developers], indent=2))


@typer_app.command(name="developer")
def developer_cli(
    ctx: typer.Context,
    username: Annotated[str, Argument(help="GitHub username of the developer.")],
) -> None:
    """Print one developer's profile, statistics, languages and repositories as JSON."""
    config = _load_config(ctx)
    service = AggregationService.create(config)
    detail = _run_or_exit(service.get_developer(username))
    typer.echo(detail.model_dump_json(indent=2))


@typer_app.command(name="rate-limit")
def rate_limit_cli(ctx: typer.Context) -> None:
    """Print the remaining GitHub API rate budget."""
    config = _load_config(ctx)
    service = AggregationService.create(config)
    snapshot = _run_or_exit(service.rate_budget())
    typer.echo(f"Remaining calls: {snapshot.remaining}/{snapshot.limit}")
    typer.echo(f"Resets at: {snapshot.reset_at.isoformat()}")


if __name__ == "__main__":
    typer_app()
