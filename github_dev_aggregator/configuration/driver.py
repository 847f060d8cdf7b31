"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from github_dev_aggregator.configuration import reconcile
from github_dev_aggregator.configuration.models import AggregatorConfig, LogFormat


def get_aggregator_config(
    debug: bool | None = None,
    github_api_url: str | None = None,
    github_pat_token: str | None = None,
    search_query: str | None = None,
    max_developers: int | None = None,
    log_format: LogFormat | None = None,
    host: str | None = None,
    port: int | None = None,
) -> AggregatorConfig:
    """Synchronously get the reconciled aggregator configuration."""
    return asyncio.run(
        reconcile.reconcile_aggregator_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_pat_token=github_pat_token,
            cli_search_query=search_query,
            cli_max_developers=max_developers,
            cli_log_format=log_format,
            cli_host=host,
            cli_port=port,
        )
    )
