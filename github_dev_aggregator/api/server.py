"""Uvicorn server runner for the aggregator API."""

import uvicorn

from github_dev_aggregator.api.app import create_app
from github_dev_aggregator.configuration.models import AggregatorConfig


def run_server(config: AggregatorConfig) -> None:
    """Run uvicorn with config-backed host/port values."""
    app = create_app(config)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
