"""Unit tests for the Typer command line interface."""

import json
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from github_dev_aggregator.aggregation.service import AggregationService
from github_dev_aggregator.configuration.cli import typer_app
from github_dev_aggregator.configuration.exceptions import InvalidConfigurationError
from github_dev_aggregator.configuration.models import AggregatorConfig, AuthenticationMode

from .utils import FakeUpstream, RecordingSleep, make_repo, make_search_item

runner = CliRunner()

CONFIG = AggregatorConfig(
    debug=False,
    github_api_url="https://api.github.com",
    authentication_mode=AuthenticationMode.TOKEN,
    github_pat_token="token",
)


@pytest.fixture
def mock_config() -> Generator[MagicMock, None, None]:
    """Patch configuration loading and logging setup."""
    with (
        patch("github_dev_aggregator.configuration.cli.get_aggregator_config", return_value=CONFIG) as mock_get_config,
        patch("github_dev_aggregator.configuration.cli.configure_logging"),
    ):
        yield mock_get_config


@pytest.fixture
def service(upstream: FakeUpstream, recording_sleep: RecordingSleep) -> Generator[AggregationService, None, None]:
    """Patch service creation to use the fake upstream."""
    aggregation_service = AggregationService.create(CONFIG, upstream=upstream, sleep=recording_sleep)
    with patch.object(AggregationService, "create", return_value=aggregation_service):
        yield aggregation_service


def test_developers_prints_json(mock_config: MagicMock, service: AggregationService, upstream: FakeUpstream) -> None:
    """Test that the developers command prints the listing as JSON."""
    upstream.search_results = [make_search_item("abebe")]
    upstream.add_user("abebe", repositories=[make_repo(1, "api", "Go")])

    result = runner.invoke(typer_app, ["--max-developers", "5", "developers"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)[0]["languages"] == ["Go"]
    assert mock_config.call_args.kwargs["max_developers"] == 5


def test_developer_prints_detail(mock_config: MagicMock, service: AggregationService, upstream: FakeUpstream) -> None:
    """Test that the developer command prints one developer's detail."""
    upstream.add_user("abebe")

    result = runner.invoke(typer_app, ["developer", "abebe"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["profile"]["username"] == "abebe"


def test_developer_not_found_exits_with_error(mock_config: MagicMock, service: AggregationService) -> None:
    """Test that an upstream failure exits non-zero with the error tag."""
    result = runner.invoke(typer_app, ["developer", "ghost"])

    assert result.exit_code == 1
    assert "not_found" in result.output


def test_developer_budget_exhausted_reports_reset(mock_config: MagicMock, service: AggregationService, upstream: FakeUpstream) -> None:
    """Test that a refused request reports when the budget resets."""
    upstream.rate_limit = {"resources": {"core": {"limit": 60, "remaining": 1, "reset": 1700000000}}}

    result = runner.invoke(typer_app, ["developer", "abebe"])

    assert result.exit_code == 1
    assert "budget_exhausted" in result.output
    assert "2023-11-14T22:13:20+00:00" in result.output


def test_rate_limit(mock_config: MagicMock, service: AggregationService) -> None:
    """Test that the rate-limit command prints the remaining budget."""
    result = runner.invoke(typer_app, ["rate-limit"])

    assert result.exit_code == 0
    assert "Remaining calls: 4999/5000" in result.stdout


def test_invalid_configuration_exits_with_error() -> None:
    """Test that an invalid configuration is reported and exits non-zero."""
    error = InvalidConfigurationError("maximum developers", "MAX_DEVELOPERS", "must be at least 1, got 0", cli_name="--max-developers")
    with patch("github_dev_aggregator.configuration.cli.get_aggregator_config", side_effect=error):
        result = runner.invoke(typer_app, ["--max-developers", "0", "developers"])

    assert result.exit_code == 1
    assert "MAX_DEVELOPERS" in result.output


def test_serve_runs_server(mock_config: MagicMock) -> None:
    """Test that serve passes host and port overrides and starts the server."""
    with patch("github_dev_aggregator.api.server.run_server") as mock_run_server:
        result = runner.invoke(typer_app, ["serve", "--port", "8080"])

    assert result.exit_code == 0
    assert mock_config.call_args.kwargs["port"] == 8080
    mock_run_server.assert_called_once_with(CONFIG)
