"""Unit tests for per-account enrichment outcomes."""

from github_dev_aggregator.aggregation.models import AccountSummary, EnrichedAccount
from github_dev_aggregator.aggregation.results import Degraded, Enriched, all_degraded, collect_accounts

from .utils import make_search_item


def _summary(login: str) -> AccountSummary:
    return AccountSummary.from_github_search_item(make_search_item(login))


def _enriched(login: str, languages: list[str]) -> Enriched:
    return Enriched(account=EnrichedAccount(**_summary(login).model_dump(), languages=languages))


def test_degraded_renders_summary_without_languages() -> None:
    """Test that a degraded account keeps its summary fields and has no languages."""
    summary = _summary("beta")
    account = Degraded(summary=summary, reason="Bad Gateway").to_account()
    assert account.username == "beta"
    assert account.repos_url == summary.repos_url
    assert account.languages == []


def test_collect_accounts_keeps_order_and_length() -> None:
    """Test that every outcome becomes exactly one row, in order."""
    outcomes = [_enriched("alpha", ["Go"]), Degraded(summary=_summary("beta"), reason="x"), _enriched("gamma", ["Rust"])]
    accounts = collect_accounts(outcomes)
    assert [account.username for account in accounts] == ["alpha", "beta", "gamma"]
    assert [account.languages for account in accounts] == [["Go"], [], ["Rust"]]


def test_all_degraded() -> None:
    """Test detection of batches in which no account was enriched."""
    degraded = Degraded(summary=_summary("beta"), reason="x")
    assert all_degraded([degraded, degraded]) is True
    assert all_degraded([degraded, _enriched("alpha", [])]) is False
    assert all_degraded([]) is False
