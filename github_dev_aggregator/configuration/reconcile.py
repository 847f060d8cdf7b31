"""Reconciles configuration between CLI arguments and environment variables."""

import structlog

from github_dev_aggregator.configuration.env import Settings, get_settings
from github_dev_aggregator.configuration.exceptions import InvalidConfigurationError
from github_dev_aggregator.configuration.models import AggregatorConfig, AuthenticationMode, LogFormat

logger = structlog.get_logger(__name__)

MAX_SEARCH_PAGE_SIZE = 100
"""GitHub's largest accepted per_page value for search and list endpoints."""

FIXED_DETAIL_CALLS = 4
"""Calls made by single-account enrichment besides language lookups: profile, repositories, followers, organizations."""


async def resolve_authentication_mode(github_pat_token: str | None) -> AuthenticationMode:
    """Resolves how the upstream client authenticates.

    Args:
        github_pat_token (str | None): The GitHub PAT token.

    Returns:
        AuthenticationMode: TOKEN when a non-blank token is configured, ANONYMOUS otherwise.
    """
    if github_pat_token and github_pat_token.strip():
        return AuthenticationMode.TOKEN
    return AuthenticationMode.ANONYMOUS


async def validate_aggregator_configuration(config: AggregatorConfig) -> None:
    """Validates numeric limits and delays of a reconciled configuration.

    Raises:
        InvalidConfigurationError: If any element is out of range.
    """
    positive_counts = [
        ("maximum developers", "MAX_DEVELOPERS", "--max-developers", config.max_developers),
        ("search page size", "SEARCH_PAGE_SIZE", None, config.search_page_size),
        ("repository sample limit", "REPO_SAMPLE_LIMIT", None, config.repo_sample_limit),
        ("language limit", "LANGUAGE_LIMIT", None, config.language_limit),
        ("detail repository page size", "DETAIL_REPO_PAGE_SIZE", None, config.detail_repo_page_size),
        ("followers page size", "FOLLOWERS_PAGE_SIZE", None, config.followers_page_size),
        ("language sample repositories", "LANGUAGE_SAMPLE_REPOS", None, config.language_sample_repos),
    ]
    for name, env_name, cli_name, value in positive_counts:
        if value < 1:
            raise InvalidConfigurationError(name, env_name, f"must be at least 1, got {value}", cli_name=cli_name)

    page_sizes = [
        ("search page size", "SEARCH_PAGE_SIZE", config.search_page_size),
        ("repository sample limit", "REPO_SAMPLE_LIMIT", config.repo_sample_limit),
        ("detail repository page size", "DETAIL_REPO_PAGE_SIZE", config.detail_repo_page_size),
        ("followers page size", "FOLLOWERS_PAGE_SIZE", config.followers_page_size),
    ]
    for name, env_name, value in page_sizes:
        if value > MAX_SEARCH_PAGE_SIZE:
            raise InvalidConfigurationError(name, env_name, f"GitHub returns at most {MAX_SEARCH_PAGE_SIZE} items per page, got {value}")

    delays = [
        ("search page delay", "SEARCH_PAGE_DELAY", config.search_page_delay),
        ("account delay", "ACCOUNT_DELAY", config.account_delay),
        ("language stagger", "LANGUAGE_STAGGER", config.language_stagger),
    ]
    for name, env_name, delay in delays:
        if delay < 0:
            raise InvalidConfigurationError(name, env_name, f"must not be negative, got {delay}")

    if config.followers_preview_limit < 0:
        raise InvalidConfigurationError(
            "followers preview limit", "FOLLOWERS_PREVIEW_LIMIT", f"must not be negative, got {config.followers_preview_limit}"
        )

    if config.cache_ttl_seconds <= 0:
        raise InvalidConfigurationError("cache TTL", "CACHE_TTL_SECONDS", f"must be positive, got {config.cache_ttl_seconds}")

    worst_case_calls = FIXED_DETAIL_CALLS + config.language_sample_repos
    if config.min_rate_budget < worst_case_calls:
        raise InvalidConfigurationError(
            "minimum rate budget",
            "MIN_RATE_BUDGET",
            f"must cover the {worst_case_calls} calls of a single-account enrichment, got {config.min_rate_budget}",
        )


async def reconcile_aggregator_configuration(
    cli_debug: bool | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_search_query: str | None = None,
    cli_max_developers: int | None = None,
    cli_log_format: LogFormat | None = None,
    cli_host: str | None = None,
    cli_port: int | None = None,
    settings: Settings | None = None,
) -> AggregatorConfig:
    """Reconciles CLI options with environment settings; CLI values win when given."""
    settings = settings or get_settings()

    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    authentication_mode = await resolve_authentication_mode(github_pat_token)

    try:
        log_format = cli_log_format or LogFormat(settings.LOG_FORMAT.lower())
    except ValueError as exc:
        raise InvalidConfigurationError(
            "log format", "LOG_FORMAT", f"must be one of {[f.value for f in LogFormat]}, got {settings.LOG_FORMAT!r}", cli_name="--log-format"
        ) from exc

    config = AggregatorConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        authentication_mode=authentication_mode,
        github_pat_token=github_pat_token if authentication_mode == AuthenticationMode.TOKEN else None,
        search_query=cli_search_query or settings.SEARCH_QUERY,
        max_developers=cli_max_developers if cli_max_developers is not None else settings.MAX_DEVELOPERS,
        search_page_size=settings.SEARCH_PAGE_SIZE,
        search_page_delay=settings.SEARCH_PAGE_DELAY,
        repo_sample_limit=settings.REPO_SAMPLE_LIMIT,
        language_limit=settings.LANGUAGE_LIMIT,
        account_delay=settings.ACCOUNT_DELAY,
        detail_repo_page_size=settings.DETAIL_REPO_PAGE_SIZE,
        followers_page_size=settings.FOLLOWERS_PAGE_SIZE,
        followers_preview_limit=settings.FOLLOWERS_PREVIEW_LIMIT,
        language_sample_repos=settings.LANGUAGE_SAMPLE_REPOS,
        language_stagger=settings.LANGUAGE_STAGGER,
        min_rate_budget=settings.MIN_RATE_BUDGET,
        cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
        cors_origins=list(settings.CORS_ORIGINS),
        host=cli_host or settings.HOST,
        port=cli_port if cli_port is not None else settings.PORT,
        log_format=log_format,
    )
    await validate_aggregator_configuration(config)

    logger.debug(
        "Reconciled aggregator configuration",
        github_api_url=config.github_api_url,
        authentication_mode=config.authentication_mode.value,
        search_query=config.search_query,
        max_developers=config.max_developers,
    )
    return config
