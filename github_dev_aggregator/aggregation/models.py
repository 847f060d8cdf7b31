"""Data models for aggregated developer data.

Every model is immutable once built. Raw GitHub payloads are mapped into these
records with renamed fields by the ``from_github*`` constructors.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class AccountSummary(BaseModel):
    """A developer as returned by user search."""

    model_config = ConfigDict(frozen=True)

    username: str
    avatar: str
    profile: str
    repos_url: str
    followers: int = 0

    @classmethod
    def from_github_search_item(cls, item: dict[str, Any]) -> Self:
        """Build a summary from one /search/users item."""
        return cls(
            username=item["login"],
            avatar=item["avatar_url"],
            profile=item["html_url"],
            repos_url=item["repos_url"],
            followers=item.get("followers") or 0,
        )


class EnrichedAccount(AccountSummary):
    """A developer row of the bulk listing, with its most used languages."""

    languages: list[str] = Field(default_factory=list)


class AccountReference(BaseModel):
    """A linked account, used for organizations and the followers preview."""

    model_config = ConfigDict(frozen=True)

    username: str
    avatar: str
    profile: str | None = None

    @classmethod
    def from_github(cls, account: dict[str, Any]) -> Self:
        """Build a reference from a GitHub user or organization payload."""
        # Organization payloads carry no html_url
        return cls(username=account["login"], avatar=account["avatar_url"], profile=account.get("html_url"))


class RepositoryRecord(BaseModel):
    """A repository owned by a developer."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str | None = None
    url: str
    stars: int = 0
    forks: int = 0
    language: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    topics: list[str] = Field(default_factory=list)
    visibility: str | None = None
    is_template: bool = False

    @classmethod
    def from_github(cls, repo: dict[str, Any]) -> Self:
        """Build a record from a GitHub repository payload."""
        return cls(
            id=repo["id"],
            name=repo["name"],
            description=repo.get("description"),
            url=repo["html_url"],
            stars=repo.get("stargazers_count") or 0,
            forks=repo.get("forks_count") or 0,
            language=repo.get("language"),
            created_at=repo.get("created_at"),
            updated_at=repo.get("updated_at"),
            topics=repo.get("topics") or [],
            visibility=repo.get("visibility"),
            is_template=bool(repo.get("is_template")),
        )


class ProfileDetail(AccountSummary):
    """Full profile of a single developer."""

    name: str | None = None
    bio: str | None = None
    location: str | None = None
    blog: str | None = None
    created_at: datetime | None = None
    following: int = 0
    public_repos: int = 0
    organizations: list[AccountReference] = Field(default_factory=list)
    followers_preview: list[AccountReference] = Field(default_factory=list)

    @classmethod
    def from_github(
        cls,
        user: dict[str, Any],
        organizations: list[AccountReference],
        followers_preview: list[AccountReference],
    ) -> Self:
        """Build a profile from a GitHub user payload and its linked accounts."""
        return cls(
            username=user["login"],
            avatar=user["avatar_url"],
            profile=user["html_url"],
            repos_url=user["repos_url"],
            followers=user.get("followers") or 0,
            name=user.get("name"),
            bio=user.get("bio"),
            location=user.get("location"),
            blog=user.get("blog") or None,
            created_at=user.get("created_at"),
            following=user.get("following") or 0,
            public_repos=user.get("public_repos") or 0,
            organizations=organizations,
            followers_preview=followers_preview,
        )


class LanguageBytes(BaseModel):
    """Bytes of code written in one language."""

    model_config = ConfigDict(frozen=True)

    name: str
    bytes: int


class AccountStatistics(BaseModel):
    """Headline numbers of a developer."""

    model_config = ConfigDict(frozen=True)

    total_repos: int
    total_contributions: int
    follower_count: int
    following_count: int


class AccountDetail(BaseModel):
    """The single-developer payload: profile, statistics, languages and repositories."""

    model_config = ConfigDict(frozen=True)

    profile: ProfileDetail
    statistics: AccountStatistics
    languages: list[LanguageBytes] = Field(default_factory=list)
    repositories: list[RepositoryRecord] = Field(default_factory=list)


@dataclass(frozen=True)
class RateBudgetSnapshot:
    """Remaining GitHub call budget at the time it was queried."""

    remaining: int
    limit: int
    reset_at: datetime
