"""In-memory fakes shared by the unit tests."""

from typing import Any

from github_dev_aggregator.github.abc import UpstreamClientBase, UpstreamResponse
from github_dev_aggregator.github.exceptions import NotFoundError


def make_search_item(login: str) -> dict[str, Any]:
    """Build a /search/users item."""
    return {
        "login": login,
        "avatar_url": f"https://avatars.example.com/{login}",
        "html_url": f"https://github.com/{login}",
        "repos_url": f"https://api.github.com/users/{login}/repos",
    }


def make_user(login: str, followers: int = 10, following: int = 2, public_repos: int = 3) -> dict[str, Any]:
    """Build a /users/{username} payload."""
    return {
        **make_search_item(login),
        "name": login.title(),
        "bio": f"{login} writes code",
        "location": "Addis Ababa, Ethiopia",
        "blog": "",
        "created_at": "2015-03-01T10:00:00Z",
        "followers": followers,
        "following": following,
        "public_repos": public_repos,
    }


def make_repo(
    repo_id: int,
    name: str,
    language: str | None = None,
    fork: bool = False,
    stars: int = 0,
    forks: int = 0,
) -> dict[str, Any]:
    """Build a repository payload as listed by /users/{username}/repos."""
    return {
        "id": repo_id,
        "name": name,
        "full_name": f"owner/{name}",
        "description": None,
        "html_url": f"https://github.com/owner/{name}",
        "stargazers_count": stars,
        "forks_count": forks,
        "language": language,
        "fork": fork,
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2024-06-01T12:30:00Z",
        "topics": [],
        "visibility": "public",
        "is_template": False,
    }


class FakeUpstream(UpstreamClientBase):
    """An upstream client answering from dictionaries and recording every call."""

    def __init__(self) -> None:
        self.search_results: list[dict[str, Any]] = []
        self.search_total: int | None = None
        self.users: dict[str, dict[str, Any]] = {}
        self.repositories: dict[str, list[dict[str, Any]]] = {}
        self.followers: dict[str, list[dict[str, Any]]] = {}
        self.organizations: dict[str, list[dict[str, Any]]] = {}
        self.languages: dict[tuple[str, str], dict[str, int]] = {}
        self.rate_limit = {"resources": {"core": {"limit": 5000, "remaining": 4999, "reset": 1700000000}}}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, ...]] = []

    def add_user(self, login: str, repositories: list[dict[str, Any]] | None = None, **kwargs: Any) -> None:
        self.users[login] = make_user(login, **kwargs)
        self.repositories[login] = repositories or []

    def calls_named(self, name: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == name]

    def _record(self, name: str, key: str, *extra: str) -> None:
        self.calls.append((name, key, *extra))
        failure = self.failures.get((name, key))
        if failure is not None:
            raise failure

    async def request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        self._record("request", path)
        return UpstreamResponse(status_code=200, body={})

    async def search_users(
        self,
        query: str,
        per_page: int,
        page: int = 1,
        sort: str = "followers",
        order: str = "desc",
    ) -> dict[str, Any]:
        self._record("search_users", query, str(per_page), str(page))
        start = (page - 1) * per_page
        total = self.search_total if self.search_total is not None else len(self.search_results)
        return {"total_count": total, "items": self.search_results[start : start + per_page]}

    async def get_user(self, username: str) -> dict[str, Any]:
        self._record("get_user", username)
        if username not in self.users:
            raise NotFoundError("Not Found")
        return self.users[username]

    async def list_user_repositories(
        self,
        username: str,
        per_page: int,
        sort: str = "pushed",
        direction: str = "desc",
    ) -> list[dict[str, Any]]:
        self._record("list_user_repositories", username, str(per_page))
        return self.repositories.get(username, [])[:per_page]

    async def list_followers(self, username: str, per_page: int) -> list[dict[str, Any]]:
        self._record("list_followers", username, str(per_page))
        return self.followers.get(username, [])[:per_page]

    async def list_organizations(self, username: str) -> list[dict[str, Any]]:
        self._record("list_organizations", username)
        return self.organizations.get(username, [])

    async def list_repository_languages(self, owner: str, repo: str) -> dict[str, int]:
        self._record("list_repository_languages", f"{owner}/{repo}")
        return self.languages.get((owner, repo), {})

    async def get_rate_limit(self) -> dict[str, Any]:
        self._record("get_rate_limit", "core")
        return self.rate_limit


class RecordingSleep:
    """A sleep function that records requested pauses instead of waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeClock:
    """A manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
