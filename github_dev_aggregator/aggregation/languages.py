"""Language statistics derived from a developer's repositories."""

from collections import Counter
from typing import Any, Iterable, Mapping

from github_dev_aggregator.aggregation.models import LanguageBytes


def rank_languages_by_repository_count(repositories: Iterable[Mapping[str, Any]], limit: int) -> list[str]:
    """Rank primary languages by how many repositories use them.

    Each repository counts once for its primary language; repositories without
    one are skipped. Ties keep the order in which languages were first seen.
    """
    counts: Counter[str] = Counter()
    for repo in repositories:
        language = repo.get("language")
        if language:
            counts[language] += 1
    # sorted() is stable and Counter keeps first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [language for language, _ in ranked[:limit]]


class LanguageByteTally:
    """Bytes per language summed across sampled repositories."""

    def __init__(self) -> None:
        """Initialize an empty tally."""
        self._bytes: Counter[str] = Counter()

    def add(self, repository_languages: Mapping[str, int]) -> None:
        """Add one repository's language byte map to the tally."""
        for language, byte_count in repository_languages.items():
            self._bytes[language] += byte_count

    def as_dict(self) -> dict[str, int]:
        """Return the raw tally."""
        return dict(self._bytes)

    def ranked(self) -> list[LanguageBytes]:
        """Return languages sorted by descending byte count."""
        ranked = sorted(self._bytes.items(), key=lambda item: item[1], reverse=True)
        return [LanguageBytes(name=language, bytes=byte_count) for language, byte_count in ranked]

    def __len__(self) -> int:
        return len(self._bytes)
