"""Count-per-key accumulator used by every aggregator."""

from __future__ import annotations

from collections.abc import Iterator


class Tally:
    """Occurrence counts keyed by string, remembering first-seen order.

    Ranking by count is stable, so keys with equal counts keep the order in
    which they were first counted.
    """

    __slots__ = ("_counts", "_total")

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._total = 0

    def increment(self, key: str) -> int:
        """Add one occurrence of ``key`` (initializing it at zero) and return its new count."""
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        self._total += 1
        return count

    @property
    def total(self) -> int:
        return self._total

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __getitem__(self, key: str) -> int:
        return self._counts.get(key, 0)

    def items(self) -> list[tuple[str, int]]:
        """Return ``(key, count)`` pairs in first-seen order."""
        return list(self._counts.items())

    def ranked(self, limit: int | None = None) -> list[tuple[str, int]]:
        """Return pairs by count descending; ties keep first-seen order."""
        pairs = sorted(self._counts.items(), key=lambda kv: kv[1], reverse=True)
        return pairs if limit is None else pairs[:limit]

    def by_key(self) -> list[tuple[str, int]]:
        """Return pairs sorted by key ascending."""
        return sorted(self._counts.items())

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)
