"""Filter configuration and the composable line predicates built from it."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .extractors import ISO_DATE_RE, extract_date

LinePredicate = Callable[[str], bool]


class FilterConfig(BaseModel):
    """Line-acceptance criteria resolved once per invocation.

    Every field is optional; unset fields do not filter anything.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: str | None = Field(default=None, description="Level keyword, matched as uppercase substring.")
    from_date: date | None = Field(default=None, alias="from", description="Inclusive lower date bound.")
    to_date: date | None = Field(default=None, alias="to", description="Inclusive upper date bound.")
    search: str | None = Field(default=None, description="Case-insensitive substring.")
    regex: str | None = Field(default=None, description="Case-insensitive pattern searched anywhere in the line.")

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _check_date_format(cls, v: object) -> object:
        # Only plain YYYY-MM-DD; no timestamps or datetimes.
        if v is None or (isinstance(v, date) and not isinstance(v, datetime)):
            return v
        if not isinstance(v, str) or not ISO_DATE_RE.fullmatch(v):
            raise ValueError(f"Date must look like YYYY-MM-DD, got {v!r}")
        return v

    @field_validator("regex")
    @classmethod
    def _check_regex(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            re.compile(v, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{v}': {e}") from e
        return v

    @property
    def has_date_range(self) -> bool:
        return self.from_date is not None or self.to_date is not None

    @property
    def has_text_search(self) -> bool:
        """True when a search or regex filter is active (listing shows line numbers)."""
        return self.search is not None or self.regex is not None

    @property
    def is_empty(self) -> bool:
        return self.level is None and not self.has_date_range and not self.has_text_search


def date_range_predicate(from_date: date | None, to_date: date | None) -> LinePredicate:
    """Accept lines whose leading date lies within [from_date, to_date]."""

    def accepts(line: str) -> bool:
        d = extract_date(line)
        if d is None:
            return False
        if from_date is not None and d < from_date:
            return False
        if to_date is not None and d > to_date:
            return False
        return True

    return accepts


def level_predicate(level: str) -> LinePredicate:
    """Accept lines containing the uppercased level anywhere (case-sensitive)."""
    needle = level.upper()
    return lambda line: needle in line


def search_predicate(text: str) -> LinePredicate:
    needle = text.lower()
    return lambda line: needle in line.lower()


def regex_predicate(pattern: str) -> LinePredicate:
    compiled = re.compile(pattern, re.IGNORECASE)
    return lambda line: compiled.search(line) is not None


class LineFilter:
    """Logical AND over the predicates derived from a FilterConfig.

    Evaluation stops at the first rejecting predicate.
    """

    def __init__(self, predicates: list[LinePredicate] | None = None) -> None:
        self._predicates: list[LinePredicate] = list(predicates or [])

    @classmethod
    def from_config(cls, config: FilterConfig) -> LineFilter:
        predicates: list[LinePredicate] = []
        if config.has_date_range:
            predicates.append(date_range_predicate(config.from_date, config.to_date))
        if config.level is not None:
            predicates.append(level_predicate(config.level))
        if config.search is not None:
            predicates.append(search_predicate(config.search))
        if config.regex is not None:
            predicates.append(regex_predicate(config.regex))
        return cls(predicates)

    def accepts(self, line: str) -> bool:
        return all(p(line) for p in self._predicates)

    __call__ = accepts

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"LineFilter({len(self._predicates)} predicates)"
