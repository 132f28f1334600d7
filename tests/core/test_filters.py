from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from loganalyzer.core.filters import FilterConfig, LineFilter

LINES = [
    "2024-01-01 10:00:00 INFO start",
    "2024-01-01 10:05:00 ERROR failure X",
    "2024-01-02 09:00:00 ERROR failure X",
]


def _matching(config: FilterConfig, lines: list[str] = LINES) -> list[str]:
    lf = LineFilter.from_config(config)
    return [line for line in lines if lf.accepts(line)]


def test_empty_config_accepts_everything() -> None:
    config = FilterConfig()
    assert config.is_empty
    assert len(LineFilter.from_config(config)) == 0
    assert _matching(config) == LINES


def test_date_range_is_inclusive() -> None:
    assert _matching(FilterConfig(from_date="2024-01-02")) == LINES[2:]
    assert _matching(FilterConfig(to_date="2024-01-01")) == LINES[:2]
    assert _matching(FilterConfig(from_date="2024-01-01", to_date="2024-01-01")) == LINES[:2]


def test_date_range_rejects_short_and_unparsable_lines() -> None:
    lines = ["ERROR x", "garbage-line ERROR", "2024-13-01 ERROR bad month", LINES[1]]
    assert _matching(FilterConfig(from_date="2000-01-01"), lines) == [LINES[1]]


def test_short_lines_pass_without_date_bounds() -> None:
    assert _matching(FilterConfig(level="error"), ["ERROR x"]) == ["ERROR x"]


def test_level_filter_is_uppercased_substring() -> None:
    lines = LINES + ["2024-01-03 08:00:00 INFO retried ERRORS=0", "2024-01-03 error lowercase"]
    assert _matching(FilterConfig(level="error"), lines) == [LINES[1], LINES[2], lines[3]]


def test_search_is_case_insensitive() -> None:
    assert _matching(FilterConfig(search="FAILURE x")) == LINES[1:]


def test_regex_searches_anywhere_ignoring_case() -> None:
    assert _matching(FilterConfig(regex="fail.*X")) == LINES[1:]
    assert _matching(FilterConfig(regex="^START")) == []
    assert _matching(FilterConfig(regex="start$")) == [LINES[0]]


def test_invalid_regex_fails_at_configuration() -> None:
    with pytest.raises(ValueError, match="Invalid regex"):
        FilterConfig(regex="(unclosed")


def test_invalid_date_fails_at_configuration() -> None:
    with pytest.raises(ValidationError):
        FilterConfig(from_date="2024-02-30")


def test_filters_combine_with_and() -> None:
    config = FilterConfig(level="ERROR", from_date="2024-01-02", search="failure")
    assert _matching(config) == [LINES[2]]
    assert _matching(FilterConfig(level="INFO", regex="failure")) == []


def test_line_filter_short_circuits() -> None:
    calls: list[str] = []

    def reject(line: str) -> bool:
        calls.append("reject")
        return False

    def explode(line: str) -> bool:
        raise AssertionError("evaluated after a rejecting predicate")

    assert LineFilter([reject, explode]).accepts("anything") is False
    assert calls == ["reject"]


def test_config_is_frozen_and_accepts_aliases() -> None:
    config = FilterConfig.model_validate({"from": "2024-01-02", "to": "2024-01-03"})
    assert config.from_date == date(2024, 1, 2)
    assert config.to_date == date(2024, 1, 3)
    with pytest.raises(ValidationError):
        config.level = "ERROR"


def test_text_search_flag() -> None:
    assert not FilterConfig(level="error").has_text_search
    assert FilterConfig(search="x").has_text_search
    assert FilterConfig(regex="x").has_text_search


@pytest.mark.parametrize("value", ["1704153600", "2024-01-02T00:00:00", "2024/01/02", "2024-1-2"])
def test_dates_must_be_plain_iso(value: str) -> None:
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        FilterConfig(from_date=value)
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        FilterConfig(to_date=value)


def test_unix_timestamp_int_rejected() -> None:
    with pytest.raises(ValidationError):
        FilterConfig(from_date=1704153600)


def test_date_objects_accepted() -> None:
    assert FilterConfig(to_date=date(2024, 1, 2)).to_date == date(2024, 1, 2)
