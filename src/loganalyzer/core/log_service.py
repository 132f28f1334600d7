"""Log reading and the single-pass filter/aggregate loop.

This module is the main integration point: it opens a log file (plain or
gzip), walks it line by line, applies a LineFilter and hands survivors to an
aggregator. A blocking variant serves the CLI and an ``aiofiles`` variant
serves the MCP server; both read strictly in order.
"""

from __future__ import annotations

import gzip
import logging
import os
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO, TypeVar

import aiofiles
from aiofiles.threadpool import wrap

from .aggregators import Aggregator
from .filters import LineFilter
from .models import MatchedLine

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Aggregator)


@dataclass(frozen=True, slots=True)
class ReadSettings:
    encoding: str = "utf-8"
    decode_errors: str = "replace"


def resolve_read_settings(settings: ReadSettings | None = None) -> ReadSettings:
    """Return settings with the LOG_ANALYZER_ENCODING override applied."""
    if settings is not None:
        return settings
    env = os.getenv("LOG_ANALYZER_ENCODING")
    if not env:
        return ReadSettings()
    try:
        "".encode(env)
    except LookupError as exc:
        raise ValueError(f"LOG_ANALYZER_ENCODING names an unknown codec: {env}") from exc
    return ReadSettings(encoding=env)


def _require_file(log_path: str | Path) -> Path:
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    return path


@contextmanager
def _open_text_sync(path: Path, settings: ReadSettings) -> Iterator[TextIO]:
    """Open a log file for blocking text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=settings.encoding, errors=settings.decode_errors)
    else:
        f = path.open(encoding=settings.encoding, errors=settings.decode_errors)
    with f:
        yield f


@asynccontextmanager
async def _open_text(path: Path, settings: ReadSettings):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=settings.encoding, errors=settings.decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(
            path, encoding=settings.encoding, errors=settings.decode_errors
        ) as f:
            yield f


def iter_lines(
    log_path: str | Path,
    *,
    settings: ReadSettings | None = None,
) -> Iterator[tuple[int, str]]:
    """Yield ``(line_no, line)`` pairs, 1-based, without line terminators."""
    path = _require_file(log_path)
    settings = resolve_read_settings(settings)
    with _open_text_sync(path, settings) as f:
        for line_no, line in enumerate(f, start=1):
            yield line_no, line.rstrip("\r\n")


async def aiter_lines(
    log_path: str | Path,
    *,
    settings: ReadSettings | None = None,
) -> AsyncIterator[tuple[int, str]]:
    """Async counterpart of :func:`iter_lines`."""
    path = _require_file(log_path)
    settings = resolve_read_settings(settings)
    line_no = 0
    async with _open_text(path, settings) as f:
        async for line in f:
            line_no += 1
            yield line_no, line.rstrip("\r\n")


def count_lines(log_path: str | Path, *, settings: ReadSettings | None = None) -> int:
    """Return the number of lines in the file, ignoring every filter."""
    return sum(1 for _ in iter_lines(log_path, settings=settings))


async def count_lines_async(log_path: str | Path, *, settings: ReadSettings | None = None) -> int:
    n = 0
    async for _ in aiter_lines(log_path, settings=settings):
        n += 1
    return n


def iter_matches(
    log_path: str | Path,
    line_filter: LineFilter,
    *,
    settings: ReadSettings | None = None,
) -> Iterator[MatchedLine]:
    """Yield lines accepted by ``line_filter``."""
    for line_no, line in iter_lines(log_path, settings=settings):
        if line_filter.accepts(line):
            yield MatchedLine(line_no=line_no, text=line)


async def iter_matches_async(
    log_path: str | Path,
    line_filter: LineFilter,
    *,
    settings: ReadSettings | None = None,
) -> AsyncIterator[MatchedLine]:
    async for line_no, line in aiter_lines(log_path, settings=settings):
        if line_filter.accepts(line):
            yield MatchedLine(line_no=line_no, text=line)


def aggregate(
    log_path: str | Path,
    line_filter: LineFilter,
    aggregator: A,
    *,
    settings: ReadSettings | None = None,
) -> A:
    """Run one pass over the file, feeding filtered lines into ``aggregator``."""
    logger.debug("Aggregating %s with %r into %s", log_path, line_filter, type(aggregator).__name__)
    seen = matched = counted = 0
    for _, line in iter_lines(log_path, settings=settings):
        seen += 1
        if not line_filter.accepts(line):
            continue
        matched += 1
        if aggregator.feed(line):
            counted += 1
    _log_pass(log_path, seen, matched, counted)
    return aggregator


async def aggregate_async(
    log_path: str | Path,
    line_filter: LineFilter,
    aggregator: A,
    *,
    settings: ReadSettings | None = None,
) -> A:
    """Async counterpart of :func:`aggregate`."""
    logger.debug("Aggregating %s with %r into %s", log_path, line_filter, type(aggregator).__name__)
    seen = matched = counted = 0
    async for _, line in aiter_lines(log_path, settings=settings):
        seen += 1
        if not line_filter.accepts(line):
            continue
        matched += 1
        if aggregator.feed(line):
            counted += 1
    _log_pass(log_path, seen, matched, counted)
    return aggregator


def _log_pass(log_path: str | Path, seen: int, matched: int, counted: int) -> None:
    logger.debug(
        "Finished %s: %d lines read, %d matched filters, %d counted, %d without a key",
        log_path,
        seen,
        matched,
        counted,
        matched - counted,
    )
