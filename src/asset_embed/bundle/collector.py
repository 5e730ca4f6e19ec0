"""Glob resolution and file reading for bundle inputs."""

from __future__ import annotations

import glob
import os
from collections.abc import Iterable

from asset_embed.bundle.models import FileRecord
from asset_embed.errors import PatternError, ReadError


def validate_pattern(pattern: str) -> None:
    """Reject patterns the glob matcher cannot interpret."""
    if not pattern:
        raise PatternError(pattern, "pattern is empty")
    if "\x00" in pattern:
        raise PatternError(pattern, "pattern contains a NUL byte")
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char != "[":
            index += 1
            continue
        close = index + 1
        if close < length and pattern[close] == "!":
            close += 1
        if close < length and pattern[close] == "]":
            close += 1
        while close < length and pattern[close] != "]":
            close += 1
        if close >= length:
            raise PatternError(pattern, "unterminated character class")
        index = close + 1


def resolve_pattern(pattern: str) -> list[str]:
    """Return matching paths sorted by name, dotfiles included."""
    validate_pattern(pattern)
    return sorted(glob.glob(pattern, recursive=True, include_hidden=True))


def read_file(path: str) -> FileRecord:
    """Read one matched file fully into a record."""
    try:
        with open(path, "rb") as handle:
            stat = os.fstat(handle.fileno())
            data = handle.read()
    except OSError as exc:
        raise ReadError(path, exc) from exc
    return FileRecord(path=path, data=data, mod_time_ns=stat.st_mtime_ns)


def collect_sources(patterns: Iterable[str]) -> list[FileRecord]:
    """Collect records in pattern order, then match order, keeping duplicates.

    Directories reached through a `**` pattern are passed over; a directory
    named by any other pattern fails the read like an unreadable file.
    """
    records: list[FileRecord] = []
    for pattern in patterns:
        recursive = "**" in pattern
        for match in resolve_pattern(pattern):
            if recursive and os.path.isdir(match):
                continue
            records.append(read_file(match))
    return records
