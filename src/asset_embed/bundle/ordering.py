"""Deterministic ordering policies for collected records."""

from __future__ import annotations

from collections.abc import Sequence

from asset_embed.bundle.models import FileRecord
from asset_embed.errors import ConfigError

ORDER_BY_NAME = "name"
ORDER_BY_MTIME = "mtime"
ORDER_POLICIES = (ORDER_BY_NAME, ORDER_BY_MTIME)


def name_sort_key(record: FileRecord) -> bytes:
    """Byte-wise key over the path exactly as matched."""
    return record.path.encode("utf-8", "surrogateescape")


def mtime_sort_key(record: FileRecord) -> int:
    return record.mod_time_ns if record.mod_time_ns is not None else 0


def order_records(records: Sequence[FileRecord], policy: str = ORDER_BY_NAME) -> list[FileRecord]:
    """Return records in a total order; sorting is stable for equal keys."""
    if policy == ORDER_BY_NAME:
        return sorted(records, key=name_sort_key)
    if policy == ORDER_BY_MTIME:
        return sorted(records, key=mtime_sort_key)
    raise ConfigError(f"Unknown order policy '{policy}'; expected one of {ORDER_POLICIES}.")
