"""Structured logging utilities."""

from .audit import GenerationEvent, JsonlAuditLogger, new_run_id, utc_timestamp

__all__ = ["GenerationEvent", "JsonlAuditLogger", "new_run_id", "utc_timestamp"]
