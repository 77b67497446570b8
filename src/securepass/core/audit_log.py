# Core - Audit Trail
#
# Append-only, in-memory audit log for every vault facade call.
# Records are immutable and never edited, reordered or removed once logged.
# Recording (this store) is separate from displaying (optional sinks).

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from uuid import uuid4

import structlog

from .interfaces import AuditService

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
RECENT_ACTIVITY_LIMIT = 10

_HEAVY_RULE = "═" * 51
_LIGHT_RULE = "─" * 51


@dataclass(frozen=True)
class AuditRecord:
    """
    One audited facade operation (attempt + outcome).

    Construct with named fields; ``timestamp`` falls back to the
    creation time when not supplied.
    """

    id: str
    action: str
    user_id: str
    resource_id: Optional[str] = None
    details: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    ip_address: str = "127.0.0.1"
    success: bool = True

    @classmethod
    def create(
        cls,
        action: str,
        user_id: str,
        resource_id: Optional[str] = None,
        details: str = "",
        ip_address: str = "127.0.0.1",
        success: bool = True,
        timestamp: Optional[datetime] = None,
    ) -> "AuditRecord":
        """Build a record with a fresh UUID and (by default) the current time."""
        return cls(
            id=str(uuid4()),
            action=action,
            user_id=user_id,
            resource_id=resource_id,
            details=details,
            timestamp=timestamp or datetime.now(),
            ip_address=ip_address,
            success=success,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "action": self.action,
            "user_id": self.user_id,
            "resource_id": self.resource_id,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "ip_address": self.ip_address,
            "success": self.success,
        }


# A sink displays a record somewhere (console, file, ...). It never
# influences what is stored.
AuditSink = Callable[[AuditRecord], None]


def console_sink(record: AuditRecord) -> None:
    """Display an audit record as one structlog event."""
    structlog.get_logger("securepass.audit").info(
        "audit_event",
        action=record.action,
        user_id=record.user_id,
        resource_id=record.resource_id,
        success=record.success,
        timestamp=record.timestamp.strftime(TIMESTAMP_FORMAT),
    )


def _newest_first(records: List[AuditRecord]) -> List[AuditRecord]:
    # Stable sort over the reversed log: equal timestamps stay newest-logged first
    return sorted(reversed(records), key=lambda r: r.timestamp, reverse=True)


class InMemoryAuditService(AuditService):
    """
    Thread-safe in-memory audit store.

    Features:
    - Insertion-ordered, append-only record list
    - User / action / failure filtered queries (newest first)
    - Fixed-format security report per user
    - Injectable display sinks
    """

    def __init__(self, sinks: Optional[List[AuditSink]] = None):
        self._logs: List[AuditRecord] = []
        self._lock = threading.Lock()
        self._sinks: List[AuditSink] = list(sinks or [])

    # ── Sinks ────────────────────────────────────────────────────

    def add_sink(self, sink: AuditSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: AuditSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    # ── Recording ────────────────────────────────────────────────

    def log_event(self, record: AuditRecord) -> None:
        """
        Append a record to the trail.

        Raises:
            ValueError: If record is None
        """
        if record is None:
            raise ValueError("Audit log cannot be null")

        with self._lock:
            self._logs.append(record)

        for sink in list(self._sinks):
            try:
                sink(record)
            except Exception:
                logger.exception("Audit sink failed for %s record %s", record.action, record.id)

    # ── Queries ──────────────────────────────────────────────────

    def _snapshot(self) -> List[AuditRecord]:
        with self._lock:
            return list(self._logs)

    def logs_by_user(
        self, user_id: str, start: datetime, end: datetime
    ) -> List[AuditRecord]:
        """Records for user_id with start < timestamp < end, newest first."""
        matches = [
            r for r in self._snapshot()
            if r.user_id == user_id and start < r.timestamp < end
        ]
        return _newest_first(matches)

    def logs_by_action(self, action: str, limit: int) -> List[AuditRecord]:
        """Case-insensitive action match, newest first, at most limit."""
        wanted = action.lower()
        matches = [r for r in self._snapshot() if r.action.lower() == wanted]
        return _newest_first(matches)[:max(0, limit)]

    def failed_events(self, limit: int) -> List[AuditRecord]:
        """Unsuccessful records, newest first, at most limit."""
        matches = [r for r in self._snapshot() if not r.success]
        return _newest_first(matches)[:max(0, limit)]

    def total_count(self) -> int:
        with self._lock:
            return len(self._logs)

    def all_logs(self) -> List[AuditRecord]:
        """Copy of every record in insertion order."""
        return self._snapshot()

    # ── Reporting ────────────────────────────────────────────────

    def security_report(self, user_id: str) -> str:
        """
        Render the human-readable security report for one user.

        Layout (binding): header, summary block, action breakdown by
        descending count, then the 10 most recent events newest first.
        """
        user_logs = [r for r in self._snapshot() if r.user_id == user_id]

        if not user_logs:
            return f"No audit logs found for user: {user_id}"

        total = len(user_logs)
        successful = sum(1 for r in user_logs if r.success)
        failed = total - successful
        action_counts = Counter(r.action for r in user_logs)

        lines = [
            _HEAVY_RULE,
            "          SECURITY AUDIT REPORT",
            _HEAVY_RULE,
            f"User ID: {user_id}",
            f"Generated: {datetime.now().strftime(TIMESTAMP_FORMAT)}",
            _LIGHT_RULE,
            "SUMMARY:",
            f"  Total Events: {total}",
            f"  Successful: {successful}",
            f"  Failed: {failed}",
            f"  Success Rate: {successful * 100.0 / total:.1f}%",
            _LIGHT_RULE,
            "ACTIONS BREAKDOWN:",
        ]

        for action, count in sorted(action_counts.items(), key=lambda kv: kv[1], reverse=True):
            lines.append(f"  {action}: {count}")

        lines.append(_LIGHT_RULE)
        lines.append(f"RECENT ACTIVITY (Last {RECENT_ACTIVITY_LIMIT} events):")

        for record in _newest_first(user_logs)[:RECENT_ACTIVITY_LIMIT]:
            mark = "✓" if record.success else "✗"
            lines.append(
                f"  [{record.timestamp.strftime(TIMESTAMP_FORMAT)}] {record.action} {mark}"
            )

        lines.append(_HEAVY_RULE)
        return "\n".join(lines) + "\n"
