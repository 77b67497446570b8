# Vault - Vault Manager (facade)
#
# In-memory credential store fronted by a facade that:
# - gates new entries through the password analyzer
# - records exactly one audit event per public call, success or failure
# - serializes each call (mutation + audit append) under one lock

import logging
import threading
from collections import defaultdict
from typing import Dict, Iterator, List, Optional

from ..config import get_settings
from ..core.audit_log import AuditRecord, InMemoryAuditService, console_sink
from ..core.errors import NotFoundError, ValidationError
from ..core.interfaces import AuditService, PasswordAnalyzer
from .models import CredentialEntry, StrengthResult, VaultStatistics
from .strength import VALIDATION_MIN_SCORE, StrengthAnalyzer

logger = logging.getLogger(__name__)

WEAK_SCORE_THRESHOLD = VALIDATION_MIN_SCORE


class VaultStore:
    """
    Entry id -> CredentialEntry mapping.

    Not synchronized on its own; VaultManager owns it and holds its
    lock around every access.
    """

    def __init__(self):
        self._entries: Dict[str, CredentialEntry] = {}

    def put(self, entry: CredentialEntry) -> None:
        self._entries[entry.id] = entry

    def get(self, entry_id: str) -> Optional[CredentialEntry]:
        return self._entries.get(entry_id)

    def remove(self, entry_id: str) -> Optional[CredentialEntry]:
        return self._entries.pop(entry_id, None)

    def values(self) -> Iterator[CredentialEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self._entries


class VaultManager:
    """
    Facade over the credential store, the analyzer and the audit trail.

    Every public method appends one AuditRecord tagged with an action
    name, the owning user, an optional entry id and a success flag.
    The audit trail is the system of record for failures too: errors
    are logged before they are raised.

    Usage:
        analyzer = StrengthAnalyzer()
        audit = InMemoryAuditService()
        vault = VaultManager("user123", analyzer, audit)

        entry = CredentialEntry.create("GitHub", "octocat", "Tr0ub4dor&3", "work")
        vault.add_entry(entry)
        vault.get_entry(entry.id)
        print(vault.security_report())
    """

    def __init__(
        self,
        user_id: str,
        analyzer: PasswordAnalyzer,
        audit_service: AuditService,
        ip_address: str = "127.0.0.1",
    ):
        self._user_id = user_id
        self._analyzer = analyzer
        self._audit = audit_service
        self._ip_address = ip_address
        self._store = VaultStore()
        self._lock = threading.RLock()

        self._log_audit("VAULT_INITIALIZED", None, "Vault manager initialized for user", True)

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def audit_service(self) -> AuditService:
        return self._audit

    def entry_count(self) -> int:
        """Number of stored entries (not audited)."""
        with self._lock:
            return len(self._store)

    # ── CRUD ─────────────────────────────────────────────────────

    def add_entry(self, entry: Optional[CredentialEntry]) -> None:
        """
        Add an entry after the strength gate.

        An existing entry with the same id is replaced silently;
        callers are responsible for unique ids.

        Raises:
            ValidationError: entry is None or its secret fails validation
        """
        with self._lock:
            if entry is None:
                self._log_audit("ADD_PASSWORD", None, "Attempted to add null password", False)
                raise ValidationError("Password cannot be null")

            if not self._analyzer.validate_password(entry.encrypted_password):
                self._log_audit("ADD_PASSWORD", entry.id, "Password too weak", False)
                raise ValidationError("Password does not meet security requirements")

            self._store.put(entry)
            self._log_audit(
                "ADD_PASSWORD", entry.id,
                f"Added password for service: {entry.service}", True
            )

    def get_entry(self, entry_id: str) -> Optional[CredentialEntry]:
        """Return the entry (recording the access) or None if absent."""
        with self._lock:
            entry = self._store.get(entry_id)

            if entry is None:
                self._log_audit("ACCESS_PASSWORD", entry_id, "Password not found", False)
                return None

            entry.record_access()
            self._log_audit(
                "ACCESS_PASSWORD", entry_id,
                f"Password accessed for: {entry.service}", True
            )
            return entry

    def update_secret(self, entry_id: str, new_secret: str) -> None:
        """
        Replace an entry's secret.

        The new secret is NOT run through the strength gate.

        Raises:
            NotFoundError: entry_id is not in the vault
        """
        with self._lock:
            entry = self._store.get(entry_id)

            if entry is None:
                self._log_audit("UPDATE_PASSWORD", entry_id, "Password not found", False)
                raise NotFoundError(entry_id)

            entry.set_secret(new_secret)
            self._log_audit(
                "UPDATE_PASSWORD", entry_id,
                f"Password updated for: {entry.service}", True
            )

    def delete_entry(self, entry_id: str) -> bool:
        """Remove an entry. Returns whether it existed; never raises."""
        with self._lock:
            entry = self._store.remove(entry_id)

            if entry is None:
                self._log_audit("DELETE_PASSWORD", entry_id, "Password not found", False)
                return False

            self._log_audit(
                "DELETE_PASSWORD", entry_id,
                f"Password deleted for: {entry.service}", True
            )
            return True

    # ── Queries ──────────────────────────────────────────────────

    def search(self, query: str) -> List[CredentialEntry]:
        """Case-insensitive substring match on service or username."""
        with self._lock:
            self._log_audit("SEARCH_PASSWORDS", None, f"Search query: {query}", True)

            needle = (query or "").lower()
            return [
                e for e in self._store.values()
                if needle in e.service.lower() or needle in e.username.lower()
            ]

    def by_category(self, category: str) -> List[CredentialEntry]:
        """Case-insensitive exact match on category."""
        with self._lock:
            self._log_audit("LIST_CATEGORY", None, f"Category: {category}", True)

            wanted = (category or "").lower()
            return [e for e in self._store.values() if e.category.lower() == wanted]

    def statistics(self) -> VaultStatistics:
        """Recompute entry count, total accesses and per-category counts."""
        with self._lock:
            categories: Dict[str, int] = defaultdict(int)
            total_accesses = 0
            entries = list(self._store.values())
            for entry in entries:
                total_accesses += entry.access_count
                categories[entry.category] += 1

            self._log_audit("VIEW_STATISTICS", None, "Vault statistics computed", True)
            return VaultStatistics(
                total_entries=len(entries),
                total_accesses=total_accesses,
                category_breakdown=dict(categories),
            )

    # ── Analyzer pass-through ────────────────────────────────────

    def analyze_strength(self, password: Optional[str]) -> StrengthResult:
        with self._lock:
            self._log_audit("ANALYZE_PASSWORD", None, "Password strength analyzed", True)
            return self._analyzer.analyze_strength(password)

    def generate_password(self, length: int = 16, include_special: bool = True) -> str:
        with self._lock:
            password = self._analyzer.generate_strong_password(length, include_special)
            self._log_audit("GENERATE_PASSWORD", None, "Strong password generated", True)
            return password

    # ── Security scans ───────────────────────────────────────────

    def find_weak(self) -> List[CredentialEntry]:
        """Entries whose current secret scores below 50."""
        with self._lock:
            weak = [
                e for e in self._store.values()
                if self._analyzer.analyze_strength(e.encrypted_password).score < WEAK_SCORE_THRESHOLD
            ]
            self._log_audit(
                "SECURITY_SCAN", None,
                f"Weak password scan found {len(weak)} weak passwords", True
            )
            return weak

    def find_duplicates(self) -> Dict[str, List[CredentialEntry]]:
        """
        Group entries that share the exact same secret.

        Returns:
            Mapping secret -> entries, only for groups of 2 or more
        """
        with self._lock:
            grouped: Dict[str, List[CredentialEntry]] = defaultdict(list)
            for entry in self._store.values():
                grouped[entry.encrypted_password].append(entry)

            duplicates = {secret: group for secret, group in grouped.items() if len(group) > 1}
            self._log_audit(
                "SECURITY_SCAN", None,
                f"Duplicate password scan found {len(duplicates)} duplicate password groups", True
            )
            return duplicates

    def security_report(self) -> str:
        """Audit report for the vault owner (includes this request)."""
        with self._lock:
            self._log_audit("GENERATE_REPORT", None, "Security report generated", True)
            return self._audit.security_report(self._user_id)

    # ── Internal ─────────────────────────────────────────────────

    def _log_audit(
        self,
        action: str,
        resource_id: Optional[str],
        details: str,
        success: bool,
    ) -> None:
        record = AuditRecord.create(
            action=action,
            user_id=self._user_id,
            resource_id=resource_id,
            details=details,
            ip_address=self._ip_address,
            success=success,
        )
        self._audit.log_event(record)

        if not success:
            logger.warning("Vault operation failed: %s (%s)", action, details)


def build_vault_manager(audit_console: Optional[bool] = None) -> VaultManager:
    """
    Create a VaultManager wired from the current settings.

    Args:
        audit_console: Echo audit records to the console. None means
                       "use SECUREPASS_AUDIT_CONSOLE".
    """
    settings = get_settings()
    if audit_console is None:
        audit_console = settings.audit_console

    return VaultManager(
        user_id=settings.user_id,
        analyzer=StrengthAnalyzer(),
        audit_service=InMemoryAuditService(sinks=[console_sink] if audit_console else []),
        ip_address=settings.origin_ip,
    )
