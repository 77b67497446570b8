# Core - Service capabilities injected into the VaultManager
#
# Two single-level interfaces: password analysis and audit recording.
# Concrete implementations live in vault/strength.py and core/audit_log.py.

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..vault.models import StrengthResult
    from .audit_log import AuditRecord


class PasswordAnalyzer(ABC):
    """Strength scoring, breach check, generation and the add-entry gate."""

    @abstractmethod
    def analyze_strength(self, password: Optional[str]) -> "StrengthResult":
        ...

    @abstractmethod
    def is_compromised(self, password: Optional[str]) -> bool:
        ...

    @abstractmethod
    def generate_strong_password(self, length: int = 16, include_special: bool = True) -> str:
        ...

    @abstractmethod
    def validate_password(self, password: Optional[str]) -> bool:
        ...


class AuditService(ABC):
    """Append-only audit trail with filtered reads and a text report."""

    @abstractmethod
    def log_event(self, record: "AuditRecord") -> None:
        ...

    @abstractmethod
    def logs_by_user(
        self, user_id: str, start: datetime, end: datetime
    ) -> List["AuditRecord"]:
        ...

    @abstractmethod
    def logs_by_action(self, action: str, limit: int) -> List["AuditRecord"]:
        ...

    @abstractmethod
    def failed_events(self, limit: int) -> List["AuditRecord"]:
        ...

    @abstractmethod
    def security_report(self, user_id: str) -> str:
        ...
