# Vault - Data Model
#
# CredentialEntry: one stored credential (mutable only via VaultManager)
# StrengthResult:  value object produced by every strength analysis
# VaultStatistics: derived counts, recomputed on demand

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class StrengthLevel(str, Enum):
    """
    Ordered strength bands.

    VERY_WEAK is reserved for empty input; scored passwords start at WEAK.
    """
    VERY_WEAK = "VERY_WEAK"
    WEAK = "WEAK"
    FAIR = "FAIR"
    GOOD = "GOOD"
    STRONG = "STRONG"
    VERY_STRONG = "VERY_STRONG"

    @property
    def rank(self) -> int:
        return list(StrengthLevel).index(self)


@dataclass(frozen=True)
class StrengthResult:
    """Outcome of analyzing one password."""

    score: int
    level: StrengthLevel
    feedback: str
    has_upper: bool
    has_lower: bool
    has_digit: bool
    has_special: bool
    length: int
    is_common_password: bool
    entropy: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "feedback": self.feedback,
            "has_upper": self.has_upper,
            "has_lower": self.has_lower,
            "has_digit": self.has_digit,
            "has_special": self.has_special,
            "length": self.length,
            "is_common_password": self.is_common_password,
            "entropy": round(self.entropy, 2),
        }


@dataclass
class CredentialEntry:
    """
    A stored credential.

    Note: ``encrypted_password`` holds the literal secret. Nothing in this
    package encrypts or hashes it; weak and duplicate scans compare the raw
    value.
    """

    id: str
    service: str
    username: str
    encrypted_password: str
    category: str = "general"
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    access_count: int = 0
    last_accessed_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        service: str,
        username: str,
        secret: str,
        category: str = "general",
    ) -> "CredentialEntry":
        """Build an entry with a fresh UUID."""
        now = datetime.now()
        return cls(
            id=str(uuid.uuid4()),
            service=service,
            username=username,
            encrypted_password=secret,
            category=category,
            created_at=now,
            updated_at=now,
        )

    def record_access(self) -> None:
        self.access_count += 1
        self.last_accessed_at = datetime.now()

    def set_secret(self, secret: str) -> None:
        """Replace the secret and bump updated_at."""
        self.encrypted_password = secret
        self.updated_at = datetime.now()

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "service": self.service,
            "username": self.username,
            "category": self.category,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "access_count": self.access_count,
            "last_accessed_at": (
                self.last_accessed_at.isoformat() if self.last_accessed_at else None
            ),
        }
        if include_secret:
            data["password"] = self.encrypted_password
        return data


@dataclass(frozen=True)
class VaultStatistics:
    """Snapshot of vault contents (counts, not references)."""

    total_entries: int
    total_accesses: int
    category_breakdown: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_entries": self.total_entries,
            "total_accesses": self.total_accesses,
            "category_breakdown": dict(self.category_breakdown),
        }
