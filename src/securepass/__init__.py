# SecurePass Vault - Main Package
#
# In-memory credential vault with password strength analysis,
# strong password generation and an append-only audit trail.

__version__ = "1.0.0"
__author__ = "SecurePass Team"
__description__ = "In-memory password vault with strength analysis and audit reporting"

from .core import (
    AuditRecord,
    InMemoryAuditService,
    NotFoundError,
    ValidationError,
    VaultError,
)
from .vault import (
    CredentialEntry,
    StrengthAnalyzer,
    StrengthLevel,
    StrengthResult,
    VaultManager,
    VaultStatistics,
)

__all__ = [
    "__version__",
    "AuditRecord",
    "InMemoryAuditService",
    "CredentialEntry",
    "StrengthAnalyzer",
    "StrengthLevel",
    "StrengthResult",
    "VaultManager",
    "VaultStatistics",
    "VaultError",
    "ValidationError",
    "NotFoundError",
]
