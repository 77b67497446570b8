# Core Module - Shared building blocks
#
# - Audit trail (append-only store + report rendering)
# - Service capability interfaces
# - Error taxonomy
# - Logging setup

from .audit_log import (
    AuditRecord,
    AuditSink,
    InMemoryAuditService,
    console_sink,
)
from .errors import NotFoundError, ValidationError, VaultError
from .interfaces import AuditService, PasswordAnalyzer
from .logging_config import configure_logging

__all__ = [
    # Audit
    "AuditRecord",
    "AuditSink",
    "InMemoryAuditService",
    "console_sink",
    # Interfaces
    "AuditService",
    "PasswordAnalyzer",
    # Errors
    "VaultError",
    "ValidationError",
    "NotFoundError",
    # Logging
    "configure_logging",
]
