# Vault Module - In-memory credential vault
#
# Strength analysis + generation, credential entries, and the
# VaultManager facade that audits every operation.

from .models import CredentialEntry, StrengthLevel, StrengthResult, VaultStatistics
from .strength import StrengthAnalyzer
from .vault_manager import VaultManager, VaultStore, build_vault_manager

__all__ = [
    "CredentialEntry",
    "StrengthLevel",
    "StrengthResult",
    "VaultStatistics",
    "StrengthAnalyzer",
    "VaultManager",
    "VaultStore",
    "build_vault_manager",
]
