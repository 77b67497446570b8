# Core - Vault error taxonomy
#
# Every facade failure is audited before one of these is raised.
# Empty or missing passwords are NOT errors: they analyze as VERY_WEAK.


class VaultError(Exception):
    """Base class for vault facade failures."""


class ValidationError(VaultError):
    """Entry is missing or its secret does not pass the strength gate."""


class NotFoundError(VaultError):
    """Operation targeted an entry id that is not in the vault."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Password not found: {entry_id}")
