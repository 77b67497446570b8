# API Module - JSON/HTTP layer over the vault facade

from .main import app, create_app, start_api_server
from .vault_routes import get_vault_manager, set_vault_manager

__all__ = [
    "app",
    "create_app",
    "start_api_server",
    "get_vault_manager",
    "set_vault_manager",
]
