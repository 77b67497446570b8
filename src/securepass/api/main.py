# API - FastAPI application
#
# Small JSON layer over the vault facade. No authentication: the
# service is meant to bind to localhost only.

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_settings
from ..core.errors import NotFoundError, ValidationError
from ..vault import VaultManager
from .vault_routes import get_vault_manager, router as vault_router

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


async def _not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


async def _bad_request_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or wrongly typed fields
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app(vault_manager: Optional[VaultManager] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        vault_manager: Facade to serve. When None, routes use the
                       process-wide manager from get_vault_manager().
    """
    app = FastAPI(
        title="SecurePass Vault API",
        description="Password strength analysis, generation and vault scanning",
        version=__version__,
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(RequestValidationError, _bad_request_handler)

    app.include_router(vault_router)

    if vault_manager is not None:
        app.dependency_overrides[get_vault_manager] = lambda: vault_manager

    return app


app = create_app()


def start_api_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    vault_manager: Optional[VaultManager] = None,
):
    """
    Start the API server.

    Args:
        host: Host to bind to (default from settings: localhost only)
        port: Port to listen on (default from settings)
        vault_manager: Facade to serve (default: process-wide manager)
    """
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    target = create_app(vault_manager) if vault_manager is not None else app
    logger.info("SecurePass API listening on http://%s:%d", host, port)
    uvicorn.run(target, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    start_api_server()
