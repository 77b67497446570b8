# API - Vault JSON endpoints
#
#   GET       /status        service liveness
#   POST      /analyze       strength analysis of one password
#   POST      /generate      strong password generation
#   GET|POST  /scan          weak + duplicate password scan
#   GET       /audit/report  rendered security report
#
# Routes only marshal calls into the VaultManager facade.

import logging
import threading
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import get_settings
from ..vault import VaultManager, build_vault_manager

logger = logging.getLogger(__name__)

DEFAULT_GENERATED_LENGTH = 16
MAX_GENERATED_LENGTH = 4096

router = APIRouter(tags=["vault"])


# ── Vault singleton ──────────────────────────────────────────────

_vault_manager: Optional[VaultManager] = None
_vault_lock = threading.Lock()


def get_vault_manager() -> VaultManager:
    """Get or create the process-wide VaultManager (FastAPI dependency)."""
    global _vault_manager
    if _vault_manager is None:
        with _vault_lock:
            if _vault_manager is None:
                _vault_manager = build_vault_manager()
    return _vault_manager


def set_vault_manager(manager: Optional[VaultManager]) -> None:
    """Replace (or with None, reset) the process-wide VaultManager."""
    global _vault_manager
    with _vault_lock:
        _vault_manager = manager


# ── Request Models ───────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    password: Optional[str] = None


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    length: Optional[int] = Field(None, le=MAX_GENERATED_LENGTH)
    include_special: Optional[bool] = Field(None, alias="includeSpecial")


# ── Endpoints ────────────────────────────────────────────────────

@router.get("/status")
async def get_status():
    """Liveness check."""
    return {"status": "ok", "service": get_settings().service_name}


@router.post("/analyze")
async def analyze_password(
    request: Optional[AnalyzeRequest] = None,
    vault: VaultManager = Depends(get_vault_manager),
):
    """Score a password. 400 if the password field is missing."""
    if request is None or request.password is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "password field required"},
        )

    result = vault.analyze_strength(request.password)
    return {
        "score": result.score,
        "level": result.level.value,
        "entropy": round(result.entropy, 2),
        "feedback": result.feedback,
    }


@router.post("/generate")
async def generate_password(
    request: Optional[GenerateRequest] = None,
    vault: VaultManager = Depends(get_vault_manager),
):
    """Generate a strong password (defaults: length 16, specials on)."""
    length = DEFAULT_GENERATED_LENGTH
    include_special = True
    if request is not None:
        if request.length is not None:
            length = request.length
        if request.include_special is not None:
            include_special = request.include_special

    password = vault.generate_password(length, include_special)
    result = vault.analyze_strength(password)
    return {
        "password": password,
        "score": result.score,
        "level": result.level.value,
    }


@router.api_route("/scan", methods=["GET", "POST"])
async def scan_vault(vault: VaultManager = Depends(get_vault_manager)):
    """
    Weak and duplicate password scan.

    Note: each duplicate group is keyed by the raw shared secret, which
    is returned in the response body as-is.
    """
    weak = vault.find_weak()
    duplicates = vault.find_duplicates()
    logger.info("Vault scan: %d weak, %d duplicate groups", len(weak), len(duplicates))

    return {
        "weak": [{"service": e.service, "username": e.username} for e in weak],
        "duplicates": [
            {"password": secret, "services": [e.service for e in group]}
            for secret, group in duplicates.items()
        ],
    }


@router.get("/audit/report")
async def audit_report(vault: VaultManager = Depends(get_vault_manager)):
    """Rendered security audit report for the vault owner."""
    return {"report": vault.security_report()}
