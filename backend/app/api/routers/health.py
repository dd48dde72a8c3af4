"""System health endpoints for frontend polling."""

from typing import Any

from fastapi import APIRouter, Depends

from ...config import Settings
from ...domain.ledger import LedgerState
from ...infra.metrics import get_metrics_client
from ..dependencies import get_ledger_state, get_settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/healthz")
def healthcheck(
    settings: Settings = Depends(get_settings),
    state: LedgerState = Depends(get_ledger_state),
) -> dict[str, Any]:
    """Return coarse-grained readiness without touching the store."""

    last_error = state.last_error
    return {
        "status": "ok",
        "environment": settings.environment,
        "ledgerMode": state.mode.value,
        "lastStoreError": last_error.error_code if last_error else None,
        "demoFallback": settings.ledger.demo_fallback,
        "metrics": get_metrics_client().snapshot(),
    }
