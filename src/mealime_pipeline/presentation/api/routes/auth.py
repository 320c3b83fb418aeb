from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from mealime_pipeline.application.use_cases.ensure_mealime_session import EnsureMealimeSessionUseCase
from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.presentation.api.dependencies import SESSION_LOCK, get_session
from mealime_pipeline.presentation.api.metrics import LOGINS

router = APIRouter(prefix="/v1/auth", tags=["auth"])

MAX_CSRF_RETRIES = 5

@router.post("/login")
def login(
    csrf_retries: int = Query(0, ge=0, le=MAX_CSRF_RETRIES),
    session: MealimeSession = Depends(get_session),
) -> dict[str, str | None]:  # type: ignore[misc]
    with SESSION_LOCK:
        result = EnsureMealimeSessionUseCase(session, csrf_retries=csrf_retries).execute()
    LOGINS.labels(status=result.status).inc()
    return {"status": result.status, "message": result.message, "error": result.error}

@router.post("/reset")
def reset(session: MealimeSession = Depends(get_session)) -> dict[str, str]:  # type: ignore[misc]
    # failures surface through the MealimeError handler
    with SESSION_LOCK:
        session.reset()
    LOGINS.labels(status="READY").inc()
    return {"status": "READY", "message": "Cookie jar reset, logged in again"}
