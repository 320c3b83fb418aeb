from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from mealime_pipeline.application.dtos.submission_dto import SubmissionResult
from mealime_pipeline.domain.errors import UpstreamRejected
from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.presentation.api.dependencies import SESSION_LOCK, get_session
from mealime_pipeline.presentation.api.metrics import ITEMS_SUBMITTED

router = APIRouter(prefix="/v1/grocery", tags=["grocery"])


def _required_text(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str):
        raise HTTPException(status_code=422, detail=f"'{key}' must be a string")
    return value


def _row(r: SubmissionResult) -> dict[str, Any]:
    return {"item": r.item, "section_id": int(r.section), "success": r.success, "detail": r.detail}


@router.post("/query")
def submit_query(body: dict[str, Any], session: MealimeSession = Depends(get_session)):  # type: ignore[misc]
    query = _required_text(body, "query")
    with SESSION_LOCK:
        if not session.ready:
            session.login()
        try:
            report = session.submit_query(query)
        except UpstreamRejected as e:
            done = len(e.report.results) if e.report else 0
            ITEMS_SUBMITTED.labels(outcome="added").inc(done)
            ITEMS_SUBMITTED.labels(outcome="rejected").inc()
            raise
    ITEMS_SUBMITTED.labels(outcome="added").inc(len(report.results))
    return {"result": report.text, "items": [_row(r) for r in report.results]}


@router.post("/items")
def submit_item(body: dict[str, Any], session: MealimeSession = Depends(get_session)):  # type: ignore[misc]
    item = _required_text(body, "item")
    with SESSION_LOCK:
        if not session.ready:
            session.login()
        try:
            result = session.submit_item(item)
        except UpstreamRejected:
            ITEMS_SUBMITTED.labels(outcome="rejected").inc()
            raise
    ITEMS_SUBMITTED.labels(outcome="added").inc()
    return {"result": result.detail, "item": _row(result)}
