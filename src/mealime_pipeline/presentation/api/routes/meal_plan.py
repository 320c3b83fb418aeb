from typing import Any

from fastapi import APIRouter, Depends

from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.presentation.api.dependencies import SESSION_LOCK, get_session

router = APIRouter(prefix="/v1", tags=["meal-plan"])

@router.get("/meal-plan")
def meal_plan(session: MealimeSession = Depends(get_session)) -> dict[str, Any]:  # type: ignore[misc]
    with SESSION_LOCK:
        if not session.ready:
            session.login()
        data = session.get_meal_plan()
    return {"result": data}
