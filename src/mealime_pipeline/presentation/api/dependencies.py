from __future__ import annotations

import threading
from functools import lru_cache

from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.infrastructure.bootstrap import build_session

# Routes run in a threadpool; the one session they share is used one call at a time.
SESSION_LOCK = threading.Lock()


@lru_cache(maxsize=1)
def get_session() -> MealimeSession:
    return build_session()
