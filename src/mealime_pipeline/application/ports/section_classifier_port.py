from __future__ import annotations

from typing import Protocol

from mealime_pipeline.domain.value_objects.category_id import CategoryId


class SectionClassifierPort(Protocol):
    def category_of(self, text: str) -> CategoryId: ...
