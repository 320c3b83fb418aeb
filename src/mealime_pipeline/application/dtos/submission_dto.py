from dataclasses import dataclass, field

from mealime_pipeline.domain.value_objects.category_id import CategoryId


@dataclass(frozen=True)
class SubmissionResult:
    item: str
    section: CategoryId
    success: bool
    detail: str

    @classmethod
    def added(cls, item: str, section: CategoryId) -> "SubmissionResult":
        return cls(item=item, section=section, success=True, detail=f"{item} added!")


@dataclass
class SubmissionReport:
    results: list[SubmissionResult] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(r.detail for r in self.results)

    @property
    def items(self) -> list[str]:
        return [r.item for r in self.results]
