from __future__ import annotations

from typing import Protocol

from mealime_pipeline.application.dtos.submission_dto import SubmissionReport, SubmissionResult
from mealime_pipeline.application.services.query_splitter import split_items
from mealime_pipeline.domain.errors import UpstreamRejected


class ItemSubmitter(Protocol):
    def __call__(self, item: str) -> SubmissionResult: ...


class SubmitGroceryQueryUseCase:
    """Adds every item of a free-text request, strictly one after another.

    Each item waits for the previous one to complete, which keeps the
    traffic human-paced. The first rejected item aborts the rest; the
    exception carries the report of the items added before it.
    """

    def __init__(self, submit_item: ItemSubmitter) -> None:
        self.submit_item = submit_item

    def execute(self, query: str) -> SubmissionReport:
        report = SubmissionReport()
        for item in split_items(query):
            try:
                result = self.submit_item(item)
            except UpstreamRejected as e:
                e.report = report
                raise
            report.results.append(result)
        return report
