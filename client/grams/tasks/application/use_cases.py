import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from grams.tasks.application.ports import TaskGateway
from grams.tasks.domain.expenses import ExpenseSheet
from grams.tasks.domain.models import TaskCompletion, TaskSummary, UploadFile
from grams.tasks.domain.validation import (
    MAX_IMAGE_BYTES,
    validate_completion,
    validate_upload,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompleteTaskCommand:
    grievance_id: str
    completion_image_url: Optional[str]
    days_to_complete: object
    completion_notes: str = ""
    bill_image_urls: Sequence[str] = field(default_factory=list)


def completion_to_payload(completion: TaskCompletion) -> Dict[str, Any]:
    return {
        "grievanceId": completion.grievance_id,
        "completionNotes": completion.completion_notes,
        "daysToComplete": completion.days_to_complete,
        "completionImageUrl": completion.completion_image_url,
        "billImageUrls": list(completion.bill_image_urls),
        "expenseBreakdown": [
            {"description": line.description, "amount": line.amount}
            for line in completion.expense_breakdown
        ],
        "totalSpent": completion.total_spent,
    }


class LoadTaskUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(self, grievance_id: str) -> TaskSummary:
        return await self._gateway.get_task(grievance_id)


class UploadEvidenceUseCase:
    def __init__(self, gateway: TaskGateway, max_bytes: int = MAX_IMAGE_BYTES) -> None:
        self._gateway = gateway
        self._max_bytes = max_bytes

    async def execute(self, upload: UploadFile) -> str:
        validate_upload(upload, self._max_bytes)
        url = await self._gateway.upload_file(upload)
        logger.info("Uploaded %s (%d bytes)", upload.filename, upload.size)
        return url

    async def execute_many(self, uploads: Sequence[UploadFile]) -> List[str]:
        """Upload one after another; the first failure aborts the batch."""
        for upload in uploads:
            validate_upload(upload, self._max_bytes)
        urls = []
        for upload in uploads:
            urls.append(await self.execute(upload))
        return urls


class CompleteTaskUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(self, command: CompleteTaskCommand, sheet: ExpenseSheet) -> TaskCompletion:
        completion = validate_completion(
            grievance_id=command.grievance_id,
            completion_image_url=command.completion_image_url,
            days_to_complete=command.days_to_complete,
            sheet=sheet,
            completion_notes=command.completion_notes,
            bill_image_urls=command.bill_image_urls,
        )
        await self._gateway.complete_task(completion_to_payload(completion))
        logger.info(
            "Task %s completed in %d days, spent %.2f",
            completion.grievance_id,
            completion.days_to_complete,
            completion.total_spent,
        )
        return completion
