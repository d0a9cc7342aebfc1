from typing import Optional

from grams.resource_requests.domain.errors import InvalidRequest
from grams.tasks.domain.expenses import ExpenseSheet
from grams.tasks.domain.models import TaskCompletion, UploadFile

MAX_IMAGE_BYTES = 5 * 1024 * 1024


def parse_days(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value.isdecimal():
            return None
        value = int(value)
    if not isinstance(value, int) or value < 1:
        return None
    return value


def validate_upload(upload: UploadFile, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    if not (upload.content_type or "").startswith("image/"):
        raise InvalidRequest("Please upload an image file")
    if upload.size > max_bytes:
        raise InvalidRequest(
            f"Image size should be less than {max_bytes // (1024 * 1024)}MB"
        )


def validate_completion(
    grievance_id: str,
    completion_image_url: Optional[str],
    days_to_complete: object,
    sheet: ExpenseSheet,
    completion_notes: str = "",
    bill_image_urls=(),
) -> TaskCompletion:
    """Run the submit-time checks and build the completion to send.

    A task without an allocation can never be completed, so that check runs
    first. The image must already be uploaded; a selected-but-not-uploaded
    file does not count. The over-budget check here is a hard block, separate
    from the warning the form shows while typing.
    """
    ledger = sheet.ledger
    if not ledger.has_allocation:
        raise InvalidRequest(
            "Cannot complete task: No budget has been allocated. "
            "Please request resources first."
        )

    if not completion_image_url:
        raise InvalidRequest("Please upload the after-task image first")

    days = parse_days(days_to_complete)
    if days is None:
        raise InvalidRequest("Please enter valid days to complete")

    lines = sheet.filled_lines()
    if not lines:
        raise InvalidRequest("Please add at least one expense with description and amount")

    if any(line.amount < 0 for line in lines):
        raise InvalidRequest("Expense amounts cannot be negative")

    if ledger.is_over_budget:
        raise InvalidRequest(
            f"Total expenses (₹{ledger.total_used:,.2f}) exceed "
            f"allocated budget (₹{ledger.allocated_budget:,.2f})"
        )

    return TaskCompletion(
        grievance_id=grievance_id,
        days_to_complete=days,
        completion_image_url=completion_image_url,
        expense_breakdown=lines,
        total_spent=ledger.total_used,
        completion_notes=completion_notes or "",
        bill_image_urls=list(bill_image_urls),
    )
