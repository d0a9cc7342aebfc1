from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class TaskSummary:
    """The slice of an assigned grievance the completion form needs."""

    grievance_id: str
    title: str
    allocated_budget: float = 0.0
    tracking_id: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ExpenseLine:
    description: str
    amount: float


@dataclass(frozen=True)
class UploadFile:
    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class TaskCompletion:
    grievance_id: str
    days_to_complete: int
    completion_image_url: str
    expense_breakdown: Sequence[ExpenseLine]
    total_spent: float
    completion_notes: str = ""
    bill_image_urls: Sequence[str] = field(default_factory=list)
