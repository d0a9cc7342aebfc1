from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence


REQUEST_STATUSES = (
    "pending",
    "approved",
    "partially-approved",
    "rejected",
    "delivered",
    "refetched",
)
PRIORITIES = ("low", "medium", "high", "urgent")
DELIVERY_STATUSES = ("not-started", "in-transit", "delivered", "completed")
STATUS_BUCKETS = ("pending", "approved", "rejected")


@dataclass(frozen=True)
class LineItem:
    name: str
    estimated_cost: float
    quantity: int = 1
    unit: str = "set"
    reason: Optional[str] = None
    approved: bool = False
    approved_cost: float = 0.0

    @property
    def display_cost(self) -> float:
        return self.approved_cost if self.approved else self.estimated_cost


@dataclass(frozen=True)
class Manpower:
    workers: int = 0
    days: int = 1
    skill_level: str = "unskilled"
    total_cost: float = 0.0
    approved: bool = False
    approved_cost: float = 0.0

    @property
    def display_cost(self) -> float:
        return self.approved_cost if self.approved else self.total_cost


@dataclass(frozen=True)
class RefetchRecord:
    refetched_amount: float
    refetched_at: Optional[datetime] = None
    admin_message: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class ResourceRequest:
    id: str
    status: Optional[str]
    grievance_id: Optional[str] = None
    request_type: str = "materials"
    priority: str = "medium"
    justification: str = ""
    materials: Sequence[LineItem] = field(default_factory=list)
    equipment: Sequence[LineItem] = field(default_factory=list)
    manpower: Optional[Manpower] = None
    total_estimated_cost: float = 0.0
    total_approved_cost: float = 0.0
    allocated_amount: float = 0.0
    used_amount: float = 0.0
    remaining_amount: float = 0.0
    total_refetched: float = 0.0
    refetch_history: Sequence[RefetchRecord] = field(default_factory=list)
    delivery_status: str = "not-started"
    rejection_reason: Optional[str] = None
    can_refetch: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class RequestStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_approved: Optional[float] = None


@dataclass(frozen=True)
class AllocationTotals:
    total_allocated: float = 0.0
    total_used: float = 0.0
    total_remaining: float = 0.0
    total_refetched: float = 0.0


@dataclass(frozen=True)
class AllocatedResources:
    requests: Sequence[ResourceRequest]
    totals: AllocationTotals


@dataclass(frozen=True)
class ResourceDraft:
    name: str = ""
    reason: str = ""


@dataclass(frozen=True)
class ResourceRequestDraft:
    """What an engineer typed into one of the request forms."""

    grievance_id: Optional[str]
    fund_required: object
    resources: Sequence[ResourceDraft]
    description: str
    priority: str = "medium"
