from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LineItemSchema(WireModel):
    name: str
    estimated_cost: Optional[float] = Field(None, alias="estimatedCost")
    quantity: Optional[int] = None
    unit: Optional[str] = None
    reason: Optional[str] = None
    approved: Optional[bool] = None
    approved_cost: Optional[float] = Field(None, alias="approvedCost")


class ManpowerSchema(WireModel):
    workers: Optional[int] = None
    days: Optional[int] = None
    skill_level: Optional[str] = Field(None, alias="skillLevel")
    total_cost: Optional[float] = Field(None, alias="totalCost")
    approved: Optional[bool] = None
    approved_cost: Optional[float] = Field(None, alias="approvedCost")


class RefetchRecordSchema(WireModel):
    refetched_amount: Optional[float] = Field(None, alias="refetchedAmount")
    refetched_at: Optional[datetime] = Field(None, alias="refetchedAt")
    admin_message: Optional[str] = Field(None, alias="adminMessage")
    reason: Optional[str] = None


class ResourceRequestSchema(WireModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    # Either an id or the populated grievance document
    grievance: Optional[Any] = Field(None, alias="grievanceId")
    status: Optional[str] = None
    request_type: Optional[str] = Field(None, alias="requestType")
    priority: Optional[str] = None
    justification: Optional[str] = None
    materials: List[LineItemSchema] = Field(default_factory=list)
    equipment: List[LineItemSchema] = Field(default_factory=list)
    manpower: Optional[ManpowerSchema] = None
    total_estimated_cost: Optional[float] = Field(None, alias="totalEstimatedCost")
    total_approved_cost: Optional[float] = Field(None, alias="totalApprovedCost")
    actual_spent: Optional[float] = Field(None, alias="actualSpent")
    refetched_amount: Optional[float] = Field(None, alias="refetchedAmount")
    allocated_amount: Optional[float] = Field(None, alias="allocatedAmount")
    used_amount: Optional[float] = Field(None, alias="usedAmount")
    remaining_amount: Optional[float] = Field(None, alias="remainingAmount")
    total_refetched: Optional[float] = Field(None, alias="totalRefetched")
    refetch_history: List[RefetchRecordSchema] = Field(default_factory=list, alias="refetchHistory")
    delivery_status: Optional[str] = Field(None, alias="deliveryStatus")
    rejection_reason: Optional[str] = Field(None, alias="rejectionReason")
    can_refetch: Optional[bool] = Field(None, alias="canRefetch")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class RequestStatsSchema(WireModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_approved: Optional[float] = Field(None, alias="totalApproved")


class AllocationTotalsSchema(WireModel):
    total_allocated: float = Field(0.0, alias="totalAllocated")
    total_used: float = Field(0.0, alias="totalUsed")
    total_remaining: float = Field(0.0, alias="totalRemaining")
    total_refetched: float = Field(0.0, alias="totalRefetched")
