from typing import List, Optional

from grams.resource_requests.domain.amounts import parse_positive_amount
from grams.resource_requests.domain.errors import InvalidRequest
from grams.resource_requests.domain.models import (
    PRIORITIES,
    ResourceDraft,
    ResourceRequestDraft,
)


def named_resources(draft: ResourceRequestDraft) -> List[ResourceDraft]:
    return [resource for resource in draft.resources if (resource.name or "").strip()]


def validate_resource_request(draft: ResourceRequestDraft) -> float:
    """Check a create-request draft and return the parsed fund amount."""
    if not (draft.grievance_id or "").strip():
        raise InvalidRequest("Please select a grievance")

    fund = parse_positive_amount(draft.fund_required)
    if fund is None:
        raise InvalidRequest("Please enter valid fund amount")

    named = named_resources(draft)
    if not named:
        raise InvalidRequest("Please add at least one resource")

    if any(not (resource.reason or "").strip() for resource in named):
        raise InvalidRequest("Please provide a reason for all resources")

    if not (draft.description or "").strip():
        raise InvalidRequest("Please provide a description")

    if draft.priority not in PRIORITIES:
        raise InvalidRequest(f"Unknown priority: {draft.priority}")

    return fund


def validate_rejection(reason: Optional[str]) -> str:
    reason = (reason or "").strip()
    if not reason:
        raise InvalidRequest("Please provide a rejection reason")
    return reason


def validate_refetch(amount: object, remaining_amount: float) -> float:
    parsed = parse_positive_amount(amount)
    if parsed is None:
        raise InvalidRequest("Please enter a valid amount")
    available = remaining_amount or 0.0
    if parsed > available:
        raise InvalidRequest(
            f"Cannot refetch ₹{parsed:,.2f}. Only ₹{available:,.2f} is available."
        )
    return parsed
