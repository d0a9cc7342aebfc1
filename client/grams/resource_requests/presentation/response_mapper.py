from typing import Any, Dict

from grams.resource_requests.domain.ledger import ledger_for
from grams.resource_requests.domain.models import (
    AllocationTotals,
    LineItem,
    RequestStats,
    ResourceRequest,
)
from grams.resource_requests.domain.status import bucket
from grams.resource_requests.presentation.formatting import format_date, format_inr


def _line_item_to_row(item: LineItem) -> Dict[str, Any]:
    return {
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
        "reason": item.reason,
        "approved": item.approved,
        "cost": format_inr(item.display_cost),
    }


def resource_request_to_card(request: ResourceRequest) -> Dict[str, Any]:
    ledger = ledger_for(request)
    card = {
        "id": request.id,
        "grievance_id": request.grievance_id,
        "status": request.status,
        "bucket": bucket(request.status),
        "priority": request.priority,
        "request_type": request.request_type,
        "justification": request.justification,
        "materials": [_line_item_to_row(item) for item in request.materials],
        "equipment": [_line_item_to_row(item) for item in request.equipment],
        "manpower": None,
        "estimated": format_inr(request.total_estimated_cost),
        "approved": format_inr(request.total_approved_cost),
        "allocated": format_inr(ledger.allocated),
        "used": format_inr(ledger.used),
        "remaining": format_inr(ledger.remaining, decimals=2),
        "refetched": format_inr(ledger.refetched),
        "ledger_consistent": ledger.is_consistent,
        "can_refetch": request.can_refetch,
        "delivery_status": request.delivery_status,
        "rejection_reason": request.rejection_reason,
        "created": format_date(request.created_at),
        "refetch_history": [
            {
                "amount": format_inr(record.refetched_amount),
                "at": format_date(record.refetched_at),
                "message": record.admin_message,
                "reason": record.reason,
            }
            for record in request.refetch_history
        ],
    }
    if request.manpower is not None:
        card["manpower"] = {
            "workers": request.manpower.workers,
            "days": request.manpower.days,
            "skill_level": request.manpower.skill_level,
            "cost": format_inr(request.manpower.display_cost),
        }
    return card


def stats_to_cards(stats: RequestStats) -> Dict[str, Any]:
    cards: Dict[str, Any] = {
        "total": stats.total,
        "pending": stats.pending,
        "approved": stats.approved,
        "rejected": stats.rejected,
    }
    if stats.total_approved is not None:
        cards["total_approved"] = format_inr(stats.total_approved)
    return cards


def totals_to_cards(totals: AllocationTotals) -> Dict[str, str]:
    return {
        "total_allocated": format_inr(totals.total_allocated),
        "total_used": format_inr(totals.total_used),
        "total_remaining": format_inr(totals.total_remaining),
        "total_refetched": format_inr(totals.total_refetched),
    }
