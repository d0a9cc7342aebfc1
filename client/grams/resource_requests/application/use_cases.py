import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from grams.resource_requests.application.ports import ResourceRequestGateway
from grams.resource_requests.domain.amounts import round_money
from grams.resource_requests.domain.ledger import summarize_allocations
from grams.resource_requests.domain.models import (
    AllocatedResources,
    RequestStats,
    ResourceRequest,
    ResourceRequestDraft,
)
from grams.resource_requests.domain.stats import aggregate
from grams.resource_requests.domain.status import filter_by_bucket
from grams.resource_requests.domain.validation import (
    named_resources,
    validate_refetch,
    validate_rejection,
    validate_resource_request,
)

logger = logging.getLogger(__name__)

LIST_SCOPES = ("pending", "all", "mine")


@dataclass(frozen=True)
class ApproveRequestCommand:
    request_id: str
    review_notes: Optional[str] = None


@dataclass(frozen=True)
class RejectRequestCommand:
    request_id: str
    rejection_reason: Optional[str]


@dataclass(frozen=True)
class RefetchAmountCommand:
    request: ResourceRequest
    refetch_amount: object
    admin_message: str = ""
    reason: str = ""


@dataclass(frozen=True)
class ListResourceRequestsQuery:
    scope: str = "mine"
    status_filter: str = "all"


@dataclass(frozen=True)
class RequestBoard:
    """A full list plus the counts computed from it."""

    requests: Sequence[ResourceRequest]
    visible: Sequence[ResourceRequest]
    stats: RequestStats


def build_create_payload(draft: ResourceRequestDraft, fund: float) -> Dict[str, Any]:
    named = named_resources(draft)
    share = fund / len(named)
    materials = [
        {
            "name": resource.name.strip(),
            "quantity": 1,
            "unit": "set",
            "estimatedCost": share,
            "reason": resource.reason.strip(),
        }
        for resource in named
    ]
    return {
        "grievanceId": draft.grievance_id,
        "requestType": "materials",
        "priority": draft.priority,
        "justification": draft.description,
        "materials": materials,
        "equipment": [],
        "manpower": {},
    }


class CreateResourceRequestUseCase:
    """Shared by the task modal and the standalone request form."""

    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, draft: ResourceRequestDraft) -> ResourceRequest:
        fund = validate_resource_request(draft)
        payload = build_create_payload(draft, fund)
        request = await self._gateway.create_request(payload)
        logger.info(
            "Resource request %s created for grievance %s (%d materials)",
            request.id,
            draft.grievance_id,
            len(payload["materials"]),
        )
        return request


class ListResourceRequestsUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, query: ListResourceRequestsQuery) -> RequestBoard:
        if query.scope not in LIST_SCOPES:
            raise ValueError(f"Unknown request scope: {query.scope}")

        if query.scope == "pending":
            requests = await self._gateway.list_pending()
        elif query.scope == "all":
            requests = await self._gateway.list_all()
        else:
            requests = await self._gateway.list_mine()

        requests = list(requests)
        return RequestBoard(
            requests=requests,
            visible=filter_by_bucket(requests, query.status_filter),
            stats=aggregate(requests),
        )


class GetRequestStatsUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self) -> RequestStats:
        return await self._gateway.get_stats()


class ListAllocatedResourcesUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self) -> AllocatedResources:
        allocated = await self._gateway.list_allocated()
        local = summarize_allocations(allocated.requests)
        if round_money(local.total_remaining) != round_money(allocated.totals.total_remaining):
            logger.warning(
                "Allocated totals disagree with line items: server remaining %.2f, computed %.2f",
                allocated.totals.total_remaining,
                local.total_remaining,
            )
        return allocated


class ApproveResourceRequestUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, command: ApproveRequestCommand) -> Optional[ResourceRequest]:
        payload: Dict[str, Any] = {}
        if command.review_notes:
            payload["reviewNotes"] = command.review_notes
        result = await self._gateway.approve(command.request_id, payload)
        logger.info("Resource request %s approved", command.request_id)
        return result


class RejectResourceRequestUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, command: RejectRequestCommand) -> Optional[ResourceRequest]:
        reason = validate_rejection(command.rejection_reason)
        result = await self._gateway.reject(command.request_id, {"rejectionReason": reason})
        logger.info("Resource request %s rejected", command.request_id)
        return result


class MarkDeliveredUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, request_id: str) -> Optional[ResourceRequest]:
        result = await self._gateway.mark_delivered(request_id)
        logger.info("Resource request %s marked as delivered", request_id)
        return result


class RefetchRemainingAmountUseCase:
    def __init__(self, gateway: ResourceRequestGateway) -> None:
        self._gateway = gateway

    async def execute(self, command: RefetchAmountCommand) -> Optional[ResourceRequest]:
        amount = validate_refetch(command.refetch_amount, command.request.remaining_amount)
        payload = {
            "refetchAmount": amount,
            "adminMessage": command.admin_message,
            "reason": command.reason,
        }
        result = await self._gateway.refetch(command.request.id, payload)
        logger.info("Refetched %.2f from resource request %s", amount, command.request.id)
        return result
