from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from api.connection import ApiConnector
from api.endpoints import build_url
from grams.resource_requests.application.ports import ResourceRequestGateway
from grams.resource_requests.domain.errors import GatewayError
from grams.resource_requests.domain.ledger import can_refetch
from grams.resource_requests.domain.models import (
    AllocatedResources,
    AllocationTotals,
    LineItem,
    Manpower,
    RefetchRecord,
    RequestStats,
    ResourceRequest,
)
from grams.resource_requests.infrastructure.schemas import (
    AllocationTotalsSchema,
    LineItemSchema,
    ResourceRequestSchema,
    RequestStatsSchema,
)

GROUP = "resource-requests"


def _line_item(item: LineItemSchema) -> LineItem:
    return LineItem(
        name=item.name,
        estimated_cost=item.estimated_cost or 0.0,
        quantity=item.quantity or 1,
        unit=item.unit or "set",
        reason=item.reason,
        approved=bool(item.approved),
        approved_cost=item.approved_cost or 0.0,
    )


def _grievance_id(grievance: Any) -> Optional[str]:
    if grievance is None:
        return None
    if isinstance(grievance, dict):
        value = grievance.get("_id") or grievance.get("id")
        return str(value) if value is not None else None
    return str(grievance)


def to_domain(schema: ResourceRequestSchema) -> ResourceRequest:
    # Only the allocated listing carries ledger fields; derive them otherwise.
    allocated = schema.allocated_amount
    if allocated is None:
        allocated = schema.total_approved_cost or 0.0
    used = schema.used_amount
    if used is None:
        used = schema.actual_spent or 0.0
    refetched = schema.total_refetched
    if refetched is None:
        refetched = schema.refetched_amount or 0.0
    remaining = schema.remaining_amount
    if remaining is None:
        remaining = allocated - used - refetched

    manpower = None
    if schema.manpower is not None:
        manpower = Manpower(
            workers=schema.manpower.workers or 0,
            days=schema.manpower.days or 1,
            skill_level=schema.manpower.skill_level or "unskilled",
            total_cost=schema.manpower.total_cost or 0.0,
            approved=bool(schema.manpower.approved),
            approved_cost=schema.manpower.approved_cost or 0.0,
        )

    request = ResourceRequest(
        id=schema.id,
        grievance_id=_grievance_id(schema.grievance),
        status=schema.status,
        request_type=schema.request_type or "materials",
        priority=schema.priority or "medium",
        justification=schema.justification or "",
        materials=[_line_item(item) for item in schema.materials],
        equipment=[_line_item(item) for item in schema.equipment],
        manpower=manpower,
        total_estimated_cost=schema.total_estimated_cost or 0.0,
        total_approved_cost=schema.total_approved_cost or 0.0,
        allocated_amount=allocated,
        used_amount=used,
        remaining_amount=remaining,
        total_refetched=refetched,
        refetch_history=[
            RefetchRecord(
                refetched_amount=record.refetched_amount or 0.0,
                refetched_at=record.refetched_at,
                admin_message=record.admin_message,
                reason=record.reason,
            )
            for record in schema.refetch_history
        ],
        delivery_status=schema.delivery_status or "not-started",
        rejection_reason=schema.rejection_reason,
        created_at=schema.created_at,
    )
    if schema.can_refetch is not None:
        return replace(request, can_refetch=schema.can_refetch)
    return replace(request, can_refetch=can_refetch(request))


def parse_request(data: Any) -> ResourceRequest:
    try:
        return to_domain(ResourceRequestSchema.model_validate(data))
    except ValidationError as e:
        raise GatewayError(f"Unexpected resource request payload: {e.error_count()} errors") from e


def parse_requests(data: Any) -> List[ResourceRequest]:
    if not isinstance(data, list):
        raise GatewayError("Unexpected resource request list payload")
    return [parse_request(item) for item in data]


def _optional_request(payload: Dict[str, Any]) -> Optional[ResourceRequest]:
    data = payload.get("data")
    if isinstance(data, dict) and ("_id" in data or "id" in data):
        return parse_request(data)
    return None


class RestResourceRequestGateway(ResourceRequestGateway):
    def __init__(self, connector: ApiConnector) -> None:
        self._connector = connector

    def _url(self, name: str, **params: str) -> str:
        return build_url(self._connector.base_url, GROUP, name, **params)

    async def create_request(self, payload: Dict[str, Any]) -> ResourceRequest:
        response = await self._connector.call(
            "POST", self._url("create"), body=payload,
            fallback="Failed to submit resource request",
        )
        return parse_request(response.get("data"))

    async def _list(self, name: str) -> Sequence[ResourceRequest]:
        response = await self._connector.call(
            "GET", self._url(name), fallback="Failed to fetch requests"
        )
        return parse_requests(response.get("data", []))

    async def list_pending(self) -> Sequence[ResourceRequest]:
        return await self._list("pending")

    async def list_all(self) -> Sequence[ResourceRequest]:
        return await self._list("all")

    async def list_mine(self) -> Sequence[ResourceRequest]:
        return await self._list("mine")

    async def get_request(self, request_id: str) -> ResourceRequest:
        response = await self._connector.call(
            "GET", self._url("by_id", id=request_id), fallback="Failed to fetch request"
        )
        return parse_request(response.get("data"))

    async def get_stats(self) -> RequestStats:
        response = await self._connector.call(
            "GET", self._url("stats"), fallback="Failed to fetch request stats"
        )
        try:
            stats = RequestStatsSchema.model_validate(response.get("data") or {})
        except ValidationError as e:
            raise GatewayError(f"Unexpected request stats payload: {e.error_count()} errors") from e
        return RequestStats(
            total=stats.total,
            pending=stats.pending,
            approved=stats.approved,
            rejected=stats.rejected,
            total_approved=stats.total_approved,
        )

    async def list_allocated(self) -> AllocatedResources:
        response = await self._connector.call(
            "GET", self._url("allocated"), fallback="Failed to fetch allocated resources"
        )
        try:
            totals = AllocationTotalsSchema.model_validate(response.get("totals") or {})
        except ValidationError as e:
            raise GatewayError(f"Unexpected allocation totals payload: {e.error_count()} errors") from e
        return AllocatedResources(
            requests=parse_requests(response.get("data", [])),
            totals=AllocationTotals(
                total_allocated=totals.total_allocated,
                total_used=totals.total_used,
                total_remaining=totals.total_remaining,
                total_refetched=totals.total_refetched,
            ),
        )

    async def approve(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        response = await self._connector.call(
            "PUT", self._url("approve", id=request_id), body=payload,
            fallback="Failed to approve request",
        )
        return _optional_request(response)

    async def reject(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        response = await self._connector.call(
            "PUT", self._url("reject", id=request_id), body=payload,
            fallback="Failed to reject request",
        )
        return _optional_request(response)

    async def mark_delivered(self, request_id: str) -> Optional[ResourceRequest]:
        response = await self._connector.call(
            "PUT", self._url("deliver", id=request_id),
            fallback="Failed to mark as delivered",
        )
        return _optional_request(response)

    async def refetch(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        response = await self._connector.call(
            "POST", self._url("refetch", id=request_id), body=payload,
            fallback="Failed to refetch amount",
        )
        return _optional_request(response)
