import asyncio
from typing import Any, Dict, List, Optional, Sequence

from grams.resource_requests.application.ports import Notifier, ResourceRequestGateway
from grams.resource_requests.application.use_cases import (
    ApproveRequestCommand,
    ApproveResourceRequestUseCase,
    GetRequestStatsUseCase,
    ListAllocatedResourcesUseCase,
    ListResourceRequestsQuery,
    ListResourceRequestsUseCase,
    MarkDeliveredUseCase,
    RefetchAmountCommand,
    RefetchRemainingAmountUseCase,
    RejectRequestCommand,
    RejectResourceRequestUseCase,
)
from grams.resource_requests.domain.models import (
    AllocationTotals,
    RequestStats,
    ResourceRequest,
)
from grams.resource_requests.presentation.response_mapper import (
    resource_request_to_card,
    stats_to_cards,
    totals_to_cards,
)
from grams.ui.state import ViewModel, ViewState


TABS = ("pending", "all", "allocated")


class ResourceApprovalView(ViewModel):
    """Admin screen: review, approve, reject, deliver and refetch."""

    def __init__(self, gateway: ResourceRequestGateway, notifier: Notifier) -> None:
        super().__init__(notifier)
        self._list = ListResourceRequestsUseCase(gateway)
        self._allocated = ListAllocatedResourcesUseCase(gateway)
        self._stats = GetRequestStatsUseCase(gateway)
        self._approve = ApproveResourceRequestUseCase(gateway)
        self._reject = RejectResourceRequestUseCase(gateway)
        self._deliver = MarkDeliveredUseCase(gateway)
        self._refetch = RefetchRemainingAmountUseCase(gateway)

        self.active_tab = "pending"
        self.requests: List[ResourceRequest] = []
        self.allocated: List[ResourceRequest] = []
        self.allocated_totals: Optional[AllocationTotals] = None
        self.stats: Optional[RequestStats] = None

    async def select_tab(self, tab: str) -> ViewState:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab
        return await self.refresh()

    async def refresh(self) -> ViewState:
        tab = self.active_tab

        async def load():
            if tab == "allocated":
                allocated, stats = await asyncio.gather(
                    self._allocated.execute(), self._stats.execute()
                )
                return tab, allocated, stats
            board, stats = await asyncio.gather(
                self._list.execute(ListResourceRequestsQuery(scope=tab)),
                self._stats.execute(),
            )
            return tab, board, stats

        state = await self.run("refresh", load)
        if state.ok:
            loaded_tab, result, stats = state.data
            if loaded_tab == "allocated":
                self.allocated = list(result.requests)
                self.allocated_totals = result.totals
            else:
                self.requests = list(result.requests)
            self.stats = stats
        return state

    def find(self, request_id: str) -> Optional[ResourceRequest]:
        for request in self.requests + self.allocated:
            if request.id == request_id:
                return request
        return None

    async def approve(self, request_id: str, review_notes: Optional[str] = None) -> ViewState:
        state = await self.run(
            f"approve:{request_id}",
            lambda: self._approve.execute(ApproveRequestCommand(request_id, review_notes)),
            success_message="Request approved successfully",
        )
        return await self._refresh_after(state)

    async def reject(self, request_id: str, rejection_reason: Optional[str]) -> ViewState:
        state = await self.run(
            f"reject:{request_id}",
            lambda: self._reject.execute(RejectRequestCommand(request_id, rejection_reason)),
            success_message="Request rejected",
        )
        return await self._refresh_after(state)

    async def deliver(self, request_id: str) -> ViewState:
        state = await self.run(
            f"deliver:{request_id}",
            lambda: self._deliver.execute(request_id),
            success_message="Marked as delivered",
        )
        return await self._refresh_after(state)

    async def refetch(
        self,
        request: ResourceRequest,
        amount: object,
        admin_message: str = "",
        reason: str = "",
    ) -> ViewState:
        command = RefetchAmountCommand(
            request=request,
            refetch_amount=amount,
            admin_message=admin_message,
            reason=reason,
        )
        state = await self.run(
            f"refetch:{request.id}",
            lambda: self._refetch.execute(command),
            success_message="Amount refetched successfully and notification sent to engineer",
        )
        return await self._refresh_after(state)

    async def _refresh_after(self, state: ViewState) -> ViewState:
        if state.ok:
            await self.refresh()
        return state

    def cards(self) -> Sequence[Dict[str, Any]]:
        source = self.allocated if self.active_tab == "allocated" else self.requests
        return [resource_request_to_card(request) for request in source]

    def summary(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = {}
        if self.stats is not None:
            summary["stats"] = stats_to_cards(self.stats)
        if self.active_tab == "allocated" and self.allocated_totals is not None:
            summary["totals"] = totals_to_cards(self.allocated_totals)
        return summary
