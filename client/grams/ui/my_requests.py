from typing import Any, Dict, List, Optional

from grams.resource_requests.application.ports import Notifier, ResourceRequestGateway
from grams.resource_requests.application.use_cases import (
    ListResourceRequestsQuery,
    ListResourceRequestsUseCase,
)
from grams.resource_requests.domain.models import RequestStats, ResourceRequest
from grams.resource_requests.domain.stats import aggregate
from grams.resource_requests.domain.status import filter_by_bucket
from grams.resource_requests.presentation.response_mapper import (
    resource_request_to_card,
    stats_to_cards,
)
from grams.ui.polling import PollingRefresher
from grams.ui.state import ViewModel, ViewState

FILTERS = ("all", "pending", "approved", "rejected")


class MyRequestsView(ViewModel):
    """Engineer screen listing their own requests with bucket filter tabs."""

    def __init__(
        self,
        gateway: ResourceRequestGateway,
        notifier: Notifier,
        refresh_interval: Optional[float] = None,
    ) -> None:
        super().__init__(notifier)
        self._list = ListResourceRequestsUseCase(gateway)
        self.filter = "all"
        self.requests: List[ResourceRequest] = []
        self._poller = (
            PollingRefresher(self.refresh, refresh_interval) if refresh_interval else None
        )

    @property
    def stats(self) -> RequestStats:
        return aggregate(self.requests)

    @property
    def visible(self) -> List[ResourceRequest]:
        return filter_by_bucket(self.requests, self.filter)

    def set_filter(self, selection: str) -> None:
        if selection not in FILTERS:
            raise ValueError(f"Unknown status filter: {selection}")
        self.filter = selection

    async def refresh(self) -> ViewState:
        state = await self.run(
            "refresh",
            lambda: self._list.execute(ListResourceRequestsQuery(scope="mine")),
        )
        if state.ok:
            self.requests = list(state.data.requests)
        return state

    def start_polling(self) -> None:
        if self._poller is not None:
            self._poller.start()

    async def close(self) -> None:
        self.dispose()
        if self._poller is not None:
            await self._poller.stop()

    def cards(self) -> List[Dict[str, Any]]:
        return [resource_request_to_card(request) for request in self.visible]

    def stat_cards(self) -> Dict[str, Any]:
        return stats_to_cards(self.stats)
