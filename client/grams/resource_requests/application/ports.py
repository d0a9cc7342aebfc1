from typing import Any, Dict, Optional, Protocol, Sequence

from grams.resource_requests.domain.models import (
    AllocatedResources,
    RequestStats,
    ResourceRequest,
)


class ResourceRequestGateway(Protocol):
    async def create_request(self, payload: Dict[str, Any]) -> ResourceRequest:
        ...

    async def list_pending(self) -> Sequence[ResourceRequest]:
        ...

    async def list_all(self) -> Sequence[ResourceRequest]:
        ...

    async def list_mine(self) -> Sequence[ResourceRequest]:
        ...

    async def get_request(self, request_id: str) -> ResourceRequest:
        ...

    async def get_stats(self) -> RequestStats:
        ...

    async def list_allocated(self) -> AllocatedResources:
        ...

    async def approve(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        ...

    async def reject(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        ...

    async def mark_delivered(self, request_id: str) -> Optional[ResourceRequest]:
        ...

    async def refetch(self, request_id: str, payload: Dict[str, Any]) -> Optional[ResourceRequest]:
        ...


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
