from datetime import datetime

import pytest

from grams.resource_requests.domain.errors import GatewayError
from grams.resource_requests.domain.models import (
    AllocatedResources,
    AllocationTotals,
    RequestStats,
    ResourceRequest,
)
from grams.tasks.domain.models import TaskSummary


class FakeResourceRequestGateway:
    def __init__(self) -> None:
        self.pending = []
        self.all = []
        self.mine = []
        self.allocated = AllocatedResources(requests=[], totals=AllocationTotals())
        self.stats = RequestStats()
        self.calls = []
        self.fail_with = None

    async def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None:
            raise self.fail_with

    async def create_request(self, payload):
        await self._record("create_request", payload)
        return ResourceRequest(
            id="rr-new",
            status="pending",
            grievance_id=payload["grievanceId"],
            created_at=datetime(2026, 1, 17, 10, 0, 0),
        )

    async def list_pending(self):
        await self._record("list_pending")
        return list(self.pending)

    async def list_all(self):
        await self._record("list_all")
        return list(self.all)

    async def list_mine(self):
        await self._record("list_mine")
        return list(self.mine)

    async def get_request(self, request_id):
        await self._record("get_request", request_id)
        for request in self.all:
            if request.id == request_id:
                return request
        raise GatewayError("Request not found", 404)

    async def get_stats(self):
        await self._record("get_stats")
        return self.stats

    async def list_allocated(self):
        await self._record("list_allocated")
        return self.allocated

    async def approve(self, request_id, payload):
        await self._record("approve", request_id, payload)
        return None

    async def reject(self, request_id, payload):
        await self._record("reject", request_id, payload)
        return None

    async def mark_delivered(self, request_id):
        await self._record("mark_delivered", request_id)
        return None

    async def refetch(self, request_id, payload):
        await self._record("refetch", request_id, payload)
        return None

    def names(self):
        return [call[0] for call in self.calls]


class FakeTaskGateway:
    def __init__(self, allocated_budget=1000.0) -> None:
        self.task = TaskSummary(
            grievance_id="g-1",
            title="Broken streetlight",
            allocated_budget=allocated_budget,
            tracking_id="GRV-0001",
            status="in-progress",
        )
        self.uploaded = []
        self.completed = []

    async def get_task(self, grievance_id):
        return self.task

    async def upload_file(self, upload):
        self.uploaded.append(upload.filename)
        return f"https://cdn.example/{upload.filename}"

    async def complete_task(self, payload):
        self.completed.append(payload)
        return {"status": "resolved"}


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes = []
        self.errors = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


@pytest.fixture
def gateway():
    return FakeResourceRequestGateway()


@pytest.fixture
def task_gateway():
    return FakeTaskGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()
