from dataclasses import dataclass
from typing import Iterable

from grams.resource_requests.domain.models import AllocationTotals, ResourceRequest

# Half a paisa; backend amounts are rounded to two decimals.
TOLERANCE = 0.005


@dataclass(frozen=True)
class AllocationLedger:
    allocated: float
    used: float
    remaining: float
    refetched: float

    @property
    def is_consistent(self) -> bool:
        balanced = abs(self.used + self.remaining + self.refetched - self.allocated)
        return self.remaining >= -TOLERANCE and balanced <= TOLERANCE


def ledger_for(request: ResourceRequest) -> AllocationLedger:
    return AllocationLedger(
        allocated=request.allocated_amount,
        used=request.used_amount,
        remaining=request.remaining_amount,
        refetched=request.total_refetched,
    )


def can_refetch(request: ResourceRequest) -> bool:
    return (
        request.delivery_status == "delivered"
        and request.remaining_amount > 0
        and request.status != "refetched"
    )


def summarize_allocations(requests: Iterable[ResourceRequest]) -> AllocationTotals:
    allocated = used = remaining = refetched = 0.0
    for request in requests:
        allocated += request.allocated_amount
        used += request.used_amount
        remaining += request.remaining_amount
        refetched += request.total_refetched
    return AllocationTotals(
        total_allocated=allocated,
        total_used=used,
        total_remaining=remaining,
        total_refetched=refetched,
    )
