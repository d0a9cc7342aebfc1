from collections import Counter
from typing import Iterable

from grams.resource_requests.domain.models import RequestStats, ResourceRequest
from grams.resource_requests.domain.status import bucket


def aggregate(requests: Iterable[ResourceRequest]) -> RequestStats:
    counts = Counter(bucket(request.status) for request in requests)
    return RequestStats(
        total=sum(counts.values()),
        pending=counts["pending"],
        approved=counts["approved"],
        rejected=counts["rejected"],
    )
