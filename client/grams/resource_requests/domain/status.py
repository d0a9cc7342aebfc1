from typing import Iterable, List, Optional

from grams.resource_requests.domain.models import ResourceRequest, STATUS_BUCKETS

APPROVED_STATUSES = frozenset({"approved", "partially-approved", "delivered", "refetched"})


def normalize_status(status: Optional[object]) -> str:
    if status is None:
        return ""
    return str(status).strip().lower()


def bucket(status: Optional[object]) -> str:
    """Collapse a backend lifecycle status into pending, approved or rejected.

    Anything that is not explicitly pending or rejected lands in ``approved``,
    including empty and unrecognised values. Dashboards and filters count on
    this, so keep every caller going through here.
    """
    normalized = normalize_status(status)
    if normalized in ("pending", "rejected"):
        return normalized
    if normalized in APPROVED_STATUSES:
        return "approved"
    # FIXME: unknown statuses fall back to approved; needs product sign-off to change.
    return "approved"


def filter_by_bucket(
    requests: Iterable[ResourceRequest], selection: str = "all"
) -> List[ResourceRequest]:
    if selection == "all":
        return list(requests)
    if selection not in STATUS_BUCKETS:
        raise ValueError(f"Unknown status filter: {selection}")
    return [request for request in requests if bucket(request.status) == selection]
