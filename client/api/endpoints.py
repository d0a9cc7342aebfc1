"""
GRAMS REST endpoint catalog, grouped by backend domain.

Paths are relative to the configured base URL. Templates carry ``{id}`` or
``{category}`` placeholders; ``build_url`` fills them in with URL-quoted
values.
"""
from typing import Dict
from urllib.parse import quote

# RESOURCE REQUEST ENDPOINTS
RESOURCE_REQUEST_ENDPOINTS: Dict[str, str] = {
    "create": "/resource-request/create",
    "all": "/resource-request/all",
    "pending": "/resource-request/pending",
    "mine": "/resource-request/my-requests",
    "by_id": "/resource-request/{id}",
    "approve": "/resource-request/{id}/approve",
    "reject": "/resource-request/{id}/reject",
    "deliver": "/resource-request/{id}/deliver",
    "stats": "/resource-request/stats",
    "allocated": "/resource-request/allocated",
    "refetch": "/resource-request/{id}/refetch",
}

# ENGINEER ENDPOINTS
ENGINEER_ENDPOINTS: Dict[str, str] = {
    "grievance": "/engineers/grievance/{id}",
    "complete_task": "/engineers/complete-task",
    "upload": "/engineers/upload-to-cloudinary",
}

# BUDGET ENDPOINTS
BUDGET_ENDPOINTS: Dict[str, str] = {
    "category": "/budget/system/category/{category}",
}

ENDPOINT_GROUPS: Dict[str, Dict[str, str]] = {
    "resource-requests": RESOURCE_REQUEST_ENDPOINTS,
    "engineers": ENGINEER_ENDPOINTS,
    "budget": BUDGET_ENDPOINTS,
}


def build_url(base_url: str, group: str, name: str, **params: str) -> str:
    try:
        template = ENDPOINT_GROUPS[group][name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {group}.{name}") from None
    quoted = {key: quote(str(value), safe="") for key, value in params.items()}
    return base_url.rstrip("/") + template.format(**quoted)
