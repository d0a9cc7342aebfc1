import itertools

import pytest

from grams.resource_requests.domain.models import RequestStats, ResourceRequest
from grams.resource_requests.domain.stats import aggregate
from grams.resource_requests.domain.status import bucket, filter_by_bucket


def make_request(request_id, status):
    return ResourceRequest(id=request_id, status=status)


@pytest.mark.parametrize(
    "status, expected",
    [
        ("pending", "pending"),
        ("PENDING ", "pending"),
        ("Rejected", "rejected"),
        ("approved", "approved"),
        ("partially-approved", "approved"),
        ("delivered", "approved"),
        ("refetched", "approved"),
        ("", "approved"),
        (None, "approved"),
        ("on-hold", "approved"),
    ],
)
def test_bucket_known_and_fallback_values(status, expected):
    assert bucket(status) == expected


def test_bucket_is_total():
    odd_inputs = ["   ", "\tpending\n", "ReJeCtEd", "pending-review", "🙂", 42, 0, 3.5]
    for value in odd_inputs:
        assert bucket(value) in {"pending", "approved", "rejected"}

    assert bucket("\tpending\n") == "pending"
    assert bucket("pending-review") == "approved"


def test_aggregate_empty():
    assert aggregate([]) == RequestStats(total=0, pending=0, approved=0, rejected=0)


def test_aggregate_counts_every_request_once():
    requests = [
        make_request("r1", "pending"),
        make_request("r2", "approved"),
        make_request("r3", "rejected"),
        make_request("r4", "delivered"),
        make_request("r5", None),
        make_request("r6", " Pending"),
    ]

    stats = aggregate(requests)

    assert stats.total == 6
    assert stats.pending == 2
    assert stats.approved == 3
    assert stats.rejected == 1
    assert stats.pending + stats.approved + stats.rejected == stats.total


def test_aggregate_is_order_independent():
    requests = [
        make_request("r1", "pending"),
        make_request("r2", "refetched"),
        make_request("r3", "rejected"),
        make_request("r4", "mystery"),
    ]
    expected = aggregate(requests)

    for permutation in itertools.permutations(requests):
        assert aggregate(permutation) == expected


def test_filter_by_bucket_uses_classifier():
    requests = [
        make_request("r1", "pending"),
        make_request("r2", "partially-approved"),
        make_request("r3", "rejected"),
        make_request("r4", "unknown"),
    ]

    assert [r.id for r in filter_by_bucket(requests, "all")] == ["r1", "r2", "r3", "r4"]
    assert [r.id for r in filter_by_bucket(requests, "approved")] == ["r2", "r4"]
    assert [r.id for r in filter_by_bucket(requests, "rejected")] == ["r3"]


def test_filter_by_bucket_rejects_unknown_selection():
    with pytest.raises(ValueError):
        filter_by_bucket([], "delivered")
