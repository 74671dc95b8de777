"""
Shared fixtures for cached remote data tests.

``ALL_VARIANTS`` holds one representative of each of the six states, with
payloads chosen so equality checks are meaningful.
"""

import pytest

from cached_remote_data import Failure, Loading, NotAsked, Refreshing, Stale, Success

ALL_VARIANTS = [
    NotAsked(),
    Loading(),
    Failure("boom"),
    Success(3),
    Refreshing(4),
    Stale("late", 5),
]

VARIANT_IDS = ["not_asked", "loading", "failure", "success", "refreshing", "stale"]


@pytest.fixture(params=ALL_VARIANTS, ids=VARIANT_IDS)
def variant(request):
    """Each of the six CachedRemoteData states in turn."""
    return request.param
