"""Tests for projections and state predicates."""

import pytest

from cached_remote_data import (
    NOTHING,
    Err,
    Failure,
    Loading,
    NotAsked,
    Ok,
    Refreshing,
    Some,
    Stale,
    Success,
    UnknownVariantError,
    error,
    has_error,
    has_value,
    is_failure,
    is_loading,
    is_not_asked,
    is_pending,
    is_refreshing,
    is_settled,
    is_stale,
    is_success,
    remote_data,
    result,
    value,
    with_default,
)

PREDICATES = {
    NotAsked: is_not_asked,
    Loading: is_loading,
    Failure: is_failure,
    Success: is_success,
    Refreshing: is_refreshing,
    Stale: is_stale,
}


class TestPredicates:
    def test_exactly_one_predicate_holds(self, variant):
        truths = {kind: predicate(variant) for kind, predicate in PREDICATES.items()}
        assert [kind for kind, holds in truths.items() if holds] == [type(variant)]

    def test_has_value(self, variant):
        assert has_value(variant) == isinstance(variant, (Success, Refreshing, Stale))

    def test_has_error(self, variant):
        assert has_error(variant) == isinstance(variant, (Failure, Stale))

    def test_settled_and_pending(self):
        assert is_settled(Success(1)) and is_settled(Failure("e"))
        assert not is_settled(Stale("e", 1))
        assert is_pending(Loading()) and is_pending(Refreshing(1))
        assert not is_pending(NotAsked())

    def test_predicates_are_false_for_foreign_objects(self):
        assert not any(predicate(None) for predicate in PREDICATES.values())


class TestRemoteData:
    @pytest.mark.parametrize(
        ("cached", "expected"),
        [
            (NotAsked(), NotAsked()),
            (Loading(), Loading()),
            (Failure("e"), Failure("e")),
            (Success("v"), Success("v")),
            (Refreshing("v"), Loading()),
            (Stale("e", "v"), Failure("e")),
        ],
        ids=["not_asked", "loading", "failure", "success", "refreshing", "stale"],
    )
    def test_collapses_to_four_states(self, cached, expected):
        assert remote_data(cached) == expected

    def test_rejects_foreign_objects(self):
        with pytest.raises(UnknownVariantError):
            remote_data(Ok(1))  # type: ignore[arg-type]


class TestValue:
    def test_some_iff_has_value(self, variant):
        assert value(variant).is_some() == isinstance(variant, (Success, Refreshing, Stale))

    def test_extracts_payload(self):
        assert value(Success("a")) == Some("a")
        assert value(Refreshing("b")) == Some("b")
        assert value(Stale("e", "c")) == Some("c")
        assert value(Failure("e")) is NOTHING

    def test_with_default(self):
        assert with_default("d", Stale("e", "v")) == "v"
        assert with_default("d", Loading()) == "d"


class TestResult:
    def test_some_iff_settled_outcome(self, variant):
        assert result(variant).is_some() == isinstance(variant, (Success, Failure, Stale))

    def test_refreshing_has_no_result(self):
        assert result(Refreshing("v")) is NOTHING

    def test_outcomes(self):
        assert result(Success("v")) == Some(Ok("v"))
        assert result(Failure("e")) == Some(Err("e"))
        assert result(Stale("e", "v")) == Some(Err("e"))
        assert result(NotAsked()) is NOTHING
        assert result(Loading()) is NOTHING


class TestError:
    def test_error_payload(self):
        assert error(Failure("e")) == Some("e")
        assert error(Stale("e", "v")) == Some("e")
        assert error(Refreshing("v")) is NOTHING
