"""Tests for CachedDataStore, the single-owner dispatch/settle container."""

import asyncio

import pytest
from frozendict import frozendict

from cached_remote_data import (
    CachedDataStore,
    Err,
    Failure,
    Loading,
    NotAsked,
    Ok,
    Refreshing,
    Stale,
    StoreConfig,
    Success,
    UnknownVariantError,
)


@pytest.fixture
def store():
    return CachedDataStore(config=StoreConfig())


@pytest.fixture
def transitions(store):
    seen = []
    store.subscribe(lambda key, previous, current: seen.append((key, previous, current)))
    return seen


def returning(outcome):
    async def op():
        await asyncio.sleep(0)
        return outcome

    return op


class TestStoreBasics:
    def test_unknown_key_is_not_asked(self, store):
        assert store.get("user") == NotAsked()
        assert "user" not in store
        assert len(store) == 0

    def test_initial_states(self):
        store = CachedDataStore(config=StoreConfig(), initial={"user": Success("ada")})
        assert store.get("user") == Success("ada")

    def test_set_and_snapshot(self, store):
        store.set("user", Success("ada"))
        snapshot = store.snapshot()

        assert isinstance(snapshot, frozendict)
        assert snapshot == {"user": Success("ada")}

        store.set("user", Stale("e", "ada"))
        assert snapshot["user"] == Success("ada")

    def test_set_rejects_foreign_objects(self, store):
        with pytest.raises(UnknownVariantError):
            store.set("user", "ada")

    def test_invalidate(self, store, transitions):
        store.set("user", Success("ada"))
        assert store.invalidate("user") == Success("ada")
        assert store.get("user") == NotAsked()
        assert store.invalidate("user") == NotAsked()
        assert transitions[-1] == ("user", Success("ada"), NotAsked())

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(lambda *args: seen.append(args))
        store.set("a", Loading())
        unsubscribe()
        unsubscribe()
        store.set("a", Success(1))
        assert len(seen) == 1


class TestStoreFetch:
    @pytest.mark.asyncio
    async def test_first_fetch_goes_through_loading(self, store, transitions):
        assert await store.fetch("user", returning(Ok("ada"))) == Success("ada")
        assert [current for _, _, current in transitions] == [Loading(), Success("ada")]

    @pytest.mark.asyncio
    async def test_refresh_goes_through_refreshing(self, store, transitions):
        store.set("user", Success("ada"))
        await store.fetch("user", returning(Err(503)))

        assert [current for _, _, current in transitions][1:] == [
            Refreshing("ada"),
            Stale(503, "ada"),
        ]
        assert store.get("user") == Stale(503, "ada")

    @pytest.mark.asyncio
    async def test_state_while_in_flight(self, store):
        release = asyncio.Event()

        async def op():
            await release.wait()
            return Ok("grace")

        store.set("user", Failure("e"))
        task = asyncio.create_task(store.fetch("user", op))
        await asyncio.sleep(0)

        assert store.get("user") == Loading()
        assert store.is_fetching("user")

        release.set()
        assert await task == Success("grace")
        assert not store.is_fetching("user")

    @pytest.mark.asyncio
    async def test_fetches_for_same_key_are_serialized(self, store):
        order = []

        def op_for(name, outcome):
            async def op():
                order.append(f"start {name}")
                await asyncio.sleep(0.01)
                order.append(f"end {name}")
                return outcome

            return op

        await asyncio.gather(
            store.fetch("user", op_for("first", Ok("v1"))),
            store.fetch("user", op_for("second", Err("e"))),
        )

        assert order == ["start first", "end first", "start second", "end second"]
        assert store.get("user") == Stale("e", "v1")

    @pytest.mark.asyncio
    async def test_fetches_for_different_keys_overlap(self, store):
        order = []

        def op_for(name):
            async def op():
                order.append(f"start {name}")
                await asyncio.sleep(0.01)
                order.append(f"end {name}")
                return Ok(name)

            return op

        await asyncio.gather(store.fetch("a", op_for("a")), store.fetch("b", op_for("b")))

        assert order[:2] == ["start a", "start b"]
        assert store.snapshot() == {"a": Success("a"), "b": Success("b")}

    @pytest.mark.asyncio
    async def test_operation_error_restores_previous_state(self, store):
        async def op():
            raise ConnectionError("refused")

        store.set("user", Success("ada"))
        with pytest.raises(ConnectionError):
            await store.fetch("user", op)
        assert store.get("user") == Success("ada")

    @pytest.mark.asyncio
    async def test_cancellation_restores_missing_key(self, store):
        async def op():
            await asyncio.sleep(10)
            return Ok("never")

        task = asyncio.create_task(store.fetch("user", op))
        await asyncio.sleep(0)
        assert store.get("user") == Loading()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert "user" not in store
        assert store.get("user") == NotAsked()


class TestStoreLogging:
    def test_debug_config_logs_payloads(self, caplog):
        store = CachedDataStore(config=StoreConfig(debug=True))
        with caplog.at_level("DEBUG", logger="cached_remote_data.store"):
            store.set("user", Success("ada"))
        assert "Success(value='ada')" in caplog.text

    def test_default_config_logs_variant_names_only(self, caplog, store):
        with caplog.at_level("DEBUG", logger="cached_remote_data.store"):
            store.set("user", Success("secret-token"))
        assert "NotAsked -> Success" in caplog.text
        assert "secret-token" not in caplog.text
