# tests/test_store.py
import asyncio

import httpx
import pytest
from pydantic import ValidationError

from catalog.errors import CatalogError
from catalog.models import LoadingState, Product
from conftest import Gateway, dto, mock_store, product


def run(coro):
    return asyncio.run(coro)


def test_load_all_replaces_catalog(gateway):
    gateway.on("GET", "/products", body=[product(1, "A", 10)])
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()

    run(scenario())
    assert store.products == (Product(**product(1, "A", 10)),)
    assert store.loading_state is LoadingState.SUCCESS
    assert store.error is None


def test_load_all_failure_keeps_stale_catalog(gateway):
    gateway.on("GET", "/products", body=[product(1), product(2)])
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        gateway.on("GET", "/products", status=500, body={"detail": "boom"})
        with pytest.raises(CatalogError) as exc_info:
            await store.load_all()
        return exc_info.value

    err = run(scenario())
    assert [p.id for p in store.products] == [1, 2]
    assert store.loading_state is LoadingState.ERROR
    assert store.error == (
        "Error Code: 500\n"
        "Message: Http failure response for http://testserver/products: 500 Internal Server Error"
    )
    assert err.message == store.error
    assert err.status == 500


def test_transport_failure_is_reported_without_status(gateway):
    gateway.on("GET", "/products", exc=httpx.ConnectError)
    store = mock_store(gateway)

    async def scenario():
        with pytest.raises(CatalogError) as exc_info:
            await store.load_all()
        return exc_info.value

    err = run(scenario())
    assert err.status is None
    assert store.error == "Error: connecterror for http://testserver/products"
    assert store.loading_state is LoadingState.ERROR


def test_successful_creates_prepend_one_each(gateway):
    gateway.on("GET", "/products", body=[product(1)])
    store = mock_store(gateway)
    next_id = iter([10, 11, 12])
    gateway.on("POST", "/products", body=lambda body: dict(body, id=next(next_id)))

    async def scenario():
        await store.load_all()
        for title in ("x", "y", "z"):
            before = len(store.products)
            created = await store.create(dto(title))
            assert len(store.products) == before + 1
            assert store.products[0] == created

    run(scenario())
    assert [p.id for p in store.products] == [12, 11, 10, 1]
    assert [p.title for p in store.products[:3]] == ["z", "y", "x"]


def test_create_uses_server_payload(gateway):
    gateway.on("POST", "/products", body=product(99, "B", 5))
    store = mock_store(gateway)

    created = run(store.create(dto("B", 5)))
    assert created.id == 99
    assert store.products[0].id == 99
    assert store.products[0].title == "B"
    assert store.loading_state is LoadingState.SUCCESS


def test_create_with_duplicate_server_id_gets_next_free_id(gateway):
    gateway.on("GET", "/products", body=[product(1), product(21)])
    gateway.on("POST", "/products", body=lambda body: dict(body, id=21))
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        first = await store.create(dto("one"))
        second = await store.create(dto("two"))
        return first, second

    first, second = run(scenario())
    assert (first.id, second.id) == (22, 23)
    ids = [p.id for p in store.products]
    assert ids == [23, 22, 1, 21]
    assert len(set(ids)) == len(ids)


def test_create_validates_before_any_request(gateway):
    store = mock_store(gateway)

    with pytest.raises(ValidationError):
        run(store.create(dto(price=0)))
    with pytest.raises(ValidationError):
        run(store.create(dto(image="ftp://example.com/a.png")))
    with pytest.raises(ValidationError):
        run(store.create({"title": "missing fields"}))

    assert gateway.requests == []
    assert store.loading_state is LoadingState.IDLE


def test_update_replaces_matching_entry(gateway):
    gateway.on("GET", "/products", body=[product(1, "A"), product(2, "B")])
    gateway.on("PUT", "/products/2", body=lambda body: dict(body, id=2))
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        return await store.update(2, dto("B2", 42))

    updated = run(scenario())
    assert updated.title == "B2"
    assert [(p.id, p.title) for p in store.products] == [(1, "A"), (2, "B2")]
    assert store.loading_state is LoadingState.SUCCESS


def test_update_of_unknown_id_is_not_inserted(gateway):
    gateway.on("GET", "/products", body=[product(1)])
    gateway.on("PUT", "/products/8", body=lambda body: dict(body, id=8))
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        before = store.products
        await store.update(8, dto())
        return before

    before = run(scenario())
    assert store.products == before
    assert store.loading_state is LoadingState.SUCCESS


def test_update_not_found_leaves_catalog(gateway):
    gateway.on("GET", "/products", body=[product(5)])
    gateway.on("PUT", "/products/5", status=404, body={"detail": "product not found"})
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        before = store.products
        with pytest.raises(CatalogError):
            await store.update(5, dto())
        return before

    before = run(scenario())
    assert store.products == before
    assert store.loading_state is LoadingState.ERROR
    assert store.error.startswith("Error Code: 404\nMessage: ")
    assert "404 Not Found" in store.error


def test_remove_then_fetch_one_reads_remote(gateway):
    gateway.on("GET", "/products", body=[product(7), product(8)])
    gateway.on("DELETE", "/products/7", body=product(7))
    gateway.on("GET", "/products/7", body=product(7))
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        await store.remove(7)
        state_after_remove = store.loading_state
        fetched = await store.fetch_one(7)
        return state_after_remove, fetched

    state_after_remove, fetched = run(scenario())
    assert state_after_remove is LoadingState.SUCCESS
    assert [p.id for p in store.products] == [8]
    assert fetched.id == 7


def test_remove_failure_keeps_entry(gateway):
    gateway.on("GET", "/products", body=[product(7)])
    gateway.on("DELETE", "/products/7", status=503, body={})
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        with pytest.raises(CatalogError):
            await store.remove(7)

    run(scenario())
    assert [p.id for p in store.products] == [7]
    assert store.error.startswith("Error Code: 503")


def test_fetch_one_does_not_touch_state(gateway):
    gateway.on("GET", "/products/3", status=404, body={})
    store = mock_store(gateway)

    with pytest.raises(CatalogError) as exc_info:
        run(store.fetch_one(3))

    assert exc_info.value.status == 404
    assert store.loading_state is LoadingState.IDLE
    assert store.error is None
    assert store.products == ()


def test_fetch_one_rejects_bad_ids(gateway):
    store = mock_store(gateway)
    for bad in (0, -1, True):
        with pytest.raises(ValueError):
            run(store.fetch_one(bad))
    assert gateway.requests == []


def test_error_slot_cleared_when_operation_starts(gateway):
    gateway.on("GET", "/products", status=500, body={})
    store = mock_store(gateway)
    seen = []

    async def scenario():
        with pytest.raises(CatalogError):
            await store.load_all()
        assert store.error is not None
        gateway.on("GET", "/products", body=[])
        store.subscribe(lambda s: seen.append((s.loading_state, s.error)))
        await store.load_all()

    run(scenario())
    assert seen[0] == (LoadingState.LOADING, None)
    assert seen[-1] == (LoadingState.SUCCESS, None)


def test_malformed_payload_still_settles(gateway):
    gateway.on("GET", "/products", body=[{"id": "not-a-number"}])
    store = mock_store(gateway)

    with pytest.raises(CatalogError):
        run(store.load_all())

    assert store.loading_state is LoadingState.ERROR
    assert store.error.startswith("Error: ")
    assert store.products == ()


def test_never_loading_after_settle():
    gateway = Gateway()
    gateway.on("GET", "/products", body=[product(1)])
    gateway.on("POST", "/products", body=product(2))
    gateway.on("PUT", "/products/1", status=400, body={})
    gateway.on("DELETE", "/products/2", exc=httpx.ReadTimeout)
    store = mock_store(gateway)
    settled = []

    async def attempt(coro):
        try:
            await coro
        except CatalogError:
            pass
        settled.append(store.loading_state)

    async def scenario():
        await attempt(store.load_all())
        await attempt(store.create(dto()))
        await attempt(store.update(1, dto()))
        await attempt(store.remove(2))

    run(scenario())
    assert settled == [LoadingState.SUCCESS, LoadingState.SUCCESS, LoadingState.ERROR, LoadingState.ERROR]
    assert LoadingState.LOADING not in settled


def test_unsubscribe_stops_notifications(gateway):
    gateway.on("GET", "/products", body=[])
    store = mock_store(gateway)
    calls = []
    unsubscribe = store.subscribe(lambda s: calls.append(s.loading_state))

    run(store.load_all())
    assert calls == [LoadingState.LOADING, LoadingState.SUCCESS]

    unsubscribe()
    run(store.load_all())
    assert len(calls) == 2


def test_failing_subscriber_does_not_break_store(gateway):
    gateway.on("GET", "/products", body=[product(1)])
    store = mock_store(gateway)

    def broken(_):
        raise RuntimeError("render failed")

    store.subscribe(broken)
    run(store.load_all())
    assert store.loading_state is LoadingState.SUCCESS
    assert len(store.products) == 1


def test_load_all_keeps_first_of_repeated_ids(gateway):
    gateway.on("GET", "/products", body=[product(1, "A"), product(1, "B"), product(2, "C")])
    gateway.on("PUT", "/products/1", body=lambda body: dict(body, id=1))
    store = mock_store(gateway)

    async def scenario():
        await store.load_all()
        ids = [p.id for p in store.products]
        await store.update(1, dto("A2"))
        return ids

    ids = run(scenario())
    assert ids == [1, 2]
    assert [(p.id, p.title) for p in store.products] == [(1, "A2"), (2, "C")]
