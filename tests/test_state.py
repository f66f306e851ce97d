from __future__ import annotations

import json

import pytest
from _fakes import SequenceSession, cart_payload, coupon_payload, fail, make_api, ok, user_payload

from pymotorent.exceptions import AuthError
from pymotorent.store import AppState, JsonFileStorage, MemoryStorage, RecordingNotifier
from pymotorent.store.persistence import AUTH_STORAGE_KEY, CART_STORAGE_KEY


@pytest.mark.asyncio
async def test_changes_are_persisted_and_reloaded() -> None:
    storage = MemoryStorage()
    session = SequenceSession(
        [
            ok({"user": user_payload()}),
            ok(cart_payload(discounted_total=4500, coupon=coupon_payload())),
        ]
    )
    state = AppState(make_api(session), notifier=RecordingNotifier(), storage=storage)
    await state.auth.login({"email": "asha@example.com", "password": "secret"})
    await state.cart.get_user_cart()

    assert storage.get(AUTH_STORAGE_KEY)["isAuthenticated"] is True

    restored = AppState(make_api(SequenceSession([])), storage=storage)
    restored.load()
    assert restored.auth.user == state.auth.user
    assert restored.auth.is_authenticated is True
    assert restored.cart.cart == state.cart.cart


@pytest.mark.asyncio
async def test_logout_resets_every_store() -> None:
    storage = MemoryStorage()
    session = SequenceSession(
        [
            ok({"user": user_payload()}),
            ok(cart_payload()),
            ok({"data": [{"_id": "b1"}], "metadata": []}),
            ok(None),
        ]
    )
    state = AppState(make_api(session), notifier=RecordingNotifier(), storage=storage)
    await state.auth.login({"email": "asha@example.com", "password": "secret"})
    await state.cart.get_user_cart()
    await state.bookings.get_all_bookings()

    await state.auth.logout()

    assert state.auth.user is None
    assert state.cart.cart is None
    assert state.bookings.bookings == []
    assert storage.get(AUTH_STORAGE_KEY) is None
    assert storage.get(CART_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_expired_session_signs_out() -> None:
    storage = MemoryStorage()
    session = SequenceSession([ok({"user": user_payload()}), fail(401), fail(401)])
    state = AppState(make_api(session), notifier=RecordingNotifier(), storage=storage)
    await state.auth.login({"email": "asha@example.com", "password": "secret"})

    with pytest.raises(AuthError):
        await state.cart.get_user_cart()

    assert state.auth.is_authenticated is False
    assert storage.get(AUTH_STORAGE_KEY) is None


def test_file_storage_round_trip(tmp_path) -> None:
    path = tmp_path / "state" / "motorent.json"
    storage = JsonFileStorage(path)
    storage.set(AUTH_STORAGE_KEY, {"user": None, "isAuthenticated": False})

    assert json.loads(path.read_text(encoding="utf-8")) == {
        AUTH_STORAGE_KEY: {"user": None, "isAuthenticated": False}
    }
    storage.remove(AUTH_STORAGE_KEY)
    assert storage.get(AUTH_STORAGE_KEY) is None


def test_file_storage_ignores_corrupt_file(tmp_path) -> None:
    path = tmp_path / "motorent.json"
    path.write_text("{not json", encoding="utf-8")
    state = AppState(make_api(SequenceSession([])), storage=JsonFileStorage(path))

    state.load()

    assert state.auth.user is None
    assert state.cart.cart is None
