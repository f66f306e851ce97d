from __future__ import annotations

import aiohttp
import pytest
from _fakes import (
    FakeResponse,
    SequenceSession,
    cart_payload,
    coupon_payload,
    fail,
    make_api,
    motorcycle_payload,
    ok,
    user_payload,
)

from pymotorent.api.mapping import map_cart
from pymotorent.exceptions import ApiError, AuthError, NetworkError
from pymotorent.models import CouponSavings, PaymentOrder
from pymotorent.pricing import CouponPolarity
from pymotorent.store import (
    AuthStore,
    BookingStore,
    CartStore,
    MotorcycleLogStore,
    MotorcycleStore,
    RecordingNotifier,
)


def _page(items: list[dict[str, object]], total: int | None = None) -> dict[str, object]:
    count = len(items) if total is None else total
    return {"data": items, "metadata": [{"total": count, "page": 1, "totalPages": 1}]}


def _log_payload(log_id: str) -> dict[str, object]:
    return {
        "_id": log_id,
        "motorcycleId": "m1",
        "serviceCentreName": "Hero Service",
        "dateIn": "2024-03-01T00:00:00.000Z",
        "status": "IN_SERVICE",
        "billAmount": 1200,
    }


# Cart


@pytest.mark.asyncio
async def test_apply_coupon_reports_increase_savings() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession(
        [ok(cart_payload(cart_total=4500, discounted_total=5000, coupon=coupon_payload()))]
    )
    store = CartStore(make_api(session), notifier)

    savings = await store.apply_coupon("ride10")

    assert savings == CouponSavings(applied=True, amount=500)
    assert store.cart is not None
    assert store.cart.applied_coupon == "RIDE10"
    assert notifier.messages == [("success", "Coupon Applied. Discount: 500")]


@pytest.mark.asyncio
async def test_apply_coupon_reports_decrease_savings() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession(
        [ok(cart_payload(cart_total=5000, discounted_total=4500, coupon=coupon_payload()))]
    )
    store = CartStore(make_api(session), notifier, coupon_polarity=CouponPolarity.DECREASE)

    savings = await store.apply_coupon("RIDE10")

    assert savings == CouponSavings(applied=True, amount=500)
    assert notifier.messages == [("success", "Coupon Applied. Discount: 500")]


@pytest.mark.asyncio
async def test_apply_coupon_without_savings_is_silent() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession(
        [ok(cart_payload(cart_total=5000, discounted_total=4500, coupon=coupon_payload()))]
    )
    store = CartStore(make_api(session), notifier)

    savings = await store.apply_coupon("RIDE10")

    assert savings.applied is False
    assert notifier.messages == []
    assert store.cart is not None


@pytest.mark.asyncio
async def test_rejected_coupon_leaves_cart_unchanged() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession([fail(400, "Coupon has expired")])
    store = CartStore(make_api(session), notifier)
    cart = map_cart(cart_payload())
    store.set_cart(cart)

    with pytest.raises(ApiError):
        await store.apply_coupon("OLD")

    assert store.cart == cart
    assert store.error == "Coupon has expired"
    assert store.loading is False
    assert notifier.messages == [("error", "Coupon has expired")]


@pytest.mark.asyncio
async def test_store_error_falls_back_to_operation_message() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession([FakeResponse(status=500, json_error=ValueError("html"))])
    store = CartStore(make_api(session), notifier)

    with pytest.raises(ApiError):
        await store.get_user_cart()

    assert store.error == "Failed to get cart"


@pytest.mark.asyncio
async def test_loading_is_set_while_request_is_in_flight() -> None:
    seen: list[bool] = []
    store: CartStore | None = None

    def on_request(method: str, url: str) -> None:
        assert store is not None
        seen.append(store.loading)

    session = SequenceSession([ok(cart_payload())], on_request=on_request)
    store = CartStore(make_api(session), RecordingNotifier())
    await store.get_user_cart()

    assert seen == [True]
    assert store.loading is False
    assert store.error is None


@pytest.mark.asyncio
async def test_remove_coupon_without_coupon_is_noop() -> None:
    session = SequenceSession([])
    store = CartStore(make_api(session), RecordingNotifier())
    cart = map_cart(cart_payload(cart_total=5000, discounted_total=5000))
    store.set_cart(cart)

    assert await store.remove_coupon() == cart
    assert await store.remove_coupon() == cart
    assert session.calls == 0
    assert store.error is None


@pytest.mark.asyncio
async def test_remove_coupon_replaces_cart() -> None:
    session = SequenceSession([ok(cart_payload())])
    store = CartStore(make_api(session), RecordingNotifier())
    store.set_cart(map_cart(cart_payload(discounted_total=4500, coupon=coupon_payload())))

    cart = await store.remove_coupon()

    assert cart is not None
    assert cart.coupon is None
    assert session.requests[0]["url"].endswith("/coupons/c/remove")


@pytest.mark.asyncio
async def test_clear_cart_is_idempotent() -> None:
    session = SequenceSession([ok(None), fail(404, "Cart not found")])
    store = CartStore(make_api(session), RecordingNotifier())
    store.set_cart(map_cart(cart_payload()))

    await store.clear_cart()
    await store.clear_cart()

    assert store.cart is None
    assert store.error is None
    assert session.calls == 2


@pytest.mark.asyncio
async def test_clear_empty_cart_skips_request() -> None:
    session = SequenceSession([])
    store = CartStore(make_api(session), RecordingNotifier())
    store.set_cart(map_cart(cart_payload(items=[], cart_total=0)))

    await store.clear_cart()

    assert session.calls == 0


def test_cart_snapshot_restores() -> None:
    store = CartStore(make_api(SequenceSession([])))
    store.set_cart(map_cart(cart_payload(coupon=coupon_payload())))
    other = CartStore(make_api(SequenceSession([])))
    other.restore(store.snapshot())
    assert other.cart == store.cart

    other.restore({"cart": {"items": "broken"}})
    assert other.cart is None


# Motorcycles


@pytest.mark.asyncio
async def test_failing_add_motorcycle_keeps_list() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession(
        [ok(_page([motorcycle_payload("m1")], total=7)), fail(500, "Server down")]
    )
    store = MotorcycleStore(make_api(session), notifier)
    await store.get_all_motorcycles({"page": 1})
    before = list(store.motorcycles)

    with pytest.raises(ApiError):
        await store.add_motorcycle({"make": "Bajaj"})

    assert store.motorcycles == before
    assert store.metadata.total == 7
    assert store.error is not None
    assert notifier.messages == [("error", "Server down")]


@pytest.mark.asyncio
async def test_motorcycle_add_update_delete() -> None:
    session = SequenceSession(
        [
            ok(_page([motorcycle_payload("m1")])),
            ok(motorcycle_payload("m2")),
            ok(motorcycle_payload("m1", rentPerDay=2000)),
            ok(None),
        ]
    )
    store = MotorcycleStore(make_api(session), RecordingNotifier())
    await store.get_all_motorcycles()

    await store.add_motorcycle({"make": "Royal Enfield"})
    assert [m.id for m in store.motorcycles] == ["m1", "m2"]

    await store.update_motorcycle_details("m1", {"rentPerDay": 2000})
    assert store.motorcycles[0].rent_per_day == 2000

    await store.delete_motorcycle("m2")
    assert [m.id for m in store.motorcycles] == ["m1"]


@pytest.mark.asyncio
async def test_get_motorcycle_by_id_holds_single_entry() -> None:
    session = SequenceSession(
        [ok(_page([motorcycle_payload("m1"), motorcycle_payload("m2")])), ok(motorcycle_payload("m2"))]
    )
    store = MotorcycleStore(make_api(session), RecordingNotifier())
    await store.get_all_motorcycles()

    motorcycle = await store.get_motorcycle_by_id("m2")

    assert store.motorcycles == [motorcycle]


# Maintenance logs


@pytest.mark.asyncio
async def test_created_log_is_prepended() -> None:
    session = SequenceSession([ok(_page([_log_payload("l1")])), ok(_log_payload("l2"))])
    store = MotorcycleLogStore(make_api(session), RecordingNotifier())
    await store.get_motorcycle_logs("m1")

    await store.create_motorcycle_log("m1", {"serviceCentreName": "Hero Service"})

    assert [log.id for log in store.logs] == ["l2", "l1"]
    assert session.requests[1]["kwargs"]["json"]["motorcycleId"] == "m1"


@pytest.mark.asyncio
async def test_log_update_and_delete() -> None:
    updated = _log_payload("l1")
    updated["status"] = "OK"
    session = SequenceSession([ok(_page([_log_payload("l1")])), ok(updated), ok(None)])
    store = MotorcycleLogStore(make_api(session), RecordingNotifier())
    await store.get_all_motorcycle_logs()

    await store.update_motorcycle_log("l1", {"status": "OK"})
    assert store.logs[0].status == "OK"

    await store.delete_motorcycle_log("l1")
    assert store.logs == []


# Bookings


@pytest.mark.asyncio
async def test_cancel_booking_attaches_customer() -> None:
    session = SequenceSession(
        [
            ok(_page([{"_id": "b1", "status": "CONFIRMED"}, {"_id": "b2", "status": "PENDING"}])),
            ok(
                {
                    "updatedBooking": {"_id": "b1", "status": "CANCELLED"},
                    "customer": user_payload("u9"),
                }
            ),
        ]
    )
    store = BookingStore(make_api(session), RecordingNotifier())
    await store.get_all_bookings()

    booking = await store.cancel_booking("b1")

    assert booking.status == "CANCELLED"
    assert store.bookings[0].customer is not None
    assert store.bookings[0].customer.id == "u9"
    assert store.bookings[1].status == "PENDING"


@pytest.mark.asyncio
async def test_modify_booking_uses_modified_booking() -> None:
    session = SequenceSession(
        [
            ok(_page([{"_id": "b1", "status": "CONFIRMED"}])),
            ok({"modifiedBooking": {"_id": "b1", "status": "RESERVED"}, "customer": user_payload()}),
        ]
    )
    store = BookingStore(make_api(session), RecordingNotifier())
    await store.get_all_bookings()

    await store.modify_booking("b1", {"pickupLocation": "GOA"})

    assert store.bookings[0].status == "RESERVED"
    assert session.requests[1]["method"] == "PUT"


@pytest.mark.asyncio
async def test_create_booking_declined() -> None:
    session = SequenceSession(
        [FakeResponse(json_data={"success": False, "message": "Motorcycle unavailable"})]
    )
    store = BookingStore(make_api(session), RecordingNotifier())

    assert await store.create_booking({"paymentMode": "f"}) is False
    assert store.bookings == []


@pytest.mark.asyncio
async def test_create_booking_appends() -> None:
    session = SequenceSession([ok({"_id": "b3", "status": "CONFIRMED"})])
    store = BookingStore(make_api(session), RecordingNotifier())

    assert await store.create_booking({"paymentMode": "f"}) is True
    assert [booking.id for booking in store.bookings] == ["b3"]


@pytest.mark.asyncio
async def test_generate_razorpay_order() -> None:
    session = SequenceSession([ok({"id": "order_1", "amount": 80000, "currency": "INR"})])
    store = BookingStore(make_api(session), RecordingNotifier())

    order = await store.generate_razorpay_order("p")

    assert order == PaymentOrder(id="order_1", amount=80000)


# Auth


@pytest.mark.asyncio
async def test_login_sets_user_and_notifies() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession(
        [ok({"user": user_payload(), "accessToken": "t"}, message="User logged in successfully")]
    )
    store = AuthStore(make_api(session), notifier)

    user = await store.login({"email": "asha@example.com", "password": "secret"})

    assert user is not None
    assert store.is_authenticated is True
    assert notifier.messages == [("success", "User logged in successfully")]


@pytest.mark.asyncio
async def test_logout_resets_and_calls_hook() -> None:
    calls: list[bool] = []
    session = SequenceSession([ok(user_payload()), ok(None)])
    store = AuthStore(make_api(session), RecordingNotifier(), on_logout=lambda: calls.append(True))
    await store.get_current_user()

    await store.logout()

    assert store.user is None
    assert store.is_authenticated is False
    assert calls == [True]


@pytest.mark.asyncio
async def test_get_current_user_failure_signs_out() -> None:
    session = SequenceSession([ok(user_payload()), aiohttp.ClientConnectionError("down")])
    store = AuthStore(make_api(session), RecordingNotifier())
    await store.get_current_user()

    with pytest.raises(NetworkError):
        await store.get_current_user()

    assert store.user is None
    assert store.is_authenticated is False
    assert store.error == "Failed to get user"


@pytest.mark.asyncio
async def test_forbidden_role_change_is_reported() -> None:
    notifier = RecordingNotifier()
    session = SequenceSession([fail(403, "Only admins can assign roles")])
    store = AuthStore(make_api(session), notifier)

    with pytest.raises(AuthError):
        await store.assign_role("u2", {"role": "ADMIN"})

    assert notifier.messages == [("error", "Only admins can assign roles")]
