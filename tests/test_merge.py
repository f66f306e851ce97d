from pymotorent.models import Booking, MotorcycleLog, User
from pymotorent.store.merge import (
    append,
    attach_customer,
    prepend,
    remove_by_id,
    replace_by_id,
    upsert_by_id,
)


def _log(log_id: str, status: str = "OK") -> MotorcycleLog:
    return MotorcycleLog(
        id=log_id,
        motorcycle_id="m1",
        service_centre_name="Hero Service",
        date_in=None,
        date_out=None,
        status=status,
        bill_amount=0,
    )


def test_replace_by_id_keeps_order() -> None:
    logs = [_log("a"), _log("b"), _log("c")]
    merged = replace_by_id(logs, _log("b", "IN_SERVICE"))
    assert [log.id for log in merged] == ["a", "b", "c"]
    assert merged[1].status == "IN_SERVICE"
    assert logs[1].status == "OK"


def test_replace_by_id_with_unknown_id_is_unchanged() -> None:
    logs = [_log("a")]
    assert replace_by_id(logs, _log("z")) == logs


def test_upsert_appends_new_entries() -> None:
    logs = [_log("a")]
    assert [log.id for log in upsert_by_id(logs, _log("b"))] == ["a", "b"]
    assert upsert_by_id(logs, _log("a", "DONE"))[0].status == "DONE"


def test_append_prepend_remove() -> None:
    logs = [_log("a")]
    assert [log.id for log in append(logs, _log("b"))] == ["a", "b"]
    assert [log.id for log in prepend(logs, _log("b"))] == ["b", "a"]
    assert remove_by_id(logs, "a") == []
    assert remove_by_id(logs, "missing") == logs


def test_attach_customer() -> None:
    booking = Booking(
        id="b1",
        customer_id="u1",
        status="CONFIRMED",
        payment_status=None,
        start_date=None,
        end_date=None,
        discounted_total=0,
        paid_amount=0,
        remaining_amount=0,
    )
    customer = User(
        id="u1",
        email="asha@example.com",
        username="asha",
        fullname="Asha Rider",
        role="CUSTOMER",
        is_email_verified=True,
    )
    assert attach_customer(booking, None) is booking
    assert attach_customer(booking, customer).customer == customer
