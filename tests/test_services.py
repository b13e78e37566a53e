from datetime import date
from decimal import Decimal

import pytest

from pms.models import Room, Reservation, Payment
from pms.services import (
    ReservationConflictError,
    ReservationError,
    assert_no_overlap,
    booking_code,
    confirm_reservation,
    get_available_rooms,
    month_occupancy,
    nights_between,
    occupied_dates,
    set_payment_status,
    set_reservation_status,
    settle_payment,
)

D1 = date(2030, 3, 10)
D2 = date(2030, 3, 12)
D3 = date(2030, 3, 14)


def _confirm(hotel, guest, room, check_in=D1, check_out=D2, guests=1, **kw):
    return confirm_reservation(
        hotel=hotel, client=guest, room=room, check_in=check_in, check_out=check_out, guests=guests, **kw
    )


# --- confirm_reservation ---

def test_confirm_creates_pending_reservation_and_payment(hotel, guest, room):
    created = _confirm(hotel, guest, room, guests=2, guest_name="  Ana Díaz ", guest_phone="3874659876", notes="Llego tarde")

    r = Reservation.objects.get(pk=created["reservation_id"])
    p = Payment.objects.get(pk=created["payment_id"])
    assert r.status == Reservation.PENDING
    assert r.total_amount == Decimal("200.00")
    assert r.guest_name == "Ana Díaz"
    assert r.guest_phone == "3874659876"
    assert r.notes == "Llego tarde"
    assert p.status == Payment.PENDING
    assert p.amount == r.total_amount
    assert p.provider == Payment.PROVIDER_MOCK
    assert p.reservation_id == r.id
    assert created["total_amount"] == Decimal("200.00")


def test_confirm_rejects_overlap(hotel, guest, room, book):
    book(room, guest, date(2030, 3, 11), date(2030, 3, 13), status=Reservation.PENDING)
    with pytest.raises(ReservationConflictError):
        _confirm(hotel, guest, room)
    assert Reservation.objects.count() == 1


def test_confirm_allows_back_to_back_stays(hotel, guest, room, book):
    book(room, guest, D2, D3)
    created = _confirm(hotel, guest, room, check_in=D1, check_out=D2)
    assert Reservation.objects.filter(pk=created["reservation_id"]).exists()


def test_cancelled_reservation_does_not_block(hotel, guest, room, book):
    book(room, guest, D1, D2, status=Reservation.CANCELLED)
    _confirm(hotel, guest, room)
    assert Reservation.objects.filter(room=room, status=Reservation.PENDING).count() == 1


@pytest.mark.parametrize("check_in,check_out", [(D2, D1), (D1, D1), (None, D2), (D1, date(9999, 12, 31))])
def test_confirm_rejects_bad_dates(hotel, guest, room, check_in, check_out):
    with pytest.raises(ReservationError):
        _confirm(hotel, guest, room, check_in=check_in, check_out=check_out)


def test_confirm_rejects_guests_over_capacity(hotel, guest, room):
    with pytest.raises(ReservationError, match="admite hasta 2"):
        _confirm(hotel, guest, room, guests=3)


def test_confirm_rejects_zero_guests(hotel, guest, room):
    with pytest.raises(ReservationError):
        _confirm(hotel, guest, room, guests=0)


def test_confirm_rejects_closed_room(hotel, guest, closed_room):
    with pytest.raises(ReservationError, match="no está disponible"):
        _confirm(hotel, guest, closed_room)


def test_confirm_rejects_room_of_other_hotel(other_hotel, guest, room):
    with pytest.raises(ReservationError, match="no pertenece"):
        _confirm(other_hotel, guest, room)


def test_confirm_is_atomic(hotel, guest, room, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("proveedor caído")

    monkeypatch.setattr(Payment.objects, "create", boom)
    with pytest.raises(RuntimeError):
        _confirm(hotel, guest, room)
    assert not Reservation.objects.exists()


# --- availability ---

def test_available_rooms_excludes_busy_closed_and_small(hotel, guest, room, suite, closed_room, book):
    book(suite, guest, D1, D2, status=Reservation.CHECKED_IN)
    rooms = list(get_available_rooms(hotel=hotel, check_in=D1, check_out=D2, guests=1))
    assert rooms == [room]

    rooms = list(get_available_rooms(hotel=hotel, check_in=D2, check_out=D3, guests=3))
    assert rooms == [suite]


def test_available_rooms_clamps_guests(hotel, room, suite):
    rooms = list(get_available_rooms(hotel=hotel, check_in=D1, check_out=D2, guests=0))
    assert rooms == [room, suite]


def test_available_rooms_rejects_bad_range(hotel):
    with pytest.raises(ReservationError):
        get_available_rooms(hotel=hotel, check_in=D2, check_out=D2)
    with pytest.raises(ReservationError):
        get_available_rooms(hotel=hotel, check_in=date(9999, 12, 30), check_out=date(9999, 12, 31))


def test_assert_no_overlap_excludes_itself(guest, room, book):
    r = book(room, guest, D1, D2)
    assert_no_overlap(room=room, check_in=D1, check_out=D2, exclude_id=r.id)
    with pytest.raises(ReservationConflictError):
        assert_no_overlap(room=room, check_in=D1, check_out=D2)


# --- payments / status ---

def test_settle_approved_confirms_reservation(hotel, guest, room):
    created = _confirm(hotel, guest, room)
    payment = Payment.objects.get(pk=created["payment_id"])
    settle_payment(payment=payment, result=Payment.APPROVED)

    payment.refresh_from_db()
    assert payment.status == Payment.APPROVED
    assert payment.reservation.status == Reservation.CONFIRMED


def test_settle_rejected_keeps_reservation_pending(hotel, guest, room):
    created = _confirm(hotel, guest, room)
    payment = Payment.objects.get(pk=created["payment_id"])
    settle_payment(payment=payment, result=Payment.REJECTED)

    payment.refresh_from_db()
    assert payment.status == Payment.REJECTED
    assert Reservation.objects.get(pk=created["reservation_id"]).status == Reservation.PENDING


def test_settle_unknown_result(hotel, guest, room):
    created = _confirm(hotel, guest, room)
    with pytest.raises(ReservationError):
        settle_payment(payment=Payment.objects.get(pk=created["payment_id"]), result="maybe")


def test_set_payment_status(guest, room, book, pay):
    p = pay(book(room, guest, D1, D2), status=Payment.PENDING)
    set_payment_status(payment=p, status=Payment.REJECTED)
    assert Payment.objects.get(pk=p.pk).status == Payment.REJECTED
    with pytest.raises(ReservationError):
        set_payment_status(payment=p, status=Payment.PENDING)


def test_reactivating_reservation_rechecks_overlap(guest, room, book):
    old = book(room, guest, D1, D2, status=Reservation.CANCELLED)
    book(room, guest, D1, D2, status=Reservation.CONFIRMED)

    with pytest.raises(ReservationConflictError):
        set_reservation_status(reservation=old, status=Reservation.CONFIRMED)
    old.refresh_from_db()
    assert old.status == Reservation.CANCELLED


def test_set_reservation_status_cancel_and_invalid(guest, room, book):
    r = book(room, guest, D1, D2, status=Reservation.PENDING)
    set_reservation_status(reservation=r, status=Reservation.CANCELLED)
    assert Reservation.objects.get(pk=r.pk).status == Reservation.CANCELLED
    with pytest.raises(ReservationError):
        set_reservation_status(reservation=r, status="archived")


# --- helpers ---

def test_booking_code(guest, room, book):
    r = book(room, guest, D1, D2)
    assert booking_code(r) == f"RESV-20300310-{r.id}"


def test_nights_between():
    assert nights_between(D1, D2) == 2
    assert nights_between(D1, D1) == 1
    assert nights_between(D2, D1) == 1


def test_occupied_dates_include_both_ends(guest, room, book):
    book(room, guest, D1, D2, status=Reservation.PENDING)
    book(room, guest, D3, date(2030, 3, 15), status=Reservation.CANCELLED)
    assert occupied_dates(room) == ["2030-03-10", "2030-03-11", "2030-03-12"]


def test_month_occupancy_clips_to_month(hotel, guest, room, suite, book):
    book(room, guest, date(2030, 2, 27), date(2030, 3, 2), status=Reservation.CONFIRMED)
    book(suite, guest, date(2030, 3, 30), date(2030, 4, 2), status=Reservation.PENDING)
    book(suite, guest, date(2030, 3, 5), date(2030, 3, 6), status=Reservation.CHECKED_IN)

    occ = month_occupancy(hotel=hotel, year=2030, month=3)
    assert occ[room.id] == ["2030-03-01", "2030-03-02"]
    assert occ[suite.id] == ["2030-03-30", "2030-03-31"]


def test_room_str(room):
    assert str(room) == "Sheraton Salta — Doble Superior"
    assert Room.objects.get(pk=room.pk).status == Room.OPEN
