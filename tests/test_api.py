import json
from datetime import date

from django.urls import reverse

from pms.models import Reservation, Payment

CI = "2030-11-01"
CO = "2030-11-03"


def _available(client, hotel, **params):
    query = {"p_hotel_id": hotel.pk, "p_check_in": CI, "p_check_out": CO, "p_guests": 1}
    query.update(params)
    return client.get(reverse("pms:api_available_rooms"), query)


def _confirm(client, payload):
    return client.post(reverse("pms:api_confirm_reservation"), json.dumps(payload), content_type="application/json")


def test_available_requires_login(client, hotel):
    resp = _available(client, hotel)
    assert resp.status_code == 403
    assert "error" in resp.json()


def test_available_rooms(client_as, guest, hotel, room, suite, book):
    book(room, guest, date(2030, 11, 2), date(2030, 11, 4))
    resp = _available(client_as(guest), hotel)
    assert resp.status_code == 200
    data = resp.json()
    assert [r["id"] for r in data] == [suite.pk]
    assert data[0]["base_price"] == "150.00"


def test_available_bad_params(client_as, guest, hotel):
    c = client_as(guest)
    assert _available(c, hotel, p_check_in="ayer").status_code == 400
    assert _available(c, hotel, p_check_out=CI).status_code == 400
    assert _available(c, hotel, p_hotel_id=9999).status_code == 404
    assert _available(c, hotel, p_check_in="9999-12-30", p_check_out="9999-12-31").status_code == 400


def test_confirm_creates_reservation(client_as, guest, hotel, room):
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk,
        "p_client_id": guest.pk,
        "p_room_id": room.pk,
        "p_check_in": CI,
        "p_check_out": CO,
        "p_guests": 2,
        "p_provider": "mock",
    })
    assert resp.status_code == 200
    row = resp.json()[0]
    r = Reservation.objects.get(pk=row["reservation_id"])
    assert r.status == Reservation.PENDING
    assert row["total_amount"] == "200.00"
    assert Payment.objects.get(pk=row["payment_id"]).reservation == r


def test_confirm_form_encoded_defaults_client(client_as, guest, hotel, room):
    resp = client_as(guest).post(reverse("pms:api_confirm_reservation"), {
        "p_hotel_id": hotel.pk, "p_room_id": room.pk, "p_check_in": CI, "p_check_out": CO,
    })
    assert resp.status_code == 200
    assert Reservation.objects.get().client == guest


def test_confirm_conflict(client_as, guest, hotel, room, book):
    book(room, guest, date(2030, 11, 1), date(2030, 11, 2), status=Reservation.PENDING)
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk, "p_room_id": room.pk, "p_check_in": CI, "p_check_out": CO,
    })
    assert resp.status_code == 400
    assert "ya está reservada" in resp.json()["error"]


def test_confirm_for_another_client_is_forbidden(client_as, guest, make_user, hotel, room):
    other = make_user("otro@example.com")
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk, "p_client_id": other.pk, "p_room_id": room.pk, "p_check_in": CI, "p_check_out": CO,
    })
    assert resp.status_code == 403
    assert not Reservation.objects.exists()


def test_confirm_unknown_provider(client_as, guest, hotel, room):
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk, "p_room_id": room.pk, "p_check_in": CI, "p_check_out": CO,
        "p_provider": "tarjeta-trucha",
    })
    assert resp.status_code == 400
    assert not Reservation.objects.exists()


def test_confirm_date_at_calendar_end(client_as, guest, hotel, room):
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk, "p_room_id": room.pk, "p_check_in": "9999-12-30", "p_check_out": "9999-12-31",
    })
    assert resp.status_code == 400
    assert not Reservation.objects.exists()


def test_confirm_unknown_room(client_as, guest, hotel):
    resp = _confirm(client_as(guest), {
        "p_hotel_id": hotel.pk, "p_room_id": 999, "p_check_in": CI, "p_check_out": CO,
    })
    assert resp.status_code == 404


def test_confirm_invalid_json(client_as, guest):
    resp = client_as(guest).post(
        reverse("pms:api_confirm_reservation"), "{roto", content_type="application/json"
    )
    assert resp.status_code == 400


def test_confirm_requires_post_and_login(client, client_as, guest):
    assert client.post(reverse("pms:api_confirm_reservation")).status_code == 403
    assert client_as(guest).get(reverse("pms:api_confirm_reservation")).status_code == 405


def test_send_booking_email_disabled(client, db):
    for method in (client.get, client.post):
        resp = method(reverse("pms:send_booking_email"))
        assert resp.status_code == 410
        assert resp.json() == {
            "version": "disabled",
            "ok": False,
            "disabled": True,
            "reason": "send-booking-email disabled",
        }
