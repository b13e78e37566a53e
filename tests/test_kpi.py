from datetime import date, datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from hotels import kpi
from pms.models import Room, Reservation, Payment

DAY1 = date(2030, 5, 1)
DAY2 = date(2030, 5, 2)
DAY3 = date(2030, 5, 3)


def _at(d: date, hour=12):
    return timezone.make_aware(datetime(d.year, d.month, d.day, hour, 0))


@pytest.fixture
def stays(guest, room, suite, book, pay):
    r1 = book(room, guest, DAY1, DAY3, status=Reservation.CONFIRMED, total=Decimal("200.00"))
    r2 = book(suite, guest, DAY2, DAY3, status=Reservation.CHECKED_IN, total=Decimal("150.00"))
    book(suite, guest, DAY1, DAY2, status=Reservation.PENDING)
    pay(r1, status=Payment.APPROVED, created_at=_at(DAY1))
    pay(r2, status=Payment.PENDING, created_at=_at(DAY2))
    return r1, r2


def test_revenue_by_day_counts_approved_only(hotel, stays):
    rows = kpi.revenue_by_day(hotel, DAY1, DAY3)
    assert rows == [{"day": DAY1, "revenue": Decimal("200.00")}]


def test_revenue_uses_local_date(hotel, guest, room, book, pay):
    r = book(room, guest, DAY1, DAY2)
    # 23:00 en Salta ya es el día siguiente en UTC
    pay(r, created_at=_at(DAY1, hour=23))
    rows = kpi.revenue_by_day(hotel, DAY1, DAY1)
    assert [x["day"] for x in rows] == [DAY1]


def test_occupancy_by_day_covers_every_day(hotel, stays):
    rows = kpi.occupancy_by_day(hotel, DAY1, DAY3)
    assert [(r["day"], r["rooms_occupied"]) for r in rows] == [(DAY1, 1), (DAY2, 2), (DAY3, 0)]


def test_adr_by_day_only_occupied_days(hotel, stays):
    rows = kpi.adr_by_day(hotel, DAY1, DAY3)
    assert rows == [
        {"day": DAY1, "adr": Decimal("100.00")},
        {"day": DAY2, "adr": Decimal("125.00")},
    ]


def test_revpar_by_day(hotel, stays):
    rows = kpi.revpar_by_day(hotel, DAY1, DAY3)
    assert [r["revpar"] for r in rows] == [Decimal("50.00"), Decimal("125.00"), Decimal("0.00")]


def test_kpi_summary(hotel, stays, closed_room):
    summary = kpi.kpi_summary(hotel, DAY1, DAY3)

    assert summary["revenue"] == Decimal("200.00")
    # 3 habitaciones (incluida la cerrada): (1 + 2 + 0) / (3 * 3)
    assert summary["occ_pct"] == 33
    assert summary["adr"] == Decimal("112.50")
    assert summary["room_status"] == {"open": 2, "closed": 1, "maintenance": 0, "total": 3}
    assert [o["level"] for o in summary["occ_by_day"]] == ["low", "mid", "none"]


def test_kpi_summary_without_rooms(hotel):
    summary = kpi.kpi_summary(hotel, DAY1, DAY3)
    assert summary["revenue"] == Decimal("0.00")
    assert summary["occ_pct"] is None
    assert summary["adr"] is None
    assert summary["revpar"] is None


def test_kpi_summary_averages(hotel, stays):
    summary = kpi.kpi_summary(hotel, DAY1, DAY3)
    assert summary["occ_pct"] == 50
    assert summary["adr"] == Decimal("112.50")
    assert summary["revpar"] == Decimal("58.33")


def test_kpi_summary_occupancy_rounds_half_up(hotel, guest, room, book):
    # 1 noche sobre 8 días con una habitación: 12,5 %
    book(room, guest, date(2030, 1, 1), date(2030, 1, 2))
    summary = kpi.kpi_summary(hotel, date(2030, 1, 1), date(2030, 1, 8))
    assert summary["occ_pct"] == 13


@pytest.mark.parametrize("occupied,total,level", [
    (0, 4, "none"),
    (1, 4, "low"),
    (2, 4, "mid"),
    (3, 4, "high"),
    (5, 4, "high"),
    (1, 0, "none"),
])
def test_occupancy_level(occupied, total, level):
    assert kpi.occupancy_level(occupied, total) == level


def test_reservations_with_room(hotel, guest, stays):
    rows = list(kpi.reservations_with_room(hotel=hotel, client=guest))
    assert len(rows) == 3
    assert all(r.room.name for r in rows)


def test_revenue_by_room_sorted(hotel, guest, room, suite, book, pay):
    a = book(room, guest, DAY1, DAY2)
    b = book(suite, guest, DAY2, DAY3)
    pay(a, amount=Decimal("100.00"), created_at=_at(DAY1))
    pay(b, amount=Decimal("300.00"), created_at=_at(DAY2))
    pay(b, status=Payment.REJECTED, amount=Decimal("999.00"), created_at=_at(DAY2))

    rows = kpi.revenue_by_room(hotel, DAY1, DAY3)
    assert [(r["name"], r["value"]) for r in rows] == [
        ("Suite", Decimal("300.00")),
        ("Doble Superior", Decimal("100.00")),
    ]


def test_month_heat_grid(hotel, guest, room, book):
    book(room, guest, date(2030, 5, 6), date(2030, 5, 8))
    weeks = kpi.month_heat(hotel, 2030, 5)

    cells = [c for w in weeks for c in w if c]
    assert len(cells) == 31
    assert all(len(w) == 7 for w in weeks)
    by_day = {c["day"]: c for c in cells}
    assert by_day[date(2030, 5, 6)]["level"] == "high"
    assert by_day[date(2030, 5, 8)]["level"] == "none"
    # mayo 2030 empieza miércoles
    assert weeks[0][:2] == [None, None]


def test_room_status_counts_empty(other_hotel):
    assert kpi.room_status_counts(other_hotel)["total"] == 0
    assert Room.objects.filter(hotel=other_hotel).count() == 0
