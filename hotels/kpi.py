"""
Indicadores del hotel: ingresos por día, ocupación, ADR y RevPAR.

- ingresos: pagos aprobados, por fecha local de creación
- ocupación: habitaciones distintas con una reserva confirmed/checked_in
  que cubre la noche (check_in <= día < check_out)
- ADR: ingreso por noche / habitaciones ocupadas (solo días con ocupación)
- RevPAR: ingreso por noche / total de habitaciones del hotel
"""
import calendar
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from pms.models import Room, Reservation, Payment

OCCUPIED_STATUSES = (Reservation.CONFIRMED, Reservation.CHECKED_IN)

LEVEL_NONE = "none"
LEVEL_LOW = "low"
LEVEL_MID = "mid"
LEVEL_HIGH = "high"


def _q2(v: Decimal) -> Decimal:
    return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _daterange(start: date, end: date):
    cur = start
    while cur < end:
        yield cur
        cur += timedelta(days=1)


def revenue_by_day(hotel, date_from: date, date_to: date) -> list[dict]:
    tz = timezone.get_current_timezone()
    rows = (
        Payment.objects
        .filter(reservation__hotel=hotel, status=Payment.APPROVED)
        .annotate(day=TruncDate("created_at", tzinfo=tz))
        .filter(day__gte=date_from, day__lte=date_to)
        .values("day")
        .annotate(revenue=Coalesce(Sum("amount"), Decimal("0.00")))
        .order_by("day")
    )
    return [{"day": r["day"], "revenue": r["revenue"]} for r in rows]


def _nightly(hotel, date_from: date, date_to: date):
    """
    día -> (habitaciones ocupadas, ingreso de esas noches)
    """
    end = date_to + timedelta(days=1)
    qs = (
        Reservation.objects
        .filter(hotel=hotel, status__in=OCCUPIED_STATUSES)
        .filter(check_in__lt=end, check_out__gt=date_from)
        .values_list("room_id", "check_in", "check_out", "total_amount")
    )
    rooms = defaultdict(set)
    revenue = defaultdict(lambda: Decimal("0.00"))
    for room_id, check_in, check_out, total in qs:
        nights = (check_out - check_in).days
        if nights <= 0:
            continue
        rate = (total or Decimal("0.00")) / nights
        for d in _daterange(max(check_in, date_from), min(check_out, end)):
            rooms[d].add(room_id)
            revenue[d] += rate
    return rooms, revenue


def occupancy_by_day(hotel, date_from: date, date_to: date) -> list[dict]:
    rooms, _ = _nightly(hotel, date_from, date_to)
    return [
        {"day": d, "rooms_occupied": len(rooms.get(d, ()))}
        for d in _daterange(date_from, date_to + timedelta(days=1))
    ]


def adr_by_day(hotel, date_from: date, date_to: date) -> list[dict]:
    rooms, revenue = _nightly(hotel, date_from, date_to)
    out = []
    for d in sorted(rooms):
        sold = len(rooms[d])
        if sold:
            out.append({"day": d, "adr": _q2(revenue[d] / sold)})
    return out


def revpar_by_day(hotel, date_from: date, date_to: date) -> list[dict]:
    total_rooms = Room.objects.filter(hotel=hotel).count()
    if not total_rooms:
        return []
    _, revenue = _nightly(hotel, date_from, date_to)
    return [
        {"day": d, "revpar": _q2(revenue.get(d, Decimal("0.00")) / total_rooms)}
        for d in _daterange(date_from, date_to + timedelta(days=1))
    ]


def reservations_with_room(*, hotel=None, client=None):
    qs = Reservation.objects.select_related("room", "client")
    if hotel is not None:
        qs = qs.filter(hotel=hotel)
    if client is not None:
        qs = qs.filter(client=client)
    return qs.order_by("-created_at", "-id")


def room_status_counts(hotel) -> dict:
    counts = {Room.OPEN: 0, Room.CLOSED: 0, Room.MAINTENANCE: 0}
    for row in Room.objects.filter(hotel=hotel).values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    counts["total"] = sum(counts.values())
    return counts


def occupancy_level(rooms_occupied: int, total_rooms: int) -> str:
    if not total_rooms or total_rooms <= 0:
        return LEVEL_NONE
    pct = min(1, rooms_occupied / total_rooms)
    if pct == 0:
        return LEVEL_NONE
    if pct < 0.34:
        return LEVEL_LOW
    if pct < 0.67:
        return LEVEL_MID
    return LEVEL_HIGH


def _avg(values):
    values = list(values)
    if not values:
        return None
    return _q2(sum(values, Decimal("0.00")) / len(values))


def kpi_summary(hotel, date_from: date, date_to: date) -> dict:
    by_day = revenue_by_day(hotel, date_from, date_to)
    occ = occupancy_by_day(hotel, date_from, date_to)
    adr = adr_by_day(hotel, date_from, date_to)
    revpar = revpar_by_day(hotel, date_from, date_to)
    status = room_status_counts(hotel)
    total_rooms = status["total"]

    occ_pct = None
    if occ and total_rooms:
        occupied = sum(o["rooms_occupied"] for o in occ)
        pct = Decimal(occupied) * 100 / Decimal(len(occ) * total_rooms)
        occ_pct = int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    for o in occ:
        o["level"] = occupancy_level(o["rooms_occupied"], total_rooms)

    return {
        "date_from": date_from,
        "date_to": date_to,
        "revenue": sum((r["revenue"] for r in by_day), Decimal("0.00")),
        "occ_pct": occ_pct,
        "adr": _avg(r["adr"] for r in adr),
        "revpar": _avg(r["revpar"] for r in revpar),
        "by_day": by_day,
        "occ_by_day": occ,
        "room_status": status,
    }


def revenue_by_room(hotel, date_from: date, date_to: date) -> list[dict]:
    tz = timezone.get_current_timezone()
    rows = (
        Payment.objects
        .filter(reservation__hotel=hotel, status=Payment.APPROVED)
        .annotate(day=TruncDate("created_at", tzinfo=tz))
        .filter(day__gte=date_from, day__lte=date_to)
        .values("reservation__room_id", "reservation__room__name")
        .annotate(value=Coalesce(Sum("amount"), Decimal("0.00")))
    )
    out = [
        {
            "room_id": r["reservation__room_id"],
            "name": r["reservation__room__name"] or f"Habitación #{r['reservation__room_id']}",
            "value": r["value"],
        }
        for r in rows
    ]
    out.sort(key=lambda x: x["value"], reverse=True)
    return out


def month_bounds(year: int, month: int):
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return first, last


def month_heat(hotel, year: int, month: int) -> list[list]:
    """
    Calendario de calor del mes: semanas lunes..domingo, None fuera del mes.
    """
    first, last = month_bounds(year, month)
    total_rooms = Room.objects.filter(hotel=hotel).count()
    occ = {o["day"]: o["rooms_occupied"] for o in occupancy_by_day(hotel, first, last)}

    weeks = []
    for week in calendar.Calendar(firstweekday=0).monthdatescalendar(year, month):
        row = []
        for d in week:
            if d.month != month:
                row.append(None)
                continue
            n = occ.get(d, 0)
            row.append({"day": d, "rooms_occupied": n, "level": occupancy_level(n, total_rooms)})
        weeks.append(row)
    return weeks
