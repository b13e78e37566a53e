# pms/services.py
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Q

from hotels.utils import in_calendar
from .models import Room, Reservation, Payment

logger = logging.getLogger(__name__)


class ReservationError(Exception):
    """Reserva inválida: fechas, huéspedes, habitación o estado."""
    pass


class ReservationConflictError(ReservationError):
    """Superposición de reservas activas para la misma habitación."""
    pass


SIMULATED_RESULTS = (Payment.APPROVED, Payment.REJECTED)


def _money(v) -> Decimal:
    if v is None:
        return Decimal("0.00")
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def _period_overlap_q(check_in, check_out):
    # superposición: A.start < B.end AND A.end > B.start
    return Q(check_in__lt=check_out) & Q(check_out__gt=check_in)


def _daterange(start: date, end: date):
    cur = start
    while cur < end:
        yield cur
        cur += timedelta(days=1)


def nights_between(check_in: date, check_out: date) -> int:
    d = (check_out - check_in).days
    return d if d > 0 else 1


def booking_code(reservation: Reservation) -> str:
    return f"RESV-{reservation.check_in:%Y%m%d}-{reservation.id}"


def validate_stay(check_in: date, check_out: date, guests) -> int:
    if not check_in or not check_out:
        raise ReservationError("Seleccioná las fechas de check-in y check-out.")
    if not (in_calendar(check_in) and in_calendar(check_out)):
        raise ReservationError("Fecha fuera de rango.")
    if check_out <= check_in:
        raise ReservationError("La fecha de salida debe ser posterior al check-in.")
    guests = int(guests or 0)
    if guests < 1:
        raise ReservationError("La cantidad de huéspedes debe ser al menos 1.")
    return guests


def assert_no_overlap(*, room: Room, check_in: date, check_out: date, exclude_id: Optional[int] = None):
    qs = Reservation.objects.filter(room=room, status__in=Reservation.ACTIVE_STATUSES)
    qs = qs.filter(_period_overlap_q(check_in, check_out))
    if exclude_id:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        logger.warning("Conflicto de reserva: habitación %s, %s → %s", room.id, check_in, check_out)
        raise ReservationConflictError(f"La habitación {room.name} ya está reservada en las fechas elegidas.")


def open_rooms(hotel, guests=1):
    guests = max(1, int(guests or 1))
    return Room.objects.filter(hotel=hotel, status=Room.OPEN, capacity__gte=guests).order_by("id")


def get_available_rooms(*, hotel, check_in: date, check_out: date, guests=1):
    """
    Habitaciones abiertas del hotel, con capacidad suficiente y sin reservas
    activas que se superpongan con el rango.
    """
    if not (in_calendar(check_in) and in_calendar(check_out)):
        raise ReservationError("Fecha fuera de rango.")
    if check_out <= check_in:
        raise ReservationError("La fecha de salida debe ser posterior al check-in.")

    busy = (
        Reservation.objects
        .filter(hotel=hotel, status__in=Reservation.ACTIVE_STATUSES)
        .filter(_period_overlap_q(check_in, check_out))
        .values("room_id")
    )
    return open_rooms(hotel, guests).exclude(id__in=busy)


@transaction.atomic
def confirm_reservation(
    *,
    hotel,
    client,
    room: Room,
    check_in: date,
    check_out: date,
    guests,
    provider: str = Payment.PROVIDER_MOCK,
    guest_name: str = "",
    guest_phone: str = "",
    notes: str = "",
) -> dict:
    """
    Reserva + pago en una sola transacción:
    - bloquea la habitación (select_for_update) y revalida disponibilidad
    - calcula el total por noche con el precio vigente
    - crea Reservation(pending) y Payment(pending)
    """
    guests = validate_stay(check_in, check_out, guests)

    room = Room.objects.select_for_update().get(pk=room.pk)
    if room.hotel_id != hotel.id:
        raise ReservationError("La habitación no pertenece al hotel.")
    if room.status != Room.OPEN:
        raise ReservationError(f"La habitación {room.name} no está disponible.")
    if guests > room.capacity:
        raise ReservationError(f"La habitación {room.name} admite hasta {room.capacity} huéspedes.")

    assert_no_overlap(room=room, check_in=check_in, check_out=check_out)

    nights = (check_out - check_in).days
    total = _money(room.base_price) * nights

    reservation = Reservation.objects.create(
        hotel=hotel,
        room=room,
        client=client,
        check_in=check_in,
        check_out=check_out,
        guests=guests,
        total_amount=total,
        status=Reservation.PENDING,
        guest_name=(guest_name or "").strip(),
        guest_phone=guest_phone or "",
        notes=notes or "",
    )
    payment = Payment.objects.create(
        reservation=reservation,
        client=client,
        provider=provider or Payment.PROVIDER_MOCK,
        amount=total,
        status=Payment.PENDING,
    )
    logger.info(
        "Reserva #%s creada: habitación %s, %s → %s, total %s (pago #%s)",
        reservation.id, room.id, check_in, check_out, total, payment.id,
    )
    return {
        "reservation_id": reservation.id,
        "payment_id": payment.id,
        "total_amount": total,
    }


@transaction.atomic
def settle_payment(*, payment: Payment, result: str) -> Payment:
    """
    Resultado simulado del proveedor:
    - approved: pago aprobado + reserva confirmada
    - rejected: pago rechazado, la reserva sigue pendiente (permite reintentar)
    """
    if result not in SIMULATED_RESULTS:
        raise ReservationError(f"Resultado de pago desconocido: {result}")

    payment.status = result
    payment.save(update_fields=["status"])

    if result == Payment.APPROVED:
        reservation = payment.reservation
        reservation.status = Reservation.CONFIRMED
        reservation.save(update_fields=["status"])

    logger.info("Pago #%s %s (reserva #%s)", payment.id, result, payment.reservation_id)
    return payment


@transaction.atomic
def set_payment_status(*, payment: Payment, status: str) -> Payment:
    if status not in (Payment.APPROVED, Payment.REJECTED):
        raise ReservationError(f"Estado de pago inválido: {status}")
    payment.status = status
    payment.save(update_fields=["status"])
    logger.info("Pago #%s -> %s", payment.id, status)
    return payment


@transaction.atomic
def set_reservation_status(*, reservation: Reservation, status: str) -> Reservation:
    valid = {code for code, _ in Reservation.STATUS_CHOICES}
    if status not in valid:
        raise ReservationError(f"Estado de reserva inválido: {status}")

    # volver a un estado activo exige que la habitación siga libre
    if status in Reservation.ACTIVE_STATUSES and not reservation.is_active:
        room = Room.objects.select_for_update().get(pk=reservation.room_id)
        assert_no_overlap(
            room=room,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            exclude_id=reservation.id,
        )

    reservation.status = status
    reservation.save(update_fields=["status"])
    logger.info("Reserva #%s -> %s", reservation.id, status)
    return reservation


def occupied_dates(room) -> list[str]:
    """
    Días bloqueados para el calendario del checkout (check-in y check-out inclusive).
    """
    days = set()
    rows = Reservation.objects.filter(room=room, status__in=Reservation.ACTIVE_STATUSES).values_list("check_in", "check_out")
    for check_in, check_out in rows:
        for d in _daterange(check_in, check_out + timedelta(days=1)):
            days.add(d.isoformat())
    return sorted(days)


def _month_range(year: int, month: int):
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def month_occupancy(*, hotel, year: int, month: int) -> dict:
    """
    room_id -> días ocupados del mes (ISO), para el mini calendario del admin.
    Cuentan pendientes y confirmadas.
    """
    start, end = _month_range(year, month)
    last = end - timedelta(days=1)

    qs = (
        Reservation.objects
        .filter(hotel=hotel, status__in=[Reservation.CONFIRMED, Reservation.PENDING])
        .filter(check_in__lte=last, check_out__gte=start)
        .values_list("room_id", "check_in", "check_out")
    )
    by_room = defaultdict(set)
    for room_id, check_in, check_out in qs:
        s = max(check_in, start)
        e = min(check_out, last)
        for d in _daterange(s, e + timedelta(days=1)):
            by_room[room_id].add(d.isoformat())
    return {room_id: sorted(days) for room_id, days in by_room.items()}
