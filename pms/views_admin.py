# pms/views_admin.py
import calendar
import logging

from django.contrib import messages
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.models import Profile
from accounts.utils import role_required
from hotels.kpi import reservations_with_room
from hotels.photos import ensure_room_folder
from hotels.utils import month_cursor, shift_month, user_hotel
from .forms import RoomForm
from .models import Room, Reservation, Payment
from .services import (
    ReservationError,
    booking_code,
    month_occupancy,
    set_payment_status,
    set_reservation_status,
)

logger = logging.getLogger(__name__)

admin_required = role_required(Profile.ADMIN)


def _hotel_or_redirect(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Tu perfil no tiene hotel asignado.")
    return hotel


# =========================
# Habitaciones
# =========================

@admin_required
def room_list(request):
    hotel = _hotel_or_redirect(request)
    if not hotel:
        return redirect("hotels:landing")

    if request.method == "POST":
        form = RoomForm(request.POST)
        if form.is_valid():
            room = form.save(commit=False)
            room.hotel = hotel
            room.save()
            ensure_room_folder(room.id)
            logger.info("Habitación #%s creada en %s", room.id, hotel)
            messages.success(request, "Habitación creada.")
            return redirect("pms:admin_rooms")
    else:
        form = RoomForm(initial={"capacity": 2, "base_price": 100, "status": Room.OPEN})

    rooms = Room.objects.filter(hotel=hotel).order_by("-created_at", "-id")
    return render(request, "pms/admin/rooms.html", {"hotel": hotel, "form": form, "rooms": rooms})


@admin_required
def room_edit(request, pk: int):
    hotel = user_hotel(request.user)
    room = get_object_or_404(Room, pk=pk, hotel=hotel)

    if request.method == "POST":
        form = RoomForm(request.POST, instance=room)
        if form.is_valid():
            form.save()
            messages.success(request, "Guardado.")
            return redirect("pms:admin_rooms")
    else:
        form = RoomForm(instance=room)

    return render(request, "pms/admin/room_form.html", {"form": form, "room": room})


@admin_required
@require_POST
def room_toggle(request, pk: int):
    hotel = user_hotel(request.user)
    room = get_object_or_404(Room, pk=pk, hotel=hotel)
    room.status = Room.CLOSED if room.status == Room.OPEN else Room.OPEN
    room.save(update_fields=["status"])
    messages.success(request, f"{room.name}: {room.get_status_display()}.")
    return redirect("pms:admin_rooms")


@admin_required
@require_POST
def room_delete(request, pk: int):
    hotel = user_hotel(request.user)
    room = get_object_or_404(Room, pk=pk, hotel=hotel)
    try:
        room.delete()
    except ProtectedError:
        messages.error(request, f"No se puede eliminar {room.name}: tiene reservas asociadas.")
        return redirect("pms:admin_rooms")

    logger.info("Habitación #%s eliminada", pk)
    messages.success(request, "Habitación eliminada.")
    return redirect("pms:admin_rooms")


# =========================
# Reservas y pagos
# =========================

@admin_required
def reservation_list(request):
    hotel = _hotel_or_redirect(request)
    if not hotel:
        return redirect("hotels:landing")

    status = (request.GET.get("status") or "").strip()
    qs = reservations_with_room(hotel=hotel)
    if status:
        qs = qs.filter(status=status)

    rows = [{"r": r, "code": booking_code(r)} for r in qs]
    context = {
        "hotel": hotel,
        "rows": rows,
        "status": status,
        "status_choices": Reservation.STATUS_CHOICES,
    }
    return render(request, "pms/admin/reservations.html", context)


@admin_required
@require_POST
def reservation_status(request, pk: int):
    hotel = user_hotel(request.user)
    reservation = get_object_or_404(Reservation, pk=pk, hotel=hotel)
    try:
        set_reservation_status(reservation=reservation, status=request.POST.get("status", ""))
        messages.success(request, f"Reserva #{reservation.id}: {reservation.get_status_display()}.")
    except ReservationError as e:
        messages.error(request, str(e))
    return redirect("pms:admin_reservations")


@admin_required
def payment_list(request):
    hotel = _hotel_or_redirect(request)
    if not hotel:
        return redirect("hotels:landing")

    payments = (
        Payment.objects
        .filter(reservation__hotel=hotel)
        .select_related("reservation", "reservation__room", "client")
        .order_by("-created_at", "-id")
    )
    return render(request, "pms/admin/payments.html", {"hotel": hotel, "payments": payments})


@admin_required
@require_POST
def payment_status(request, pk: int):
    hotel = user_hotel(request.user)
    payment = get_object_or_404(Payment, pk=pk, reservation__hotel=hotel)
    try:
        set_payment_status(payment=payment, status=request.POST.get("status", ""))
        messages.success(request, f"Pago #{payment.id}: {payment.get_status_display()}.")
    except ReservationError as e:
        messages.error(request, str(e))
    return redirect("pms:admin_payments")


# =========================
# Ocupación mensual
# =========================

@admin_required
def occupancy(request):
    hotel = _hotel_or_redirect(request)
    if not hotel:
        return redirect("hotels:landing")

    year, month = month_cursor(request)
    occ = month_occupancy(hotel=hotel, year=year, month=month)

    # semanas lunes..domingo, 0 = celda vacía
    weeks = calendar.Calendar(firstweekday=0).monthdayscalendar(year, month)

    rooms = []
    for room in Room.objects.filter(hotel=hotel).order_by("id"):
        days = set(occ.get(room.id, []))
        grid = [
            [
                {"day": d, "occupied": bool(d) and f"{year:04d}-{month:02d}-{d:02d}" in days}
                for d in week
            ]
            for week in weeks
        ]
        rooms.append({"room": room, "weeks": grid, "count": len(days)})

    prev_y, prev_m = shift_month(year, month, -1)
    next_y, next_m = shift_month(year, month, 1)
    context = {
        "hotel": hotel,
        "year": year,
        "month": month,
        "rooms": rooms,
        "prev": {"year": prev_y, "month": prev_m},
        "next": {"year": next_y, "month": next_m},
    }
    return render(request, "pms/admin/occupancy.html", context)
