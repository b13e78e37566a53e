# pms/views.py
import json
import logging
from datetime import datetime, date, timedelta

from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone

from accounts.models import Profile
from accounts.utils import get_profile, role_required
from hotels.photos import room_photos, room_thumbnail, room_amenities
from hotels.utils import in_calendar, user_hotel
from .forms import AvailabilityForm, CheckoutForm
from .models import Room, Reservation, Payment
from .services import (
    ReservationError,
    booking_code,
    confirm_reservation,
    get_available_rooms,
    nights_between,
    occupied_dates,
    open_rooms,
    settle_payment,
)

logger = logging.getLogger(__name__)


def _parse_date(s: str) -> date | None:
    try:
        d = datetime.strptime(s, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None
    return d if in_calendar(d) else None


def _parse_guests(s) -> int:
    try:
        return max(1, int(s))
    except (TypeError, ValueError):
        return 1


def rooms(request):
    """
    Listado de habitaciones. Con fechas válidas solo muestra las disponibles;
    sin fechas (o inválidas) muestra todas las abiertas que admiten los huéspedes.
    """
    hotel = user_hotel(request.user)
    form = AvailabilityForm(request.GET or None)

    check_in = check_out = None
    guests = 1
    if form.is_bound:
        # con datos inválidos se usa lo que haya limpiado el form
        form.is_valid()
        check_in = form.cleaned_data.get("check_in")
        check_out = form.cleaned_data.get("check_out")
        guests = form.cleaned_data.get("guests") or 1

    items = []
    filtered = False
    if hotel:
        if check_in and check_out and check_out > check_in:
            try:
                qs = get_available_rooms(hotel=hotel, check_in=check_in, check_out=check_out, guests=guests)
                filtered = True
            except ReservationError as e:
                messages.error(request, str(e))
                qs = open_rooms(hotel, guests)
        else:
            qs = open_rooms(hotel, guests)

        for room in qs:
            items.append({"room": room, "thumbnail": room_thumbnail(room.id)})

    context = {
        "hotel": hotel,
        "form": form,
        "items": items,
        "filtered": filtered,
        "check_in": check_in,
        "check_out": check_out,
        "guests": guests,
    }
    return render(request, "pms/rooms.html", context)


def room_detail(request, pk: int):
    room = get_object_or_404(Room.objects.select_related("hotel"), pk=pk)

    today = timezone.localdate()
    check_in = _parse_date(request.GET.get("check_in", "")) or today
    check_out = _parse_date(request.GET.get("check_out", "")) or check_in + timedelta(days=1)
    if check_out < check_in:
        check_out = check_in
    guests = min(_parse_guests(request.GET.get("guests")), room.capacity)

    nights = nights_between(check_in, check_out)
    context = {
        "room": room,
        "photos": room_photos(room.id),
        "amenities": room_amenities(room.id),
        "check_in": check_in,
        "check_out": check_out,
        "guests": guests,
        "nights": nights,
        "estimate": room.base_price * nights,
        "occupied_json": json.dumps(occupied_dates(room)),
    }
    return render(request, "pms/room_detail.html", context)


@role_required(Profile.CLIENT)
def checkout(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Hotel no disponible.")
        return redirect("pms:rooms")

    if request.method == "POST":
        form = CheckoutForm(request.POST, hotel=hotel)
        if form.is_valid():
            cd = form.cleaned_data
            try:
                created = confirm_reservation(
                    hotel=hotel,
                    client=request.user,
                    room=cd["room"],
                    check_in=cd["check_in"],
                    check_out=cd["check_out"],
                    guests=cd["guests"],
                    provider=cd["provider"],
                    guest_name=cd["guest_name"],
                    guest_phone=cd["guest_phone"],
                    notes=cd["notes"],
                )
                payment = Payment.objects.select_related("reservation").get(pk=created["payment_id"])
                settle_payment(payment=payment, result=cd["simulate_result"])
            except ReservationError as e:
                logger.info("Checkout de %s no confirmado: %s", request.user.get_username(), e)
                form.add_error(None, str(e))
            else:
                return redirect("pms:checkout_result", pk=created["reservation_id"])
    else:
        initial = _checkout_initial(request, hotel)
        form = CheckoutForm(initial=initial, hotel=hotel)

    room = None
    room_id = form["room"].value()
    if room_id and str(room_id).isdigit():
        room = Room.objects.filter(pk=room_id, hotel=hotel).first()

    context = {
        "form": form,
        "hotel": hotel,
        "room": room,
        "occupied_json": json.dumps(occupied_dates(room) if room else []),
    }
    return render(request, "pms/checkout.html", context)


def _checkout_initial(request, hotel) -> dict:
    today = timezone.localdate()
    check_in = _parse_date(request.GET.get("check_in", "")) or today
    check_out = _parse_date(request.GET.get("check_out", "")) or check_in + timedelta(days=1)
    if check_out <= check_in:
        check_out = check_in + timedelta(days=1)
    guests = _parse_guests(request.GET.get("guests"))

    profile = get_profile(request.user)
    initial = {
        "check_in": check_in,
        "check_out": check_out,
        "guests": guests,
        "guest_name": (profile.full_name if profile else "") or request.user.get_full_name(),
        "provider": Payment.PROVIDER_MOCK,
        "simulate_result": Payment.APPROVED,
    }

    candidates = list(get_available_rooms(hotel=hotel, check_in=check_in, check_out=check_out, guests=guests))
    wanted = request.GET.get("room") or ""
    chosen = None
    if wanted:
        chosen = next((r for r in candidates if str(r.id) == str(wanted)), None)
        if chosen is None:
            messages.error(
                request,
                "La habitación preseleccionada no está disponible para los parámetros actuales. "
                "Seleccioná otra disponible.",
            )
    if chosen is None and candidates:
        chosen = candidates[0]
    if chosen is not None:
        initial["room"] = chosen.pk
        initial["guests"] = min(guests, chosen.capacity)
    return initial


@role_required(Profile.CLIENT)
def checkout_result(request, pk: int):
    reservation = get_object_or_404(
        Reservation.objects.select_related("room", "hotel"), pk=pk, client=request.user
    )
    payment = reservation.payments.order_by("-created_at", "-id").first()
    context = {
        "reservation": reservation,
        "payment": payment,
        "code": booking_code(reservation),
        "approved": payment is not None and payment.status == Payment.APPROVED,
        "rooms_url": reverse("pms:rooms"),
    }
    return render(request, "pms/checkout_result.html", context)
