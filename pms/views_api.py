# pms/views_api.py
"""
Endpoints JSON de los dos procedimientos de reserva, con los nombres de
parámetros p_* que usa el front.
"""
import json
import logging
from datetime import datetime

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from hotels.models import Hotel
from .models import Room, Payment
from .services import ReservationError, confirm_reservation, get_available_rooms

logger = logging.getLogger(__name__)


def _error(message: str, status: int = 400) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def _date(value, name):
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ReservationError(f"Fecha inválida en {name}.")


def _int(value, name, default=None):
    if value in (None, ""):
        if default is not None:
            return default
        raise ReservationError(f"Falta el parámetro {name}.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ReservationError(f"Valor inválido en {name}.")


def _room_json(room: Room) -> dict:
    return {
        "id": room.id,
        "hotel_id": room.hotel_id,
        "name": room.name,
        "description": room.description,
        "capacity": room.capacity,
        "base_price": str(room.base_price),
        "status": room.status,
    }


@require_GET
def available_rooms(request):
    if not request.user.is_authenticated:
        return _error("Debes iniciar sesión", status=403)

    p = request.GET
    try:
        hotel_id = _int(p.get("p_hotel_id"), "p_hotel_id")
        check_in = _date(p.get("p_check_in"), "p_check_in")
        check_out = _date(p.get("p_check_out"), "p_check_out")
        guests = _int(p.get("p_guests"), "p_guests", default=1)
    except ReservationError as e:
        return _error(str(e))

    hotel = Hotel.objects.filter(pk=hotel_id).first()
    if hotel is None:
        return _error("Hotel no disponible", status=404)

    try:
        rooms = get_available_rooms(hotel=hotel, check_in=check_in, check_out=check_out, guests=guests)
    except ReservationError as e:
        return _error(str(e))

    return JsonResponse([_room_json(r) for r in rooms], safe=False)


@require_POST
def confirm(request):
    if not request.user.is_authenticated:
        return _error("Debes iniciar sesión", status=403)

    if request.content_type == "application/json":
        try:
            p = json.loads(request.body or b"{}")
        except ValueError:
            return _error("JSON inválido")
        if not isinstance(p, dict):
            return _error("JSON inválido")
    else:
        p = request.POST

    try:
        hotel_id = _int(p.get("p_hotel_id"), "p_hotel_id")
        client_id = _int(p.get("p_client_id"), "p_client_id", default=request.user.id)
        room_id = _int(p.get("p_room_id"), "p_room_id")
        check_in = _date(p.get("p_check_in"), "p_check_in")
        check_out = _date(p.get("p_check_out"), "p_check_out")
        guests = _int(p.get("p_guests"), "p_guests", default=1)
    except ReservationError as e:
        return _error(str(e))

    provider = p.get("p_provider") or Payment.PROVIDER_MOCK
    if not isinstance(provider, str) or provider not in dict(Payment.PROVIDER_CHOICES):
        return _error("Medio de pago inválido")

    # solo se reserva a nombre propio
    if client_id != request.user.id:
        return _error("No podés reservar a nombre de otro usuario", status=403)

    hotel = Hotel.objects.filter(pk=hotel_id).first()
    if hotel is None:
        return _error("Hotel no disponible", status=404)
    room = Room.objects.filter(pk=room_id).first()
    if room is None:
        return _error("Habitación no encontrada", status=404)

    try:
        created = confirm_reservation(
            hotel=hotel,
            client=request.user,
            room=room,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            provider=provider,
        )
    except ReservationError as e:
        logger.info("confirm_reservation rechazado (%s): %s", request.user.get_username(), e)
        return _error(str(e))

    return JsonResponse([{
        "reservation_id": created["reservation_id"],
        "payment_id": created["payment_id"],
        "total_amount": str(created["total_amount"]),
    }], safe=False)


@csrf_exempt
def send_booking_email(request):
    """Función de email de reservas: deshabilitada."""
    return JsonResponse(
        {
            "version": "disabled",
            "ok": False,
            "disabled": True,
            "reason": "send-booking-email disabled",
        },
        status=410,
    )
