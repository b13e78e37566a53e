from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone

from .models import Hotel

# margen para sumar/restar días y meses sin salir del calendario
MIN_YEAR = 2
MAX_YEAR = 9998


def in_calendar(d) -> bool:
    return d is not None and MIN_YEAR <= d.year <= MAX_YEAR


def validate_calendar_date(value):
    if value and not in_calendar(value):
        raise ValidationError("Fecha fuera de rango.")


def default_hotel():
    return Hotel.objects.filter(name=settings.DEFAULT_HOTEL_NAME).order_by("id").first()


def user_hotel(user):
    """
    Hotel con el que trabaja el usuario:
    - el del perfil, si tiene
    - si no, el hotel por defecto (por nombre)
    """
    profile = getattr(user, "profile", None) if getattr(user, "is_authenticated", False) else None
    if profile and profile.hotel_id:
        return profile.hotel
    return default_hotel()


def month_cursor(request):
    """(año, mes) desde ?year=&month=, o el mes actual."""
    today = timezone.localdate()
    try:
        year = int(request.GET.get("year") or today.year)
        month = int(request.GET.get("month") or today.month)
    except ValueError:
        return today.year, today.month
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        return today.year, today.month
    return year, month


def shift_month(year: int, month: int, delta: int):
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1
