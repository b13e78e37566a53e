import logging
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from hotels.utils import default_hotel
from .models import Profile

logger = logging.getLogger(__name__)


def ensure_profile(user) -> Profile:
    """
    Perfil al primer ingreso:
    - si no existe: rol client + hotel por defecto
    - si existe sin hotel: se le asigna el hotel por defecto (para cualquier rol)
    """
    hotel = default_hotel()
    profile, created = Profile.objects.get_or_create(
        user=user,
        defaults={
            "role": Profile.CLIENT,
            "full_name": user.get_full_name() or "",
            "hotel": hotel,
        },
    )
    if created:
        logger.info("Perfil creado para %s (hotel=%s)", user.get_username(), hotel)
    elif not profile.hotel_id and hotel:
        profile.hotel = hotel
        profile.save(update_fields=["hotel"])
        logger.info("Perfil de %s asociado al hotel %s", user.get_username(), hotel)
    return profile


def get_profile(user):
    if not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "profile", None)


def role_required(*roles):
    """
    Guard de rutas:
    - anónimo -> login
    - rol fuera de `roles` -> inicio
    """
    def decorator(view):
        @wraps(view)
        def wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_login(request.get_full_path())
            profile = get_profile(request.user) or ensure_profile(request.user)
            if roles and profile.role not in roles:
                return redirect("hotels:landing")
            return view(request, *args, **kwargs)
        return wrapped
    return decorator
