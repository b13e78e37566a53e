import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from hotels.forms import InquiryForm
from hotels.kpi import reservations_with_room
from hotels.models import Inquiry
from hotels.utils import user_hotel
from pms.models import Payment
from pms.services import booking_code
from .forms import ProfileForm, RoleForm, SignInForm, SignUpForm
from .models import Profile
from .utils import ensure_profile, role_required

logger = logging.getLogger(__name__)


def _next_url(request, default="hotels:landing"):
    nxt = request.POST.get("next") or request.GET.get("next") or ""
    if nxt and url_has_allowed_host_and_scheme(nxt, allowed_hosts={request.get_host()}):
        return nxt
    return default


def _home_for(user):
    profile = getattr(user, "profile", None)
    role = profile.role if profile else Profile.CLIENT
    if role == Profile.ADMIN:
        return "hotels:admin_dashboard"
    if role == Profile.MANAGER:
        return "hotels:manager_dashboard"
    return "hotels:landing"


def signup(request):
    if request.user.is_authenticated:
        return redirect("hotels:landing")

    if request.method == "POST":
        form = SignUpForm(request.POST)
        if form.is_valid():
            user = form.save()
            # user_logged_in crea el perfil
            login(request, user)
            logger.info("Alta de cuenta: %s", user.email)
            messages.success(request, "Cuenta creada. ¡Bienvenido!")
            return redirect(_next_url(request))
    else:
        form = SignUpForm()

    return render(request, "accounts/signup.html", {"form": form})


def signin(request):
    if request.method == "POST":
        form = SignInForm(request.POST, request=request)
        if form.is_valid():
            login(request, form.user)
            return redirect(_next_url(request, default=_home_for(form.user)))
    else:
        form = SignInForm(request=request)

    return render(request, "accounts/signin.html", {"form": form, "next": request.GET.get("next", "")})


@require_POST
def signout(request):
    logout(request)
    return redirect("hotels:landing")


@login_required
@require_POST
def profile_save(request):
    """Nombre y email del usuario (todos los roles)."""
    user = request.user
    profile = ensure_profile(user)
    form = ProfileForm(request.POST, user=user)
    if form.is_valid():
        cd = form.cleaned_data
        with transaction.atomic():
            profile.full_name = cd["full_name"]
            profile.save(update_fields=["full_name"])
            user.email = cd["email"]
            user.username = cd["email"]
            user.first_name = cd["full_name"][:150]
            user.save(update_fields=["email", "username", "first_name"])
        messages.success(request, "Perfil actualizado.")
    else:
        for errors in form.errors.values():
            for e in errors:
                messages.error(request, e)
    return redirect(_next_url(request, default=_home_for(user)))


def profile_form_for(user):
    profile = getattr(user, "profile", None)
    return ProfileForm(
        user=user,
        initial={"full_name": profile.full_name if profile else "", "email": user.email},
    )


@role_required(Profile.CLIENT)
def account(request):
    user = request.user
    hotel = user_hotel(user)

    rows = []
    reservations = reservations_with_room(client=user).prefetch_related("payments")
    for r in reservations:
        payments = sorted(r.payments.all(), key=lambda p: (p.created_at, p.id), reverse=True)
        last = payments[0] if payments else None
        rows.append({
            "r": r,
            "code": booking_code(r),
            "room_name": r.room.name or f"Habitación #{r.room_id}",
            "payment_status": last.status if last else Payment.PENDING,
            "payment_amount": last.amount if last else r.total_amount,
        })

    inquiries = Inquiry.objects.filter(client=user).order_by("-created_at", "-id")
    context = {
        "hotel": hotel,
        "rows": rows,
        "inquiries": inquiries,
        "inquiry_form": InquiryForm(),
        "profile_form": profile_form_for(user),
    }
    return render(request, "accounts/account.html", context)


@role_required(Profile.MANAGER)
@require_POST
def staff_role(request, user_id: int):
    manager_hotel = user_hotel(request.user)
    if manager_hotel is None:
        messages.error(request, "Tu perfil no tiene hotel asignado.")
        return redirect("hotels:landing")
    member = get_object_or_404(Profile, user_id=user_id, hotel=manager_hotel)
    form = RoleForm(request.POST)
    if form.is_valid():
        member.role = form.cleaned_data["role"]
        member.save(update_fields=["role"])
        logger.info("Rol de %s -> %s (por %s)", member.user, member.role, request.user)
        messages.success(request, f"Rol actualizado: {member.get_role_display()}.")
    else:
        messages.error(request, "Rol inválido.")
    return redirect("hotels:manager_dashboard")
