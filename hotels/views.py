# hotels/views.py
import logging
from datetime import timedelta
from decimal import Decimal

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST
from openpyxl import Workbook
from openpyxl.styles import Font

from accounts.models import Profile
from accounts.utils import role_required
from accounts.views import profile_form_for
from pms.forms import AvailabilityForm
from .forms import InquiryForm, InquiryReplyForm, KpiRangeForm
from .kpi import kpi_summary, month_bounds, month_heat, revenue_by_room
from .models import Inquiry
from .photos import hero_image
from .utils import month_cursor, shift_month, user_hotel

logger = logging.getLogger(__name__)

client_required = role_required(Profile.CLIENT)
admin_required = role_required(Profile.ADMIN)
manager_required = role_required(Profile.MANAGER)


def landing(request):
    today = timezone.localdate()
    search = AvailabilityForm(initial={
        "check_in": today,
        "check_out": today + timedelta(days=1),
        "guests": 2,
    })
    context = {
        "hotel": user_hotel(request.user),
        "hero": hero_image(),
        "search": search,
    }
    return render(request, "hotels/landing.html", context)


# =========================
# Consultas (cliente)
# =========================

@client_required
@require_POST
def inquiry_create(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Hotel no disponible.")
        return redirect("accounts:account")

    form = InquiryForm(request.POST)
    if form.is_valid():
        inquiry = form.save(commit=False)
        inquiry.hotel = hotel
        inquiry.client = request.user
        inquiry.save()
        messages.success(request, "Consulta enviada.")
    else:
        for errors in form.errors.values():
            for e in errors:
                messages.error(request, e)
    return redirect("accounts:account")


@client_required
@require_POST
def inquiry_delete(request, pk: int):
    inquiry = get_object_or_404(Inquiry, pk=pk, client=request.user)
    inquiry.delete()
    messages.success(request, "Consulta eliminada.")
    return redirect("accounts:account")


# =========================
# Panel admin
# =========================

@admin_required
def admin_dashboard(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Tu perfil no tiene hotel asignado.")
        return redirect("hotels:landing")

    range_form = KpiRangeForm(request.GET or None)
    date_from, date_to = range_form.get_range()
    if not range_form.is_bound:
        range_form = KpiRangeForm(initial={"date_from": date_from, "date_to": date_to})

    year, month = month_cursor(request)
    inquiries = Inquiry.objects.filter(hotel=hotel).select_related("client").order_by("-created_at", "-id")

    context = {
        "hotel": hotel,
        "range_form": range_form,
        "kpi": kpi_summary(hotel, date_from, date_to),
        "heat": month_heat(hotel, year, month),
        "cursor": {"year": year, "month": month},
        "prev": dict(zip(("year", "month"), shift_month(year, month, -1))),
        "next": dict(zip(("year", "month"), shift_month(year, month, 1))),
        "inquiries": inquiries,
        "reply_form": InquiryReplyForm(),
        "profile_form": profile_form_for(request.user),
    }
    return render(request, "hotels/admin_dashboard.html", context)


@admin_required
@require_POST
def inquiry_reply(request, pk: int):
    """Con texto guarda la respuesta; vacío solo marca como respondida."""
    inquiry = get_object_or_404(Inquiry, pk=pk, hotel=user_hotel(request.user))
    form = InquiryReplyForm(request.POST)
    text = (form.cleaned_data.get("response") or "").strip() if form.is_valid() else ""

    if text:
        inquiry.response = text
        inquiry.answered = True
        inquiry.save(update_fields=["response", "answered"])
        messages.success(request, "Respuesta enviada.")
    else:
        inquiry.answered = True
        inquiry.save(update_fields=["answered"])
        messages.success(request, "Consulta marcada como respondida.")
    return redirect("hotels:admin_dashboard")


@admin_required
@require_POST
def inquiry_answered(request, pk: int):
    inquiry = get_object_or_404(Inquiry, pk=pk, hotel=user_hotel(request.user))
    inquiry.answered = request.POST.get("answered") in ("1", "true", "on")
    inquiry.save(update_fields=["answered"])
    return redirect("hotels:admin_dashboard")


@admin_required
@require_POST
def inquiry_admin_delete(request, pk: int):
    inquiry = get_object_or_404(Inquiry, pk=pk, hotel=user_hotel(request.user))
    inquiry.delete()
    messages.success(request, "Consulta eliminada.")
    return redirect("hotels:admin_dashboard")


# =========================
# Panel gerente
# =========================

@manager_required
def manager_dashboard(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Tu perfil no tiene hotel asignado.")
        return redirect("hotels:landing")

    year, month = month_cursor(request)
    date_from, date_to = month_bounds(year, month)

    staff = Profile.objects.filter(hotel=hotel).select_related("user").order_by("full_name", "user__email")
    context = {
        "hotel": hotel,
        "cursor": {"year": year, "month": month},
        "prev": dict(zip(("year", "month"), shift_month(year, month, -1))),
        "next": dict(zip(("year", "month"), shift_month(year, month, 1))),
        "kpi": kpi_summary(hotel, date_from, date_to),
        "heat": month_heat(hotel, year, month),
        "by_room": revenue_by_room(hotel, date_from, date_to),
        "staff": staff,
        "role_choices": Profile.ROLE_CHOICES,
        "profile_form": profile_form_for(request.user),
    }
    return render(request, "hotels/manager_dashboard.html", context)


# =========================
# Export Excel
# =========================

def _money_cell(v):
    return float(v) if isinstance(v, Decimal) else v


@role_required(Profile.ADMIN, Profile.MANAGER)
def kpi_export_excel(request):
    hotel = user_hotel(request.user)
    if not hotel:
        messages.error(request, "Tu perfil no tiene hotel asignado.")
        return redirect("hotels:landing")

    date_from, date_to = KpiRangeForm(request.GET or None).get_range()
    kpi = kpi_summary(hotel, date_from, date_to)
    by_room = revenue_by_room(hotel, date_from, date_to)
    revenue = {r["day"]: r["revenue"] for r in kpi["by_day"]}

    wb = Workbook()
    header_font = Font(bold=True)

    # Hoja 1: resumen
    ws1 = wb.active
    ws1.title = "Resumen"
    ws1["A1"] = "Hotel"; ws1["B1"] = hotel.name
    ws1["A2"] = "Período"; ws1["B2"] = f"{date_from} → {date_to}"
    ws1["A4"] = "Ingresos"; ws1["B4"] = _money_cell(kpi["revenue"])
    ws1["A5"] = "Ocupación %"; ws1["B5"] = kpi["occ_pct"] if kpi["occ_pct"] is not None else "—"
    ws1["A6"] = "ADR"; ws1["B6"] = _money_cell(kpi["adr"]) if kpi["adr"] is not None else "—"
    ws1["A7"] = "RevPAR"; ws1["B7"] = _money_cell(kpi["revpar"]) if kpi["revpar"] is not None else "—"
    status = kpi["room_status"]
    ws1["A9"] = "Habitaciones"; ws1["B9"] = status["total"]
    ws1["A10"] = "Abiertas"; ws1["B10"] = status["open"]
    ws1["A11"] = "Cerradas"; ws1["B11"] = status["closed"]
    ws1["A12"] = "Mantenimiento"; ws1["B12"] = status["maintenance"]
    for row in (1, 2, 4, 5, 6, 7, 9, 10, 11, 12):
        ws1[f"A{row}"].font = header_font
    ws1.column_dimensions["A"].width = 18
    ws1.column_dimensions["B"].width = 28

    # Hoja 2: por día
    ws2 = wb.create_sheet("Por día")
    ws2.append(["Día", "Ingresos", "Habitaciones ocupadas", "Nivel"])
    for c in ws2[1]:
        c.font = header_font
    for o in kpi["occ_by_day"]:
        ws2.append([
            o["day"].isoformat(),
            _money_cell(revenue.get(o["day"], Decimal("0.00"))),
            o["rooms_occupied"],
            o["level"],
        ])
    ws2.column_dimensions["A"].width = 14
    ws2.column_dimensions["C"].width = 22

    # Hoja 3: por habitación
    ws3 = wb.create_sheet("Por habitación")
    ws3.append(["Habitación", "Ingresos"])
    for c in ws3[1]:
        c.font = header_font
    for r in by_room:
        ws3.append([r["name"], _money_cell(r["value"])])
    ws3.column_dimensions["A"].width = 28

    filename = f"kpi_{hotel.id}_{date_from:%Y%m%d}_{date_to:%Y%m%d}.xlsx"
    resp = HttpResponse(content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    wb.save(resp)
    logger.info("Export KPI %s (%s → %s) por %s", hotel, date_from, date_to, request.user)
    return resp
