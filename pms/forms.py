import re

from django import forms

from hotels.utils import validate_calendar_date
from .models import Room, Payment
from .services import SIMULATED_RESULTS

DATE_WIDGET = {"type": "date"}


class AvailabilityForm(forms.Form):
    check_in = forms.DateField(label="Check-in", required=False, validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))
    check_out = forms.DateField(label="Check-out", required=False, validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))
    guests = forms.IntegerField(label="Huéspedes", required=False, min_value=1, initial=1)

    def clean_guests(self):
        return max(1, self.cleaned_data.get("guests") or 1)

    def clean(self):
        cleaned = super().clean()
        ci = cleaned.get("check_in")
        co = cleaned.get("check_out")
        # salida anterior al ingreso: se mueve al ingreso
        if ci and co and co < ci:
            cleaned["check_out"] = ci
        return cleaned


class CheckoutForm(forms.Form):
    guest_name = forms.CharField(label="Nombre y apellido", max_length=180)
    guest_phone = forms.CharField(label="Teléfono", max_length=40, required=False)
    check_in = forms.DateField(label="Check-in", validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))
    check_out = forms.DateField(label="Check-out", validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))
    guests = forms.IntegerField(label="Huéspedes", min_value=1, initial=1)
    room = forms.ModelChoiceField(label="Habitación", queryset=Room.objects.none(), empty_label=None)
    notes = forms.CharField(label="Comentarios", required=False, widget=forms.Textarea(attrs={"rows": 3}))
    provider = forms.ChoiceField(label="Medio de pago", choices=Payment.PROVIDER_CHOICES, initial=Payment.PROVIDER_MOCK)
    simulate_result = forms.ChoiceField(
        label="Resultado simulado",
        choices=[(r, dict(Payment.STATUS_CHOICES)[r]) for r in SIMULATED_RESULTS],
        initial=Payment.APPROVED,
    )

    def __init__(self, *args, hotel=None, **kwargs):
        super().__init__(*args, **kwargs)
        qs = Room.objects.filter(status=Room.OPEN).order_by("id")
        if hotel is not None:
            qs = qs.filter(hotel=hotel)
        self.fields["room"].queryset = qs

    def clean_guest_name(self):
        name = (self.cleaned_data.get("guest_name") or "").strip()
        if len(name) < 2:
            raise forms.ValidationError("Ingresá tu nombre y apellido.")
        return name

    def clean_guest_phone(self):
        # solo dígitos
        return re.sub(r"\D+", "", self.cleaned_data.get("guest_phone") or "")

    def clean(self):
        cleaned = super().clean()
        ci = cleaned.get("check_in")
        co = cleaned.get("check_out")
        if ci and co and co <= ci:
            self.add_error("check_out", "La fecha de salida debe ser posterior al check-in.")

        room = cleaned.get("room")
        guests = cleaned.get("guests")
        if room and guests and guests > room.capacity:
            cleaned["guests"] = room.capacity
        return cleaned


class RoomForm(forms.ModelForm):
    class Meta:
        model = Room
        fields = ["name", "description", "capacity", "base_price", "status"]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3}),
        }
