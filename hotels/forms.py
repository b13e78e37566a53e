from datetime import timedelta

from django import forms
from django.utils import timezone

from .models import Inquiry
from .utils import validate_calendar_date

DATE_WIDGET = {"type": "date"}


class InquiryForm(forms.ModelForm):
    class Meta:
        model = Inquiry
        fields = ["subject", "message"]
        widgets = {
            "message": forms.Textarea(attrs={"rows": 4}),
        }

    def clean_subject(self):
        subject = (self.cleaned_data.get("subject") or "").strip()
        if not subject:
            raise forms.ValidationError("Ingresá un asunto.")
        return subject

    def clean_message(self):
        message = (self.cleaned_data.get("message") or "").strip()
        if not message:
            raise forms.ValidationError("Escribí tu consulta.")
        return message


class InquiryReplyForm(forms.Form):
    response = forms.CharField(label="Respuesta", required=False, widget=forms.Textarea(attrs={"rows": 3}))


class KpiRangeForm(forms.Form):
    date_from = forms.DateField(label="Desde", required=False, validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))
    date_to = forms.DateField(label="Hasta", required=False, validators=[validate_calendar_date], widget=forms.DateInput(attrs=DATE_WIDGET, format="%Y-%m-%d"))

    def get_range(self):
        """(desde, hasta): por defecto los últimos 30 días; invierte si vienen al revés."""
        today = timezone.localdate()
        data = self.cleaned_data if self.is_valid() else {}
        date_to = data.get("date_to") or today
        date_from = data.get("date_from") or date_to - timedelta(days=30)
        if date_from > date_to:
            date_from, date_to = date_to, date_from
        return date_from, date_to
