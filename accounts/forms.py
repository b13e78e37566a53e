from django import forms
from django.contrib.auth import authenticate, get_user_model, password_validation
from django.core.validators import validate_email

from .models import Profile

User = get_user_model()


def _email_taken(email: str, exclude_pk=None) -> bool:
    qs = User.objects.filter(email__iexact=email) | User.objects.filter(username__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


class SignUpForm(forms.Form):
    full_name = forms.CharField(label="Nombre completo", max_length=150)
    email = forms.CharField(label="Email", max_length=150)
    password = forms.CharField(label="Contraseña", widget=forms.PasswordInput)

    def clean_full_name(self):
        name = (self.cleaned_data.get("full_name") or "").strip()
        if not name:
            raise forms.ValidationError("Ingresá tu nombre completo.")
        return name

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        try:
            validate_email(email)
        except forms.ValidationError:
            raise forms.ValidationError("Ingresá un email válido.")
        if _email_taken(email):
            raise forms.ValidationError("Ya existe una cuenta con ese email.")
        return email

    def clean_password(self):
        password = self.cleaned_data.get("password") or ""
        password_validation.validate_password(password)
        return password

    def save(self):
        cd = self.cleaned_data
        return User.objects.create_user(
            username=cd["email"],
            email=cd["email"],
            password=cd["password"],
            first_name=cd["full_name"][:150],
        )


class SignInForm(forms.Form):
    email = forms.CharField(label="Email", max_length=150)
    password = forms.CharField(label="Contraseña", widget=forms.PasswordInput)

    def __init__(self, *args, request=None, **kwargs):
        self.request = request
        self.user = None
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned = super().clean()
        email = (cleaned.get("email") or "").strip().lower()
        password = cleaned.get("password")
        if email and password:
            # username=email al registrarse; también se acepta el email de cuentas viejas
            username = email
            match = User.objects.filter(email__iexact=email).order_by("id").first()
            if match is not None:
                username = match.get_username()
            self.user = authenticate(self.request, username=username, password=password)
            if self.user is None:
                raise forms.ValidationError("Email o contraseña incorrectos.")
        return cleaned


class ProfileForm(forms.Form):
    full_name = forms.CharField(label="Nombre completo", max_length=180, required=False)
    email = forms.CharField(label="Email", max_length=150)

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_full_name(self):
        return (self.cleaned_data.get("full_name") or "").strip()

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        try:
            validate_email(email)
        except forms.ValidationError:
            raise forms.ValidationError("Ingresá un email válido.")
        current = (self.user.email or "").lower() if self.user else ""
        if email != current and _email_taken(email, exclude_pk=getattr(self.user, "pk", None)):
            raise forms.ValidationError("Ese email ya está en uso.")
        return email


class RoleForm(forms.Form):
    role = forms.ChoiceField(label="Rol", choices=Profile.ROLE_CHOICES)
