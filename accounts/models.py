from django.conf import settings
from django.db import models

from hotels.models import Hotel


class Profile(models.Model):
    CLIENT = "client"
    ADMIN = "admin"
    MANAGER = "manager"
    ROLE_CHOICES = (
        (CLIENT, "Cliente"),
        (ADMIN, "Administrador"),
        (MANAGER, "Gerente"),
    )

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=CLIENT, verbose_name="Rol")
    hotel = models.ForeignKey(Hotel, on_delete=models.PROTECT, null=True, blank=True, related_name="profiles", verbose_name="Hotel")
    full_name = models.CharField(max_length=180, blank=True, verbose_name="Nombre completo")

    class Meta:
        verbose_name = "Perfil"
        verbose_name_plural = "Perfiles"
        ordering = ["hotel_id", "full_name"]

    def __str__(self):
        return f"Profile: {self.user}"
