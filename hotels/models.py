from django.conf import settings
from django.db import models


class Hotel(models.Model):
    name = models.CharField(max_length=150, verbose_name="Nombre")
    is_active = models.BooleanField(default=True, verbose_name="Activo")

    class Meta:
        verbose_name = "Hotel"
        verbose_name_plural = "Hoteles"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Inquiry(models.Model):
    """
    Consulta de un cliente al hotel. El admin responde en `response`
    o solo la marca como respondida.
    """
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="inquiries", verbose_name="Hotel")
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="inquiries", verbose_name="Cliente"
    )
    subject = models.CharField(max_length=200, verbose_name="Asunto")
    message = models.TextField(verbose_name="Mensaje")
    response = models.TextField(blank=True, verbose_name="Respuesta")
    answered = models.BooleanField(default=False, verbose_name="Respondida")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Creada")

    class Meta:
        verbose_name = "Consulta"
        verbose_name_plural = "Consultas"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["hotel", "answered"], name="inquiry_hotel_answered_idx"),
            models.Index(fields=["client", "created_at"], name="inquiry_client_created_idx"),
        ]

    def __str__(self):
        return f"{self.hotel} • {self.subject}"
