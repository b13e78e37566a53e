from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Room(models.Model):
    OPEN = "open"
    CLOSED = "closed"
    MAINTENANCE = "maintenance"
    STATUS_CHOICES = (
        (OPEN, "Abierta"),
        (CLOSED, "Cerrada"),
        (MAINTENANCE, "Mantenimiento"),
    )

    hotel = models.ForeignKey("hotels.Hotel", on_delete=models.PROTECT, related_name="rooms", verbose_name="Hotel")
    name = models.CharField(max_length=120, verbose_name="Nombre")
    description = models.TextField(blank=True, verbose_name="Descripción")
    capacity = models.PositiveSmallIntegerField(default=2, validators=[MinValueValidator(1)], verbose_name="Capacidad")
    base_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=0,
        validators=[MinValueValidator(Decimal("0"))], verbose_name="Precio base/noche",
    )
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=OPEN, verbose_name="Estado")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Habitación"
        verbose_name_plural = "Habitaciones"
        ordering = ["hotel_id", "id"]
        indexes = [
            models.Index(fields=["hotel", "status"], name="room_hotel_status_idx"),
        ]

    def __str__(self):
        return f"{self.hotel} — {self.name}"


class Reservation(models.Model):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CANCELLED = "cancelled"
    STATUS_CHOICES = (
        (PENDING, "Pendiente"),
        (CONFIRMED, "Confirmada"),
        (CHECKED_IN, "Alojado"),
        (CANCELLED, "Cancelada"),
    )
    # bloquean la habitación para otras reservas
    ACTIVE_STATUSES = (PENDING, CONFIRMED, CHECKED_IN)

    hotel = models.ForeignKey("hotels.Hotel", on_delete=models.PROTECT, related_name="reservations", verbose_name="Hotel")
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="reservations", verbose_name="Habitación")
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="reservations", verbose_name="Cliente"
    )

    check_in = models.DateField(verbose_name="Check-in")
    check_out = models.DateField(verbose_name="Check-out")
    guests = models.PositiveSmallIntegerField(default=1, verbose_name="Huéspedes")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Total")
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=PENDING, verbose_name="Estado")

    guest_name = models.CharField(max_length=180, blank=True, verbose_name="Huésped")
    guest_phone = models.CharField(max_length=40, blank=True, verbose_name="Teléfono")
    notes = models.TextField(blank=True, verbose_name="Comentarios")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Reserva"
        verbose_name_plural = "Reservas"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["hotel", "status"], name="resv_hotel_status_idx"),
            models.Index(fields=["room", "check_in", "check_out"], name="resv_room_dates_idx"),
            models.Index(fields=["client", "created_at"], name="resv_client_created_idx"),
        ]

    def __str__(self):
        return f"Reserva #{self.id} • {self.room.name}"

    @property
    def nights(self) -> int:
        return max((self.check_out - self.check_in).days, 0)

    @property
    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES


class Payment(models.Model):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    STATUS_CHOICES = (
        (PENDING, "Pendiente"),
        (APPROVED, "Aprobado"),
        (REJECTED, "Rechazado"),
    )

    PROVIDER_MOCK = "mock"
    PROVIDER_CHOICES = (
        (PROVIDER_MOCK, "Pago Mock"),
    )

    reservation = models.ForeignKey(Reservation, on_delete=models.CASCADE, related_name="payments", verbose_name="Reserva")
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="payments", verbose_name="Cliente"
    )
    provider = models.CharField(max_length=40, default=PROVIDER_MOCK, verbose_name="Proveedor")
    amount = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Monto")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING, verbose_name="Estado")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Pago"
        verbose_name_plural = "Pagos"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["reservation", "created_at"], name="pay_resv_created_idx"),
            models.Index(fields=["status", "created_at"], name="pay_status_created_idx"),
        ]

    def __str__(self):
        return f"Pago #{self.id} • {self.get_status_display()} • {self.amount}"
