import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("hotels", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, verbose_name="Nombre")),
                ("description", models.TextField(blank=True, verbose_name="Descripción")),
                ("capacity", models.PositiveSmallIntegerField(
                    default=2,
                    validators=[django.core.validators.MinValueValidator(1)],
                    verbose_name="Capacidad",
                )),
                ("base_price", models.DecimalField(
                    decimal_places=2,
                    default=0,
                    max_digits=12,
                    validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                    verbose_name="Precio base/noche",
                )),
                ("status", models.CharField(
                    choices=[("open", "Abierta"), ("closed", "Cerrada"), ("maintenance", "Mantenimiento")],
                    default="open",
                    max_length=12,
                    verbose_name="Estado",
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("hotel", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="rooms",
                    to="hotels.hotel",
                    verbose_name="Hotel",
                )),
            ],
            options={
                "verbose_name": "Habitación",
                "verbose_name_plural": "Habitaciones",
                "ordering": ["hotel_id", "id"],
                "indexes": [
                    models.Index(fields=["hotel", "status"], name="room_hotel_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("check_in", models.DateField(verbose_name="Check-in")),
                ("check_out", models.DateField(verbose_name="Check-out")),
                ("guests", models.PositiveSmallIntegerField(default=1, verbose_name="Huéspedes")),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="Total")),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Pendiente"),
                        ("confirmed", "Confirmada"),
                        ("checked_in", "Alojado"),
                        ("cancelled", "Cancelada"),
                    ],
                    default="pending",
                    max_length=12,
                    verbose_name="Estado",
                )),
                ("guest_name", models.CharField(blank=True, max_length=180, verbose_name="Huésped")),
                ("guest_phone", models.CharField(blank=True, max_length=40, verbose_name="Teléfono")),
                ("notes", models.TextField(blank=True, verbose_name="Comentarios")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="reservations",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Cliente",
                )),
                ("hotel", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="reservations",
                    to="hotels.hotel",
                    verbose_name="Hotel",
                )),
                ("room", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="reservations",
                    to="pms.room",
                    verbose_name="Habitación",
                )),
            ],
            options={
                "verbose_name": "Reserva",
                "verbose_name_plural": "Reservas",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["hotel", "status"], name="resv_hotel_status_idx"),
                    models.Index(fields=["room", "check_in", "check_out"], name="resv_room_dates_idx"),
                    models.Index(fields=["client", "created_at"], name="resv_client_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("provider", models.CharField(default="mock", max_length=40, verbose_name="Proveedor")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Monto")),
                ("status", models.CharField(
                    choices=[("pending", "Pendiente"), ("approved", "Aprobado"), ("rejected", "Rechazado")],
                    default="pending",
                    max_length=10,
                    verbose_name="Estado",
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="payments",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Cliente",
                )),
                ("reservation", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="payments",
                    to="pms.reservation",
                    verbose_name="Reserva",
                )),
            ],
            options={
                "verbose_name": "Pago",
                "verbose_name_plural": "Pagos",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["reservation", "created_at"], name="pay_resv_created_idx"),
                    models.Index(fields=["status", "created_at"], name="pay_status_created_idx"),
                ],
            },
        ),
    ]
