import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Hotel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, verbose_name="Nombre")),
                ("is_active", models.BooleanField(default=True, verbose_name="Activo")),
            ],
            options={
                "verbose_name": "Hotel",
                "verbose_name_plural": "Hoteles",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Inquiry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("subject", models.CharField(max_length=200, verbose_name="Asunto")),
                ("message", models.TextField(verbose_name="Mensaje")),
                ("response", models.TextField(blank=True, verbose_name="Respuesta")),
                ("answered", models.BooleanField(default=False, verbose_name="Respondida")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creada")),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="inquiries",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Cliente",
                )),
                ("hotel", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="inquiries",
                    to="hotels.hotel",
                    verbose_name="Hotel",
                )),
            ],
            options={
                "verbose_name": "Consulta",
                "verbose_name_plural": "Consultas",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["hotel", "answered"], name="inquiry_hotel_answered_idx"),
                    models.Index(fields=["client", "created_at"], name="inquiry_client_created_idx"),
                ],
            },
        ),
    ]
