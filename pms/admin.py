from django.contrib import admin

from .models import Room, Reservation, Payment


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("hotel", "name", "capacity", "base_price", "status", "created_at")
    list_filter = ("hotel", "status")
    search_fields = ("name", "hotel__name")
    list_editable = ("status",)


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ("provider", "amount", "status", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("id", "hotel", "room", "client", "check_in", "check_out", "guests", "total_amount", "status")
    list_filter = ("hotel", "status", "check_in")
    search_fields = ("guest_name", "guest_phone", "client__email", "room__name")
    date_hierarchy = "check_in"
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "reservation", "client", "provider", "amount", "status", "created_at")
    list_filter = ("status", "provider")
    search_fields = ("client__email", "reservation__guest_name")
