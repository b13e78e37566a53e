from django.contrib import admin

from .models import Hotel, Inquiry


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    list_display = ("subject", "hotel", "client", "answered", "created_at")
    list_filter = ("hotel", "answered")
    search_fields = ("subject", "message", "client__email")
