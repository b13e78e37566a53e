from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "hotel")
    list_filter = ("hotel", "role")
    search_fields = ("user__username", "user__email", "full_name")
