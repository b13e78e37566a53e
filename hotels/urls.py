# hotels/urls.py
from django.urls import path
from . import views

app_name = "hotels"

urlpatterns = [
    path("", views.landing, name="landing"),

    path("inquiries/add/", views.inquiry_create, name="inquiry_create"),
    path("inquiries/<int:pk>/delete/", views.inquiry_delete, name="inquiry_delete"),

    path("admin/", views.admin_dashboard, name="admin_dashboard"),
    path("admin/inquiries/<int:pk>/reply/", views.inquiry_reply, name="inquiry_reply"),
    path("admin/inquiries/<int:pk>/answered/", views.inquiry_answered, name="inquiry_answered"),
    path("admin/inquiries/<int:pk>/delete/", views.inquiry_admin_delete, name="inquiry_admin_delete"),
    path("admin/kpi/export/", views.kpi_export_excel, name="kpi_export"),

    path("manager/", views.manager_dashboard, name="manager_dashboard"),
]
