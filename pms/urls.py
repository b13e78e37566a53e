# pms/urls.py
from django.urls import path
from . import views, views_admin, views_api

app_name = "pms"

urlpatterns = [
    path("rooms/", views.rooms, name="rooms"),
    path("rooms/<int:pk>/", views.room_detail, name="room_detail"),
    path("checkout/", views.checkout, name="checkout"),
    path("checkout/<int:pk>/", views.checkout_result, name="checkout_result"),

    # panel admin
    path("admin/rooms/", views_admin.room_list, name="admin_rooms"),
    path("admin/rooms/<int:pk>/edit/", views_admin.room_edit, name="admin_room_edit"),
    path("admin/rooms/<int:pk>/toggle/", views_admin.room_toggle, name="admin_room_toggle"),
    path("admin/rooms/<int:pk>/delete/", views_admin.room_delete, name="admin_room_delete"),
    path("admin/reservations/", views_admin.reservation_list, name="admin_reservations"),
    path("admin/reservations/<int:pk>/status/", views_admin.reservation_status, name="admin_reservation_status"),
    path("admin/payments/", views_admin.payment_list, name="admin_payments"),
    path("admin/payments/<int:pk>/status/", views_admin.payment_status, name="admin_payment_status"),
    path("admin/occupancy/", views_admin.occupancy, name="admin_occupancy"),

    # JSON
    path("api/rooms/available/", views_api.available_rooms, name="api_available_rooms"),
    path("api/reservations/confirm/", views_api.confirm, name="api_confirm_reservation"),
    path("functions/send-booking-email/", views_api.send_booking_email, name="send_booking_email"),
]
