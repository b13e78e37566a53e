# accounts/urls.py
from django.contrib.auth import views as auth_views
from django.urls import path, reverse_lazy

from . import views

app_name = "accounts"

urlpatterns = [
    path("auth/signin/", views.signin, name="signin"),
    path("auth/signup/", views.signup, name="signup"),
    path("auth/signout/", views.signout, name="signout"),

    # recuperación de contraseña (tokens de django.contrib.auth)
    path(
        "auth/forgot/",
        auth_views.PasswordResetView.as_view(
            template_name="accounts/forgot.html",
            email_template_name="accounts/email/password_reset.txt",
            subject_template_name="accounts/email/password_reset_subject.txt",
            success_url=reverse_lazy("accounts:forgot_sent"),
        ),
        name="forgot",
    ),
    path(
        "auth/forgot/sent/",
        auth_views.PasswordResetDoneView.as_view(template_name="accounts/forgot_sent.html"),
        name="forgot_sent",
    ),
    path(
        "auth/reset/<uidb64>/<token>/",
        auth_views.PasswordResetConfirmView.as_view(
            template_name="accounts/reset.html",
            success_url=reverse_lazy("accounts:reset_done"),
        ),
        name="reset",
    ),
    path(
        "auth/reset/done/",
        auth_views.PasswordResetCompleteView.as_view(template_name="accounts/reset_done.html"),
        name="reset_done",
    ),

    path("account/", views.account, name="account"),
    path("profile/", views.profile_save, name="profile_save"),
    path("manager/staff/<int:user_id>/role/", views.staff_role, name="staff_role"),
]
