from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .utils import ensure_profile


@receiver(user_logged_in)
def bootstrap_profile(sender, request, user, **kwargs):
    ensure_profile(user)
