from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from accounts.models import Profile
from hotels.models import Hotel
from pms.models import Room, Reservation, Payment

PASSWORD = "Salta-Segura-2030"

User = get_user_model()


@pytest.fixture(autouse=True)
def default_hotel_name(settings):
    settings.DEFAULT_HOTEL_NAME = "Sheraton Salta"


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    settings.MEDIA_URL = "/media/"
    return tmp_path


@pytest.fixture
def hotel(db):
    return Hotel.objects.create(name="Sheraton Salta")


@pytest.fixture
def other_hotel(db):
    return Hotel.objects.create(name="Hotel Norte")


@pytest.fixture
def make_user(db, hotel):
    def make(email, role=Profile.CLIENT, full_name="", for_hotel=None):
        user = User.objects.create_user(username=email, email=email, password=PASSWORD, first_name=full_name)
        Profile.objects.create(user=user, role=role, full_name=full_name, hotel=for_hotel or hotel)
        return user
    return make


@pytest.fixture
def guest(make_user):
    return make_user("ana@example.com", full_name="Ana Díaz")


@pytest.fixture
def hotel_admin(make_user):
    return make_user("admin@example.com", role=Profile.ADMIN, full_name="Admin Salta")


@pytest.fixture
def manager(make_user):
    return make_user("gerente@example.com", role=Profile.MANAGER, full_name="Gerente Salta")


@pytest.fixture
def room(hotel):
    return Room.objects.create(hotel=hotel, name="Doble Superior", capacity=2, base_price=Decimal("100.00"))


@pytest.fixture
def suite(hotel):
    return Room.objects.create(hotel=hotel, name="Suite", capacity=4, base_price=Decimal("150.00"))


@pytest.fixture
def closed_room(hotel):
    return Room.objects.create(hotel=hotel, name="Simple", capacity=1, base_price=Decimal("80.00"), status=Room.CLOSED)


@pytest.fixture
def book(db):
    def make(room, client, check_in: date, check_out: date, status=Reservation.CONFIRMED, guests=1, total=None):
        nights = (check_out - check_in).days
        return Reservation.objects.create(
            hotel=room.hotel,
            room=room,
            client=client,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            total_amount=room.base_price * nights if total is None else total,
            status=status,
        )
    return make


@pytest.fixture
def pay(db):
    def make(reservation, status=Payment.APPROVED, amount=None, created_at=None):
        payment = Payment.objects.create(
            reservation=reservation,
            client=reservation.client,
            amount=reservation.total_amount if amount is None else amount,
            status=status,
        )
        if created_at is not None:
            Payment.objects.filter(pk=payment.pk).update(created_at=created_at)
            payment.refresh_from_db()
        return payment
    return make


@pytest.fixture
def client_as(client):
    def login(user):
        client.force_login(user)
        return client
    return login
