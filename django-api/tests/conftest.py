"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from accounts.models import Profile
from events.models import Event, TicketType
from tests.fakes import FakeGateway

PASSWORD = "s3cure-Passw0rd!"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def fake_gateway():
    FakeGateway.reset()
    yield FakeGateway
    FakeGateway.reset()


@pytest.fixture
def make_user(db):
    def _make_user(email: str = "host@example.com", is_staff: bool = False, **profile) -> User:
        user = User.objects.create_user(
            username=email, email=email, password=PASSWORD, is_staff=is_staff
        )
        Profile.objects.create(user=user, full_name=profile.pop("full_name", "Ada Host"), **profile)
        return user

    return _make_user


@pytest.fixture
def host(make_user) -> User:
    return make_user("host@example.com", full_name="Ada Host")


@pytest.fixture
def buyer(make_user) -> User:
    return make_user("buyer@example.com", full_name="Bola Buyer")


@pytest.fixture
def staff(make_user) -> User:
    return make_user("ops@example.com", is_staff=True, full_name="Ops")


def client_for(user: User) -> APIClient:
    client = APIClient()
    token, _ = Token.objects.get_or_create(user=user)
    client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")
    return client


@pytest.fixture
def host_client(host) -> APIClient:
    return client_for(host)


@pytest.fixture
def buyer_client(buyer) -> APIClient:
    return client_for(buyer)


@pytest.fixture
def staff_client(staff) -> APIClient:
    return client_for(staff)


@pytest.fixture
def make_event(db):
    def _make_event(
        host: User,
        title: str = "Lagos Jazz Night",
        slug: str | None = None,
        status: str = "published",
        ticket_types: list[tuple[str, str, int]] | None = None,
        days_ahead: int = 30,
        **fields,
    ) -> Event:
        event = Event.objects.create(
            host=host,
            title=title,
            slug=slug or title.lower().replace(" ", "-"),
            description=fields.pop("description", "An evening of live jazz."),
            date=date.today() + timedelta(days=days_ahead),
            venue=fields.pop("venue", "Terra Kulture"),
            location=fields.pop("location", "Victoria Island, Lagos"),
            country=fields.pop("country", "Nigeria"),
            currency=fields.pop("currency", "NGN"),
            status=status,
            **fields,
        )
        for name, price, quantity in ticket_types or [("Regular", "5000.00", 100)]:
            TicketType.objects.create(
                event=event, name=name, price=Decimal(price), quantity=quantity
            )
        return event

    return _make_event


@pytest.fixture
def event(host, make_event) -> Event:
    return make_event(host, ticket_types=[("Regular", "5000.00", 10), ("VIP", "20000.00", 2)])
