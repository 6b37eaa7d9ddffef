"""Integration tests for ticket lookup, door scanning and host reports.

Run with: pytest tests/test_tickets.py -v
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from orders.models import Order, Ticket, TicketScan


@pytest.fixture
def free_event(host, make_event):
    return make_event(host, title="Community Meetup", ticket_types=[("Free", "0", 10)])


@pytest.fixture
def issued(api_client: APIClient, free_event) -> list[dict]:
    response = api_client.post(
        "/api/orders",
        {
            "event": free_event.slug,
            "ticket_type": "Free",
            "quantity": 2,
            "buyer_full_name": "Bola Buyer",
            "buyer_email": "buyer@example.com",
            "attendees": [{"name": "Chi Guest", "email": "chi@example.com"}],
        },
        format="json",
    )
    assert response.status_code == 201, response.data
    return response.data["tickets"]


@pytest.mark.django_db
class TestTicketDetail:
    """Tests for GET /api/tickets/{id}?signature=..."""

    def test_valid_signature_returns_ticket(self, api_client: APIClient, issued):
        ticket = issued[0]
        response = api_client.get(f"/api/tickets/{ticket['id']}", {"signature": ticket["code"]})
        assert response.status_code == 200
        assert response.data["attendee_name"] == "Bola Buyer"
        assert response.data["ticket_type"] == "Free"

    def test_wrong_signature_forbidden(self, api_client: APIClient, issued):
        response = api_client.get(f"/api/tickets/{issued[0]['id']}", {"signature": "ZZZZZZZZ"})
        assert response.status_code == 403
        assert response.data["error"]["code"] == "INVALID_TICKET_SIGNATURE"

    def test_missing_signature_forbidden(self, api_client: APIClient, issued):
        assert api_client.get(f"/api/tickets/{issued[0]['id']}").status_code == 403

    def test_unknown_ticket(self, api_client: APIClient, db):
        response = api_client.get("/api/tickets/not-a-ticket", {"signature": "AAAAAAAA"})
        assert response.status_code == 404
        assert response.data["error"]["code"] == "TICKET_NOT_FOUND"


@pytest.mark.django_db
class TestScanTicket:
    """Tests for POST /api/tickets/{id}/scan"""

    def test_first_scan_succeeds_then_reports_already_scanned(self, host_client: APIClient, issued):
        ticket = issued[0]
        url = f"/api/tickets/{ticket['id']}/scan"

        first = host_client.post(url, {"signature": ticket["code"]}, format="json")
        second = host_client.post(url, {"signature": ticket["code"]}, format="json")

        assert first.status_code == 200
        assert first.data["result"] == "success"
        assert first.data["valid"] is True
        assert first.data["ticket"]["is_scanned"] is True
        assert second.data["result"] == "already_scanned"
        assert second.data["valid"] is False
        assert second.data["ticket"]["scanned_at"] == first.data["ticket"]["scanned_at"]
        assert list(
            TicketScan.objects.filter(ticket_id=ticket["id"]).order_by("id").values_list("result", flat=True)
        ) == ["success", "already_scanned"]

    def test_invalid_signature_logged_and_rejected(self, host_client: APIClient, issued):
        ticket = issued[0]
        response = host_client.post(
            f"/api/tickets/{ticket['id']}/scan", {"signature": "WRONG123"}, format="json"
        )
        assert response.status_code == 403
        assert not Ticket.objects.get(pk=ticket["id"]).is_scanned
        assert TicketScan.objects.get(ticket_id=ticket["id"]).result == "invalid_signature"

    def test_only_host_or_staff_can_scan(
        self, buyer_client: APIClient, staff_client: APIClient, issued
    ):
        ticket = issued[1]
        url = f"/api/tickets/{ticket['id']}/scan"

        denied = buyer_client.post(url, {"signature": ticket["code"]}, format="json")
        allowed = staff_client.post(url, {"signature": ticket["code"]}, format="json")

        assert denied.status_code == 403
        assert denied.data["error"]["code"] == "NOT_EVENT_HOST"
        assert allowed.data["result"] == "success"

    def test_requires_authentication(self, api_client: APIClient, issued):
        response = api_client.post(
            f"/api/tickets/{issued[0]['id']}/scan", {"signature": issued[0]["code"]}, format="json"
        )
        assert response.status_code == 401


@pytest.mark.django_db
class TestMyTickets:
    """Tests for GET /api/me/tickets"""

    def test_lists_tickets_addressed_to_user(self, make_user, issued):
        from tests.conftest import client_for

        guest = make_user("chi@example.com", full_name="Chi Guest")
        response = client_for(guest).get("/api/me/tickets")

        assert response.status_code == 200
        assert [t["attendee_email"] for t in response.data] == ["chi@example.com"]

    def test_lists_tickets_from_own_orders(self, buyer_client: APIClient, free_event):
        buyer_client.post(
            "/api/orders",
            {
                "event": free_event.slug,
                "ticket_type": "Free",
                "quantity": 2,
                "buyer_full_name": "Bola Buyer",
                "buyer_email": "someone.else@example.com",
            },
            format="json",
        )
        response = buyer_client.get("/api/me/tickets")
        assert len(response.data) == 2


@pytest.mark.django_db
class TestHostReports:
    """Tests for GET /api/events/{id}/stats and /attendees"""

    def test_stats(self, host_client: APIClient, event):
        Order.objects.create(
            event=event,
            ticket_type=event.ticket_types.get(name="Regular"),
            buyer_full_name="Paid Buyer",
            buyer_email="paid@example.com",
            currency="NGN",
            quantity=2,
            unit_price=Decimal("5000"),
            total_amount=Decimal("10000"),
            status=Order.Status.PAID,
        )
        event.ticket_types.filter(name="Regular").update(sold=2)

        response = host_client.get(f"/api/events/{event.id}/stats")

        assert response.status_code == 200
        assert response.data["tickets_sold"] == 2
        assert response.data["capacity"] == 12
        assert response.data["paid_orders"] == 1
        assert Decimal(response.data["gross_revenue"]) == Decimal("10000")
        regular = response.data["ticket_types"][0]
        assert regular["name"] == "Regular"
        assert Decimal(regular["revenue"]) == Decimal("10000")

    def test_attendees_and_scanned_count(self, host_client: APIClient, free_event, issued):
        host_client.post(
            f"/api/tickets/{issued[0]['id']}/scan", {"signature": issued[0]["code"]}, format="json"
        )

        attendees = host_client.get(f"/api/events/{free_event.slug}/attendees")
        stats = host_client.get(f"/api/events/{free_event.slug}/stats")

        assert sorted(t["attendee_name"] for t in attendees.data) == ["Bola Buyer", "Chi Guest"]
        assert stats.data["tickets_scanned"] == 1
        assert stats.data["tickets_sold"] == 2

    def test_non_host_forbidden(self, buyer_client: APIClient, free_event):
        response = buyer_client.get(f"/api/events/{free_event.id}/attendees")
        assert response.status_code == 403
