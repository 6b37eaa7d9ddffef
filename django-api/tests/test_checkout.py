"""Integration tests for checkout: orders, payment links, confirmation and webhooks.

Run with: pytest tests/test_checkout.py -v
"""

import json
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core import mail
from django.core.management import call_command
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import Profile
from events.models import TicketType
from events.stores import DjangoEventStore
from orders.domain import Attendee, TicketCode
from orders.domain.errors import InsufficientTicketsError
from orders.models import Order, Ticket
from orders.services import CheckoutService
from orders.stores import DjangoOrderStore
from payments.gateway import compute_signature
from tests.fakes import FakeGateway, MemoryFileStore, RecordingMailer


def order_payload(event, **overrides) -> dict:
    payload = {
        "event": event.slug,
        "ticket_type": "Regular",
        "quantity": 1,
        "buyer_full_name": "Bola Buyer",
        "buyer_email": "Buyer@Example.com",
        "buyer_phone": "+2348000000000",
    }
    payload.update(overrides)
    return payload


def place_order(client: APIClient, event, **overrides) -> dict:
    response = client.post("/api/orders", order_payload(event, **overrides), format="json")
    assert response.status_code == 201, response.data
    return response.data


def start_payment(client: APIClient, order_id: str) -> str:
    response = client.post(f"/api/orders/{order_id}/pay", {}, format="json")
    assert response.status_code == 200, response.data
    return response.data["reference"]


def sold(event, name: str = "Regular") -> int:
    return TicketType.objects.get(event=event, name=name).sold


@pytest.mark.django_db
class TestCreateOrder:
    """Tests for POST /api/orders"""

    def test_paid_ticket_creates_pending_order(self, api_client: APIClient, event):
        data = place_order(api_client, event, quantity=2)

        order = data["order"]
        assert order["status"] == "pending"
        assert order["quantity"] == 2
        assert Decimal(order["total_amount"]) == Decimal("10000.00")
        assert order["display_total"] == "₦10,000"
        assert order["currency"] == "NGN"
        assert order["buyer_email"] == "buyer@example.com"
        assert data["tickets"] == []
        assert data["event"]["slug"] == event.slug
        assert sold(event) == 0

    def test_authenticated_buyer_linked(self, buyer_client: APIClient, buyer, event):
        data = place_order(buyer_client, event)
        assert Order.objects.get(pk=data["order"]["id"]).buyer_id == buyer.id

    def test_quantity_above_availability(self, api_client: APIClient, event):
        response = api_client.post(
            "/api/orders", order_payload(event, ticket_type="VIP", quantity=3), format="json"
        )
        assert response.status_code == 409
        assert response.data["error"] == {
            "code": "INSUFFICIENT_TICKETS",
            "message": "Only 2 ticket(s) available",
        }

    def test_unknown_ticket_type(self, api_client: APIClient, event):
        response = api_client.post(
            "/api/orders", order_payload(event, ticket_type="Backstage"), format="json"
        )
        assert response.status_code == 404
        assert response.data["error"]["code"] == "TICKET_TYPE_NOT_FOUND"

    def test_zero_quantity(self, api_client: APIClient, event):
        response = api_client.post("/api/orders", order_payload(event, quantity=0), format="json")
        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_ORDER"

    def test_too_many_attendees(self, api_client: APIClient, event):
        attendees = [{"name": "Chi", "email": "chi@example.com"}]
        response = api_client.post(
            "/api/orders", order_payload(event, quantity=1, attendees=attendees), format="json"
        )
        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_ORDER"

    def test_draft_event_not_purchasable(self, api_client: APIClient, host, make_event):
        draft = make_event(host, title="Quiet Draft", status="draft")
        response = api_client.post("/api/orders", order_payload(draft), format="json")
        assert response.status_code == 404


@pytest.mark.django_db
class TestFreeOrder:
    """Free orders skip the payment provider."""

    def test_free_order_is_paid_with_tickets(self, api_client: APIClient, host, make_event):
        event = make_event(host, title="Open Day", ticket_types=[("Free", "0", 5)])
        attendees = [{"name": "Chi Guest", "email": "chi@example.com"}]

        data = place_order(api_client, event, ticket_type="Free", quantity=3, attendees=attendees)

        order = data["order"]
        assert order["status"] == "paid"
        assert order["payment_provider"] == "free"
        assert order["payment_reference"] == f"FREE-{order['id']}"
        assert order["display_total"] == "FREE"
        holders = [t["attendee_email"] for t in data["tickets"]]
        assert holders == ["buyer@example.com", "chi@example.com", "buyer@example.com"]
        assert all(len(t["code"]) == 8 for t in data["tickets"])
        assert all(
            t["qr_code_url"].endswith(f"tickets/{t['id']}/qr-code.png") for t in data["tickets"]
        )
        assert sold(event, "Free") == 3
        assert mail.outbox[-1].to == ["buyer@example.com"]
        assert data["tickets"][0]["code"] in mail.outbox[-1].body


@pytest.mark.django_db
class TestInitializePayment:
    """Tests for POST /api/orders/{id}/pay"""

    def test_returns_authorization_url_and_stores_reference(self, api_client: APIClient, event):
        order_id = place_order(api_client, event, quantity=2)["order"]["id"]

        response = api_client.post(f"/api/orders/{order_id}/pay", {}, format="json")

        assert response.status_code == 200
        reference = response.data["reference"]
        assert reference.startswith(f"ORD-{order_id}-")
        assert response.data["authorization_url"] == f"https://checkout.test/{reference}"
        sent = FakeGateway.transactions[reference]
        assert sent["amount"] == Decimal("10000.00")
        assert sent["email"] == "buyer@example.com"
        assert sent["callback_url"] == f"https://tickets.test/success?orderId={order_id}"
        assert sent["metadata"]["orderId"] == order_id
        order = Order.objects.get(pk=order_id)
        assert order.payment_reference == reference
        assert order.payment_provider == "fake"

    def test_custom_callback(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        response = api_client.post(
            f"/api/orders/{order_id}/pay", {"callback_url": "https://app.test/done"}, format="json"
        )
        assert FakeGateway.transactions[response.data["reference"]]["callback_url"] == (
            "https://app.test/done"
        )

    def test_cancelled_order_not_payable(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        api_client.post(f"/api/orders/{order_id}/cancel")
        response = api_client.post(f"/api/orders/{order_id}/pay", {}, format="json")
        assert response.status_code == 409
        assert response.data["error"]["code"] == "ORDER_NOT_PAYABLE"

    def test_unknown_order(self, api_client: APIClient):
        response = api_client.post(
            "/api/orders/00000000-0000-0000-0000-000000000000/pay", {}, format="json"
        )
        assert response.status_code == 404


@pytest.mark.django_db
class TestConfirmPayment:
    """Tests for POST /api/payments/confirm"""

    def test_success_issues_tickets(self, api_client: APIClient, event):
        attendees = [{"name": "Chi Guest", "email": "chi@example.com"}]
        order_id = place_order(api_client, event, quantity=2, attendees=attendees)["order"]["id"]
        reference = start_payment(api_client, order_id)
        FakeGateway.settle(reference, "success")

        response = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert response.status_code == 200
        assert response.data["order"]["status"] == "paid"
        assert [t["attendee_name"] for t in response.data["tickets"]] == ["Bola Buyer", "Chi Guest"]
        assert Ticket.objects.filter(order_id=order_id).count() == 2
        assert sold(event) == 2
        assert mail.outbox[-1].subject == f"Your tickets for {event.title}"

    def test_confirm_is_idempotent(self, api_client: APIClient, event):
        order_id = place_order(api_client, event, quantity=2)["order"]["id"]
        reference = start_payment(api_client, order_id)
        FakeGateway.settle(reference, "success")

        first = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")
        second = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert second.status_code == 200
        codes = sorted(t["code"] for t in first.data["tickets"])
        assert sorted(t["code"] for t in second.data["tickets"]) == codes
        assert sold(event) == 2
        assert [m.to for m in mail.outbox] == [["host@example.com"], ["buyer@example.com"]]

    def test_failed_payment_marks_order_failed(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)
        FakeGateway.settle(reference, "failed")

        response = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert response.status_code == 402
        assert response.data["error"]["code"] == "PAYMENT_NOT_SUCCESSFUL"
        assert Order.objects.get(pk=order_id).status == "failed"
        assert sold(event) == 0

    def test_ongoing_payment_leaves_order_pending(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)

        response = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert response.status_code == 402
        assert Order.objects.get(pk=order_id).status == "pending"

    def test_underpayment_not_accepted(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)
        FakeGateway.settle(reference, "success", amount=Decimal("100.00"))

        response = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert response.status_code == 402
        assert Order.objects.get(pk=order_id).status == "pending"

    def test_unknown_reference(self, api_client: APIClient):
        response = api_client.post("/api/payments/confirm", {"reference": "ORD-nope"}, format="json")
        assert response.status_code == 502

    def test_reference_with_path_characters_rejected(self, api_client: APIClient):
        for reference in ("../../bank", "ORD-1?perPage=100", ".."):
            response = api_client.post(
                "/api/payments/confirm", {"reference": reference}, format="json"
            )
            assert response.status_code == 400, reference

    def test_seats_gone_before_confirmation(self, api_client: APIClient, event):
        order_id = place_order(api_client, event, ticket_type="VIP", quantity=2)["order"]["id"]
        reference = start_payment(api_client, order_id)
        TicketType.objects.filter(event=event, name="VIP").update(sold=1)
        FakeGateway.settle(reference, "success")

        response = api_client.post("/api/payments/confirm", {"reference": reference}, format="json")

        assert response.status_code == 409
        assert Order.objects.get(pk=order_id).status == "pending"
        assert not Ticket.objects.filter(order_id=order_id).exists()


@pytest.mark.django_db
class TestWebhook:
    """Tests for POST /api/payments/webhook"""

    def _post(self, client: APIClient, payload: dict, secret: str = "sk_test_secret"):
        body = json.dumps(payload).encode()
        return client.post(
            "/api/payments/webhook",
            data=body,
            content_type="application/json",
            HTTP_X_PAYSTACK_SIGNATURE=compute_signature(secret, body),
        )

    def test_charge_success_issues_tickets(self, api_client: APIClient, event):
        order_id = place_order(api_client, event, quantity=2)["order"]["id"]
        reference = start_payment(api_client, order_id)

        response = self._post(
            api_client,
            {"event": "charge.success", "data": {"reference": reference, "metadata": {"orderId": order_id}}},
        )

        assert response.status_code == 200
        assert response.data == {"received": True, "event": "charge.success"}
        assert Order.objects.get(pk=order_id).status == "paid"
        assert Ticket.objects.filter(order_id=order_id).count() == 2

    def test_invalid_signature_rejected(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)

        response = self._post(
            api_client,
            {"event": "charge.success", "data": {"reference": reference}},
            secret="not-the-secret",
        )

        assert response.status_code == 401
        assert response.data["error"]["code"] == "INVALID_SIGNATURE"
        assert Order.objects.get(pk=order_id).status == "pending"

    def test_missing_signature_rejected(self, api_client: APIClient):
        response = api_client.post(
            "/api/payments/webhook", data=b"{}", content_type="application/json"
        )
        assert response.status_code == 401

    def test_other_events_acknowledged(self, api_client: APIClient):
        response = self._post(api_client, {"event": "transfer.success", "data": {}})
        assert response.status_code == 200
        assert response.data == {"received": True, "event": "transfer.success"}

    def test_underpaid_charge_leaves_order_pending(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)

        response = self._post(
            api_client,
            {"event": "charge.success", "data": {"reference": reference, "amount": 10000}},
        )

        assert response.status_code == 200
        assert Order.objects.get(pk=order_id).status == "pending"
        assert not Ticket.objects.filter(order_id=order_id).exists()
        assert sold(event) == 0

    def test_full_amount_in_minor_units_completes(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        reference = start_payment(api_client, order_id)

        self._post(
            api_client,
            {"event": "charge.success", "data": {"reference": reference, "amount": 500000}},
        )

        assert Order.objects.get(pk=order_id).status == "paid"

    def test_non_object_metadata_is_ignored(self, api_client: APIClient):
        response = self._post(
            api_client,
            {"event": "charge.success", "data": {"reference": "ORD-x", "metadata": "orderId=1"}},
        )
        assert response.status_code == 200

    def test_non_object_data_rejected(self, api_client: APIClient):
        response = self._post(api_client, {"event": "charge.success", "data": ["ORD-x"]})
        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_ORDER"


@pytest.mark.django_db
class TestHostSaleNotification:
    """Hosts hear about paid orders unless they opted out."""

    def _pay(self, client: APIClient, event) -> None:
        order_id = place_order(client, event, quantity=2)["order"]["id"]
        reference = start_payment(client, order_id)
        FakeGateway.settle(reference, "success")
        client.post("/api/payments/confirm", {"reference": reference}, format="json")

    def test_host_emailed_on_sale(self, api_client: APIClient, event):
        self._pay(api_client, event)

        host_mail = [m for m in mail.outbox if m.to == ["host@example.com"]]
        assert len(host_mail) == 1
        assert host_mail[0].subject == f"New ticket sale for {event.title}"
        assert "Bola Buyer just bought 2 x Regular" in host_mail[0].body
        assert "₦10,000" in host_mail[0].body

    def test_opted_out_host_not_emailed(self, api_client: APIClient, host, event):
        Profile.objects.filter(user=host).update(notify_ticket_sales=False)

        self._pay(api_client, event)

        assert [m.to for m in mail.outbox] == [["buyer@example.com"]]


@pytest.mark.django_db
class TestOrderLifecycle:
    """Tests for receipts and cancellation."""

    def test_receipt(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        response = api_client.get(f"/api/orders/{order_id}")
        assert response.status_code == 200
        assert response.data["order"]["id"] == order_id
        assert response.data["event"]["title"] == event.title

    def test_cancel_pending_order(self, api_client: APIClient, event):
        order_id = place_order(api_client, event)["order"]["id"]
        response = api_client.post(f"/api/orders/{order_id}/cancel")
        assert response.status_code == 200
        assert response.data["status"] == "cancelled"

    def test_paid_order_cannot_be_cancelled(self, api_client: APIClient, host, make_event):
        event = make_event(host, title="Free Fest", ticket_types=[("Free", "0", 5)])
        order_id = place_order(api_client, event, ticket_type="Free")["order"]["id"]
        response = api_client.post(f"/api/orders/{order_id}/cancel")
        assert response.status_code == 400


@pytest.mark.django_db
class TestAbandonedCarts:
    """Tests for the send_abandoned_carts command."""

    def test_reminds_stale_pending_orders_once(self, api_client: APIClient, event):
        stale_id = place_order(api_client, event)["order"]["id"]
        place_order(api_client, event, buyer_email="fresh@example.com")
        Order.objects.filter(pk=stale_id).update(created_at=timezone.now() - timedelta(minutes=30))

        call_command("send_abandoned_carts", minutes=10)
        call_command("send_abandoned_carts", minutes=10)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["buyer@example.com"]
        assert mail.outbox[0].subject == f"Complete Your Purchase - {event.title}"
        assert Order.objects.get(pk=stale_id).abandoned_email_sent_at is not None


@pytest.mark.django_db
class TestCheckoutServiceIssuance:
    """Service-level tests for issuance side effects."""

    def _service(self, files=None, mailer=None) -> CheckoutService:
        return CheckoutService(
            orders=DjangoOrderStore(),
            events=DjangoEventStore(),
            gateway=FakeGateway(),
            files=files,
            mailer=mailer,
            public_base_url="https://tickets.test/",
        )

    def test_qr_code_encodes_validation_url(self, host, make_event):
        event = make_event(host, title="Free QR", ticket_types=[("Free", "0", 5)])
        files = MemoryFileStore()
        receipt = self._service(files=files).create_order(
            event.slug, "Free", 1, Attendee("Bola Buyer", "buyer@example.com")
        )

        ticket = receipt.tickets[0]
        assert ticket.qr_code_url == f"https://files.test/tickets/{ticket.id}/qr-code.png"
        assert files.files[f"tickets/{ticket.id}/qr-code.png"].startswith(b"\x89PNG")

    def test_storage_failure_keeps_ticket(self, host, make_event):
        event = make_event(host, title="Free Fail", ticket_types=[("Free", "0", 5)])
        mailer = RecordingMailer()
        receipt = self._service(files=MemoryFileStore(fail=True), mailer=mailer).create_order(
            event.slug, "Free", 2, Attendee("Bola Buyer", "buyer@example.com")
        )

        assert receipt.order.is_paid
        assert [t.qr_code_url for t in receipt.tickets] == ["", ""]
        assert Ticket.objects.filter(order_id=receipt.order.id.value).count() == 2
        body = mailer.sent[0][2]
        assert f"https://tickets.test/validate-ticket?ticketId={receipt.tickets[0].id}" in body

    def test_issue_tickets_rechecks_availability(self, host, make_event):
        event = make_event(host, title="Tiny", ticket_types=[("Seat", "100", 1)])
        service = self._service()
        first = service.create_order(event.slug, "Seat", 1, Attendee("A", "a@example.com"))
        second = service.create_order(event.slug, "Seat", 1, Attendee("B", "b@example.com"))
        store = DjangoOrderStore()
        holders = [Attendee("A", "a@example.com")]

        store.issue_tickets(first.order.id, holders, [TicketCode.generate()], "ref-1", "fake")
        with pytest.raises(InsufficientTicketsError):
            store.issue_tickets(second.order.id, holders, [TicketCode.generate()], "ref-2", "fake")
        assert store.get_order(second.order.id).is_pending
