"""Integration tests for host balances and withdrawal requests.

Run with: pytest tests/test_withdrawals.py -v
"""

from decimal import Decimal

import pytest
from django.core import mail
from rest_framework.test import APIClient

from accounts.models import Profile
from orders.models import Order
from payouts.models import WithdrawalRequest


def record_sale(event, amount: str, status: str = Order.Status.PAID) -> Order:
    ticket_type = event.ticket_types.first()
    return Order.objects.create(
        event=event,
        ticket_type=ticket_type,
        buyer_full_name="Paid Buyer",
        buyer_email="paid@example.com",
        currency="NGN",
        quantity=1,
        unit_price=Decimal(amount),
        total_amount=Decimal(amount),
        status=status,
    )


@pytest.fixture
def with_bank(host):
    Profile.objects.filter(user=host).update(
        bank_name="GTBank",
        bank_code="058",
        account_number="0123456789",
        account_name="ADA LOVELACE",
    )
    return host


@pytest.fixture
def earnings(event):
    record_sale(event, "60000.00")
    record_sale(event, "40000.00")
    record_sale(event, "99999.00", status=Order.Status.PENDING)
    return event


@pytest.mark.django_db
class TestBalance:
    """Tests for GET /api/me/balance"""

    def test_balance_deducts_platform_fee(self, host_client: APIClient, earnings):
        """Given paid sales of 100,000, returns 94,000 available after the 6% fee."""
        response = host_client.get("/api/me/balance")

        assert response.status_code == 200
        assert Decimal(response.data["gross_revenue"]) == Decimal("100000.00")
        assert Decimal(response.data["platform_fee"]) == Decimal("6000.00")
        assert Decimal(response.data["net_revenue"]) == Decimal("94000.00")
        assert Decimal(response.data["available"]) == Decimal("94000.00")

    def test_withdrawals_reduce_available(self, host_client: APIClient, host, earnings):
        WithdrawalRequest.objects.create(user=host, amount=Decimal("10000"), currency="NGN")
        WithdrawalRequest.objects.create(
            user=host, amount=Decimal("4000"), currency="NGN", status="approved"
        )
        WithdrawalRequest.objects.create(
            user=host, amount=Decimal("50000"), currency="NGN", status="rejected"
        )

        response = host_client.get("/api/me/balance")

        assert Decimal(response.data["pending"]) == Decimal("10000.00")
        assert Decimal(response.data["approved"]) == Decimal("4000.00")
        assert Decimal(response.data["available"]) == Decimal("80000.00")

    def test_no_sales(self, buyer_client: APIClient):
        response = buyer_client.get("/api/me/balance")
        assert Decimal(response.data["available"]) == Decimal("0")

    def test_requires_authentication(self, api_client: APIClient, db):
        assert api_client.get("/api/me/balance").status_code == 401


@pytest.mark.django_db
class TestRequestWithdrawal:
    """Tests for POST /api/me/withdrawals"""

    def test_requires_bank_details(self, host_client: APIClient, earnings):
        response = host_client.post("/api/me/withdrawals", {"amount": "1000"}, format="json")
        assert response.status_code == 400
        assert response.data["error"]["code"] == "BANK_DETAILS_REQUIRED"

    def test_zero_amount_rejected(self, host_client: APIClient, with_bank, earnings):
        response = host_client.post("/api/me/withdrawals", {"amount": "0"}, format="json")
        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_AMOUNT"

    def test_cannot_exceed_available(self, host_client: APIClient, with_bank, earnings):
        response = host_client.post("/api/me/withdrawals", {"amount": "94000.01"}, format="json")
        assert response.status_code == 409
        assert response.data["error"]["code"] == "INSUFFICIENT_BALANCE"
        assert not WithdrawalRequest.objects.exists()

    def test_creates_pending_request_and_notifies_admins(
        self, host_client: APIClient, with_bank, earnings
    ):
        response = host_client.post("/api/me/withdrawals", {"amount": "25000"}, format="json")

        assert response.status_code == 201
        assert response.data["status"] == "pending"
        assert Decimal(response.data["amount"]) == Decimal("25000.00")
        assert mail.outbox[-1].to == ["ops@tickets.test"]
        assert "Withdrawal request" in mail.outbox[-1].subject

        balance = host_client.get("/api/me/balance")
        assert Decimal(balance.data["available"]) == Decimal("69000.00")

    def test_lists_own_requests(self, host_client: APIClient, buyer, with_bank, earnings):
        WithdrawalRequest.objects.create(user=buyer, amount=Decimal("10"), currency="NGN")
        host_client.post("/api/me/withdrawals", {"amount": "500"}, format="json")

        response = host_client.get("/api/me/withdrawals")

        assert [Decimal(w["amount"]) for w in response.data] == [Decimal("500.00")]


@pytest.mark.django_db
class TestAdminWithdrawals:
    """Tests for /api/admin/withdrawals"""

    @pytest.fixture
    def pending(self, host_client: APIClient, with_bank, earnings) -> dict:
        response = host_client.post("/api/me/withdrawals", {"amount": "30000"}, format="json")
        return response.data

    def test_non_staff_forbidden(self, host_client: APIClient, pending):
        assert host_client.get("/api/admin/withdrawals").status_code == 403
        response = host_client.post(f"/api/admin/withdrawals/{pending['id']}/approve")
        assert response.status_code == 403

    def test_list_filters_by_status(self, staff_client: APIClient, pending):
        assert len(staff_client.get("/api/admin/withdrawals", {"status": "pending"}).data) == 1
        assert staff_client.get("/api/admin/withdrawals", {"status": "approved"}).data == []
        assert staff_client.get("/api/admin/withdrawals", {"status": "bogus"}).status_code == 400

    def test_approve_pays_out_through_gateway(
        self, staff_client: APIClient, host, pending, fake_gateway
    ):
        response = staff_client.post(
            f"/api/admin/withdrawals/{pending['id']}/approve", {"note": "Paid"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["status"] == "approved"
        assert response.data["admin_note"] == "Paid"
        assert response.data["transfer_code"] == "TRF_1"
        assert response.data["reference"].startswith(f"WD-{host.id}-")
        assert fake_gateway.recipients[0]["account_number"] == "0123456789"
        assert fake_gateway.transfers[0]["amount"] == Decimal("30000.00")
        assert fake_gateway.transfers[0]["recipient_code"] == "RCP_0123456789"
        assert Profile.objects.get(user=host).recipient_code == "RCP_0123456789"
        assert mail.outbox[-1].to == ["host@example.com"]
        assert mail.outbox[-1].subject == "Withdrawal approved"

    def test_saved_recipient_is_reused(
        self, staff_client: APIClient, host, pending, fake_gateway
    ):
        Profile.objects.filter(user=host).update(recipient_code="RCP_saved")
        staff_client.post(f"/api/admin/withdrawals/{pending['id']}/approve")
        assert fake_gateway.recipients == []
        assert fake_gateway.transfers[0]["recipient_code"] == "RCP_saved"

    def test_approve_twice_conflicts(self, staff_client: APIClient, pending, fake_gateway):
        url = f"/api/admin/withdrawals/{pending['id']}/approve"
        staff_client.post(url)
        response = staff_client.post(url)

        assert response.status_code == 409
        assert response.data["error"]["code"] == "WITHDRAWAL_NOT_PENDING"
        assert len(fake_gateway.transfers) == 1

    def test_failed_transfer_leaves_request_pending(
        self, staff_client: APIClient, host, pending, fake_gateway
    ):
        fake_gateway.fail_transfers = True
        response = staff_client.post(f"/api/admin/withdrawals/{pending['id']}/approve")

        assert response.status_code == 502
        assert response.data["error"]["code"] == "PAYMENT_GATEWAY_ERROR"
        assert WithdrawalRequest.objects.get(pk=pending["id"]).status == "pending"
        assert Profile.objects.get(user=host).recipient_code == ""

    def test_reject_releases_balance(self, staff_client: APIClient, host_client: APIClient, pending):
        response = staff_client.post(
            f"/api/admin/withdrawals/{pending['id']}/reject",
            {"note": "Bank details mismatch"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["status"] == "rejected"
        assert response.data["resolved_at"] is not None
        assert "Bank details mismatch" in mail.outbox[-1].body
        balance = host_client.get("/api/me/balance")
        assert Decimal(balance.data["available"]) == Decimal("94000.00")

    def test_unknown_request(self, staff_client: APIClient, db):
        response = staff_client.post(
            "/api/admin/withdrawals/00000000-0000-0000-0000-000000000000/reject"
        )
        assert response.status_code == 404
