"""Test doubles for external services.

FakeGateway keeps its state on the class because views build a fresh
gateway per request through payments.get_gateway().
"""

from decimal import Decimal
from io import BytesIO

from PIL import Image

from core.mailer import Mailer
from core.storage import FileStore
from payments import (
    Bank,
    InitializedTransaction,
    PaymentGateway,
    PaymentGatewayError,
    ResolvedAccount,
    Transfer,
    VerifiedTransaction,
)


class FakeGateway(PaymentGateway):
    name = "fake"

    transactions: dict[str, dict] = {}
    recipients: list[dict] = []
    transfers: list[dict] = []
    accounts: dict[tuple[str, str], str] = {}
    fail_transfers = False

    @classmethod
    def reset(cls) -> None:
        cls.transactions = {}
        cls.recipients = []
        cls.transfers = []
        cls.accounts = {("0123456789", "058"): "ADA LOVELACE"}
        cls.fail_transfers = False

    @classmethod
    def settle(cls, reference: str, status: str = "success", amount: Decimal | None = None) -> None:
        """Record the provider-side outcome of a transaction."""
        transaction = cls.transactions.setdefault(reference, {"amount": None, "order_id": None})
        transaction["status"] = status
        if amount is not None:
            transaction["amount"] = amount

    def initialize_transaction(self, *, email, amount, currency, reference, callback_url, metadata):
        self.transactions[reference] = {
            "status": "ongoing",
            "amount": amount,
            "order_id": metadata.get("orderId"),
            "email": email,
            "currency": currency,
            "callback_url": callback_url,
            "metadata": metadata,
        }
        return InitializedTransaction(
            authorization_url=f"https://checkout.test/{reference}",
            access_code=f"access-{reference}",
            reference=reference,
        )

    def verify_transaction(self, reference):
        transaction = self.transactions.get(reference)
        if transaction is None:
            raise PaymentGatewayError("Transaction reference not found")
        return VerifiedTransaction(
            reference=reference,
            status=transaction["status"],
            amount=transaction["amount"],
            order_id=transaction["order_id"],
        )

    def list_banks(self, country):
        if country != "nigeria":
            return []
        return [Bank(code="044", name="Access Bank"), Bank(code="058", name="GTBank")]

    def resolve_account(self, account_number, bank_code):
        name = self.accounts.get((account_number, bank_code))
        if name is None:
            raise PaymentGatewayError("Could not resolve account name")
        return ResolvedAccount(account_name=name, account_number=account_number)

    def create_transfer_recipient(self, *, name, account_number, bank_code, currency):
        code = f"RCP_{account_number}"
        self.recipients.append(
            {"name": name, "account_number": account_number, "bank_code": bank_code, "code": code}
        )
        return code

    def initiate_transfer(self, *, amount, recipient_code, reference, reason):
        if self.fail_transfers:
            raise PaymentGatewayError("Your balance is not enough to fulfil this request")
        self.transfers.append(
            {"amount": amount, "recipient_code": recipient_code, "reference": reference}
        )
        return Transfer(reference=reference, transfer_code=f"TRF_{len(self.transfers)}", status="pending")


FakeGateway.reset()


class MemoryFileStore(FileStore):
    def __init__(self, fail: bool = False) -> None:
        self.files: dict[str, bytes] = {}
        self.fail = fail

    def save(self, path: str, content: bytes, overwrite: bool = True) -> str:
        if self.fail:
            raise OSError("storage unavailable")
        self.files[path] = content
        return f"https://files.test/{path}"

    def delete(self, path: str) -> None:
        self.files.pop(path, None)


class RecordingMailer(Mailer):
    def __init__(self) -> None:
        self.sent: list[tuple[list[str], str, str]] = []
        self.admin_messages: list[tuple[str, str]] = []

    def send(self, to: list[str], subject: str, body: str) -> bool:
        self.sent.append((to, subject, body))
        return True

    def send_admins(self, subject: str, body: str) -> bool:
        self.admin_messages.append((subject, body))
        return True


def image_bytes(image_format: str = "PNG") -> bytes:
    """Encode a tiny solid image in the given Pillow format."""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (200, 40, 40)).save(buffer, format=image_format)
    return buffer.getvalue()
