"""QR code rendering for issued tickets."""

from io import BytesIO
from urllib.parse import urlencode

import qrcode


def validation_url(base_url: str, ticket_id: str, code: str) -> str:
    """URL a door scanner opens to validate a ticket."""
    query = urlencode({"ticketId": ticket_id, "signature": code})
    return f"{base_url}/validate-ticket?{query}"


def render_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffered = BytesIO()
    img.save(buffered, format="PNG")
    return buffered.getvalue()
