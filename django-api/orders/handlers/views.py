"""HTTP handlers for checkout, payments and tickets."""

from uuid import UUID

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.dependencies import get_checkout_service, get_ticket_service
from orders.domain import OrderId, ScanResult
from orders.handlers.serializers import (
    ConfirmPaymentSerializer,
    CreateOrderSerializer,
    EventStatsSerializer,
    InitializePaymentSerializer,
    OrderSerializer,
    ReceiptSerializer,
    ScanTicketSerializer,
    TicketSerializer,
)


class OrderListView(APIView):
    """Handler for POST /api/orders"""

    def post(self, request: Request) -> Response:
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        buyer_id = request.user.id if request.user.is_authenticated else None
        receipt = get_checkout_service(with_gateway=False).create_order(
            buyer_id=buyer_id, **serializer.to_kwargs()
        )
        return Response(ReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """Handler for GET /api/orders/{order_id}"""

    def get(self, request: Request, order_id: UUID) -> Response:
        receipt = get_checkout_service(with_gateway=False).get_receipt(OrderId(order_id))
        return Response(ReceiptSerializer(receipt).data)


class OrderPaymentView(APIView):
    """Handler for POST /api/orders/{order_id}/pay"""

    def post(self, request: Request, order_id: UUID) -> Response:
        serializer = InitializePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transaction = get_checkout_service().initialize_payment(
            OrderId(order_id), serializer.validated_data.get("callback_url")
        )
        return Response(
            {
                "authorization_url": transaction.authorization_url,
                "access_code": transaction.access_code,
                "reference": transaction.reference,
            }
        )


class OrderCancelView(APIView):
    """Handler for POST /api/orders/{order_id}/cancel"""

    def post(self, request: Request, order_id: UUID) -> Response:
        order = get_checkout_service(with_gateway=False).cancel_order(OrderId(order_id))
        return Response(OrderSerializer(order).data)


class PaymentConfirmView(APIView):
    """Handler for POST /api/payments/confirm"""

    def post(self, request: Request) -> Response:
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        receipt = get_checkout_service().confirm_payment(serializer.validated_data["reference"])
        return Response(ReceiptSerializer(receipt).data)


class PaymentWebhookView(APIView):
    """Handler for POST /api/payments/webhook"""

    authentication_classes = []

    def post(self, request: Request) -> Response:
        result = get_checkout_service().handle_webhook(
            request.body, request.headers.get("x-paystack-signature")
        )
        return Response(result)


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{ticket_id}?signature=..."""

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = get_ticket_service().get_ticket(ticket_id, request.query_params.get("signature"))
        return Response(TicketSerializer(ticket).data)


class TicketScanView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/scan"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, ticket_id: str) -> Response:
        serializer = ScanTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket, result = get_ticket_service().scan_ticket(
            request.user.id,
            request.user.is_staff,
            ticket_id,
            serializer.validated_data["signature"],
        )
        return Response(
            {
                "result": result.value,
                "valid": result == ScanResult.SUCCESS,
                "ticket": TicketSerializer(ticket).data,
            }
        )


class MyTicketListView(APIView):
    """Handler for GET /api/me/tickets"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        tickets = get_ticket_service().list_my_tickets(request.user.id, request.user.email)
        return Response(TicketSerializer(tickets, many=True).data)


class EventStatsView(APIView):
    """Handler for GET /api/events/{event_id}/stats"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        stats = get_ticket_service().event_stats(event_id, request.user.id)
        return Response(EventStatsSerializer(stats).data)


class EventAttendeeListView(APIView):
    """Handler for GET /api/events/{event_id}/attendees"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        tickets = get_ticket_service().list_attendees(event_id, request.user.id)
        return Response(TicketSerializer(tickets, many=True).data)
