from django.core.management.base import BaseCommand

from orders.dependencies import get_checkout_service


class Command(BaseCommand):
    help = "Email buyers whose orders have been pending longer than --minutes."

    def add_arguments(self, parser):
        parser.add_argument("--minutes", type=int, default=5)
        parser.add_argument("--limit", type=int, default=50)

    def handle(self, *args, **options):
        sent = get_checkout_service(with_gateway=False).send_abandoned_cart_emails(
            minutes=options["minutes"], limit=options["limit"]
        )
        self.stdout.write(self.style.SUCCESS(f"Sent {sent} abandoned cart email(s)"))
