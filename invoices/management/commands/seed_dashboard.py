import logging
from datetime import date

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from invoices.cache import INVOICES_PATH, revalidate_path
from invoices.models import Customer, Invoice

logger = logging.getLogger(__name__)
User = get_user_model()

DEMO_USER = {"name": "User", "email": "user@nextmail.com", "password": "123456"}

CUSTOMERS = [
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Hector Simpson", "hector@simpson.com", "/customers/hector-simpson.png"),
    ("Steven Tey", "steven@tey.com", "/customers/steven-tey.png"),
    ("Steph Dietz", "steph@dietz.com", "/customers/steph-dietz.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
]

# (customer email, amount in cents, status, date)
INVOICES = [
    ("delba@oliveira.com", 15795, "pending", "2022-12-06"),
    ("lee@robinson.com", 20348, "pending", "2022-11-14"),
    ("hector@simpson.com", 3040, "paid", "2022-10-29"),
    ("steven@tey.com", 44800, "paid", "2023-09-10"),
    ("steph@dietz.com", 34577, "pending", "2023-08-05"),
    ("michael@novotny.com", 54246, "pending", "2023-07-16"),
    ("delba@oliveira.com", 666, "pending", "2023-06-27"),
    ("steven@tey.com", 32545, "paid", "2023-06-09"),
    ("hector@simpson.com", 1250, "paid", "2023-06-17"),
    ("michael@novotny.com", 8546, "paid", "2023-06-07"),
    ("lee@robinson.com", 500, "paid", "2023-08-19"),
    ("michael@novotny.com", 8945, "paid", "2023-06-03"),
    ("delba@oliveira.com", 1000, "paid", "2022-06-05"),
]


class Command(BaseCommand):
    help = "Seed the dashboard with placeholder customers, invoices and a demo user"

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete existing customers and invoices before seeding.',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['reset']:
            deleted, _ = Customer.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing rows"))

        user, created = User.objects.get_or_create(
            username=DEMO_USER['email'],
            defaults={'email': DEMO_USER['email'], 'first_name': DEMO_USER['name']},
        )
        if created:
            user.set_password(DEMO_USER['password'])
            user.save(update_fields=['password'])
            self.stdout.write(f"Created demo user {user.email}")

        customers = {}
        for name, email, image_url in CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={'name': name, 'image_url': image_url},
            )
            customers[email] = customer

        created_invoices = 0
        for email, amount, status, issued in INVOICES:
            _, created = Invoice.objects.get_or_create(
                customer=customers[email],
                amount=amount,
                status=status,
                date=date.fromisoformat(issued),
            )
            created_invoices += int(created)

        revalidate_path(INVOICES_PATH)
        logger.info(f"Seeded {len(customers)} customers and {created_invoices} invoices")
        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {len(customers)} customers, {created_invoices} new invoices"
        ))
