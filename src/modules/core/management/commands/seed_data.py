from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.customers.models import Customer, Role


SEED_CUSTOMERS = [
    ("Admin", "admin@bookmarket.example", "admin123", [Role.USER, Role.ADMIN]),
    ("Ana Souza", "ana@example.com", "ana12345", [Role.USER]),
    ("Bruno Lima", "bruno@example.com", "bruno123", [Role.USER]),
    ("Gustavo Reis", "gustavo@example.com", "gustavo1", [Role.USER]),
]


class Command(BaseCommand):
    help = "Seed database with an ADMIN customer and a few USER customers."

    def add_arguments(self, parser):
        parser.add_argument(
            "--admin-password",
            default=None,
            help="Password for the admin account (overrides the default).",
        )

    def handle(self, *args, **options):
        self.stdout.write("Seeding customers...")
        created = 0
        for name, email, password, roles in SEED_CUSTOMERS:
            if Role.ADMIN in roles and options["admin_password"]:
                password = options["admin_password"]
            if Customer.objects.filter(email=email).exists():
                continue
            customer = Customer(name=name, email=email, roles=[r.value for r in roles])
            customer.set_password(password)
            customer.save()
            created += 1
        self.stdout.write(self.style.SUCCESS(f"Seed completed: customers={created}"))
