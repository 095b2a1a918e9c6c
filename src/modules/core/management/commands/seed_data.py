from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.core.caller import Caller
from modules.core.notifications import EmailNotifier
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

CATALOG = [
    ("Ceramic Mug", Decimal("12.90")),
    ("Espresso Beans 1kg", Decimal("24.50")),
    ("French Press", Decimal("39.00")),
    ("Pour-over Kettle", Decimal("54.90")),
    ("Paper Filters (100)", Decimal("6.50")),
    ("Burr Grinder", Decimal("129.00")),
    ("Milk Frother", Decimal("29.90")),
    ("Travel Tumbler", Decimal("19.90")),
]


class Command(BaseCommand):
    help = "Seed database with development users, products and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=10,
            help="Number of orders to place when the database has none.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customers = self._seed_users()
        products = self._seed_products()
        orders_created = self._seed_orders(customers, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> list:
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin", email="admin@example.com", password="admin123"
            )
        customers = []
        for username, first, last in [
            ("alice", "Alice", "Martin"),
            ("bob", "Bob", "Keller"),
        ]:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "email": f"{username}@example.com",
                    "first_name": first,
                    "last_name": last,
                },
            )
            if created:
                user.set_password(f"{username}123")
                user.save()
            customers.append(user)
        return customers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for name, price in CATALOG:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"price": price, "stock": random.randint(50, 200)},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, customers: list, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            notifier=EmailNotifier(),
        )
        created = 0
        for _ in range(count):
            customer = random.choice(customers)
            lines = random.sample(products, k=random.randint(1, 3))
            dto = CreateOrderDTO(
                items=[
                    CreateOrderItemDTO(product_id=product.id, quantity=random.randint(1, 3))
                    for product in lines
                ]
            )
            try:
                service.create_order(Caller.from_user(customer), dto)
            except InsufficientStock as exc:
                self.stdout.write(self.style.WARNING(f"Skipping order: {exc}"))
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
