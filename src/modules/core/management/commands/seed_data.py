from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.dtos import CreateOrderDTO, OrderProductRefDTO
from modules.orders.models import Order
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SEED_CUSTOMERS = [
    ("Ana", "Souza", "ana@example.com", "+55 11 91234-5678"),
    ("Bruno", "Lima", "bruno@example.com", "(21) 99876-5432"),
    ("Carla", "Mendes", "carla@example.com", "+1 415 555 0100"),
    ("Daniel", "Costa", "daniel@example.com", "+44 20 7946 0958"),
    ("Helena", "Ferreira", "helena@example.com", "31 3333-4444"),
]

SEED_PRODUCTS = [
    ("Monitor 27\"", "Electronics", Decimal("1299.90"), 15),
    ("Mechanical keyboard", "Electronics", Decimal("399.90"), 40),
    ("Gaming mouse", "Electronics", Decimal("249.90"), 60),
    ("Office desk", "Furniture", Decimal("899.00"), 8),
    ("Ergonomic chair", "Furniture", Decimal("1499.00"), 12),
    ("A4 paper", None, Decimal("29.90"), 200),
    ("Gift card", "Priced at checkout", None, 0),
]


class Command(BaseCommand):
    help = "Seed database with development data through the service layer."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=10)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customer_ids = self._seed_customers()
        product_ids = self._seed_products()
        orders_created = self._seed_orders(customer_ids, product_ids, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customer_ids)}, "
                f"products={len(product_ids)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_customers(self) -> list[int]:
        self.stdout.write("Creating customers...")
        repository = CustomerDjangoRepository()
        service = CustomerService(repository=repository)
        ids: list[int] = []
        for first_name, last_name, email, phone in SEED_CUSTOMERS:
            existing = repository.find_active_by_email(email)
            if existing:
                ids.append(existing.id)
                continue
            dto = CreateCustomerDTO(
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone_number=phone,
            )
            ids.append(service.create_customer(dto).id)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return ids

    def _seed_products(self) -> list[int]:
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())
        ids: list[int] = []
        for name, description, price, quantity in SEED_PRODUCTS:
            existing = Product.objects.alive().filter(name=name).first()
            if existing:
                ids.append(existing.id)
                continue
            dto = CreateProductDTO(
                name=name,
                description=description,
                price=price,
                quantity_in_stock=quantity,
            )
            ids.append(service.create_product(dto).id)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return ids

    def _seed_orders(self, customer_ids: list[int], product_ids: list[int], count: int) -> int:
        self.stdout.write("Creating orders...")
        if not customer_ids or not product_ids:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers/products)."))
            return 0
        if Order.objects.alive().exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        for i in range(count):
            picked = random.sample(product_ids, k=random.randint(1, min(3, len(product_ids))))
            dto = CreateOrderDTO(
                customer_id=random.choice(customer_ids),
                products=[OrderProductRefDTO(id=pid) for pid in picked],
                shipping_address=f"{100 + i} Seed Street",
                total_price=Decimal(random.randint(10, 5000)),
            )
            service.create_order(dto)
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
