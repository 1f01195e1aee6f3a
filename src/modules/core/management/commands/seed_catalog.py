from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.categories.models import Category
from modules.products.models import Product
from modules.tags.repositories.django_repository import TagDjangoRepository
from modules.tags.services import TagService

CATALOG = [
    ("Phone", "Electronics", Decimal("599.00"), ["Premium", "New"]),
    ("Laptop", "Electronics", Decimal("1499.99"), ["Premium"]),
    ("Headphones", "Electronics", Decimal("199.90"), ["Wireless", "New"]),
    ("Mechanical Keyboard", "Electronics", Decimal("129.90"), ["Wireless"]),
    ("Office Chair", "Furniture", Decimal("349.00"), ["Ergonomic"]),
    ("Standing Desk", "Furniture", Decimal("699.00"), ["Ergonomic", "Premium"]),
    ("Bookshelf", "Furniture", Decimal("149.00"), []),
    ("Notebook A5", "Stationery", Decimal("4.90"), ["Eco"]),
    ("Ballpoint Pen", "Stationery", Decimal("1.20"), []),
    ("Recycled Paper", "Stationery", Decimal("7.50"), ["Eco", "New"]),
]


class Command(BaseCommand):
    help = "Seed database with demo categories, tags and products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-admin",
            action="store_true",
            help="Also create an 'admin' user for the token endpoints.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding catalog data...")

        users_created = self._seed_users() if options["with_admin"] else 0
        categories = self._seed_categories()
        products_created = self._seed_products(categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"categories={len(categories)}, "
                f"products={products_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        categories: dict[str, Category] = {}
        for name in dict.fromkeys(category for _, category, _, _ in CATALOG):
            categories[name], _ = Category.objects.get_or_create(name=name)
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> int:
        self.stdout.write("Creating products...")
        tag_service = TagService(repository=TagDjangoRepository())
        created = 0
        for name, category, price, tag_names in CATALOG:
            product, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "category": categories[category],
                    "price": price,
                    "stock_quantity": random.randint(0, 50),
                },
            )
            if not was_created:
                continue
            if tag_names:
                product.tags.set(tag_service.get_or_create_tags(tag_names))
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
