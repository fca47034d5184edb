from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.products.models import Product

CATALOG = [
    (
        "Laptop Dell XPS 15",
        "High-performance laptop with Intel Core i7, 16GB RAM and 512GB SSD",
        Decimal("1299.99"),
        15,
        "Electronics",
    ),
    (
        "Mouse Logitech MX Master 3",
        "Ergonomic wireless mouse with 4000 DPI precision",
        Decimal("99.99"),
        50,
        "Accessories",
    ),
    (
        "Keyboard Corsair K95",
        "RGB mechanical keyboard with Cherry MX switches",
        Decimal("189.99"),
        30,
        "Accessories",
    ),
    (
        'Monitor Samsung 27" 4K',
        "27 inch 4K UHD monitor with HDR",
        Decimal("449.99"),
        20,
        "Electronics",
    ),
    (
        "Ergonomic Chair Herman Miller",
        "Office chair with adjustable lumbar support",
        Decimal("799.99"),
        10,
        "Furniture",
    ),
    (
        "Webcam Logitech C920",
        "Full HD 1080p webcam with stereo microphone",
        Decimal("79.99"),
        40,
        "Accessories",
    ),
    (
        "Headphones Sony WH-1000XM4",
        "Wireless headphones with active noise cancelling",
        Decimal("349.99"),
        25,
        "Audio",
    ),
    (
        "Height Adjustable Desk",
        "Electric standing desk adjustable from 60cm to 120cm",
        Decimal("599.99"),
        8,
        "Furniture",
    ),
    (
        "USB-C Hub 7 in 1",
        "Multiport USB-C adapter with HDMI, USB 3.0 and SD reader",
        Decimal("49.99"),
        60,
        "Accessories",
    ),
    (
        "LED Desk Lamp",
        "Dimmable LED lamp with built-in Qi wireless charging",
        Decimal("69.99"),
        35,
        "Lighting",
    ),
    (
        "SSD Samsung 970 EVO 1TB",
        "High-speed 1TB NVMe M.2 solid state drive",
        Decimal("129.99"),
        45,
        "Storage",
    ),
    (
        "Router Wi-Fi 6 ASUS",
        "Dual-band Wi-Fi 6 router covering 3000 square feet",
        Decimal("179.99"),
        18,
        "Networking",
    ),
]


class Command(BaseCommand):
    help = "Seed an empty product table with a demo catalog."

    @transaction.atomic
    def handle(self, *args, **options):
        if Product.objects.exists():
            self.stdout.write(
                self.style.WARNING("Products already present. Skipping seed.")
            )
            return

        self.stdout.write("Creating products...")
        now = timezone.now()
        products = Product.objects.bulk_create(
            [
                Product(
                    name=name,
                    description=description,
                    price=price,
                    stock=stock,
                    category=category,
                    created_at=now,
                    is_active=True,
                )
                for name, description, price, stock, category in CATALOG
            ]
        )
        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={len(products)}")
        )
