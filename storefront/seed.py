"""
Seed data — the admin account and the starter catalog.
"""

from storefront import config
from storefront.database import MemoryStore
from storefront.utils.helpers import slugify
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600"

SAMPLE_PRODUCTS = [
    {
        "title": "Professional Laptop Pro 15\"",
        "description": "High-performance laptop designed for business professionals with "
                       "advanced security features and powerful processing capabilities.",
        "price": "2499.00",
        "image": _IMG.format("1496181133206-80ce9b88a853"),
        "stock": 12,
        "category": "technology",
        "tags": ["laptop", "professional", "business"],
        "featured": True,
    },
    {
        "title": "Executive Office Chair",
        "description": "Ergonomic design with lumbar support and premium materials for "
                       "all-day comfort and professional appearance.",
        "price": "699.00",
        "image": _IMG.format("1506439773649-6e0eb8cfb237"),
        "stock": 8,
        "category": "office",
        "tags": ["chair", "ergonomic", "office"],
        "featured": True,
    },
    {
        "title": "Video Conference Kit",
        "description": "Complete video conferencing solution with 4K camera, professional "
                       "audio equipment, and wireless connectivity.",
        "price": "1299.00",
        "image": _IMG.format("1600298881974-6be191ceeda1"),
        "stock": 5,
        "category": "technology",
        "tags": ["conference", "video", "audio"],
    },
    {
        "title": "Strategic Consulting Package",
        "description": "Comprehensive business strategy consultation with market analysis, "
                       "growth planning, and implementation roadmap.",
        "price": "899.00",
        "image": _IMG.format("1560472354-b33ff0c44a43"),
        "stock": 999,
        "category": "consulting",
        "tags": ["consulting", "strategy", "business"],
    },
    {
        "title": "Multi-Function Printer Pro",
        "description": "Professional grade printer with scanning, copying, fax, and wireless "
                       "connectivity for complete office solutions.",
        "price": "449.00",
        "image": _IMG.format("1612198188060-c7c2a3b66eae"),
        "stock": 15,
        "category": "office",
        "tags": ["printer", "scanner", "office"],
    },
    {
        "title": "Adjustable Standing Desk",
        "description": "Height-adjustable desk with memory settings and sustainable materials "
                       "for healthy work habits and improved productivity.",
        "price": "799.00",
        "image": _IMG.format("1541558869434-2840d308329a"),
        "stock": 6,
        "category": "office",
        "tags": ["desk", "adjustable", "ergonomic"],
    },
]


def seed_store(store: MemoryStore) -> None:
    """Create the admin user and the sample products if they are missing."""
    if store.get_user_by_username(config.ADMIN_USERNAME) is None:
        store.create_user(config.ADMIN_USERNAME, config.ADMIN_PASSWORD)
        _logger.info(f"Seeded admin user '{config.ADMIN_USERNAME}'")

    created = 0
    for fields in SAMPLE_PRODUCTS:
        if store.get_product(slugify(fields["title"])) is not None:
            continue
        store.create_product(**fields)
        created += 1
    if created:
        _logger.info(f"Seeded {created} sample products")

