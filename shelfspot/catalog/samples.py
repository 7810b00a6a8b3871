"""
Demo catalog inserted into an empty store when SEED_SAMPLE_PRODUCTS is on.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from shelfspot.catalog.store import CatalogStore
from shelfspot.schemas.product import ProductCreate


logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {"name": "Ergonomic Office Chair", "price": 299.99, "description": "High-back ergonomic chair with lumbar support and adjustable armrests.", "imageUrl": "https://picsum.photos/seed/chair/400/300", "displayHint": "office chair"},
    {"name": "Modern Oak Dining Table", "price": 450.00, "description": "Solid oak dining table with a minimalist design, seats 6.", "imageUrl": "https://picsum.photos/seed/table/400/300", "displayHint": "dining table"},
    {"name": "Gaming Desktop PC - Ryzen 7", "price": 1200.00, "description": "Powerful gaming desktop with AMD Ryzen 7, RTX 4070, 32GB RAM.", "imageUrl": "https://picsum.photos/seed/desktop/400/300", "displayHint": "gaming pc"},
    {"name": "Latest Smartphone Pro Max", "price": 999.00, "description": "Flagship smartphone with a stunning display and pro-grade camera system.", "imageUrl": "https://picsum.photos/seed/phone/400/300", "displayHint": "smartphone"},
    {"name": "Adjustable Standing Desk Lamp", "price": 79.50, "description": "Modern LED desk lamp with adjustable brightness and color temperature.", "imageUrl": "https://picsum.photos/seed/desklamp/400/300", "displayHint": "desk lamp"},
    {"name": "Wireless Noise-Cancelling Headphones", "price": 199.99, "description": "Immersive sound experience with active noise cancellation and long battery life.", "imageUrl": "https://picsum.photos/seed/headphones/400/300", "displayHint": "headphones audio"},
    {"name": "Smart Coffee Maker", "price": 89.00, "description": "Wi-Fi enabled coffee maker, schedule your brews from your phone.", "imageUrl": "https://picsum.photos/seed/coffeemaker/400/300", "displayHint": "coffee maker"},
    {"name": "Leather Messenger Bag", "price": 120.00, "description": "Stylish and durable leather bag for laptops and daily essentials.", "imageUrl": "https://picsum.photos/seed/messengerbag/400/300", "displayHint": "leather bag"},
    {"name": "Premium Yoga Mat", "price": 45.00, "description": "Eco-friendly, non-slip yoga mat for all types of practice.", "imageUrl": "https://picsum.photos/seed/yogamat/400/300", "displayHint": "yoga mat"},
    {"name": "Portable Bluetooth Speaker", "price": 65.00, "description": "Compact and waterproof Bluetooth speaker with rich sound.", "imageUrl": "https://picsum.photos/seed/btspeaker/400/300", "displayHint": "bluetooth speaker"},
    {"name": "Mechanical Keyboard", "price": 150.00, "description": "RGB backlit mechanical keyboard with customizable switches.", "imageUrl": "https://picsum.photos/seed/keyboard/400/300", "displayHint": "mechanical keyboard"},
    {"name": "4K Ultra HD Monitor", "price": 350.00, "description": "27-inch 4K UHD monitor with HDR support for crisp visuals.", "imageUrl": "https://picsum.photos/seed/monitor/400/300", "displayHint": "4k monitor"},
    {"name": "Smartwatch Series X", "price": 249.00, "description": "Feature-rich smartwatch with fitness tracking and notifications.", "imageUrl": "https://picsum.photos/seed/smartwatch/400/300", "displayHint": "smartwatch wearable"},
    {"name": "Bookshelf, 5-Tier", "price": 90.00, "description": "Modern and sturdy 5-tier bookshelf for home or office.", "imageUrl": "https://picsum.photos/seed/bookshelf/400/300", "displayHint": "bookshelf furniture"},
    {"name": "Electric Kettle", "price": 35.00, "description": "Fast-boiling electric kettle with auto shut-off feature.", "imageUrl": "https://picsum.photos/seed/kettle/400/300", "displayHint": "electric kettle"},
]


def seed_store(store: CatalogStore) -> int:
    """
    Insert the demo catalog into an empty store.

    Products are inserted last-to-first so the list reads in the order
    above (newest first).

    Returns:
        Number of products inserted (0 when the store already has data)
    """
    if store.count() > 0:
        logger.info("Catalog already populated, skipping sample data")
        return 0

    for item in reversed(SAMPLE_PRODUCTS):
        store.create_product(ProductCreate.model_validate(item))

    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
