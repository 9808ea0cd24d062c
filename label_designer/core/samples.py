"""
Sample product catalog for the "Randomize" action.

Each pick keeps the first SKU_BASE_LEN characters of the catalog SKU and
appends a random 3-digit suffix, so repeated picks of the same product still
produce visibly different barcodes.
"""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from .models import Label

SKU_BASE_LEN = 10

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {"product_name": "Jeera Rice Premium (1kg)", "mrp": 140, "price": 125, "sku": "8901234567890"},
    {"product_name": "Toor Dal Unpolished (500g)", "mrp": 95, "price": 89, "sku": "8904567123450"},
    {"product_name": "Sunflower Oil (1L)", "mrp": 180, "price": 159, "sku": "8902519003225"},
    {"product_name": "Masala Chai Tea (250g)", "mrp": 150, "price": 135, "sku": "8901725121815"},
    {"product_name": "Basmati Rice Classic (5kg)", "mrp": 799, "price": 699, "sku": "8906012340016"},
    {"product_name": "Atta Whole Wheat (10kg)", "mrp": 520, "price": 475, "sku": "8901030704376"},
    {"product_name": "Sugar (1kg)", "mrp": 55, "price": 48, "sku": "8908001234561"},
]


def random_sku(base: str, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return f"{(base or '')[:SKU_BASE_LEN]}{rng.randint(0, 999):03d}"


def random_sample(rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """Pick one catalog product and return the four fields it replaces."""
    rng = rng or random
    product = rng.choice(SAMPLE_PRODUCTS)
    return {
        "product_name": product["product_name"],
        "mrp": float(product["mrp"]),
        "price": float(product["price"]),
        "sku": random_sku(product["sku"], rng),
    }


def apply_random_sample(label: Label, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """Randomize *label* in place; store name, phone and copy count are kept."""
    fields = random_sample(rng)
    for name, value in fields.items():
        setattr(label, name, value)
    return fields
