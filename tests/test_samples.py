"""Tests for the sample catalog behind Randomize."""
from __future__ import annotations

import random

from label_designer.core.models import Label
from label_designer.core.samples import (
    SAMPLE_PRODUCTS,
    SKU_BASE_LEN,
    apply_random_sample,
    random_sample,
    random_sku,
)


def test_random_sku_keeps_base_and_adds_three_digits():
    rng = random.Random(7)
    for _ in range(50):
        sku = random_sku("8901234567890", rng)
        assert len(sku) == SKU_BASE_LEN + 3
        assert sku.startswith("8901234567")
        assert sku[-3:].isdigit()


def test_random_sku_with_short_base():
    sku = random_sku("12", random.Random(1))
    assert sku.startswith("12")
    assert len(sku) == 5


def test_random_sample_comes_from_catalog():
    rng = random.Random(42)
    names = {p["product_name"]: p for p in SAMPLE_PRODUCTS}
    for _ in range(20):
        sample = random_sample(rng)
        assert set(sample) == {"product_name", "mrp", "price", "sku"}
        product = names[sample["product_name"]]
        assert sample["mrp"] == float(product["mrp"])
        assert sample["price"] == float(product["price"])
        assert sample["sku"].startswith(product["sku"][:SKU_BASE_LEN])


def test_seeded_rng_is_reproducible():
    assert random_sample(random.Random(3)) == random_sample(random.Random(3))


def test_apply_keeps_store_fields_and_copies():
    label = Label(store_name="CORNER SHOP", store_phone="555", print_count=9)
    apply_random_sample(label, random.Random(5))
    assert label.store_name == "CORNER SHOP"
    assert label.store_phone == "555"
    assert label.print_count == 9
    assert label.product_name in {p["product_name"] for p in SAMPLE_PRODUCTS}
