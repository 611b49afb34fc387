"""
Stock analysis: totals, extremes and low/high classification.
"""
import random

import pytest

from warehouse.crud.products import ProductCollection
from warehouse.exceptions import EmptyInventoryError
from warehouse.models import Product
from warehouse.utils.analysis import analyze_products


@pytest.fixture
def tools():
    collection = ProductCollection("Tools")
    collection.insert(1, "Hammer", 10)
    collection.insert(2, "Nail", 100)
    collection.insert(3, "Screwdriver", 5)
    return collection


def test_tools_scenario(tools):
    result = analyze_products(tools)

    assert result.total_quantity == 115
    assert result.product_count == 3
    assert round(result.average_quantity, 2) == 38.33
    assert (result.max_stock_product.name, result.max_stock_product.quantity) == ("Nail", 100)
    assert (result.min_stock_product.name, result.min_stock_product.quantity) == ("Screwdriver", 5)
    assert [(p.name, p.quantity) for p in result.low_stock_products] == [("Hammer", 10), ("Screwdriver", 5)]
    assert [(p.name, p.quantity) for p in result.high_stock_products] == [("Nail", 100)]


def test_empty_collection_fails_fast():
    with pytest.raises(EmptyInventoryError) as exc_info:
        analyze_products(ProductCollection("Food"), "Food")
    assert "Food" in str(exc_info.value)


def test_products_at_average_are_neither_low_nor_high():
    collection = ProductCollection("Even")
    collection.insert(1, "A", 10)
    collection.insert(2, "B", 20)
    collection.insert(3, "C", 30)

    result = analyze_products(collection)
    assert result.average_quantity == 20
    assert [p.product_id for p in result.low_stock_products] == [1]
    assert [p.product_id for p in result.high_stock_products] == [3]


def test_all_equal_quantities():
    collection = ProductCollection("Flat")
    for product_id in range(4):
        collection.insert(product_id, f"P{product_id}", 7)

    result = analyze_products(collection)
    assert result.low_stock_products == []
    assert result.high_stock_products == []
    # First product seen (most recently inserted) wins ties
    assert result.max_stock_product.product_id == 3
    assert result.min_stock_product.product_id == 3


def test_results_are_copies(tools):
    result = analyze_products(tools)
    result.low_stock_products[0].quantity = 999
    result.max_stock_product.quantity = 0

    assert tools.find(1).quantity == 10
    assert tools.find(2).quantity == 100


def test_analysis_does_not_reorder_collection(tools):
    analyze_products(tools)
    assert [p.product_id for p in tools] == [3, 2, 1]


@pytest.mark.parametrize("seed", range(10))
def test_classification_properties(seed):
    rng = random.Random(seed)
    products = [Product(i, f"P{i}", rng.randint(0, 50), "Random") for i in range(rng.randint(1, 25))]

    result = analyze_products(products)
    quantities = [p.quantity for p in products]
    average = sum(quantities) / len(quantities)

    assert result.total_quantity == sum(quantities)
    assert result.max_stock_product.quantity == max(quantities)
    assert result.min_stock_product.quantity == min(quantities)
    low_ids = {p.product_id for p in result.low_stock_products}
    high_ids = {p.product_id for p in result.high_stock_products}
    assert low_ids == {p.product_id for p in products if p.quantity < average}
    assert high_ids == {p.product_id for p in products if p.quantity > average}
