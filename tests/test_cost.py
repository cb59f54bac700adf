import pytest

from recipe_costing import ConversionError, NoCandidatesError
from recipe_costing.catalog import (
    Catalog,
    Product,
    RecipeLineItem,
    SupplierProduct,
    UnitOfMeasure,
)
from recipe_costing.summary import compute_real_cost, find_lowest_cost
from recipe_costing.units import get_cost_per_base_unit


def each(amount):
    return UnitOfMeasure("count", "each", amount)


def offer(supplier, price, uom):
    return SupplierProduct(
        supplier_name=supplier,
        supplier_product_name=f"{supplier} offer",
        supplier_price=price,
        supplier_product_uom=uom,
    )


@pytest.fixture
def tomato_catalog():
    product_a = Product(
        product_name="Product A",
        ingredient_name="Tomato",
        supplier_products=(offer("Supplier A", 3, each(1)),),
    )
    product_b = Product(
        product_name="Product B",
        ingredient_name="Tomato",
        supplier_products=(offer("Supplier B", 2, each(1)),),
    )
    return Catalog(products=[product_a, product_b])


def test_compute_real_cost():
    assert compute_real_cost(UnitOfMeasure("mass", "kg", 2), 0.01) == pytest.approx(20.0)


def test_compute_real_cost_unknown_unit():
    with pytest.raises(ConversionError):
        compute_real_cost(UnitOfMeasure("mass", "stone", 1), 0.01)


def test_cheapest_product_wins(tomato_catalog):
    lowest = find_lowest_cost(RecipeLineItem("Tomato", each(2)), tomato_catalog)
    assert lowest.cost == 4
    assert lowest.product.product_name == "Product B"
    assert lowest.supplier_product.supplier_name == "Supplier B"


def test_cost_compared_after_unit_conversion():
    # 5 lb for 9.00 is cheaper per gram than 1 kg for 4.50
    catalog = Catalog(
        products=[
            Product(
                product_name="Flour by the kilo",
                ingredient_name="Flour",
                supplier_products=(offer("Metric Mill", 4.5, UnitOfMeasure("mass", "kg", 1)),),
            ),
            Product(
                product_name="Flour by the pound",
                ingredient_name="Flour",
                supplier_products=(offer("Imperial Mill", 9.0, UnitOfMeasure("mass", "lb", 5)),),
            ),
        ]
    )
    line_item = RecipeLineItem("Flour", UnitOfMeasure("mass", "grams", 500))
    lowest = find_lowest_cost(line_item, catalog)

    assert lowest.product.product_name == "Flour by the pound"
    assert lowest.cost == pytest.approx(500 * 9.0 / (5 * 453.592))


def test_first_offer_wins_ties():
    catalog = Catalog(
        products=[
            Product(
                product_name="First",
                ingredient_name="Egg",
                supplier_products=(offer("Early", 0.5, each(1)), offer("Early bulk", 6.0, each(12))),
            ),
            Product(
                product_name="Second",
                ingredient_name="Egg",
                supplier_products=(offer("Late", 6.0, each(12)),),
            ),
        ]
    )
    lowest = find_lowest_cost(RecipeLineItem("Egg", each(3)), catalog)
    assert lowest.product.product_name == "First"
    assert lowest.supplier_product.supplier_name == "Early"
    assert lowest.cost == 1.5


def test_lowest_cost_not_above_any_offer():
    offers = [
        offer("A", 3.2, UnitOfMeasure("volume", "litre", 1)),
        offer("B", 0.9, UnitOfMeasure("volume", "cup", 1)),
        offer("C", 12.0, UnitOfMeasure("volume", "gallon", 1)),
        offer("D", 0.05, UnitOfMeasure("volume", "tbsp", 2)),
    ]
    catalog = Catalog(
        products=[
            Product(product_name=f"Milk {o.supplier_name}", ingredient_name="Milk", supplier_products=(o,))
            for o in offers
        ]
    )
    required = UnitOfMeasure("volume", "millilitre", 750)
    lowest = find_lowest_cost(RecipeLineItem("Milk", required), catalog)

    for o in offers:
        assert lowest.cost <= compute_real_cost(required, get_cost_per_base_unit(o))


def test_product_without_offers_cannot_win():
    catalog = Catalog(
        products=[
            Product(product_name="Unpriced", ingredient_name="Salt"),
            Product(
                product_name="Priced",
                ingredient_name="Salt",
                supplier_products=(offer("Salt Co", 1.0, UnitOfMeasure("mass", "kg", 1)),),
            ),
        ]
    )
    lowest = find_lowest_cost(RecipeLineItem("Salt", UnitOfMeasure("mass", "g", 10)), catalog)
    assert lowest.product.product_name == "Priced"


def test_no_products_fails(tomato_catalog):
    with pytest.raises(NoCandidatesError) as excinfo:
        find_lowest_cost(RecipeLineItem("Saffron", each(1)), tomato_catalog)
    assert excinfo.value.ingredient == "Saffron"


def test_no_offers_fails():
    catalog = Catalog(products=[Product(product_name="Unpriced", ingredient_name="Salt")])
    with pytest.raises(NoCandidatesError):
        find_lowest_cost(RecipeLineItem("Salt", UnitOfMeasure("mass", "g", 10)), catalog)


def test_mismatched_line_item_dimension_fails(tomato_catalog):
    line_item = RecipeLineItem("Tomato", UnitOfMeasure("temperature", "celsius", 1))
    with pytest.raises(ConversionError):
        find_lowest_cost(line_item, tomato_catalog)
