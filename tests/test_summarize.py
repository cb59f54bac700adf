import pytest

from recipe_costing import NoCandidatesError, summarize_recipe
from recipe_costing.catalog import (
    Catalog,
    NutrientFact,
    Product,
    Recipe,
    RecipeLineItem,
    SupplierProduct,
    UnitOfMeasure,
)
from recipe_costing.summary import sort_keys, summarize_recipes


def each(amount):
    return UnitOfMeasure("count", "each", amount)


def grams(amount):
    return UnitOfMeasure("mass", "gram", amount)


def product(name, ingredient, price, facts=()):
    return Product(
        product_name=name,
        ingredient_name=ingredient,
        supplier_products=(
            SupplierProduct(
                supplier_name=f"{name} supplier",
                supplier_product_name=name,
                supplier_price=price,
                supplier_product_uom=each(1),
            ),
        ),
        nutrient_facts=tuple(facts),
    )


@pytest.fixture
def catalog():
    return Catalog(
        products=[
            product(
                "Beef Patty",
                "Beef",
                3,
                [NutrientFact("Protein", grams(20)), NutrientFact("Fat", grams(15))],
            ),
            product("Bargain Beef Patty", "Beef", 2, [NutrientFact("Protein", grams(5))]),
            product(
                "Brioche Bun",
                "Bun",
                1.5,
                [
                    NutrientFact("Protein", grams(10)),
                    NutrientFact("Carbohydrate", grams(30)),
                    NutrientFact("Sodium", UnitOfMeasure("mass", "mg", 200)),
                ],
            ),
        ]
    )


@pytest.fixture
def burger():
    return Recipe(
        recipe_name="Burger",
        line_items=(
            RecipeLineItem("Beef", each(2)),
            RecipeLineItem("Bun", each(1)),
        ),
    )


def test_single_line_item_cost():
    catalog = Catalog(
        products=[product("Product A", "Tomato", 3), product("Product B", "Tomato", 2)]
    )
    recipe = Recipe("Salad", (RecipeLineItem("Tomato", each(2)),))
    summary = summarize_recipe(recipe, catalog)
    assert summary.cheapest_cost == 4
    assert summary.nutrients_at_cheapest_cost == {}


def test_summarize_recipe(catalog, burger):
    summary = summarize_recipe(burger, catalog)

    assert summary.cheapest_cost == pytest.approx(2 * 2 + 1.5)
    nutrients = summary.nutrients_at_cheapest_cost
    # only the winning beef product contributes nutrients, once per line item
    assert nutrients["Protein"].quantity_amount.uom_amount == 15
    assert "Fat" not in nutrients
    assert nutrients["Sodium"].quantity_amount.uom_amount == pytest.approx(0.2)
    assert nutrients["Sodium"].quantity_amount.uom_name == "gram"


def test_nutrient_keys_sorted(catalog, burger):
    summary = summarize_recipe(burger, catalog)
    keys = list(summary.nutrients_at_cheapest_cost)
    assert keys == sorted(keys)
    assert keys == ["Carbohydrate", "Protein", "Sodium"]


def test_summarize_is_idempotent(catalog, burger):
    first = summarize_recipe(burger, catalog)
    second = summarize_recipe(burger, catalog)
    assert first.cheapest_cost == second.cheapest_cost
    assert first == second
    # catalog facts are untouched by the merge
    bun = catalog.get_products_for_ingredient("Bun")[0]
    assert bun.nutrient_facts[0].quantity_amount.uom_amount == 10


def test_missing_ingredient_aborts_recipe(catalog):
    recipe = Recipe(
        recipe_name="Cheeseburger",
        line_items=(
            RecipeLineItem("Beef", each(1)),
            RecipeLineItem("Cheese", each(1)),
        ),
    )
    with pytest.raises(NoCandidatesError) as excinfo:
        summarize_recipe(recipe, catalog)
    assert excinfo.value.ingredient == "Cheese"


def test_empty_recipe():
    summary = summarize_recipe(Recipe("Nothing"), Catalog())
    assert summary.cheapest_cost == 0
    assert summary.nutrients_at_cheapest_cost == {}


def test_summarize_recipes_keyed_by_name(catalog, burger):
    snack = Recipe("Bun", (RecipeLineItem("Bun", each(3)),))
    summaries = summarize_recipes([burger, snack], catalog)
    assert list(summaries) == ["Burger", "Bun"]
    assert summaries["Bun"].cheapest_cost == pytest.approx(4.5)
    assert summaries["Bun"].nutrients_at_cheapest_cost["Protein"].quantity_amount.uom_amount == 10


def test_summary_to_dict(catalog, burger):
    data = summarize_recipe(burger, catalog).to_dict()
    assert data["cheapestCost"] == pytest.approx(5.5)
    assert list(data["nutrientsAtCheapestCost"]) == ["Carbohydrate", "Protein", "Sodium"]
    assert data["nutrientsAtCheapestCost"]["Protein"] == {
        "nutrientName": "Protein",
        "quantityAmount": {"uomAmount": 15, "uomName": "gram", "uomType": "mass"},
    }


@pytest.mark.parametrize(
    "mapping, expected",
    [
        ({"b": 1, "a": 2, "C": 3}, ["C", "a", "b"]),
        ({}, []),
        ({"Zinc": 1, "Iron": 2, "Vitamin A": 3}, ["Iron", "Vitamin A", "Zinc"]),
    ],
)
def test_sort_keys(mapping, expected):
    assert list(sort_keys(mapping)) == expected
