"""Recipe summaries at the cheapest supplier cost."""

import logging
from typing import Dict, Iterable, Mapping, Optional, TypeVar

from ..catalog.models import NutrientFact, Recipe, RecipeSummary
from ..units import UnitRegistry
from .cost import ProductSource, find_lowest_cost
from .nutrients import merge_into

logger = logging.getLogger(__name__)

V = TypeVar("V")


def sort_keys(mapping: Mapping[str, V]) -> Dict[str, V]:
    """Return a copy of ``mapping`` with keys in ascending order."""
    return {key: mapping[key] for key in sorted(mapping)}


def summarize_recipe(
    recipe: Recipe,
    products: ProductSource,
    registry: Optional[UnitRegistry] = None,
) -> RecipeSummary:
    """Compute the cheapest cost of a recipe and the nutrients bought at that cost.

    Every line item is bought from its cheapest offer. The nutrient facts of
    each winning product are merged into one profile in base units.

    Args:
        recipe: The recipe to summarize
        products: Source of candidate products per ingredient
        registry: Unit registry to convert with. Defaults to DEFAULT_REGISTRY.

    Returns:
        RecipeSummary with nutrient names in ascending order

    Raises:
        NoCandidatesError: If any line item has no product or offer
        ConversionError: If any quantity cannot be converted to base units
    """
    total_cost = 0.0
    total_nutrients: Dict[str, NutrientFact] = {}

    for line_item in recipe.line_items:
        lowest = find_lowest_cost(line_item, products, registry)
        total_cost += lowest.cost
        merge_into(total_nutrients, lowest.product.nutrient_facts, registry)

    logger.debug(f"{recipe.recipe_name}: cheapest cost {total_cost:.2f}")
    return RecipeSummary(
        cheapest_cost=total_cost,
        nutrients_at_cheapest_cost=sort_keys(total_nutrients),
    )


def summarize_recipes(
    recipes: Iterable[Recipe],
    products: ProductSource,
    registry: Optional[UnitRegistry] = None,
) -> Dict[str, RecipeSummary]:
    """Summarize several recipes, keyed by recipe name in input order."""
    return {
        recipe.recipe_name: summarize_recipe(recipe, products, registry)
        for recipe in recipes
    }
