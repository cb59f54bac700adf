"""Cheapest supplier offer for a recipe line item."""

import logging
from typing import List, Optional, Protocol, Sequence

from ..catalog.models import LowestCost, Product, RecipeLineItem, UnitOfMeasure
from ..exceptions import NoCandidatesError
from ..units import DEFAULT_REGISTRY, UnitRegistry

logger = logging.getLogger(__name__)


class ProductSource(Protocol):
    """Anything that can list the products fulfilling an ingredient."""

    def get_products_for_ingredient(self, ingredient: str) -> Sequence[Product]:
        ...


def compute_real_cost(
    line_item_uom: UnitOfMeasure,
    base_price: float,
    registry: Optional[UnitRegistry] = None,
) -> float:
    """Cost of the quantity a line item needs at a given price per base unit.

    Args:
        line_item_uom: Quantity required by the line item
        base_price: Price of one base unit of the line item's dimension
        registry: Unit registry to convert with. Defaults to DEFAULT_REGISTRY.

    Returns:
        ``base_price`` multiplied by the line item quantity in base units

    Raises:
        ConversionError: If the line item unit has no base unit or no
            conversion to it
    """
    registry = registry or DEFAULT_REGISTRY
    base_uom = registry.get_base_uom(line_item_uom.uom_type)
    converted = registry.convert_units(
        line_item_uom, base_uom.uom_name, base_uom.uom_type
    )
    return base_price * converted.uom_amount


def find_lowest_cost(
    line_item: RecipeLineItem,
    products: ProductSource,
    registry: Optional[UnitRegistry] = None,
) -> LowestCost:
    """Find the cheapest supplier offer across every product for an ingredient.

    Products are scanned in the order the source returns them, then each
    product's offers in catalog order. Only a strictly lower cost replaces the
    current best, so the first offer reaching the minimum wins.

    Args:
        line_item: The recipe line item to cost
        products: Source of candidate products
        registry: Unit registry to convert with. Defaults to DEFAULT_REGISTRY.

    Returns:
        The winning product, its offer and the cost of the line item quantity

    Raises:
        NoCandidatesError: If no product, or no supplier offer, exists for the
            ingredient
        ConversionError: If an offer or the line item cannot be converted
    """
    registry = registry or DEFAULT_REGISTRY
    candidates: List[Product] = list(
        products.get_products_for_ingredient(line_item.ingredient)
    )
    if not candidates:
        raise NoCandidatesError(line_item.ingredient)

    best: Optional[LowestCost] = None
    for product in candidates:
        for supplier_product in product.supplier_products:
            base_cost = registry.get_cost_per_base_unit(supplier_product)
            real_cost = compute_real_cost(
                line_item.unit_of_measure, base_cost, registry
            )
            if best is None or real_cost < best.cost:
                best = LowestCost(
                    product=product, supplier_product=supplier_product, cost=real_cost
                )

    if best is None:
        raise NoCandidatesError(
            line_item.ingredient,
            f"No supplier offers available for the given ingredient: "
            f"{line_item.ingredient!r}",
        )

    logger.debug(
        f"Cheapest offer for {line_item.ingredient}: "
        f"{best.supplier_product.supplier_name} / {best.product.product_name} "
        f"at {best.cost:.4f}"
    )
    return best
