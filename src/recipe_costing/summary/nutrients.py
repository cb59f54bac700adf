"""Merging nutrient facts into running totals."""

import dataclasses
import logging
from typing import Dict, Iterable, Optional

from ..catalog.models import NutrientFact
from ..exceptions import ConversionError
from ..units import DEFAULT_REGISTRY, UnitRegistry

logger = logging.getLogger(__name__)


def merge_into(
    running_totals: Dict[str, NutrientFact],
    new_facts: Iterable[NutrientFact],
    registry: Optional[UnitRegistry] = None,
) -> None:
    """Add nutrient facts to running totals keyed by nutrient name.

    Each fact is converted to the base unit of its dimension before it is
    merged, so totals do not depend on the order facts arrive in. Entries are
    replaced with new facts; the facts passed in are never modified.

    Args:
        running_totals: Totals to update in place
        new_facts: Facts to merge, typically one product's nutrient facts
        registry: Unit registry to convert with. Defaults to DEFAULT_REGISTRY.

    Raises:
        ConversionError: If a fact cannot be converted, or a nutrient is
            reported in two different dimensions
    """
    registry = registry or DEFAULT_REGISTRY
    for fact in new_facts:
        base_fact = registry.get_nutrient_fact_in_base_units(fact)
        name = base_fact.nutrient_name
        existing = running_totals.get(name)
        if existing is None:
            running_totals[name] = base_fact
            continue

        existing_uom = existing.quantity_amount
        incoming_uom = base_fact.quantity_amount
        if existing_uom.uom_type != incoming_uom.uom_type:
            raise ConversionError(
                f"Nutrient '{name}' is reported as both {existing_uom.uom_type} "
                f"and {incoming_uom.uom_type}",
                unit=fact.quantity_amount,
            )
        running_totals[name] = dataclasses.replace(
            existing,
            quantity_amount=dataclasses.replace(
                existing_uom,
                uom_amount=existing_uom.uom_amount + incoming_uom.uom_amount,
            ),
        )
        logger.debug(
            f"{name}: {running_totals[name].quantity_amount.uom_amount} "
            f"{existing_uom.uom_name}"
        )
