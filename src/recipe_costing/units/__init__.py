"""Unit-of-measure registry and conversions."""

from .conversions import (
    BASE_UNITS,
    DEFAULT_REGISTRY,
    UNIT_CONVERSIONS,
    UnitRegistry,
    collect_units,
    convert_units,
    find_unknown_units,
    get_base_uom,
    get_cost_per_base_unit,
    get_nutrient_fact_in_base_units,
    normalize_unit,
)

__all__ = [
    "BASE_UNITS",
    "UNIT_CONVERSIONS",
    "UnitRegistry",
    "DEFAULT_REGISTRY",
    "normalize_unit",
    "get_base_uom",
    "convert_units",
    "get_cost_per_base_unit",
    "get_nutrient_fact_in_base_units",
    "collect_units",
    "find_unknown_units",
]
