"""Unit conversion to the base unit of each dimension."""

import dataclasses
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..catalog.models import (
    NutrientFact,
    Product,
    Recipe,
    SupplierProduct,
    UnitOfMeasure,
)
from ..exceptions import ConversionError


# Canonical base unit for each dimension
BASE_UNITS = {
    "mass": "gram",
    "volume": "millilitre",
    "count": "each",
}

# Conversion factors to the base unit of the dimension
UNIT_CONVERSIONS = {
    "mass": {
        "gram": 1.0,
        "kilogram": 1000.0,
        "milligram": 0.001,
        "microgram": 0.000001,
        "pound": 453.592,
        "ounce": 28.3495,
    },
    "volume": {
        "millilitre": 1.0,
        "centilitre": 10.0,
        "litre": 1000.0,
        "teaspoon": 4.92892,
        "tablespoon": 14.7868,
        "fluid ounce": 29.5735,
        "cup": 236.588,
        "pint": 473.176,
        "quart": 946.353,
        "gallon": 3785.41,
    },
    "count": {
        "each": 1.0,
        "dozen": 12.0,
    },
}

# Unit spellings seen in supplier catalogs, keyed by canonical name
UNIT_MAP = {
    "gram": ["gram", "grams", "g", "gr"],
    "kilogram": ["kilogram", "kilograms", "kg", "kgs"],
    "milligram": ["milligram", "milligrams", "mg"],
    "microgram": ["microgram", "micrograms", "mcg", "µg"],
    "pound": ["pound", "pounds", "lb", "lbs"],
    "ounce": ["ounce", "ounces", "oz"],
    "millilitre": ["millilitre", "millilitres", "milliliter", "milliliters", "ml"],
    "centilitre": ["centilitre", "centilitres", "centiliter", "centiliters", "cl"],
    "litre": ["litre", "litres", "liter", "liters", "l"],
    "teaspoon": ["teaspoon", "teaspoons", "tsp"],
    "tablespoon": ["tablespoon", "tablespoons", "tbsp"],
    "fluid ounce": ["fluid ounce", "fluid ounces", "fl oz", "floz"],
    "cup": ["cup", "cups"],
    "pint": ["pint", "pints", "pt"],
    "quart": ["quart", "quarts", "qt"],
    "gallon": ["gallon", "gallons", "gal"],
    "each": ["each", "ea", "whole", "piece", "pieces", "unit", "units"],
    "dozen": ["dozen", "dz"],
}

UNIT_LOOKUP = {v: k for k, vs in UNIT_MAP.items() for v in vs}


def normalize_unit(unit: str) -> str:
    """Normalize unit names to their canonical form.

    Args:
        unit: Raw unit string

    Returns:
        Canonical unit name, or the cleaned input if the unit is not known

    Examples:
        >>> normalize_unit("Grams")
        'gram'
        >>> normalize_unit("tbsp.")
        'tablespoon'
    """
    unit = " ".join(unit.lower().strip().rstrip(".").split())
    return UNIT_LOOKUP.get(unit, unit)


class UnitRegistry:
    """Base units and conversion factors for every supported dimension.

    Args:
        base_units: Mapping of dimension to its base unit name
        conversions: Mapping of dimension to ``{unit name: factor to base}``.
            Unit names are canonical names as returned by ``normalize_unit``.
    """

    def __init__(
        self,
        base_units: Optional[Dict[str, str]] = None,
        conversions: Optional[Dict[str, Dict[str, float]]] = None,
    ):
        self.base_units = dict(BASE_UNITS if base_units is None else base_units)
        self.conversions = {
            dimension: dict(factors)
            for dimension, factors in (
                UNIT_CONVERSIONS if conversions is None else conversions
            ).items()
        }

    def get_base_uom(self, uom_type: str) -> UnitOfMeasure:
        """Return the base unit of a dimension as a one-unit UnitOfMeasure."""
        dimension = uom_type.lower().strip()
        if dimension not in self.base_units:
            raise ConversionError(f"No base unit registered for unit type '{uom_type}'")
        return UnitOfMeasure(
            uom_type=dimension, uom_name=self.base_units[dimension], uom_amount=1.0
        )

    def _factor(self, dimension: str, unit_name: str) -> float:
        factors = self.conversions.get(dimension)
        if factors is None:
            raise ConversionError(f"Unknown unit type '{dimension}'")
        canonical = normalize_unit(unit_name)
        if canonical not in factors:
            raise ConversionError(
                f"Cannot convert unit '{unit_name}' of type '{dimension}'"
            )
        return factors[canonical]

    def convert_units(
        self, source: UnitOfMeasure, target_name: str, target_type: str
    ) -> UnitOfMeasure:
        """Convert a quantity to another unit of the same dimension.

        Args:
            source: The quantity to convert
            target_name: Unit to express the quantity in
            target_type: Dimension of the target unit

        Returns:
            A new UnitOfMeasure holding the converted amount

        Raises:
            ConversionError: If the dimensions differ or either unit is unknown
        """
        source_type = source.uom_type.lower().strip()
        target_dimension = target_type.lower().strip()
        if source_type != target_dimension:
            raise ConversionError(
                f"Cannot convert {source.uom_type} unit '{source.uom_name}' "
                f"to {target_type} unit '{target_name}'",
                unit=source,
            )

        try:
            source_factor = self._factor(source_type, source.uom_name)
            target_factor = self._factor(target_dimension, target_name)
        except ConversionError as e:
            raise ConversionError(str(e), unit=source) from None

        return UnitOfMeasure(
            uom_type=target_dimension,
            uom_name=normalize_unit(target_name),
            uom_amount=source.uom_amount * source_factor / target_factor,
        )

    def to_base_units(self, uom: UnitOfMeasure) -> UnitOfMeasure:
        """Express a quantity in the base unit of its dimension."""
        try:
            base = self.get_base_uom(uom.uom_type)
        except ConversionError as e:
            raise ConversionError(str(e), unit=uom) from None
        return self.convert_units(uom, base.uom_name, base.uom_type)

    def get_cost_per_base_unit(self, supplier_product: SupplierProduct) -> float:
        """Price of one base unit of a supplier offer.

        Raises:
            ConversionError: If the offer's unit cannot be converted, or the
                offer is for a zero quantity
        """
        base_amount = self.to_base_units(supplier_product.supplier_product_uom).uom_amount
        if base_amount == 0:
            raise ConversionError(
                f"Offer '{supplier_product.supplier_product_name}' from "
                f"{supplier_product.supplier_name} is for a zero quantity",
                unit=supplier_product.supplier_product_uom,
            )
        return supplier_product.supplier_price / base_amount

    def get_nutrient_fact_in_base_units(self, fact: NutrientFact) -> NutrientFact:
        return dataclasses.replace(
            fact, quantity_amount=self.to_base_units(fact.quantity_amount)
        )

    def is_known(self, uom: UnitOfMeasure) -> bool:
        factors = self.conversions.get(uom.uom_type.lower().strip(), {})
        return normalize_unit(uom.uom_name) in factors

    def find_unknown_units(self, units: Iterable[UnitOfMeasure]) -> List[Tuple[str, str]]:
        """Find units without conversion coverage.

        Args:
            units: Units of measure to check

        Returns:
            Sorted list of distinct ``(uom_type, uom_name)`` pairs that cannot
            be converted to a base unit
        """
        unknown = {
            (uom.uom_type, uom.uom_name) for uom in units if not self.is_known(uom)
        }
        return sorted(unknown)


DEFAULT_REGISTRY = UnitRegistry()


def collect_units(
    products: Iterable[Product], recipes: Iterable[Recipe] = ()
) -> Iterator[UnitOfMeasure]:
    """Yield every unit of measure referenced by products and recipes."""
    for product in products:
        for offer in product.supplier_products:
            yield offer.supplier_product_uom
        for fact in product.nutrient_facts:
            yield fact.quantity_amount
    for recipe in recipes:
        for item in recipe.line_items:
            yield item.unit_of_measure


def get_base_uom(uom_type: str) -> UnitOfMeasure:
    return DEFAULT_REGISTRY.get_base_uom(uom_type)


def convert_units(
    source: UnitOfMeasure, target_name: str, target_type: str
) -> UnitOfMeasure:
    return DEFAULT_REGISTRY.convert_units(source, target_name, target_type)


def get_cost_per_base_unit(supplier_product: SupplierProduct) -> float:
    return DEFAULT_REGISTRY.get_cost_per_base_unit(supplier_product)


def get_nutrient_fact_in_base_units(fact: NutrientFact) -> NutrientFact:
    return DEFAULT_REGISTRY.get_nutrient_fact_in_base_units(fact)


def find_unknown_units(units: Iterable[UnitOfMeasure]) -> List[Tuple[str, str]]:
    return DEFAULT_REGISTRY.find_unknown_units(units)
