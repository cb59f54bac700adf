"""Dataclasses describing recipes, products and supplier offers.

All models are frozen. The JSON form of each model uses the camelCase keys of
the supplier catalog format (``uomType``, ``supplierPrice``, ...).
"""

import dataclasses
import math
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import CatalogError


def _require(data: Dict[str, Any], key: str, model: str) -> Any:
    """Return ``data[key]`` or raise a CatalogError naming the model."""
    if not isinstance(data, dict):
        raise CatalogError(f"{model} must be an object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise CatalogError(f"{model} is missing required field '{key}'") from None


def _text(data: Dict[str, Any], key: str, model: str) -> str:
    value = _require(data, key, model)
    if not isinstance(value, str):
        raise CatalogError(f"{model} field '{key}' must be a string, got {value!r}")
    return value


def _optional_text(data: Dict[str, Any], key: str, model: str, default=None) -> Optional[str]:
    if data.get(key) is None:
        return default
    return _text(data, key, model)


def _entries(data: Dict[str, Any], key: str, model: str) -> List[Any]:
    """Return the list under ``key``; a missing or null list is empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise CatalogError(f"{model} field '{key}' must be a list, got {value!r}")
    return value


def _number(value: Any, field: str) -> float:
    # bool is an int subclass; True is not a price
    if isinstance(value, bool):
        raise CatalogError(f"Field '{field}' must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise CatalogError(f"Field '{field}' must be numeric, got {value!r}") from None
    if not math.isfinite(number):
        raise CatalogError(f"Field '{field}' must be a finite number, got {value!r}")
    return number


@dataclasses.dataclass(frozen=True)
class UnitOfMeasure:
    """A quantity in a named unit of a given dimension (mass, volume, count)."""

    uom_type: str
    uom_name: str
    uom_amount: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnitOfMeasure":
        return cls(
            uom_type=_text(data, "uomType", "UnitOfMeasure"),
            uom_name=_text(data, "uomName", "UnitOfMeasure"),
            uom_amount=_number(_require(data, "uomAmount", "UnitOfMeasure"), "uomAmount"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uomAmount": self.uom_amount,
            "uomName": self.uom_name,
            "uomType": self.uom_type,
        }


@dataclasses.dataclass(frozen=True)
class SupplierProduct:
    """An offer: ``supplier_price`` buys ``supplier_product_uom`` of a product."""

    supplier_name: str
    supplier_product_name: str
    supplier_price: float
    supplier_product_uom: UnitOfMeasure

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SupplierProduct":
        return cls(
            supplier_name=_text(data, "supplierName", "SupplierProduct"),
            supplier_product_name=_optional_text(
                data, "supplierProductName", "SupplierProduct", default=""
            ),
            supplier_price=_number(
                _require(data, "supplierPrice", "SupplierProduct"), "supplierPrice"
            ),
            supplier_product_uom=UnitOfMeasure.from_dict(
                _require(data, "supplierProductUoM", "SupplierProduct")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supplierName": self.supplier_name,
            "supplierProductName": self.supplier_product_name,
            "supplierPrice": self.supplier_price,
            "supplierProductUoM": self.supplier_product_uom.to_dict(),
        }


@dataclasses.dataclass(frozen=True)
class NutrientFact:
    """A named nutrient quantity reported for a product.

    ``quantity_per`` is the serving the amount refers to, as reported by the
    supplier. It is carried through summaries but never used in arithmetic.
    """

    nutrient_name: str
    quantity_amount: UnitOfMeasure
    quantity_per: Optional[UnitOfMeasure] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NutrientFact":
        per = data.get("quantityPer") if isinstance(data, dict) else None
        return cls(
            nutrient_name=_text(data, "nutrientName", "NutrientFact"),
            quantity_amount=UnitOfMeasure.from_dict(
                _require(data, "quantityAmount", "NutrientFact")
            ),
            quantity_per=UnitOfMeasure.from_dict(per) if per is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "nutrientName": self.nutrient_name,
            "quantityAmount": self.quantity_amount.to_dict(),
        }
        if self.quantity_per is not None:
            result["quantityPer"] = self.quantity_per.to_dict()
        return result


@dataclasses.dataclass(frozen=True)
class Product:
    """An item that fulfils an ingredient, with its offers and nutrient facts.

    Offers and facts are kept as tuples in catalog order; the order of
    ``supplier_products`` decides ties between equally cheap offers.
    """

    product_name: str
    ingredient_name: str
    brand_name: Optional[str] = None
    supplier_products: Tuple[SupplierProduct, ...] = ()
    nutrient_facts: Tuple[NutrientFact, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        name = _text(data, "productName", "Product")
        return cls(
            product_name=name,
            ingredient_name=_optional_text(data, "ingredientName", "Product", default=name),
            brand_name=_optional_text(data, "brandName", "Product"),
            supplier_products=tuple(
                SupplierProduct.from_dict(offer)
                for offer in _entries(data, "supplierProducts", "Product")
            ),
            nutrient_facts=tuple(
                NutrientFact.from_dict(fact)
                for fact in _entries(data, "nutrientFacts", "Product")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productName": self.product_name,
            "ingredientName": self.ingredient_name,
            "brandName": self.brand_name,
            "supplierProducts": [offer.to_dict() for offer in self.supplier_products],
            "nutrientFacts": [fact.to_dict() for fact in self.nutrient_facts],
        }


@dataclasses.dataclass(frozen=True)
class RecipeLineItem:
    ingredient: str
    unit_of_measure: UnitOfMeasure

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecipeLineItem":
        ingredient = _require(data, "ingredient", "RecipeLineItem")
        # Older catalogs nest the name: {"ingredient": {"ingredientName": ...}}
        if isinstance(ingredient, dict):
            ingredient = _text(ingredient, "ingredientName", "Ingredient")
        elif not isinstance(ingredient, str):
            raise CatalogError(
                f"RecipeLineItem field 'ingredient' must be a string, got {ingredient!r}"
            )
        return cls(
            ingredient=ingredient,
            unit_of_measure=UnitOfMeasure.from_dict(
                _require(data, "unitOfMeasure", "RecipeLineItem")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ingredient": self.ingredient,
            "unitOfMeasure": self.unit_of_measure.to_dict(),
        }


@dataclasses.dataclass(frozen=True)
class Recipe:
    recipe_name: str
    line_items: Tuple[RecipeLineItem, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recipe":
        return cls(
            recipe_name=_text(data, "recipeName", "Recipe"),
            line_items=tuple(
                RecipeLineItem.from_dict(item)
                for item in _entries(data, "lineItems", "Recipe")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipeName": self.recipe_name,
            "lineItems": [item.to_dict() for item in self.line_items],
        }


@dataclasses.dataclass(frozen=True)
class LowestCost:
    """The cheapest offer found for one recipe line item."""

    product: Product
    supplier_product: SupplierProduct
    cost: float


@dataclasses.dataclass(frozen=True)
class RecipeSummary:
    """Cheapest total cost of a recipe and the nutrients bought at that cost.

    ``nutrients_at_cheapest_cost`` is keyed by nutrient name in ascending
    order, each fact expressed in the base unit of its dimension.
    """

    cheapest_cost: float
    nutrients_at_cheapest_cost: Dict[str, NutrientFact]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cheapestCost": self.cheapest_cost,
            "nutrientsAtCheapestCost": {
                name: fact.to_dict()
                for name, fact in self.nutrients_at_cheapest_cost.items()
            },
        }
