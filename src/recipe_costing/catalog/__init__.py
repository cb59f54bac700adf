"""Catalog models and data access."""

from .models import (
    LowestCost,
    NutrientFact,
    Product,
    Recipe,
    RecipeLineItem,
    RecipeSummary,
    SupplierProduct,
    UnitOfMeasure,
)
from .sources import Catalog, catalog_from_dict, load_catalog

__all__ = [
    "UnitOfMeasure",
    "SupplierProduct",
    "NutrientFact",
    "Product",
    "RecipeLineItem",
    "Recipe",
    "LowestCost",
    "RecipeSummary",
    "Catalog",
    "catalog_from_dict",
    "load_catalog",
]
