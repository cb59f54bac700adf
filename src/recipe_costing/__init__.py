"""Recipe Costing - Cheapest supplier cost and nutrient summaries for recipes."""

__version__ = "0.1.0"

from . import catalog, database, summary, units
from .exceptions import (
    CatalogError,
    ConversionError,
    NoCandidatesError,
    RecipeCostingError,
)
from .summary import summarize_recipe

__all__ = [
    "catalog",
    "database",
    "summary",
    "units",
    "summarize_recipe",
    "RecipeCostingError",
    "NoCandidatesError",
    "ConversionError",
    "CatalogError",
]
