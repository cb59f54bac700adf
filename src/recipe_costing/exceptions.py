"""Errors raised while costing recipes."""

from typing import Optional


class RecipeCostingError(Exception):
    """Base class for every error raised by recipe_costing."""


class NoCandidatesError(RecipeCostingError, LookupError):
    """No product or supplier offer exists for an ingredient."""

    def __init__(self, ingredient: str, message: Optional[str] = None):
        self.ingredient = ingredient
        super().__init__(
            message or f"No products available for the given ingredient: {ingredient!r}"
        )


class ConversionError(RecipeCostingError, ValueError):
    """A quantity cannot be expressed in the base unit of its dimension."""

    def __init__(self, message: str, unit=None):
        self.unit = unit
        super().__init__(message)


class CatalogError(RecipeCostingError, ValueError):
    """Catalog data is malformed."""
