"""In-memory product catalog and its JSON loader."""

import json
import logging
import pathlib
from typing import Any, Dict, Iterable, List, Union

from ..exceptions import CatalogError
from .models import Product, Recipe, _entries

logger = logging.getLogger(__name__)


class Catalog:
    """Products grouped by the ingredient they fulfil, plus the recipes to cost.

    Products are returned in the order they were added. That order decides
    which product wins when two offers cost exactly the same.
    """

    def __init__(
        self, products: Iterable[Product] = (), recipes: Iterable[Recipe] = ()
    ):
        self._products: Dict[str, List[Product]] = {}
        self._recipes: List[Recipe] = []
        for product in products:
            self.add_product(product)
        for recipe in recipes:
            self.add_recipe(recipe)

    def add_product(self, product: Product) -> None:
        self._products.setdefault(product.ingredient_name, []).append(product)

    def add_recipe(self, recipe: Recipe) -> None:
        self._recipes.append(recipe)

    def get_products_for_ingredient(self, ingredient: str) -> List[Product]:
        return list(self._products.get(ingredient, []))

    def get_recipes(self) -> List[Recipe]:
        return list(self._recipes)

    @property
    def products(self) -> List[Product]:
        return [product for group in self._products.values() for product in group]

    def __len__(self) -> int:
        return sum(len(group) for group in self._products.values())


def catalog_from_dict(data: Dict[str, Any]) -> Catalog:
    """Build a Catalog from the parsed JSON catalog document.

    Args:
        data: Mapping with optional ``products`` and ``recipes`` lists in the
            camelCase catalog format.

    Returns:
        A populated Catalog.

    Raises:
        CatalogError: If the document or any entry in it is malformed.
    """
    if not isinstance(data, dict):
        raise CatalogError("Catalog document must be a JSON object")

    products = [Product.from_dict(item) for item in _entries(data, "products", "Catalog")]
    recipes = [Recipe.from_dict(item) for item in _entries(data, "recipes", "Catalog")]
    return Catalog(products=products, recipes=recipes)


def load_catalog(path: Union[str, pathlib.Path]) -> Catalog:
    """Load a catalog from a JSON file.

    Args:
        path: Path to the JSON catalog file

    Returns:
        The loaded Catalog

    Raises:
        CatalogError: If the file is not valid JSON or not a valid catalog
    """
    path = pathlib.Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in catalog {path}: {e}") from e

    catalog = catalog_from_dict(data)
    logger.info(
        f"Loaded {len(catalog)} products and {len(catalog.get_recipes())} recipes from {path}"
    )
    return catalog
