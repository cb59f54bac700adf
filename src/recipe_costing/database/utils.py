"""SQLite storage for product catalogs and recipes."""

import contextlib
import logging
import pathlib
import sqlite3
from typing import Generator, List, Optional, Union

from ..catalog.models import (
    NutrientFact,
    Product,
    Recipe,
    RecipeLineItem,
    SupplierProduct,
    UnitOfMeasure,
)
from ..catalog.sources import Catalog

logger = logging.getLogger(__name__)


def get_connection(db_path: Union[str, pathlib.Path]) -> sqlite3.Connection:
    """Get a SQLite database connection with foreign keys enabled.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection with foreign keys enabled
    """
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Cursor, None, None]:
    """Context manager for database transactions.

    Args:
        conn: SQLite database connection

    Yields:
        Database cursor for executing queries

    Example:
        with transaction(conn) as cur:
            cur.execute("INSERT INTO recipe(name) VALUES (?)", ("Lasagna",))
    """
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def upsert_product(cur: sqlite3.Cursor, product: Product) -> int:
    """Insert or replace a product with its offers and nutrient facts, return its ID.

    Products are keyed on (name, ingredient). A product stored again keeps its
    ID, so its position among the products for an ingredient is unchanged.
    """
    cur.execute(
        "INSERT INTO product(name, ingredient_name, brand_name) VALUES (?, ?, ?) "
        "ON CONFLICT(name, ingredient_name) DO UPDATE SET brand_name = excluded.brand_name",
        (product.product_name, product.ingredient_name, product.brand_name),
    )
    cur.execute(
        "SELECT id FROM product WHERE name = ? AND ingredient_name = ?",
        (product.product_name, product.ingredient_name),
    )
    product_id = cur.fetchone()[0]

    cur.execute("DELETE FROM supplier_product WHERE product_id = ?", (product_id,))
    cur.execute("DELETE FROM nutrient_fact WHERE product_id = ?", (product_id,))

    cur.executemany(
        "INSERT INTO supplier_product(product_id, position, supplier_name, name, "
        "price, uom_type, uom_name, uom_amount) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        [
            (
                product_id,
                position,
                offer.supplier_name,
                offer.supplier_product_name,
                offer.supplier_price,
                offer.supplier_product_uom.uom_type,
                offer.supplier_product_uom.uom_name,
                offer.supplier_product_uom.uom_amount,
            )
            for position, offer in enumerate(product.supplier_products)
        ],
    )

    rows = []
    for position, fact in enumerate(product.nutrient_facts):
        per = fact.quantity_per
        rows.append(
            (
                product_id,
                position,
                fact.nutrient_name,
                fact.quantity_amount.uom_type,
                fact.quantity_amount.uom_name,
                fact.quantity_amount.uom_amount,
                per.uom_type if per else None,
                per.uom_name if per else None,
                per.uom_amount if per else None,
            )
        )
    cur.executemany(
        "INSERT INTO nutrient_fact(product_id, position, nutrient_name, uom_type, "
        "uom_name, uom_amount, per_uom_type, per_uom_name, per_uom_amount) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        rows,
    )
    return product_id


def upsert_recipe(cur: sqlite3.Cursor, recipe: Recipe) -> int:
    """Insert or replace a recipe and its line items, return its ID."""
    cur.execute(
        "INSERT INTO recipe(name) VALUES (?) ON CONFLICT(name) DO NOTHING",
        (recipe.recipe_name,),
    )
    cur.execute("SELECT id FROM recipe WHERE name = ?", (recipe.recipe_name,))
    recipe_id = cur.fetchone()[0]

    cur.execute("DELETE FROM recipe_line_item WHERE recipe_id = ?", (recipe_id,))
    cur.executemany(
        "INSERT INTO recipe_line_item(recipe_id, position, ingredient, uom_type, "
        "uom_name, uom_amount) VALUES (?, ?, ?, ?, ?, ?)",
        [
            (
                recipe_id,
                position,
                item.ingredient,
                item.unit_of_measure.uom_type,
                item.unit_of_measure.uom_name,
                item.unit_of_measure.uom_amount,
            )
            for position, item in enumerate(recipe.line_items)
        ],
    )
    return recipe_id


def import_catalog(conn: sqlite3.Connection, catalog: Catalog) -> None:
    """Store every product and recipe of a catalog, preserving catalog order.

    Products and recipes already stored under the same key are replaced, so a
    catalog can be imported again without duplicating rows.
    """
    with transaction(conn) as cur:
        for product in catalog.products:
            upsert_product(cur, product)
        for recipe in catalog.get_recipes():
            upsert_recipe(cur, recipe)
    logger.info(
        f"Imported {len(catalog)} products and {len(catalog.get_recipes())} recipes"
    )


def _uom(uom_type: Optional[str], uom_name: Optional[str], uom_amount) -> Optional[UnitOfMeasure]:
    if uom_type is None:
        return None
    return UnitOfMeasure(uom_type=uom_type, uom_name=uom_name, uom_amount=uom_amount)


class DatabaseCatalog:
    """Read products and recipes from a catalog database.

    Rows come back in insertion order, the same order ``Catalog`` uses, so
    ties between equally cheap offers resolve identically for both.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _load_product(self, product_id: int, name: str, ingredient: str, brand) -> Product:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT supplier_name, name, price, uom_type, uom_name, uom_amount "
            "FROM supplier_product WHERE product_id = ? ORDER BY position",
            (product_id,),
        )
        offers = tuple(
            SupplierProduct(
                supplier_name=supplier_name,
                supplier_product_name=offer_name or "",
                supplier_price=price,
                supplier_product_uom=_uom(uom_type, uom_name, uom_amount),
            )
            for supplier_name, offer_name, price, uom_type, uom_name, uom_amount in cur.fetchall()
        )

        cur.execute(
            "SELECT nutrient_name, uom_type, uom_name, uom_amount, "
            "per_uom_type, per_uom_name, per_uom_amount "
            "FROM nutrient_fact WHERE product_id = ? ORDER BY position",
            (product_id,),
        )
        facts = tuple(
            NutrientFact(
                nutrient_name=row[0],
                quantity_amount=_uom(row[1], row[2], row[3]),
                quantity_per=_uom(row[4], row[5], row[6]),
            )
            for row in cur.fetchall()
        )
        return Product(
            product_name=name,
            ingredient_name=ingredient,
            brand_name=brand,
            supplier_products=offers,
            nutrient_facts=facts,
        )

    def get_products_for_ingredient(self, ingredient: str) -> List[Product]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT id, name, ingredient_name, brand_name FROM product "
            "WHERE ingredient_name = ? ORDER BY id",
            (ingredient,),
        )
        return [self._load_product(*row) for row in cur.fetchall()]

    def get_recipes(self) -> List[Recipe]:
        cur = self.conn.cursor()
        cur.execute("SELECT id, name FROM recipe ORDER BY id")
        recipes = []
        for recipe_id, name in cur.fetchall():
            cur.execute(
                "SELECT ingredient, uom_type, uom_name, uom_amount "
                "FROM recipe_line_item WHERE recipe_id = ? ORDER BY position",
                (recipe_id,),
            )
            items = tuple(
                RecipeLineItem(
                    ingredient=ingredient,
                    unit_of_measure=_uom(uom_type, uom_name, uom_amount),
                )
                for ingredient, uom_type, uom_name, uom_amount in cur.fetchall()
            )
            recipes.append(Recipe(recipe_name=name, line_items=items))
        return recipes
