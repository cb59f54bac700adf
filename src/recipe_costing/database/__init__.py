"""SQLite storage for product catalogs."""

from .schema import DDL, create_schema
from .utils import (
    DatabaseCatalog,
    get_connection,
    import_catalog,
    upsert_product,
    transaction,
    upsert_recipe,
)

__all__ = [
    "DDL",
    "create_schema",
    "get_connection",
    "transaction",
    "upsert_product",
    "upsert_recipe",
    "import_catalog",
    "DatabaseCatalog",
]
