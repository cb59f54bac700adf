"""Database schema for stored product catalogs."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS product(
    id              INTEGER PRIMARY KEY,
    name            TEXT NOT NULL,
    ingredient_name TEXT NOT NULL,
    brand_name      TEXT,
    UNIQUE(name, ingredient_name)
);

CREATE INDEX IF NOT EXISTS product_ingredient ON product(ingredient_name);

CREATE TABLE IF NOT EXISTS supplier_product(
    product_id    INTEGER NOT NULL,
    position      INTEGER NOT NULL,
    supplier_name TEXT NOT NULL,
    name          TEXT,
    price         REAL NOT NULL,
    uom_type      TEXT NOT NULL,
    uom_name      TEXT NOT NULL,
    uom_amount    REAL NOT NULL,
    PRIMARY KEY(product_id, position),
    FOREIGN KEY(product_id) REFERENCES product(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS nutrient_fact(
    product_id     INTEGER NOT NULL,
    position       INTEGER NOT NULL,
    nutrient_name  TEXT NOT NULL,
    uom_type       TEXT NOT NULL,
    uom_name       TEXT NOT NULL,
    uom_amount     REAL NOT NULL,
    per_uom_type   TEXT,
    per_uom_name   TEXT,
    per_uom_amount REAL,
    PRIMARY KEY(product_id, position),
    FOREIGN KEY(product_id) REFERENCES product(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS recipe(
    id   INTEGER PRIMARY KEY,
    name TEXT UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS recipe_line_item(
    recipe_id  INTEGER NOT NULL,
    position   INTEGER NOT NULL,
    ingredient TEXT NOT NULL,
    uom_type   TEXT NOT NULL,
    uom_name   TEXT NOT NULL,
    uom_amount REAL NOT NULL,
    PRIMARY KEY(recipe_id, position),
    FOREIGN KEY(recipe_id) REFERENCES recipe(id) ON DELETE CASCADE
);

"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the catalog tables.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
    conn.execute("PRAGMA foreign_keys = ON")
