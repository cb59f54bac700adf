#!/usr/bin/env python3
"""
Summarize recipes at their cheapest supplier cost.

Loads recipes and supplier products from a JSON catalog or a catalog database,
buys every line item from its cheapest offer and reports the total cost and the
combined nutrient profile per recipe.

Usage:
    python summarize_recipes.py --catalog data/sample_catalog.json
    python summarize_recipes.py --db data/catalog.db --recipe "Creamy Lasagna" --csv summary.csv
"""

import argparse
import json
import logging
import pathlib
import sys

from recipe_costing import RecipeCostingError
from recipe_costing.catalog import load_catalog
from recipe_costing.database import DatabaseCatalog, get_connection
from recipe_costing.summary import summaries_to_dataframe, summarize_recipe
from recipe_costing.units import collect_units, find_unknown_units
from tqdm import tqdm

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--catalog", help="JSON catalog file")
    source.add_argument("--db", help="SQLite catalog database")
    parser.add_argument(
        "--recipe",
        action="append",
        default=[],
        help="Only summarize this recipe (may be given more than once)",
    )
    parser.add_argument("--output", help="Write the JSON summary here instead of stdout")
    parser.add_argument("--csv", help="Also write a one-row-per-recipe CSV table")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report failed recipes and continue with the rest",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.db and not pathlib.Path(args.db).exists():
        parser.error(f"catalog database not found: {args.db}")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    conn = None
    if args.db:
        conn = get_connection(args.db)
        products = DatabaseCatalog(conn)
    else:
        products = load_catalog(args.catalog)

    try:
        recipes = products.get_recipes()
        if args.recipe:
            wanted = set(args.recipe)
            recipes = [recipe for recipe in recipes if recipe.recipe_name in wanted]
            missing = wanted - {recipe.recipe_name for recipe in recipes}
            for name in sorted(missing):
                logger.warning(f"Recipe not found: {name}")

        ingredients = {item.ingredient for recipe in recipes for item in recipe.line_items}
        candidates = [
            product
            for ingredient in sorted(ingredients)
            for product in products.get_products_for_ingredient(ingredient)
        ]
        for uom_type, uom_name in find_unknown_units(collect_units(candidates, recipes)):
            logger.warning(f"No conversion for {uom_type} unit '{uom_name}'")

        summaries = {}
        failures = 0
        for recipe in tqdm(recipes, desc="Summarizing recipes"):
            try:
                summaries[recipe.recipe_name] = summarize_recipe(recipe, products)
            except RecipeCostingError as e:
                if not args.keep_going:
                    raise
                failures += 1
                logger.error(f"⚠ {recipe.recipe_name}: {e}")
    finally:
        if conn is not None:
            conn.close()

    result = {name: summary.to_dict() for name, summary in summaries.items()}
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
        logger.info(f"Wrote {len(result)} recipe summaries to {args.output}")
    else:
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")

    if args.csv:
        summaries_to_dataframe(summaries).to_csv(args.csv, index=False)
        logger.info(f"Wrote summary table to {args.csv}")

    if failures:
        logger.error(f"{failures} of {len(recipes)} recipes could not be summarized")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
