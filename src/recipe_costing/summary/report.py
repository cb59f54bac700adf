"""Tabular reports of recipe summaries."""

from typing import Mapping

import pandas as pd

from ..catalog.models import RecipeSummary


def nutrient_column(name: str, unit: str) -> str:
    return f"{name} ({unit})"


def summaries_to_dataframe(summaries: Mapping[str, RecipeSummary]) -> pd.DataFrame:
    """Build a table with one row per recipe.

    Args:
        summaries: Recipe summaries keyed by recipe name

    Returns:
        DataFrame with columns ``recipe_name``, ``cheapest_cost`` and one
        column per nutrient named ``"<nutrient> (<base unit>)"`` in ascending
        order. Nutrients a recipe does not contain are NaN.
    """
    rows = []
    for recipe_name, summary in summaries.items():
        row = {"recipe_name": recipe_name, "cheapest_cost": summary.cheapest_cost}
        for name, fact in summary.nutrients_at_cheapest_cost.items():
            column = nutrient_column(name, fact.quantity_amount.uom_name)
            row[column] = fact.quantity_amount.uom_amount
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=["recipe_name", "cheapest_cost"])

    nutrient_columns = sorted(
        column for column in df.columns if column not in ("recipe_name", "cheapest_cost")
    )
    return df[["recipe_name", "cheapest_cost"] + nutrient_columns]
