"""Cheapest-cost recipe summaries."""

from .cost import ProductSource, compute_real_cost, find_lowest_cost
from .nutrients import merge_into
from .report import summaries_to_dataframe
from .summarize import sort_keys, summarize_recipe, summarize_recipes

__all__ = [
    "ProductSource",
    "compute_real_cost",
    "find_lowest_cost",
    "merge_into",
    "sort_keys",
    "summarize_recipe",
    "summarize_recipes",
    "summaries_to_dataframe",
]
