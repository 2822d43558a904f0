#!/usr/bin/env python3
"""
Budget Credit - Tiered price-vs-budget credit for both scoring tables.

Both tables give decreasing credit as the price drifts outside the budget so
that near misses are still worth showing.
"""
from typing import Optional

from core.config_loader import BudgetBands, FallbackBudgetBands


def profile_budget_credit(
    price: float,
    budget_min: Optional[float],
    budget_max: Optional[float],
    bands: BudgetBands
) -> float:
    """Fraction of the budget weight (0.0-1.0) earned under the profile table.

    Tiers: inside [min, max] -> 1.0; inside [min*near_lower, max*near_upper]
    -> near_credit; price <= max*outer_upper -> outer_credit; else 0.0.
    A missing bound is open on that side. The outer tier needs a budget_max.
    """
    lower = budget_min if budget_min is not None else 0.0
    upper = budget_max if budget_max is not None else float('inf')

    if lower <= price <= upper:
        return 1.0
    if lower * bands.near_lower <= price <= upper * bands.near_upper:
        return bands.near_credit
    if budget_max is not None and price <= budget_max * bands.outer_upper:
        return bands.outer_credit
    return 0.0


def fallback_budget_points(
    price: float,
    budget: float,
    full_points: float,
    bands: FallbackBudgetBands
) -> float:
    """Absolute points earned under the wider lead-inferred bands."""
    if budget * bands.full_lower <= price <= budget * bands.full_upper:
        return full_points
    if budget * bands.partial_lower <= price <= budget * bands.partial_upper:
        return bands.partial_points
    if price <= budget * bands.outer_upper:
        return bands.outer_points
    return 0.0
