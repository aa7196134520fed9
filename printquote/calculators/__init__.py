"""
Deterministic derived-state engine.

Pure Python math. No I/O.
Given a product specification and its operational inputs, produce the sheet
layout, sheet demand, paper/finishing costs and press-side counts.
"""

from .layout import compute_layout
from .sheet_demand import recommend_sheets, price_per_sheet
from .cost_aggregator import CostAggregator, aggregate_costs
