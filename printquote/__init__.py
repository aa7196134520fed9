"""
Print-shop quotation engine.

Turns a product specification and its paper/finishing inputs into sheet
layout, sheet counts, plates, units and a priced total.
"""

from .calculators import aggregate_costs, compute_layout, price_per_sheet, recommend_sheets
from .detail_import import import_quote_detail
from .pricing_engine import compute_pricing
from .reconciler import reconcile
