"""
Pricing Engine.

Folds the aggregated base cost through the fixed margin and VAT into the
quote's Calculation. Pure math — quantity × price, subtotal × percentage.

Two independent paths live here:
- build_calculation: the detailed operational costing (paper + finishing)
- price_summary / price_other_quantity: the flat per-unit headline price
  shown on the quotation step and for "other quantities" what-if rows

The two totals are not expected to agree. Nothing here reconciles them.
"""

from typing import Optional

from .schemas import Calculation, CostBreakdown, OtherQuantityRow, PriceSummary


class PricingEngine:
    """Turns a base cost into margin, subtotal, VAT and total."""

    MARGIN_PCT = 0.30
    VAT_PCT = 0.05
    UNIT_BASE = 0.195  # headline price per unit, currency units

    def compute_pricing(self, base_price: float) -> Calculation:
        """
        base → +30% margin → subtotal → +5% VAT → total.
        No rounding — display formatting is the caller's concern.
        """
        margin_amount = base_price * self.MARGIN_PCT
        subtotal = base_price + margin_amount
        vat_amount = subtotal * self.VAT_PCT
        return Calculation(
            base_price=base_price,
            margin_amount=margin_amount,
            subtotal=subtotal,
            vat_amount=vat_amount,
            total_price=subtotal + vat_amount,
        )

    def build_calculation(self, costs: CostBreakdown) -> Calculation:
        """Price a cost breakdown. Plates and units do not enter the price."""
        return self.compute_pricing(costs.paper_cost + costs.finishing_cost)

    def price_summary(self, product_name: str, quantity: Optional[int]) -> PriceSummary:
        """Headline price: quantity × UNIT_BASE plus VAT. Never consults operational costs."""
        qty = quantity or 0
        base = qty * self.UNIT_BASE
        return self._summary(product_name, qty, base)

    def price_other_quantity(self, row: OtherQuantityRow) -> PriceSummary:
        """
        Price one what-if row. A typed price is the row's base; an empty
        price box falls back to the headline per-unit rate.
        """
        qty = row.quantity or 0
        base = row.price if row.price is not None else qty * self.UNIT_BASE
        return self._summary(row.product_name, qty, base)

    def price_other_quantities(self, rows: list) -> list:
        return [self.price_other_quantity(row) for row in rows]

    def _summary(self, product_name: str, quantity: int, base: float) -> PriceSummary:
        vat = base * self.VAT_PCT
        return PriceSummary(
            product_name=product_name,
            quantity=quantity,
            base=base,
            vat=vat,
            total=base + vat,
        )


def compute_pricing(base_price: float) -> Calculation:
    """Module-level shortcut for PricingEngine().compute_pricing()."""
    return PricingEngine().compute_pricing(base_price)
