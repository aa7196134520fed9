"""
Cost aggregation for the operational step.

Input: the primary ProductSpec (paper lines, quantity, sides, finishing
selection) + the Operational section (finishing cost entries)
Output: CostBreakdown — per-paper layout and cost lines, paper and finishing
totals, plate and unit counts.

Plates and units are informational press-side counts; they never enter the
price.
"""

from ..models import PrintingSelection
from ..schemas import CostBreakdown, Operational, PaperCost, PaperLine, ProductSpec
from .layout import compute_layout, product_trim_size
from .sheet_demand import price_per_sheet, recommend_sheets


class CostAggregator:
    """Sums paper and finishing costs and derives plate/unit counts."""

    PLATES_PER_SIDE = 4  # one plate per CMYK separation

    def aggregate(self, product: ProductSpec, operational: Operational) -> CostBreakdown:
        lines = self.paper_lines(product)

        paper_cost = sum(line.cost for line in lines)
        finishing_cost = self.finishing_cost(product.finishing, operational)
        plates = self.plate_count(product.printing_selection, product.sides)
        units = self.unit_count(lines, product.sides)

        return CostBreakdown(
            paper_cost=paper_cost,
            finishing_cost=finishing_cost,
            plates=plates,
            units=units,
            lines=lines,
        )

    def paper_lines(self, product: ProductSpec) -> list:
        """Layout, sheet demand and cost for every paper on the product, in order."""
        width, height = product_trim_size(product)
        return [self._paper_line(line, width, height, product.quantity) for line in product.papers]

    def _paper_line(self, line: PaperLine, product_w, product_h, quantity) -> PaperCost:
        inputs = line.inputs
        layout = compute_layout(inputs.input_width, inputs.input_height, product_w, product_h)
        recommended = recommend_sheets(layout.items_per_sheet, quantity)
        unit_price = price_per_sheet(inputs.price_per_packet, inputs.sheets_per_packet)

        # An entered count always wins over the recommendation, even when it is 0
        sheets = inputs.entered_sheets if inputs.entered_sheets is not None else recommended
        cost = sheets * (unit_price or 0.0)

        return PaperCost(
            paper=line.paper,
            layout=layout,
            recommended_sheets=recommended,
            price_per_sheet=unit_price,
            sheets_used=sheets,
            cost=cost,
        )

    def finishing_cost(self, selected: list, operational: Operational) -> float:
        """
        Sum of cost entries whose name is selected on the product.
        An entry that is not selected contributes nothing even if priced.
        """
        chosen = set(selected)
        total = 0.0
        for entry in operational.finishing:
            if entry.name in chosen:
                total += entry.cost or 0.0
        return total

    def plate_count(self, printing: PrintingSelection, sides: int) -> int:
        """Digital needs no plates; anything else needs a CMYK set per printed side."""
        if printing == PrintingSelection.DIGITAL:
            return 0
        return self._side_factor(sides) * self.PLATES_PER_SIDE

    def unit_count(self, lines: list, sides: int) -> int:
        """Total press sheets across papers, doubled for two-sided work."""
        total_sheets = sum(line.sheets_used for line in lines)
        return total_sheets * self._side_factor(sides)

    def _side_factor(self, sides: int) -> int:
        return 2 if sides == 2 else 1


def aggregate_costs(product: ProductSpec, operational: Operational) -> CostBreakdown:
    """Module-level shortcut for CostAggregator().aggregate()."""
    return CostAggregator().aggregate(product, operational)
