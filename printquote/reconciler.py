"""
State reconciler — the only writer of derived fields on the quote form.

One pass runs layout → sheet demand → cost aggregation → pricing, then
writes recommended sheets, plates, units and the calculation back onto the
form. Values are compared first: when nothing differs the very same form
instance comes back, so calling reconcile on every input change converges
after one pass and never re-triggers itself.

User inputs (entered sheets, packet prices, sizes...) are never written.
"""

import logging

from .calculators.cost_aggregator import CostAggregator
from .pricing_engine import PricingEngine
from .schemas import PaperCost, ProductSpec, QuoteFormData

logger = logging.getLogger(__name__)


class StateReconciler:
    """Recomputes derived form state and writes back only what changed."""

    def __init__(self, aggregator: CostAggregator = None, pricing: PricingEngine = None):
        self.aggregator = aggregator or CostAggregator()
        self.pricing = pricing or PricingEngine()

    def reconcile(self, form: QuoteFormData) -> QuoteFormData:
        """
        Returns the form with all derived fields current.

        If every derived value already matches, returns `form` itself (no
        copy). Otherwise returns one new form with every derived field
        updated together.
        """
        primary = form.products[0]
        costs = self.aggregator.aggregate(primary, form.operational)
        calculation = self.pricing.build_calculation(costs)

        products = [self._apply_recommended(primary, costs.lines)]
        for product in form.products[1:]:
            products.append(
                self._apply_recommended(product, self.aggregator.paper_lines(product))
            )

        products_same = all(new is old for new, old in zip(products, form.products))
        plates_same = form.operational.plates == costs.plates
        units_same = form.operational.units == costs.units
        calculation_same = form.calculation == calculation

        if products_same and plates_same and units_same and calculation_same:
            logger.debug("Reconcile: no derived changes")
            return form

        logger.debug(
            "Reconcile: writing derived state (plates=%d, units=%d, total=%.4f)",
            costs.plates, costs.units, calculation.total_price,
        )
        operational = form.operational
        if not (plates_same and units_same):
            operational = operational.model_copy(
                update={"plates": costs.plates, "units": costs.units}
            )

        return form.model_copy(update={
            "products": products,
            "operational": operational,
            "calculation": calculation,
        })

    def _apply_recommended(self, product: ProductSpec, lines: list) -> ProductSpec:
        """Write each line's recommended sheets; unchanged lines keep their identity."""
        # PaperCost lines are built one per paper, in order
        assert len(lines) == len(product.papers), "paper lines out of step with product papers"

        papers = []
        changed = False
        for paper_line, calc in zip(product.papers, lines):
            papers.append(self._with_recommended(paper_line, calc))
            changed = changed or papers[-1] is not paper_line

        if not changed:
            return product
        return product.model_copy(update={"papers": papers})

    def _with_recommended(self, paper_line, calc: PaperCost):
        if paper_line.inputs.recommended_sheets == calc.recommended_sheets:
            return paper_line
        inputs = paper_line.inputs.model_copy(
            update={"recommended_sheets": calc.recommended_sheets}
        )
        return paper_line.model_copy(update={"inputs": inputs})


def reconcile(form: QuoteFormData) -> QuoteFormData:
    """Module-level shortcut for StateReconciler().reconcile()."""
    return StateReconciler().reconcile(form)
