"""
Stored quote → live form.

Maps a QuoteDetail snapshot onto the form shape so an existing quote can be
edited again. Only copies data: run reconcile() on the result to bring
recommended sheets, plates, units and the calculation up to date.
"""

from .schemas import (
    ClientDetail,
    FinishingCost,
    OperationalPaper,
    PaperLine,
    PaperSpec,
    ProductSpec,
    QuoteDetail,
    QuoteFormData,
)


def import_quote_detail(detail: QuoteDetail, form: QuoteFormData) -> QuoteFormData:
    """
    Copy client and primary-product fields from `detail` into `form`.

    Sizes and the same-as-flat choice come from the snapshot when it has
    them, otherwise the in-progress form's values are kept.
    """
    prev = form.products[0]

    product = ProductSpec(
        product_name=detail.product,
        quantity=detail.quantity,
        sides=detail.sides,
        printing_selection=detail.printing,
        flat_size=(detail.flat_size or prev.flat_size).model_copy(),
        close_size=(detail.close_size or prev.close_size).model_copy(),
        use_same_as_flat=(
            detail.use_same_as_flat if detail.use_same_as_flat is not None
            else prev.use_same_as_flat
        ),
        papers=_paper_lines(detail, prev),
        finishing=list(detail.finishing),
    )

    operational = form.operational.model_copy(
        update={"finishing": _finishing_costs(detail, form.operational.finishing)}
    )

    return form.model_copy(update={
        "client": ClientDetail(**detail.client.model_dump()),
        "products": [product],
        "operational": operational,
    })


def _paper_lines(detail: QuoteDetail, prev: ProductSpec) -> list:
    """
    Pair each snapshot paper with operational inputs: the snapshot's own
    when it carries them, else whatever the form had at that position.
    """
    papers = detail.papers or [PaperSpec()]
    snapshot_inputs = detail.operational.papers if detail.operational else []

    lines = []
    for i, paper in enumerate(papers):
        if i < len(snapshot_inputs):
            inputs = snapshot_inputs[i].model_copy()
        elif i < len(prev.papers):
            inputs = prev.papers[i].inputs.model_copy()
        else:
            inputs = OperationalPaper()
        lines.append(PaperLine(paper=paper.model_copy(), inputs=inputs))
    return lines


def _finishing_costs(detail: QuoteDetail, existing: list) -> list:
    """
    Snapshot costs win, existing entries are kept, and every selected
    finishing gets an entry (unset cost) so the selection stays priceable.
    """
    costs = {entry.name: entry for entry in existing}
    if detail.operational:
        for entry in detail.operational.finishing:
            costs[entry.name] = entry

    for name in detail.finishing:
        if name not in costs:
            costs[name] = FinishingCost(name=name)

    return [entry.model_copy() for entry in costs.values()]
