"""
Form editing actions — the mutations the wizard's product, operational and
quotation steps make.

Every action takes the current state and returns a new one; nothing is
edited in place. None of them recompute derived values: call reconcile()
on the result.

Invalid requests (unknown finishing option, out-of-range index, writing a
derived field) raise ValueError. Requests the wizard simply ignores, such as
removing the last paper, return the state unchanged.
"""

import logging
import math
from typing import Optional

from .models import FINISHING_OPTIONS, PrintingSelection
from .schemas import (
    ClientDetail,
    FinishingCost,
    OtherQuantityRow,
    PaperLine,
    ProductSpec,
    QuoteFormData,
    Size,
)

logger = logging.getLogger(__name__)

SIZE_FIELDS = ("flat_size", "close_size")
SIZE_DIMENSIONS = ("width", "height", "spine")
# Operational fields a user may type into — recommended_sheets is derived
PAPER_INPUT_FIELDS = (
    "input_width",
    "input_height",
    "price_per_packet",
    "sheets_per_packet",
    "entered_sheets",
)

# Product fields update_product refuses, with the action that keeps them consistent
LINKED_PRODUCT_FIELDS = {
    "flat_size": "set_size",
    "close_size": "set_size",
    "use_same_as_flat": "set_use_same_as_flat",
    "papers": "add_paper/remove_paper/update_paper/set_paper_input",
    "finishing": "toggle_finishing",
}

OTHER_QTY_DEFAULT_QUANTITY = 250
OTHER_QTY_DEFAULT_PRICE = 60.0


def parse_number(value) -> Optional[float]:
    """Parse an input box. Empty, unparseable or non-finite → None, never 0."""
    if value is None:
        return None
    if not isinstance(value, (int, float)):
        value = str(value).strip()
        if not value:
            return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def new_product() -> ProductSpec:
    """A blank product as the product step adds it."""
    return ProductSpec(
        product_name="",
        quantity=100,
        sides=1,
        printing_selection=PrintingSelection.DIGITAL,
        flat_size=Size(width=9, height=5.5, spine=0),
        close_size=Size(width=9, height=5.5, spine=0),
        use_same_as_flat=True,
        papers=[PaperLine()],
        finishing=[],
    )


# --- Products ---

def update_product(form: QuoteFormData, index: int, **patch) -> QuoteFormData:
    """
    Replace plain fields on one product (validated). Sizes, papers and
    finishing carry linked state and go through their own actions.
    """
    linked = sorted(set(patch) & set(LINKED_PRODUCT_FIELDS))
    if linked:
        actions = sorted({LINKED_PRODUCT_FIELDS[key] for key in linked})
        raise ValueError(f"Cannot patch {linked} directly; use {actions}")
    product = _product_at(form, index)
    data = product.model_dump()
    data.update(patch)
    return _replace_product(form, index, ProductSpec.model_validate(data))


def add_product(form: QuoteFormData) -> QuoteFormData:
    return form.model_copy(update={"products": form.products + [new_product()]})


def remove_product(form: QuoteFormData, index: int) -> QuoteFormData:
    _product_at(form, index)
    if len(form.products) <= 1:
        logger.warning("Refusing to remove the only product")
        return form
    products = [p for i, p in enumerate(form.products) if i != index]
    return form.model_copy(update={"products": products})


# --- Sizes ---

def set_size(form: QuoteFormData, index: int, size_field: str,
             dimension: str, value) -> QuoteFormData:
    """
    Set one dimension of the flat or close size.
    While use_same_as_flat is on, a flat size edit is copied to the close size.
    """
    if size_field not in SIZE_FIELDS:
        raise ValueError(f"Unknown size field: {size_field}. Available: {list(SIZE_FIELDS)}")
    if dimension not in SIZE_DIMENSIONS:
        raise ValueError(f"Unknown dimension: {dimension}. Available: {list(SIZE_DIMENSIONS)}")

    product = _product_at(form, index)
    new_size = getattr(product, size_field).model_copy(update={dimension: parse_number(value)})
    update = {size_field: new_size}
    if size_field == "flat_size" and product.use_same_as_flat:
        update["close_size"] = new_size.model_copy()
    return _replace_product(form, index, product.model_copy(update=update))


def set_use_same_as_flat(form: QuoteFormData, index: int, checked: bool) -> QuoteFormData:
    """Switching on copies the flat size into the close size; switching off freezes it."""
    product = _product_at(form, index)
    update = {"use_same_as_flat": bool(checked)}
    if checked:
        update["close_size"] = product.flat_size.model_copy()
    return _replace_product(form, index, product.model_copy(update=update))


# --- Papers ---

def add_paper(form: QuoteFormData, index: int) -> QuoteFormData:
    """Append a blank paper together with blank operational inputs."""
    product = _product_at(form, index)
    papers = product.papers + [PaperLine()]
    return _replace_product(form, index, product.model_copy(update={"papers": papers}))


def remove_paper(form: QuoteFormData, index: int, paper_index: int) -> QuoteFormData:
    """Drop a paper and its operational inputs. A product keeps at least one paper."""
    product = _product_at(form, index)
    _paper_at(product, paper_index)
    if len(product.papers) <= 1:
        logger.warning("Refusing to remove the last paper of product %d", index)
        return form
    papers = [p for i, p in enumerate(product.papers) if i != paper_index]
    return _replace_product(form, index, product.model_copy(update={"papers": papers}))


def update_paper(form: QuoteFormData, index: int, paper_index: int,
                 name: Optional[str] = None, gsm: Optional[str] = None) -> QuoteFormData:
    product = _product_at(form, index)
    line = _paper_at(product, paper_index)
    patch = {}
    if name is not None:
        patch["name"] = name
    if gsm is not None:
        patch["gsm"] = gsm
    new_line = line.model_copy(update={"paper": line.paper.model_copy(update=patch)})
    return _replace_paper(form, index, paper_index, new_line)


def set_paper_input(form: QuoteFormData, index: int, paper_index: int,
                    field: str, value) -> QuoteFormData:
    """Set one operational input for a paper. An emptied box stores None."""
    if field not in PAPER_INPUT_FIELDS:
        raise ValueError(
            f"Not an editable paper input: {field}. Available: {list(PAPER_INPUT_FIELDS)}"
        )
    product = _product_at(form, index)
    line = _paper_at(product, paper_index)

    number = parse_number(value)
    if field == "entered_sheets" and number is not None:
        if not number.is_integer():
            raise ValueError(f"Sheet count must be a whole number, got {value!r}")
        number = int(number)
    inputs = line.inputs.model_copy(update={field: number})
    return _replace_paper(form, index, paper_index, line.model_copy(update={"inputs": inputs}))


# --- Finishing ---

def toggle_finishing(form: QuoteFormData, index: int, option: str,
                     options: list = None) -> QuoteFormData:
    """
    Select or deselect a finishing option on a product. Selecting an option
    that has no cost entry yet adds one with an unset cost, so every selected
    name can be priced.
    """
    options = options if options is not None else FINISHING_OPTIONS
    if option not in options:
        raise ValueError(f"Unknown finishing option: {option}. Available: {list(options)}")

    product = _product_at(form, index)
    if option in product.finishing:
        finishing = [f for f in product.finishing if f != option]
    else:
        finishing = product.finishing + [option]
    form = _replace_product(form, index, product.model_copy(update={"finishing": finishing}))

    if any(entry.name == option for entry in form.operational.finishing):
        return form
    operational = form.operational.model_copy(
        update={"finishing": form.operational.finishing + [FinishingCost(name=option)]}
    )
    return form.model_copy(update={"operational": operational})


def set_finishing_cost(form: QuoteFormData, name: str, value) -> QuoteFormData:
    """Set the cost of a finishing entry. An emptied box stores None."""
    if not any(entry.name == name for entry in form.operational.finishing):
        raise ValueError(f"No finishing cost entry named: {name}")
    cost = parse_number(value)
    finishing = [
        entry.model_copy(update={"cost": cost}) if entry.name == name else entry
        for entry in form.operational.finishing
    ]
    operational = form.operational.model_copy(update={"finishing": finishing})
    return form.model_copy(update={"operational": operational})


# --- Client ---

def start_new_quote(form: QuoteFormData) -> QuoteFormData:
    """Blank the client details; product and operational inputs are kept."""
    return form.model_copy(update={"client": ClientDetail()})


# --- Other quantities ---

def add_other_quantity(rows: list, product_name: str) -> list:
    row = OtherQuantityRow(
        product_name=product_name or "Business Card",
        quantity=OTHER_QTY_DEFAULT_QUANTITY,
        price=OTHER_QTY_DEFAULT_PRICE,
    )
    return rows + [row]


def remove_other_quantity(rows: list, row_index: int) -> list:
    _check_row_index(rows, row_index)
    return [row for i, row in enumerate(rows) if i != row_index]


def update_other_quantity(rows: list, row_index: int, **patch) -> list:
    _check_row_index(rows, row_index)
    rows = list(rows)
    data = rows[row_index].model_dump()
    data.update(patch)
    rows[row_index] = OtherQuantityRow.model_validate(data)
    return rows


def sync_other_quantities(rows: list, product_name: str) -> list:
    """The first what-if row follows the primary product's name."""
    if not rows or rows[0].product_name == product_name:
        return rows
    return [rows[0].model_copy(update={"product_name": product_name})] + list(rows[1:])


# --- Helpers ---

def _check_row_index(rows: list, row_index: int):
    if not 0 <= row_index < len(rows):
        raise ValueError(f"No other-quantity row at index {row_index}")


def _product_at(form: QuoteFormData, index: int) -> ProductSpec:
    if not 0 <= index < len(form.products):
        raise ValueError(f"No product at index {index}")
    return form.products[index]


def _paper_at(product: ProductSpec, paper_index: int) -> PaperLine:
    if not 0 <= paper_index < len(product.papers):
        raise ValueError(f"No paper at index {paper_index}")
    return product.papers[paper_index]


def _replace_product(form: QuoteFormData, index: int, product: ProductSpec) -> QuoteFormData:
    products = list(form.products)
    products[index] = product
    return form.model_copy(update={"products": products})


def _replace_paper(form: QuoteFormData, index: int, paper_index: int,
                   line: PaperLine) -> QuoteFormData:
    product = form.products[index]
    papers = list(product.papers)
    papers[paper_index] = line
    return _replace_product(form, index, product.model_copy(update={"papers": papers}))
