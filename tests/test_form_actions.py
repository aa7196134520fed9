"""
Form action tests — product, paper, finishing and what-if row edits.

Tests:
1-5.   Same-as-flat propagation and freeze
6-8.   Product patches refuse linked fields
9-14.  Paper add/remove keeps papers and operational inputs together
15-21. Empty, non-numeric and non-finite input boxes stay None
22-28. Finishing selection and cost entries
29-33. Other-quantity rows, new quote
"""

import pytest

from printquote import form_actions
from printquote.detail_import import import_quote_detail
from printquote.form_actions import parse_number
from printquote.schemas import OtherQuantityRow


# ============================================================
# Same-as-flat
# ============================================================

def test_same_as_flat_propagates_flat_edits(default_form):
    form = form_actions.set_use_same_as_flat(default_form, 0, True)
    form = form_actions.set_size(form, 0, "flat_size", "width", "21")
    form = form_actions.set_size(form, 0, "flat_size", "height", "29.7")
    product = form.products[0]
    assert product.close_size == product.flat_size
    assert product.close_size.width == 21
    assert product.close_size.height == 29.7


def test_switching_off_freezes_close_size(default_form):
    form = form_actions.set_use_same_as_flat(default_form, 0, True)
    form = form_actions.set_size(form, 0, "flat_size", "width", "21")
    form = form_actions.set_use_same_as_flat(form, 0, False)
    form = form_actions.set_size(form, 0, "flat_size", "width", "42")
    product = form.products[0]
    assert product.flat_size.width == 42
    assert product.close_size.width == 21


def test_switching_on_copies_flat_size(default_form):
    form = form_actions.set_size(default_form, 0, "close_size", "width", "4")
    form = form_actions.set_use_same_as_flat(form, 0, True)
    assert form.products[0].close_size == form.products[0].flat_size


def test_close_size_editable_when_independent(default_form):
    form = form_actions.set_size(default_form, 0, "close_size", "height", "3")
    assert form.products[0].close_size.height == 3
    assert form.products[0].flat_size.height == 5.5


def test_close_size_is_a_copy_not_shared(default_form):
    form = form_actions.set_use_same_as_flat(default_form, 0, True)
    assert form.products[0].close_size is not form.products[0].flat_size


# ============================================================
# Product patches
# ============================================================

def test_update_product_plain_fields(default_form):
    form = form_actions.update_product(default_form, 0, product_name="Flyer A5", quantity=400)
    assert form.products[0].product_name == "Flyer A5"
    assert form.products[0].quantity == 400


@pytest.mark.parametrize("field, value", [
    ("use_same_as_flat", True),
    ("flat_size", {"width": 20, "height": 10}),
    ("close_size", {"width": 20, "height": 10}),
    ("finishing", ["Embossing"]),
    ("papers", []),
])
def test_update_product_refuses_linked_fields(default_form, field, value):
    with pytest.raises(ValueError, match=field):
        form_actions.update_product(default_form, 0, **{field: value})


def test_same_as_flat_via_dedicated_action_after_flat_edit(default_form):
    """Turning same-as-flat back on must catch the close size up with the flat size."""
    form = form_actions.set_use_same_as_flat(default_form, 0, False)
    form = form_actions.set_size(form, 0, "flat_size", "width", "20")
    form = form_actions.set_use_same_as_flat(form, 0, True)
    assert form.products[0].close_size.width == 20


# ============================================================
# Papers
# ============================================================

def test_add_then_remove_paper_restores_original(default_form):
    form = form_actions.add_paper(default_form, 0)
    assert len(form.products[0].papers) == 2
    form = form_actions.remove_paper(form, 0, 1)
    assert form.products[0].papers == default_form.products[0].papers


def test_added_paper_has_blank_inputs(default_form):
    form = form_actions.add_paper(default_form, 0)
    new_line = form.products[0].papers[1]
    assert new_line.paper.name == ""
    assert new_line.inputs.input_width is None
    assert new_line.inputs.entered_sheets is None


def test_remove_paper_takes_its_inputs_along(default_form):
    form = form_actions.add_paper(default_form, 0)
    form = form_actions.set_paper_input(form, 0, 1, "input_width", "70")
    form = form_actions.remove_paper(form, 0, 0)
    papers = form.products[0].papers
    assert len(papers) == 1
    assert papers[0].inputs.input_width == 70


def test_last_paper_cannot_be_removed(default_form):
    assert form_actions.remove_paper(default_form, 0, 0) is default_form


def test_bad_paper_index_raises(default_form):
    with pytest.raises(ValueError):
        form_actions.remove_paper(default_form, 0, 5)


def test_update_paper_name_and_gsm(default_form):
    form = form_actions.update_paper(default_form, 0, 0, name="Matt Paper", gsm="250")
    paper = form.products[0].papers[0].paper
    assert (paper.name, paper.gsm) == ("Matt Paper", "250")


# ============================================================
# Empty inputs
# ============================================================

def test_emptied_box_stores_none(default_form):
    form = form_actions.set_paper_input(default_form, 0, 0, "entered_sheets", "")
    assert form.products[0].papers[0].inputs.entered_sheets is None


def test_typed_zero_stays_zero(default_form):
    form = form_actions.set_paper_input(default_form, 0, 0, "entered_sheets", "0")
    assert form.products[0].papers[0].inputs.entered_sheets == 0


def test_non_finite_input_stores_none(default_form):
    form = form_actions.set_paper_input(default_form, 0, 0, "price_per_packet", "nan")
    form = form_actions.set_paper_input(form, 0, 0, "entered_sheets", "inf")
    inputs = form.products[0].papers[0].inputs
    assert inputs.price_per_packet is None
    assert inputs.entered_sheets is None


def test_fractional_sheet_count_raises(default_form):
    with pytest.raises(ValueError):
        form_actions.set_paper_input(default_form, 0, 0, "entered_sheets", "1.5")


def test_whole_number_sheet_count_as_decimal(default_form):
    form = form_actions.set_paper_input(default_form, 0, 0, "entered_sheets", "140.0")
    assert form.products[0].papers[0].inputs.entered_sheets == 140


def test_recommended_sheets_not_editable(default_form):
    with pytest.raises(ValueError):
        form_actions.set_paper_input(default_form, 0, 0, "recommended_sheets", "5")


@pytest.mark.parametrize("raw, expected", [
    ("", None),
    ("  ", None),
    (None, None),
    ("abc", None),
    ("nan", None),
    ("inf", None),
    ("-Infinity", None),
    ("1e400", None),
    (float("nan"), None),
    ("12.5", 12.5),
    (3, 3.0),
])
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


# ============================================================
# Finishing
# ============================================================

def test_toggle_finishing_off_and_on(default_form):
    form = form_actions.toggle_finishing(default_form, 0, "UV Spot")
    assert form.products[0].finishing == ["Lamination"]
    form = form_actions.toggle_finishing(form, 0, "UV Spot")
    assert form.products[0].finishing == ["Lamination", "UV Spot"]


def test_toggle_keeps_cost_entry(default_form):
    form = form_actions.toggle_finishing(default_form, 0, "UV Spot")
    assert [f.name for f in form.operational.finishing] == ["UV Spot", "Lamination"]


def test_selecting_unpriced_option_adds_entry(default_form):
    form = form_actions.toggle_finishing(default_form, 0, "Embossing")
    assert "Embossing" in form.products[0].finishing
    entry = [f for f in form.operational.finishing if f.name == "Embossing"]
    assert len(entry) == 1
    assert entry[0].cost is None


def test_unknown_finishing_option_raises(default_form):
    with pytest.raises(ValueError):
        form_actions.toggle_finishing(default_form, 0, "Gold Leaf")


def test_toggle_finishing_against_custom_catalog(default_form):
    form = form_actions.toggle_finishing(default_form, 0, "Gold Leaf", options=["Gold Leaf"])
    assert "Gold Leaf" in form.products[0].finishing
    with pytest.raises(ValueError):
        form_actions.toggle_finishing(default_form, 0, "Embossing", options=["Gold Leaf"])


def test_set_finishing_cost(default_form):
    form = form_actions.set_finishing_cost(default_form, "Lamination", "18.5")
    costs = {f.name: f.cost for f in form.operational.finishing}
    assert costs["Lamination"] == 18.5
    form = form_actions.set_finishing_cost(form, "Lamination", "")
    costs = {f.name: f.cost for f in form.operational.finishing}
    assert costs["Lamination"] is None


def test_set_cost_for_missing_entry_raises(default_form):
    with pytest.raises(ValueError):
        form_actions.set_finishing_cost(default_form, "Embossing", "10")


# ============================================================
# Other quantities and new quote
# ============================================================

def test_add_other_quantity_defaults():
    rows = form_actions.add_other_quantity([], "Flyer A5")
    assert rows == [OtherQuantityRow(product_name="Flyer A5", quantity=250, price=60)]


def test_other_quantity_bad_index_raises():
    rows = form_actions.add_other_quantity([], "Flyer A5")
    with pytest.raises(ValueError):
        form_actions.remove_other_quantity(rows, 3)
    with pytest.raises(ValueError):
        form_actions.update_other_quantity(rows, 3, quantity=10)


def test_remove_and_update_other_quantity():
    rows = form_actions.add_other_quantity([], "Flyer A5")
    rows = form_actions.add_other_quantity(rows, "Flyer A5")
    rows = form_actions.update_other_quantity(rows, 1, quantity=750)
    assert rows[1].quantity == 750
    rows = form_actions.remove_other_quantity(rows, 0)
    assert len(rows) == 1
    assert rows[0].quantity == 750


def test_first_row_follows_product_name():
    rows = [
        OtherQuantityRow(product_name="Business Card", quantity=500, price=115),
        OtherQuantityRow(product_name="Business Card", quantity=250, price=60),
    ]
    synced = form_actions.sync_other_quantities(rows, "Brochure")
    assert synced[0].product_name == "Brochure"
    assert synced[1].product_name == "Business Card"
    assert form_actions.sync_other_quantities(synced, "Brochure") is synced


def test_start_new_quote_blanks_client(repository, default_form):
    form = import_quote_detail(repository.get_detail("QT-2025-001"), default_form)
    form = form_actions.start_new_quote(form)
    assert form.client.company_name == ""
    assert form.client.country_code == "+971"
    assert form.products[0].product_name == "Flyer A5"
