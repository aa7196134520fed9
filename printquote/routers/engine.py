"""
Engine API — the derived-state engine over HTTP for the wizard UI.

POST /api/engine/layout           — grid-fit a product on a sheet
POST /api/engine/recommend-sheets — sheets needed for a quantity
POST /api/engine/price-per-sheet  — packet price per sheet
POST /api/engine/aggregate-costs  — paper/finishing costs, plates, units
POST /api/engine/pricing          — margin + VAT on a base price
POST /api/engine/reconcile        — bring every derived form field up to date
POST /api/engine/price-summary    — headline and other-quantity prices
POST /api/engine/actions          — apply a form edit, then reconcile

Every endpoint is stateless: the caller sends the form and keeps the result.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .. import form_actions
from ..calculators import aggregate_costs, compute_layout, price_per_sheet, recommend_sheets
from ..pricing_engine import PricingEngine
from ..reconciler import reconcile
from ..repository import QuoteRepository, get_repository
from ..schemas import (
    Calculation,
    CostBreakdown,
    LayoutResult,
    OtherQuantityRow,
    PriceSummary,
    QuoteFormData,
)

router = APIRouter(prefix="/engine", tags=["engine"])

pricing = PricingEngine()

# Form edits the UI may request by name
FORM_ACTIONS = {
    "update_product": form_actions.update_product,
    "add_product": form_actions.add_product,
    "remove_product": form_actions.remove_product,
    "set_size": form_actions.set_size,
    "set_use_same_as_flat": form_actions.set_use_same_as_flat,
    "add_paper": form_actions.add_paper,
    "remove_paper": form_actions.remove_paper,
    "update_paper": form_actions.update_paper,
    "set_paper_input": form_actions.set_paper_input,
    "toggle_finishing": form_actions.toggle_finishing,
    "set_finishing_cost": form_actions.set_finishing_cost,
    "start_new_quote": form_actions.start_new_quote,
}


# --- Request/Response schemas ---

class LayoutRequest(BaseModel):
    sheet_width: Optional[float] = Field(default=None, allow_inf_nan=False)
    sheet_height: Optional[float] = Field(default=None, allow_inf_nan=False)
    product_width: Optional[float] = Field(default=None, allow_inf_nan=False)
    product_height: Optional[float] = Field(default=None, allow_inf_nan=False)


class SheetDemandRequest(BaseModel):
    items_per_sheet: int
    quantity: Optional[int] = None


class PacketPriceRequest(BaseModel):
    price_per_packet: Optional[float] = Field(default=None, allow_inf_nan=False)
    sheets_per_packet: Optional[float] = Field(default=None, allow_inf_nan=False)


class PricingRequest(BaseModel):
    base_price: float = Field(allow_inf_nan=False)


class PriceSummaryRequest(BaseModel):
    form: QuoteFormData
    other_quantities: List[OtherQuantityRow] = []


class PriceSummaryResponse(BaseModel):
    summary: PriceSummary
    other_quantities: List[PriceSummary] = []
    grand_total: float


class FormActionRequest(BaseModel):
    form: QuoteFormData
    action: str
    args: dict = {}


# --- Endpoints ---

@router.post("/layout", response_model=LayoutResult)
def layout(request: LayoutRequest):
    return compute_layout(
        request.sheet_width, request.sheet_height,
        request.product_width, request.product_height,
    )


@router.post("/recommend-sheets")
def sheets(request: SheetDemandRequest):
    return {"recommended_sheets": recommend_sheets(request.items_per_sheet, request.quantity)}


@router.post("/price-per-sheet")
def sheet_price(request: PacketPriceRequest):
    return {"price_per_sheet": price_per_sheet(request.price_per_packet, request.sheets_per_packet)}


@router.post("/aggregate-costs", response_model=CostBreakdown)
def costs(form: QuoteFormData):
    """Costs for the primary product."""
    return aggregate_costs(form.primary_product, form.operational)


@router.post("/pricing", response_model=Calculation)
def price(request: PricingRequest):
    return pricing.compute_pricing(request.base_price)


@router.post("/reconcile", response_model=QuoteFormData)
def reconcile_form(form: QuoteFormData):
    return reconcile(form)


@router.post("/price-summary", response_model=PriceSummaryResponse)
def price_summary(request: PriceSummaryRequest):
    """
    Headline price for the primary product plus each what-if row.
    Independent of the operational costing — the totals will differ.
    """
    product = request.form.primary_product
    rows = form_actions.sync_other_quantities(request.other_quantities, product.product_name)
    summary = pricing.price_summary(product.product_name, product.quantity)
    return PriceSummaryResponse(
        summary=summary,
        other_quantities=pricing.price_other_quantities(rows),
        grand_total=summary.total,
    )


@router.post("/actions", response_model=QuoteFormData)
def apply_action(request: FormActionRequest, repo: QuoteRepository = Depends(get_repository)):
    """
    Apply one named form edit and return the reconciled form.
    Finishing toggles are checked against the repository catalog.
    """
    action = FORM_ACTIONS.get(request.action)
    if action is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown action: {request.action}. Available: {list(FORM_ACTIONS.keys())}",
        )
    args = dict(request.args)
    if request.action == "toggle_finishing":
        args["options"] = repo.finishing_options()
    try:
        form = action(request.form, **args)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return reconcile(form)
