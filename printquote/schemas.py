"""
Quote form data model.

Every numeric input is Optional: None means the box is empty, which is not
the same thing as a typed 0. The engine reads None as 0 for arithmetic but
never writes a 0 back into a field the user left empty.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from .models import PrintingSelection, ClientType, QuoteStatus


class Size(BaseModel):
    width: Optional[float] = Field(default=None, allow_inf_nan=False)
    height: Optional[float] = Field(default=None, allow_inf_nan=False)
    spine: Optional[float] = Field(default=None, allow_inf_nan=False)


class PaperSpec(BaseModel):
    name: str = ""
    gsm: str = ""


class OperationalPaper(BaseModel):
    input_width: Optional[float] = Field(default=None, allow_inf_nan=False)   # sheet stock width, cm
    input_height: Optional[float] = Field(default=None, allow_inf_nan=False)  # sheet stock height, cm
    price_per_packet: Optional[float] = Field(default=None, allow_inf_nan=False)
    sheets_per_packet: Optional[float] = Field(default=None, allow_inf_nan=False)
    recommended_sheets: Optional[int] = None  # derived by the reconciler
    entered_sheets: Optional[int] = None      # user override


class PaperLine(BaseModel):
    """A paper on the product together with its operational inputs."""
    paper: PaperSpec = Field(default_factory=PaperSpec)
    inputs: OperationalPaper = Field(default_factory=OperationalPaper)


class ProductSpec(BaseModel):
    product_name: str = ""
    quantity: Optional[int] = Field(default=None, ge=0)
    sides: int = Field(default=1, ge=1, le=2)
    printing_selection: PrintingSelection = PrintingSelection.DIGITAL
    flat_size: Size = Field(default_factory=Size)
    close_size: Size = Field(default_factory=Size)
    use_same_as_flat: bool = False
    papers: List[PaperLine] = Field(default_factory=lambda: [PaperLine()], min_length=1)
    finishing: List[str] = []


class FinishingCost(BaseModel):
    name: str
    cost: Optional[float] = Field(default=None, allow_inf_nan=False)


class Operational(BaseModel):
    finishing: List[FinishingCost] = []
    plates: int = 0
    units: int = 0


class Calculation(BaseModel):
    base_price: float = 0.0
    margin_amount: float = 0.0
    subtotal: float = 0.0
    vat_amount: float = 0.0
    total_price: float = 0.0


class ClientDetail(BaseModel):
    client_type: ClientType = ClientType.COMPANY
    company_name: str = ""
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    country_code: str = "+971"
    role: str = ""


class QuoteFormData(BaseModel):
    client: ClientDetail = Field(default_factory=ClientDetail)
    products: List[ProductSpec] = Field(default_factory=lambda: [ProductSpec()], min_length=1)
    operational: Operational = Field(default_factory=Operational)
    calculation: Calculation = Field(default_factory=Calculation)

    @property
    def primary_product(self) -> ProductSpec:
        """The product operational costing applies to."""
        return self.products[0]


class OtherQuantityRow(BaseModel):
    product_name: str = ""
    quantity: Optional[int] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)


# --- Derived results (never stored on the form) ---

class LayoutResult(BaseModel):
    usable_width: float = 0.0
    usable_height: float = 0.0
    bled_width: float = 0.0
    bled_height: float = 0.0
    columns: int = 0
    rows: int = 0
    items_per_sheet: int = 0
    efficiency: float = 0.0


class PaperCost(BaseModel):
    paper: PaperSpec
    layout: LayoutResult
    recommended_sheets: int = 0
    price_per_sheet: Optional[float] = None
    sheets_used: int = 0
    cost: float = 0.0


class CostBreakdown(BaseModel):
    paper_cost: float = 0.0
    finishing_cost: float = 0.0
    plates: int = 0
    units: int = 0
    lines: List[PaperCost] = []

    @property
    def base_price(self) -> float:
        return self.paper_cost + self.finishing_cost


class PriceSummary(BaseModel):
    product_name: str = ""
    quantity: int = 0
    base: float = 0.0
    vat: float = 0.0
    total: float = 0.0


# --- Stored quotes ---

class OperationalSnapshot(BaseModel):
    papers: List[OperationalPaper] = []
    finishing: List[FinishingCost] = []


class QuoteDetail(BaseModel):
    id: str
    client: ClientDetail = Field(default_factory=ClientDetail)
    product: str = ""
    quantity: Optional[int] = None
    sides: int = Field(default=1, ge=1, le=2)
    printing: PrintingSelection = PrintingSelection.DIGITAL
    papers: List[PaperSpec] = []
    finishing: List[str] = []
    flat_size: Optional[Size] = None
    close_size: Optional[Size] = None
    use_same_as_flat: Optional[bool] = None
    operational: Optional[OperationalSnapshot] = None


class QuoteSummary(BaseModel):
    id: str
    client_name: str = ""
    contact_person: str = ""
    date: str = ""
    amount: float = 0.0
    status: QuoteStatus = QuoteStatus.PENDING
    user_id: Optional[str] = None
