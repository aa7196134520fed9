import enum


# --- Enums shared by the form schemas and the engine ---

class PrintingSelection(str, enum.Enum):
    DIGITAL = "Digital"
    OFFSET = "Offset"
    EITHER = "Either"
    BOTH = "Both"


class ClientType(str, enum.Enum):
    COMPANY = "Company"
    INDIVIDUAL = "Individual"


class QuoteStatus(str, enum.Enum):
    APPROVED = "Approved"
    PENDING = "Pending"
    REJECTED = "Rejected"


# Finishing options the product step offers, in display order.
# A product may only select names from this list.
FINISHING_OPTIONS = [
    "UV Spot",
    "Foil Stamping",
    "Embossing",
    "Lamination",
    "Die Cutting",
]

PRODUCT_NAMES = [
    "Business Card",
    "Flyer A5",
    "Brochure",
    "Book",
]
