"""
Sheet demand — how many press sheets a run needs, and what one sheet costs.

Both functions guard their divisor; a zero or missing value gives 0 / None
instead of raising.
"""

import math
from typing import Optional


def recommend_sheets(items_per_sheet: int, quantity: Optional[int]) -> int:
    """Sheets needed for `quantity` copies. Always rounds up — a part sheet is a whole sheet."""
    if items_per_sheet <= 0:
        return 0
    return math.ceil((quantity or 0) / items_per_sheet)


def price_per_sheet(
    price_per_packet: Optional[float],
    sheets_per_packet: Optional[float],
) -> Optional[float]:
    """Packet price spread over its sheets, or None if either value is missing."""
    if price_per_packet is None or sheets_per_packet is None or sheets_per_packet <= 0:
        return None
    return price_per_packet / sheets_per_packet
