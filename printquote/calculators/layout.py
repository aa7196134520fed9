"""
Sheet layout — how many copies of a product nest on one press sheet.

Single-orientation grid fit: the bled product is tiled in columns × rows
inside the sheet's usable area. No rotation is tried, so a layout that would
fit more copies turned 90° is still reported in the given orientation.
"""

import math
from typing import Optional

from ..schemas import LayoutResult, ProductSpec

MARGIN_CM = 0.5   # gripper/trim margin per sheet edge
BLEED_CM = 0.5    # bleed per product edge


def compute_layout(
    sheet_width: Optional[float],
    sheet_height: Optional[float],
    product_width: Optional[float],
    product_height: Optional[float],
) -> LayoutResult:
    """
    Grid-fit a product onto a sheet. All lengths in cm.

    Any missing (or zero) dimension means the sheet or the product has not
    been set yet; the result is then all zeros rather than an error.
    """
    if not sheet_width or not sheet_height or not product_width or not product_height:
        return LayoutResult()

    usable_w = max(0.0, sheet_width - MARGIN_CM * 2)
    usable_h = max(0.0, sheet_height - MARGIN_CM * 2)

    bled_w = product_width + BLEED_CM * 2
    bled_h = product_height + BLEED_CM * 2

    columns = max(0, math.floor(usable_w / bled_w))
    rows = max(0, math.floor(usable_h / bled_h))
    items = columns * rows

    usable_area = usable_w * usable_h
    if usable_area > 0 and items > 0:
        efficiency = min(100.0, items * bled_w * bled_h * 100 / usable_area)
    else:
        efficiency = 0.0

    return LayoutResult(
        usable_width=usable_w,
        usable_height=usable_h,
        bled_width=bled_w,
        bled_height=bled_h,
        columns=columns,
        rows=rows,
        items_per_sheet=items,
        efficiency=efficiency,
    )


def product_trim_size(product: ProductSpec) -> tuple:
    """Close size, falling back to flat size per dimension when unset."""
    width = product.close_size.width
    if width is None:
        width = product.flat_size.width
    height = product.close_size.height
    if height is None:
        height = product.flat_size.height
    return width, height
