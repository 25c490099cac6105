"""Fixed column layout and geometric constants of the VAT invoice table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .models import ColumnSpec

ITEM_NAME = "项目名称"
SPEC_MODEL = "规格型号"
UNIT = "单位"
QUANTITY = "数量"
UNIT_PRICE = "单价"
AMOUNT = "金额"
TAX_RATE = "税率/征收率"
TAX_AMOUNT = "税额"

# (name, left_bounded, right_bounded)
# left_bounded: content never starts further left than the label.
# right_bounded: content never ends further right than the label.
# Neither: content is centered and may overflow on both sides.
COLUMN_LAYOUT: Tuple[Tuple[str, bool, bool], ...] = (
    (ITEM_NAME, False, False),
    (SPEC_MODEL, True, False),
    (UNIT, True, True),
    (QUANTITY, False, True),
    (UNIT_PRICE, False, True),
    (AMOUNT, False, True),
    (TAX_RATE, True, True),
    (TAX_AMOUNT, False, True),
)

COLUMN_NAMES: Tuple[str, ...] = tuple(name for name, _, _ in COLUMN_LAYOUT)

# The tax-rate label shares its first and last character with earlier text in
# the same label, so its end is only trusted once this character was seen.
TAX_RATE_DISAMBIGUATOR = "征"

ROW_HEIGHT_RATIO = 0.8
BLOCK_GAP_TOLERANCE = 1.0
ALIGNMENT_TOLERANCE = 1.0
# Spaces that separate words ("iPhone 12 Pro") have a fixed width; padding
# spaces between cells have arbitrary widths and are dropped.
MEANINGFUL_SPACE_WIDTH = 4.5
MEANINGFUL_SPACE_TOLERANCE = 0.1


@dataclass(frozen=True, slots=True)
class Tolerances:
    row_height_ratio: float = ROW_HEIGHT_RATIO
    block_gap: float = BLOCK_GAP_TOLERANCE
    alignment: float = ALIGNMENT_TOLERANCE


def new_column_specs() -> List[ColumnSpec]:
    """Return a fresh, undiscovered column list in declaration order."""
    return [
        ColumnSpec(name=name, left_bounded=left, right_bounded=right)
        for name, left, right in COLUMN_LAYOUT
    ]
