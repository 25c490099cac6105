"""Line-item region boundaries within a page."""

from __future__ import annotations

import re
from typing import List, Sequence

from .models import Block
from .rows import row_text

# The row right after the last line item reads "小计 ¥ x ¥ y" or "合计 ¥ x ¥ y".
TOTAL_ROW_PATTERN = re.compile(r"(小.*计.*¥.+|合.*计.*¥.+)")


def find_last_item_row(rows: Sequence[Sequence[Block]], header_index: int) -> int:
    """Index of the last line-item row; defaults to the last row of the page."""
    for idx in range(header_index + 1, len(rows)):
        if TOTAL_ROW_PATTERN.search(row_text(rows[idx])):
            return idx - 1
    return len(rows) - 1


def line_item_rows(rows: Sequence[Sequence[Block]], header_index: int) -> List[Sequence[Block]]:
    last = find_last_item_row(rows, header_index)
    return list(rows[header_index + 1 : last + 1])
