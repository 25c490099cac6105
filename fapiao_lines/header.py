"""Header row detection and column geometry."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .columns import ITEM_NAME, SPEC_MODEL, TAX_RATE, TAX_RATE_DISAMBIGUATOR, new_column_specs
from .models import Block, ColumnSpec
from .rows import row_text

DEFAULT_HEADER_INDEX = 0


def find_header_row(rows: Sequence[Sequence[Block]]) -> Tuple[int, bool]:
    """Return (index, found) of the first row naming both item and spec columns.

    Falls back to (0, False) so a page without the expected labels still yields
    a best-effort geometry instead of an error.
    """
    for idx, row in enumerate(rows):
        text = row_text(row)
        if ITEM_NAME in text and SPEC_MODEL in text:
            return idx, True
    return DEFAULT_HEADER_INDEX, False


def locate_columns(header_row: Sequence[Block]) -> List[ColumnSpec]:
    """Derive each column's horizontal extent from the header row blocks.

    Labels appear left to right and never overlap, so each column's scan starts
    after the block that closed the previous one. Labels may be split across
    several blocks (e.g. ``税率`` ``/`` ``征收率``), hence matching on the first
    and last characters rather than on the whole label.
    """
    columns = new_column_specs()
    cursor = 0

    for column in columns:
        start_char = column.name[0]
        end_char = column.name[-1]
        seen_disambiguator = column.name != TAX_RATE

        for idx in range(cursor, len(header_row)):
            block = header_row[idx]

            if not seen_disambiguator and TAX_RATE_DISAMBIGUATOR in block.text:
                seen_disambiguator = True

            if column.x_start is None and start_char in block.text:
                column.x_start = block.x_start

            if end_char in block.text:
                if not seen_disambiguator:
                    continue
                column.x_end = block.x_end
                if column.x_start is not None:
                    column.x_center = (column.x_start + column.x_end) / 2
                    column.content_x_start = column.x_start
                    column.content_x_end = column.x_end
                cursor = idx + 1
                break

    return columns
