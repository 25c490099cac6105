"""Row grouping and block merging for positioned text fragments."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .columns import (
    BLOCK_GAP_TOLERANCE,
    MEANINGFUL_SPACE_TOLERANCE,
    MEANINGFUL_SPACE_WIDTH,
    ROW_HEIGHT_RATIO,
)
from .models import Block, Fragment


def group_rows(fragments: Iterable[Fragment], height_ratio: float = ROW_HEIGHT_RATIO) -> List[List[Fragment]]:
    """
    Cluster one page's fragments into visual rows, top to bottom.
    - Deterministic sort: y_baseline descending, then x_start ascending within a row
    - Anchor is the first fragment of the current row
    - Joins the row when anchor_y - y <= height_ratio * height, or height == 0

    The tolerance follows each fragment's own height so small glyphs are not
    pulled into a taller row above. Observed on real invoices: 6.60 apart on
    different rows (h=5), 6.93 apart on the same row (h=8.99).
    """
    ordered = sorted(fragments, key=lambda f: -f.y_baseline)
    if not ordered:
        return []

    rows: List[List[Fragment]] = []
    current: List[Fragment] = []
    anchor_y = ordered[0].y_baseline

    for frag in ordered:
        if frag.height == 0 or anchor_y - frag.y_baseline <= frag.height * height_ratio:
            current.append(frag)
        else:
            rows.append(current)
            current = [frag]
            anchor_y = frag.y_baseline
    rows.append(current)

    for row in rows:
        row.sort(key=lambda f: f.x_start)
    return rows


def _is_meaningful_space(frag: Fragment) -> bool:
    return abs(frag.width - MEANINGFUL_SPACE_WIDTH) < MEANINGFUL_SPACE_TOLERANCE


def merge_blocks(row: Sequence[Fragment], tolerance: float = BLOCK_GAP_TOLERANCE) -> List[Block]:
    """Merge left-to-right fragments of one row into continuous blocks."""
    blocks: List[Block] = []
    for frag in row:
        previous = blocks[-1] if blocks else None
        if previous is not None and abs(frag.x_start - previous.x_end) <= tolerance:
            if not frag.is_blank():
                previous.text += frag.text
                # Use the fragment's own end; summing widths drifts over long runs.
                previous.x_end = frag.x_end
            elif _is_meaningful_space(frag):
                # Keep x_end: a space that extended it would bridge the next cell.
                previous.text += " "
        else:
            blocks.append(Block(text=frag.text, x_start=frag.x_start, x_end=frag.x_end))
    return blocks


def build_rows(
    fragments: Iterable[Fragment],
    height_ratio: float = ROW_HEIGHT_RATIO,
    gap_tolerance: float = BLOCK_GAP_TOLERANCE,
) -> List[List[Block]]:
    return [merge_blocks(row, gap_tolerance) for row in group_rows(fragments, height_ratio)]


def row_text(row: Sequence[Block]) -> str:
    return "".join(block.text for block in row)
