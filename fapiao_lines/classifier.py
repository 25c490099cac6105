"""Geometric assignment of text blocks to invoice columns."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .columns import ALIGNMENT_TOLERANCE
from .models import Block, ColumnSpec


class ClassifierStrategy(str, Enum):
    # Label geometry plus a content span that grows with classified values.
    CONTENT_SPAN = "content_span"
    # Label geometry plus left/right boundedness for blocks between columns.
    BOUNDED = "bounded"


def _aligned(column: ColumnSpec, block: Block, tolerance: float) -> bool:
    centered = column.x_start - tolerance <= block.x_center <= column.x_end + tolerance
    right_aligned = abs(block.x_end - column.x_end) <= tolerance
    left_aligned = abs(block.x_start - column.x_start) <= tolerance
    return centered or right_aligned or left_aligned


def _in_gap(
    columns: Sequence[ColumnSpec], idx: int, block: Block, tolerance: float
) -> bool:
    """Blocks between two columns belong to the side the neighbour cannot reach."""
    column = columns[idx]
    following = columns[idx + 1] if idx + 1 < len(columns) else None
    preceding = columns[idx - 1] if idx > 0 else None

    if following is not None and following.x_start is not None and column.x_end + tolerance < block.x_center:
        ends_before_next = block.x_end + tolerance < following.x_start
        if following.left_bounded and ends_before_next:
            return True

    if preceding is not None and preceding.x_end is not None and block.x_center < column.x_start - tolerance:
        starts_after_previous = preceding.x_end + tolerance < block.x_start
        if preceding.right_bounded and starts_after_previous:
            return True

    return False


def _nearest(columns: Sequence[ColumnSpec], block: Block) -> Optional[ColumnSpec]:
    closest: Optional[ColumnSpec] = None
    min_distance = float("inf")
    for column in columns:
        if column.x_center is None:
            continue
        distance = abs(block.x_center - column.x_center)
        if distance < min_distance:
            min_distance = distance
            closest = column
    return closest


class ColumnClassifier:
    """Resolve a block to a column name.

    Columns are tried in declaration order and the first match wins, so an
    earlier column takes any block that also fits a later one. Blocks that
    match nothing go to the column with the nearest center.
    """

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        strategy: ClassifierStrategy = ClassifierStrategy.CONTENT_SPAN,
        tolerance: float = ALIGNMENT_TOLERANCE,
    ) -> None:
        self.columns = columns
        self.strategy = ClassifierStrategy(strategy)
        self.tolerance = tolerance

    def classify(self, block: Block) -> Optional[str]:
        column = self._match(block)
        if column is None:
            return None
        return column.name

    def _match(self, block: Block) -> Optional[ColumnSpec]:
        for idx, column in enumerate(self.columns):
            if column.x_start is None or column.x_end is None:
                continue
            if _aligned(column, block, self.tolerance):
                return self._observe(column, block)
            if self.strategy is ClassifierStrategy.BOUNDED and _in_gap(self.columns, idx, block, self.tolerance):
                return column

        if self.strategy is ClassifierStrategy.CONTENT_SPAN:
            for column in self.columns:
                if column.content_x_start is None or column.content_x_end is None:
                    continue
                if column.content_x_start <= block.x_center <= column.content_x_end:
                    return self._observe(column, block)

        return _nearest(self.columns, block)

    def _observe(self, column: ColumnSpec, block: Block) -> ColumnSpec:
        if self.strategy is ClassifierStrategy.CONTENT_SPAN:
            column.widen_content(block.x_start, block.x_end)
        return column
