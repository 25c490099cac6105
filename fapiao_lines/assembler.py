"""Assembly of classified rows into logical line-item records."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .classifier import ColumnClassifier
from .logging import get_logger
from .models import Block, LineItemRecord
from .rows import row_text

logger = get_logger(__name__)

# "*category*description": a row opening a new line item. Later asterisks in
# the row (e.g. "550ml*24" in the spec/model cell) do not matter.
PRIMARY_LINE_PATTERN = re.compile(r"^\*[^*]+\*.+$")


def is_primary_line(text: str) -> bool:
    return PRIMARY_LINE_PATTERN.match(text) is not None


class RecordAssembler:
    """Two-state machine: no active record, or an active record being filled.

    A primary line always opens a new record. Every row then appends its
    blocks to the active record, column by column, so wrapped cells
    concatenate in row order. Rows seen before any primary line are dropped.
    """

    def __init__(self, classifier: ColumnClassifier, records: Optional[List[LineItemRecord]] = None) -> None:
        self.classifier = classifier
        self.records: List[LineItemRecord] = records if records is not None else []
        self.active: Optional[LineItemRecord] = None

    def feed(self, row: Sequence[Block]) -> bool:
        """Consume one row; return False when it was dropped as an orphan."""
        text = row_text(row)
        if is_primary_line(text):
            self.active = LineItemRecord()
            self.records.append(self.active)

        if self.active is None:
            logger.debug("orphan_row_dropped", text=text)
            return False

        for block in row:
            if block.text.strip() == "":
                continue
            column = self.classifier.classify(block)
            if column is None:
                logger.debug("block_unclassified", text=block.text, x_start=block.x_start)
                continue
            self.active.append(column, block.text)
        return True

    def feed_all(self, rows: Iterable[Sequence[Block]]) -> List[LineItemRecord]:
        for row in rows:
            self.feed(row)
        return self.records
