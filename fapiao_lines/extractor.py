"""Per-document line-item extraction over page fragments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .assembler import RecordAssembler
from .boundary import find_last_item_row
from .classifier import ClassifierStrategy, ColumnClassifier
from .columns import Tolerances, new_column_specs
from .header import find_header_row, locate_columns
from .invoice_number import LABEL_MISSING, find_invoice_number
from .logging import get_logger
from .models import ColumnSpec, DocumentResult, Fragment, LineItemRecord
from .rows import build_rows

logger = get_logger(__name__)


@dataclass(slots=True)
class ExtractionContext:
    """State of one document run, threaded through its pages.

    Column geometry is discovered on the first page that carries the header
    row and reused for the following pages; it is never shared between
    documents.
    """

    strategy: ClassifierStrategy = ClassifierStrategy.CONTENT_SPAN
    tolerances: Tolerances = field(default_factory=Tolerances)
    columns: List[ColumnSpec] = field(default_factory=new_column_specs)
    header_found: bool = False
    header_index: int = 0
    invoice_number: Optional[str] = None
    records: List[LineItemRecord] = field(default_factory=list)
    pages_seen: int = 0
    assembler: Optional[RecordAssembler] = None

    def set_columns(self, columns: List[ColumnSpec]) -> None:
        self.columns = columns
        classifier = ColumnClassifier(columns, self.strategy, self.tolerances.alignment)
        if self.assembler is None:
            self.assembler = RecordAssembler(classifier, self.records)
        else:
            self.assembler.classifier = classifier


def process_page(context: ExtractionContext, fragments: Iterable[Fragment], page_number: int) -> int:
    """Run one page through the pipeline; return the number of line-item rows fed."""
    context.pages_seen += 1
    rows = build_rows(
        fragments,
        height_ratio=context.tolerances.row_height_ratio,
        gap_tolerance=context.tolerances.block_gap,
    )
    if not rows:
        logger.debug("empty_page", page=page_number)
        return 0

    if context.invoice_number is None:
        context.invoice_number = find_invoice_number(rows)

    header_index, found = find_header_row(rows)
    if not context.header_found:
        context.set_columns(locate_columns(rows[header_index]))
        context.header_found = found
        context.header_index = header_index
        if found:
            logger.info("header_located", page=page_number, row=header_index)
        else:
            logger.warning("header_not_found", page=page_number, fallback_row=header_index)
    elif found:
        context.header_index = header_index

    last_index = find_last_item_row(rows, context.header_index)
    item_rows = rows[context.header_index + 1 : last_index + 1]
    context.assembler.feed_all(item_rows)

    logger.debug(
        "page_processed",
        page=page_number,
        rows=len(rows),
        item_rows=len(item_rows),
        records=len(context.records),
    )
    return len(item_rows)


def finalize(context: ExtractionContext, source: Optional[str] = None) -> DocumentResult:
    invoice_number = context.invoice_number or LABEL_MISSING
    for record in context.records:
        record.invoice_number = invoice_number
    return DocumentResult(
        invoice_number=invoice_number,
        line_items=list(context.records),
        source=source,
        page_count=context.pages_seen,
        header_found=context.header_found,
    )


class InvoiceExtractor:
    """Extracts line items from the fragment pages of one document at a time."""

    def __init__(
        self,
        strategy: ClassifierStrategy = ClassifierStrategy.CONTENT_SPAN,
        tolerances: Optional[Tolerances] = None,
    ) -> None:
        self.strategy = ClassifierStrategy(strategy)
        self.tolerances = tolerances or Tolerances()

    def new_context(self) -> ExtractionContext:
        return ExtractionContext(strategy=self.strategy, tolerances=self.tolerances)

    def extract(self, pages: Iterable[Iterable[Fragment]], source: Optional[str] = None) -> DocumentResult:
        context = self.new_context()
        for page_number, fragments in enumerate(pages, start=1):
            process_page(context, fragments, page_number)
        result = finalize(context, source)
        logger.info(
            "document_extracted",
            source=source,
            pages=result.page_count,
            line_items=len(result.line_items),
            invoice_number=result.invoice_number,
            header_found=result.header_found,
        )
        return result
