"""Concurrent extraction across independent documents."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .extractor import InvoiceExtractor
from .invoice_number import LABEL_MISSING
from .logging import get_logger
from .models import DocumentResult, Fragment
from .pdf_source import FragmentSourceError, PdfInput, load_pages

logger = get_logger(__name__)

BatchItem = Tuple[str, PdfInput]
PageLoader = Callable[[PdfInput], List[List[Fragment]]]


def extract_one(
    name: str,
    data: PdfInput,
    extractor: InvoiceExtractor,
    loader: Optional[PageLoader] = None,
) -> DocumentResult:
    """Extract one document; a source that cannot be decoded becomes an error result."""
    try:
        pages = (loader or load_pages)(data)
    except FragmentSourceError as exc:
        logger.error("document_failed", source=name, error=str(exc))
        return DocumentResult(invoice_number=LABEL_MISSING, source=name, error=str(exc))
    return extractor.extract(pages, source=name)


def extract_batch(
    items: Sequence[BatchItem],
    extractor: Optional[InvoiceExtractor] = None,
    max_workers: int = 4,
    loader: Optional[PageLoader] = None,
) -> List[DocumentResult]:
    """Run documents concurrently and return results in input order."""
    if not items:
        return []
    extractor = extractor or InvoiceExtractor()
    workers = max(1, min(max_workers, len(items)))

    logger.info("batch_started", documents=len(items), workers=workers)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(extract_one, name, data, extractor, loader)
            for name, data in items
        ]
        results = [fut.result() for fut in futures]

    failed = sum(1 for r in results if not r.ok)
    logger.info("batch_completed", documents=len(results), failed=failed)
    return results


def items_from_paths(paths: Sequence[Path]) -> List[BatchItem]:
    return [(Path(p).name, Path(p)) for p in paths]
