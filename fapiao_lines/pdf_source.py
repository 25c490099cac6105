"""PDF decoding into positioned fragments (pdfplumber)."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pdfplumber

from .logging import get_logger
from .models import Fragment

logger = get_logger(__name__)

PdfInput = Union[str, Path, bytes]


class FragmentSourceError(RuntimeError):
    """The document could not be opened or its text could not be read."""


def fragments_from_chars(chars: Iterable[Dict[str, Any]]) -> List[Fragment]:
    """
    Convert pdfplumber character dicts into Fragments.
    - x_start/width from x0/x1
    - y_baseline from the text matrix (PDF space, measured from the page bottom),
      falling back to y0 when the matrix is absent
    - height from the glyph box
    """
    fragments: List[Fragment] = []
    for ch in chars:
        text = ch.get("text")
        if text is None:
            continue
        x0 = float(ch["x0"])
        x1 = float(ch["x1"])
        y0 = float(ch["y0"])
        height = float(ch.get("height", float(ch.get("y1", y0)) - y0))
        matrix = ch.get("matrix")
        baseline = float(matrix[5]) if matrix else y0
        fragments.append(
            Fragment(
                text=text,
                x_start=x0,
                width=x1 - x0,
                y_baseline=baseline,
                height=height,
            )
        )
    return fragments


def _open(source: PdfInput):
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(source))
    return pdfplumber.open(str(source))


def load_pages(source: PdfInput) -> List[List[Fragment]]:
    """Decode every page of a PDF into its fragment list."""
    try:
        with _open(source) as pdf:
            pages = [fragments_from_chars(page.chars) for page in pdf.pages]
    except Exception as exc:
        raise FragmentSourceError(f"Unable to read PDF text: {exc.__class__.__name__}: {exc}") from exc

    logger.debug("pdf_loaded", pages=len(pages), fragments=sum(len(p) for p in pages))
    return pages
