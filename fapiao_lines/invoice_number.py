"""Invoice number lookup on block rows."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .models import INVOICE_NUMBER_KEY, Block
from .rows import row_text

INVOICE_LABELS = (f"{INVOICE_NUMBER_KEY}：", f"{INVOICE_NUMBER_KEY}:")
# ASCII word boundaries: CJK characters count as word characters otherwise.
INVOICE_NUMBER_PATTERN = re.compile(r"\b\d{20}\b", re.ASCII)

NUMBER_MISSING = f'No invoice number found on the same line as "{INVOICE_NUMBER_KEY}："'
LABEL_MISSING = f"{INVOICE_NUMBER_KEY} is not found"


def find_invoice_number(rows: Sequence[Sequence[Block]]) -> Optional[str]:
    """Return the number, the missing-number sentinel, or None when no row has the label."""
    for row in rows:
        text = row_text(row)
        if any(label in text for label in INVOICE_LABELS):
            match = INVOICE_NUMBER_PATTERN.search(text)
            if match:
                return match.group(0)
            return NUMBER_MISSING
    return None


def extract_invoice_number(rows: Sequence[Sequence[Block]]) -> str:
    found = find_invoice_number(rows)
    return found if found is not None else LABEL_MISSING
