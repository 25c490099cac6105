"""Domain models for fapiao line-item extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

INVOICE_NUMBER_KEY = "发票号码"


@dataclass(frozen=True, slots=True)
class Fragment:
    """One decoded text run with its position on the page.

    ``y_baseline`` grows upwards (PDF user space), so the top row of a page has
    the largest value.
    """

    text: str
    x_start: float
    width: float
    y_baseline: float
    height: float

    @property
    def x_end(self) -> float:
        return self.x_start + self.width

    def is_blank(self) -> bool:
        return self.text.strip() == ""


@dataclass(slots=True)
class Block:
    """A merged run of horizontally continuous fragments."""

    text: str
    x_start: float
    x_end: float

    @property
    def x_center(self) -> float:
        return (self.x_start + self.x_end) / 2


@dataclass(slots=True)
class ColumnSpec:
    """Geometry of one invoice column, discovered from the header row."""

    name: str
    left_bounded: bool = False
    right_bounded: bool = False
    x_start: Optional[float] = None
    x_end: Optional[float] = None
    x_center: Optional[float] = None
    content_x_start: Optional[float] = None
    content_x_end: Optional[float] = None

    @property
    def is_located(self) -> bool:
        return self.x_start is not None

    def widen_content(self, x_start: float, x_end: float) -> None:
        """Grow the observed content span; it never shrinks."""
        if self.content_x_start is None or x_start < self.content_x_start:
            self.content_x_start = x_start
        if self.content_x_end is None or x_end > self.content_x_end:
            self.content_x_end = x_end


@dataclass(slots=True)
class LineItemRecord:
    """One logical invoice line, possibly assembled from wrapped rows."""

    values: Dict[str, str] = field(default_factory=dict)
    invoice_number: Optional[str] = None

    def append(self, column: str, text: str) -> None:
        self.values[column] = self.values.get(column, "") + text

    def get(self, column: str, default: str = "") -> str:
        return self.values.get(column, default)

    def as_dict(self, columns: Optional[List[str]] = None) -> Dict[str, str]:
        """Render the record with the invoice number first, then ``columns`` in order."""
        row: Dict[str, str] = {}
        if self.invoice_number is not None:
            row[INVOICE_NUMBER_KEY] = self.invoice_number
        names = columns if columns is not None else list(self.values)
        for name in names:
            if name in self.values:
                row[name] = self.values[name]
        return row


@dataclass(slots=True)
class DocumentResult:
    """Extraction output for one input document."""

    invoice_number: str
    line_items: List[LineItemRecord] = field(default_factory=list)
    source: Optional[str] = None
    page_count: int = 0
    header_found: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self, columns: Optional[List[str]] = None) -> dict:
        return {
            "source": self.source,
            "invoice_number": self.invoice_number,
            "page_count": self.page_count,
            "header_found": self.header_found,
            "error": self.error,
            "line_items": [item.as_dict(columns) for item in self.line_items],
        }
