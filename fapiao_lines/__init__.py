"""Core package for the fapiao line-item extractor."""

__all__ = [
    "models",
    "columns",
    "rows",
    "header",
    "boundary",
    "classifier",
    "assembler",
    "invoice_number",
    "extractor",
    "pdf_source",
    "batch",
    "config",
    "runtime",
    "cli",
    "app",
]
