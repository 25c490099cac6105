"""Runtime wiring for CLI and service entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .batch import BatchItem, extract_batch
from .config import AppConfig, load_config
from .extractor import InvoiceExtractor
from .logging import configure_logging
from .models import DocumentResult


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    extractor: InvoiceExtractor

    def run_batch(self, items: Sequence[BatchItem]) -> List[DocumentResult]:
        return extract_batch(items, self.extractor, max_workers=self.config.batch_max_workers)


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level)

    extractor = InvoiceExtractor(strategy=cfg.strategy, tolerances=cfg.tolerances())
    return Runtime(config=cfg, extractor=extractor)
