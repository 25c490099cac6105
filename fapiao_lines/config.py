"""Configuration loader for the fapiao line-item extractor."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .classifier import ClassifierStrategy
from .columns import ALIGNMENT_TOLERANCE, BLOCK_GAP_TOLERANCE, ROW_HEIGHT_RATIO, Tolerances


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


@dataclass(slots=True)
class AppConfig:
    log_level: str
    strategy: ClassifierStrategy
    row_height_ratio: float
    block_gap_tolerance: float
    alignment_tolerance: float
    batch_max_workers: int
    max_upload_mb: int

    def tolerances(self) -> Tolerances:
        return Tolerances(
            row_height_ratio=self.row_height_ratio,
            block_gap=self.block_gap_tolerance,
            alignment=self.alignment_tolerance,
        )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def load_config() -> AppConfig:
    log_level = _get_env("LOG_LEVEL", "INFO").upper()

    strategy_name = _get_env("CLASSIFIER_STRATEGY", ClassifierStrategy.CONTENT_SPAN.value).lower()
    try:
        strategy = ClassifierStrategy(strategy_name)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in ClassifierStrategy)
        raise ValueError(f"CLASSIFIER_STRATEGY must be one of: {allowed}") from exc

    row_height_ratio = _get_float("ROW_HEIGHT_RATIO", ROW_HEIGHT_RATIO)
    if row_height_ratio <= 0:
        raise ValueError("ROW_HEIGHT_RATIO must be positive")
    block_gap_tolerance = max(0.0, _get_float("BLOCK_GAP_TOLERANCE", BLOCK_GAP_TOLERANCE))
    alignment_tolerance = max(0.0, _get_float("ALIGNMENT_TOLERANCE", ALIGNMENT_TOLERANCE))
    batch_max_workers = max(1, _get_int("BATCH_MAX_WORKERS", 4))
    max_upload_mb = max(1, _get_int("MAX_UPLOAD_MB", 20))

    return AppConfig(
        log_level=log_level,
        strategy=strategy,
        row_height_ratio=row_height_ratio,
        block_gap_tolerance=block_gap_tolerance,
        alignment_tolerance=alignment_tolerance,
        batch_max_workers=batch_max_workers,
        max_upload_mb=max_upload_mb,
    )
