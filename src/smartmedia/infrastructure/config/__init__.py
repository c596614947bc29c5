from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, ExtractionConfig, SummaryConfig

__all__ = [
    "AppConfig",
    "EnvOverrides",
    "ExtractionConfig",
    "SummaryConfig",
    "load_config",
]
