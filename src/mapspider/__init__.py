"""MapSpider - Google Maps 搜索结果采集工具"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .pipeline.runner import run_pipeline as run_pipeline

__all__ = [
    "__version__",
    "run_pipeline",
]


def __getattr__(name: str) -> Any:
    """Lazy exports to avoid importing playwright at package import time."""
    if name == "run_pipeline":
        from .pipeline.runner import run_pipeline

        return run_pipeline
    raise AttributeError(f"module 'mapspider' has no attribute '{name}'")
