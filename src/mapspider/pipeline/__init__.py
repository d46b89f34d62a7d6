"""流水线模块"""

from .runner import PipelineResult, run_pipeline

__all__ = ["PipelineResult", "run_pipeline"]
