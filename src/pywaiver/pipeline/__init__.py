"""Pipeline orchestration for waiver target ranking."""

from .service import PipelineResult, RunSummary, run_pipeline

__all__ = ["PipelineResult", "RunSummary", "run_pipeline"]
