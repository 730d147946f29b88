"""
Resume processing pipeline.

Exports: ProcessingPipeline, ProgressCallback, STAGE_PROGRESS, PipelineSettings,
get_pipeline_settings
"""

from .configs import PipelineSettings, get_pipeline_settings
from .entrypoint import STAGE_PROGRESS, ProcessingPipeline, ProgressCallback

__all__ = [
    "ProcessingPipeline",
    "ProgressCallback",
    "STAGE_PROGRESS",
    "PipelineSettings",
    "get_pipeline_settings",
]
