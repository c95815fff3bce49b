"""Request orchestration.

- CorroborationPipeline: base classification -> corroboration -> calibration
"""

from factcheck_system.pipeline.corroboration_pipeline import CorroborationPipeline

__all__ = ["CorroborationPipeline"]
