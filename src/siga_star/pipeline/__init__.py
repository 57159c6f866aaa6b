from .orchestrator import PipelineResult, StarSchemaPipeline

__all__ = ['PipelineResult', 'StarSchemaPipeline']
