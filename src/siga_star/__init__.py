"""
SIGA star schema ETL.

Turns the ANEEL SIGA generation-facility extract into dimension and fact
tables for BI tools.
"""

from .config import EtlConfig
from .pipeline.orchestrator import PipelineResult, StarSchemaPipeline

__all__ = ['EtlConfig', 'PipelineResult', 'StarSchemaPipeline']
__version__ = '1.0.0'
