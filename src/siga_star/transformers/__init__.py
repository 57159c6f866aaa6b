from .base_transformer import BaseTransformer, TransformationResult
from .calendar import CalendarGenerator
from .dimensions import DimensionEmitter, DimensionPassResult, EmitterState
from .facts import FactEmitter, FactPassResult
from .registry import DimensionRegistries, DimensionRegistry, RegistryFrozenError

__all__ = [
    'BaseTransformer', 'TransformationResult', 'CalendarGenerator',
    'DimensionEmitter', 'DimensionPassResult', 'EmitterState',
    'FactEmitter', 'FactPassResult',
    'DimensionRegistries', 'DimensionRegistry', 'RegistryFrozenError',
]
