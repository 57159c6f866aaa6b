from .report import ValidationReport
from .rules import (
    AllowedValuesRule,
    ContiguousDateRule,
    DenseKeyRule,
    ReferentialIntegrityRule,
    Rule,
    RuleResult,
    RuleSet,
    UniquenessRule,
)
from .validator import DataValidator, star_schema_validator

__all__ = [
    'ValidationReport', 'AllowedValuesRule', 'ContiguousDateRule', 'DenseKeyRule', 'ReferentialIntegrityRule',
    'Rule', 'RuleResult', 'RuleSet', 'UniquenessRule', 'DataValidator', 'star_schema_validator',
]
