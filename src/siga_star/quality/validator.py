"""
Star schema validation engine.

DataValidator evaluates integrity rules over the set of generated
tables and produces a ValidationReport.
"""

from typing import List

from ..config import UNRESOLVED_KEY
from ..transformers.star_schema import DIM_CALENDAR, DISCOVERED_DIMENSIONS, FACT_GENERATION
from .report import ValidationReport
from .rules import (
    AllowedValuesRule,
    ContiguousDateRule,
    DenseKeyRule,
    ReferentialIntegrityRule,
    Rule,
    RuleSet,
    Tables,
    UniquenessRule,
)


class DataValidator:
    """
    Validate the generated tables against a set of rules.

    Usage:
        v = DataValidator("siga_star")
        v.add_rule(UniquenessRule("dim_tempo", ["ChaveData"]))
        report = v.validate(tables)
        report.print_summary()
    """

    def __init__(self, name: str = 'validation'):
        self.name = name
        self._ruleset = RuleSet(name)

    def add_rule(self, rule: Rule) -> 'DataValidator':
        self._ruleset.add(rule)
        return self

    def add_rules(self, rules: List[Rule]) -> 'DataValidator':
        for rule in rules:
            self._ruleset.add(rule)
        return self

    @property
    def rule_count(self) -> int:
        return len(self._ruleset)

    def validate(self, tables: Tables) -> ValidationReport:
        """Run all rules against the tables and summarize the outcome."""
        results = self._ruleset.evaluate(tables)
        return ValidationReport(
            name=self.name,
            results=results,
            rows_by_table={name: len(df) for name, df in tables.items()},
        )


def star_schema_validator(include_calendar: bool = True) -> DataValidator:
    """
    Standard integrity checks for the SIGA star schema.

    Without a generated calendar every fact date key must be the reserved
    0 key, since no day exists for a non-zero key to reference.
    """
    v = DataValidator('siga_star_schema')

    for dim in DISCOVERED_DIMENSIONS:
        v.add_rule(UniquenessRule(dim.name, [dim.key_column]))
        if dim.key_column.startswith('ID_'):
            v.add_rule(DenseKeyRule(dim.name, dim.key_column))

    for column, dimension in FACT_GENERATION.dimension_keys.items():
        if dimension == DIM_CALENDAR.name:
            continue
        sentinels = (UNRESOLVED_KEY,) if column.startswith('ID_') else ()
        v.add_rule(ReferentialIntegrityRule(
            FACT_GENERATION.name, column, dimension, sentinels=sentinels,
        ))

    if include_calendar:
        v.add_rule(UniquenessRule(DIM_CALENDAR.name, ['ChaveData']))
        v.add_rule(ContiguousDateRule(DIM_CALENDAR.name, 'DataCompleta'))
        v.add_rule(ReferentialIntegrityRule(
            FACT_GENERATION.name, 'FK_DataOperacao', DIM_CALENDAR.name,
            dimension_column='ChaveData', sentinels=(0,),
        ))
    else:
        v.add_rule(AllowedValuesRule(FACT_GENERATION.name, 'FK_DataOperacao', [0]))

    return v
