"""
Integrity rules for the generated star schema.

Each rule checks one property of the output tables and returns a
structured result. Rules receive the full set of tables by name, so a
rule can relate a fact table to its dimensions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

Tables = Dict[str, pd.DataFrame]


@dataclass
class RuleResult:
    """Result of a single rule evaluation."""
    rule_name: str
    passed: bool
    column: Optional[str]
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def severity(self) -> str:
        return 'PASS' if self.passed else 'FAIL'


class Rule(ABC):
    """Base class for all integrity rules."""

    def __init__(self, table: str, name: Optional[str] = None):
        self.table = table
        self.name = name or self.__class__.__name__

    @abstractmethod
    def evaluate(self, tables: Tables) -> RuleResult:
        """Run this rule against the named tables and return a result."""
        ...

    def _missing(self, tables: Tables, column: str, table: Optional[str] = None) -> Optional[RuleResult]:
        table = table or self.table
        if table not in tables:
            return RuleResult(self.name, False, column, {'error': f'table {table!r} not found'})
        if column not in tables[table].columns:
            return RuleResult(self.name, False, column,
                              {'error': f'column {column!r} not found in {table}'})
        return None


class UniquenessRule(Rule):
    """
    Check that key columns contain no duplicate rows.

    Args:
        table: Table to check.
        columns: Columns that form the unique key.
    """

    def __init__(self, table: str, columns: List[str], name: Optional[str] = None):
        super().__init__(table, name or f"uniqueness_{table}_{','.join(columns)}")
        self.columns = columns

    def evaluate(self, tables: Tables) -> RuleResult:
        for col in self.columns:
            missing = self._missing(tables, col)
            if missing:
                return missing

        df = tables[self.table]
        dup_count = int(df.duplicated(subset=self.columns, keep=False).sum())
        return RuleResult(
            rule_name=self.name,
            passed=dup_count == 0,
            column=','.join(self.columns),
            details={'duplicate_rows': dup_count, 'total_rows': len(df)},
        )


class DenseKeyRule(Rule):
    """Check that a surrogate key column reads exactly 1..n in row order."""

    def __init__(self, table: str, column: str, name: Optional[str] = None):
        super().__init__(table, name or f"dense_{table}_{column}")
        self.column = column

    def evaluate(self, tables: Tables) -> RuleResult:
        missing = self._missing(tables, self.column)
        if missing:
            return missing

        values = tables[self.table][self.column].tolist()
        expected = list(range(1, len(values) + 1))
        out_of_place = sum(1 for got, want in zip(values, expected) if got != want)
        return RuleResult(
            rule_name=self.name,
            passed=out_of_place == 0,
            column=self.column,
            details={'out_of_place': out_of_place, 'checked': len(values)},
        )


class ReferentialIntegrityRule(Rule):
    """
    Check that every foreign key of a fact table exists in its dimension.

    Values listed in ``sentinels`` are reserved markers (unresolved lookup,
    missing date) and are counted separately instead of as orphans.
    """

    def __init__(
        self,
        table: str,
        column: str,
        dimension: str,
        dimension_column: Optional[str] = None,
        sentinels: Sequence[Any] = (),
        name: Optional[str] = None,
    ):
        super().__init__(table, name or f"fk_{table}_{column}")
        self.column = column
        self.dimension = dimension
        self.dimension_column = dimension_column or column
        self.sentinels = set(sentinels)

    def evaluate(self, tables: Tables) -> RuleResult:
        missing = (self._missing(tables, self.column)
                   or self._missing(tables, self.dimension_column, self.dimension))
        if missing:
            return missing

        fact_keys = tables[self.table][self.column]
        dim_keys = set(tables[self.dimension][self.dimension_column])
        is_sentinel = fact_keys.isin(self.sentinels)
        orphans = fact_keys[~is_sentinel & ~fact_keys.isin(dim_keys)]
        return RuleResult(
            rule_name=self.name,
            passed=len(orphans) == 0,
            column=self.column,
            details={
                'orphan_rows': len(orphans),
                'orphan_keys': sorted(set(orphans.astype(str)))[:10],
                'sentinel_rows': int(is_sentinel.sum()),
                'checked': len(fact_keys),
            },
        )


class AllowedValuesRule(Rule):
    """Check that a column only holds values from a fixed set."""

    def __init__(self, table: str, column: str, allowed: Sequence[Any], name: Optional[str] = None):
        super().__init__(table, name or f"allowed_{table}_{column}")
        self.column = column
        self.allowed = list(allowed)

    def evaluate(self, tables: Tables) -> RuleResult:
        missing = self._missing(tables, self.column)
        if missing:
            return missing

        values = tables[self.table][self.column]
        unexpected = values[~values.isin(self.allowed)]
        return RuleResult(
            rule_name=self.name,
            passed=len(unexpected) == 0,
            column=self.column,
            details={
                'unexpected_rows': len(unexpected),
                'unexpected_values': sorted(set(unexpected.astype(str)))[:10],
                'allowed': self.allowed,
            },
        )


class ContiguousDateRule(Rule):
    """Check that an ISO date column has one row per day with no gaps."""

    def __init__(self, table: str, column: str, name: Optional[str] = None):
        super().__init__(table, name or f"contiguous_{table}_{column}")
        self.column = column

    def evaluate(self, tables: Tables) -> RuleResult:
        missing = self._missing(tables, self.column)
        if missing:
            return missing

        days = sorted(date.fromisoformat(v) for v in tables[self.table][self.column])
        duplicates = sum(1 for a, b in zip(days, days[1:]) if a == b)
        gaps = sum(1 for a, b in zip(days, days[1:]) if (b - a).days > 1)
        expected = (days[-1] - days[0]).days + 1 if days else 0
        return RuleResult(
            rule_name=self.name,
            passed=duplicates == 0 and gaps == 0,
            column=self.column,
            details={
                'duplicates': duplicates,
                'gaps': gaps,
                'rows': len(days),
                'expected_rows': expected,
            },
        )


class RuleSet:
    """
    A named collection of rules that run together.

    Usage:
        rules = RuleSet("star_schema")
        rules.add(UniquenessRule("dim_geracao", ["ID_Geracao"]))
        rules.add(ReferentialIntegrityRule("fato_geracao", "ID_Geracao", "dim_geracao"))
        results = rules.evaluate(tables)
    """

    def __init__(self, name: str = 'default'):
        self.name = name
        self.rules: List[Rule] = []

    def add(self, rule: Rule) -> 'RuleSet':
        self.rules.append(rule)
        return self

    def evaluate(self, tables: Tables) -> List[RuleResult]:
        return [rule.evaluate(tables) for rule in self.rules]

    def __len__(self) -> int:
        return len(self.rules)
