"""
Star schema integrity report.

Combines rule results with the size of every checked table and the
foreign-key totals (orphans, sentinel rows) gathered by the
referential integrity rules.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .rules import RuleResult


@dataclass
class ValidationReport:
    """
    Outcome of validating one generated star schema.

    Attributes:
        name: Name of the rule set that produced the report.
        results: Individual rule results, in evaluation order.
        rows_by_table: Row count of every table that was checked.
    """
    name: str
    results: List[RuleResult]
    rows_by_table: Dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> List[RuleResult]:
        return [r for r in self.results if not r.passed]

    @property
    def total_rules(self) -> int:
        return len(self.results)

    @property
    def fail_count(self) -> int:
        return len(self.failures)

    @property
    def pass_count(self) -> int:
        return self.total_rules - self.fail_count

    @property
    def row_count(self) -> int:
        return sum(self.rows_by_table.values())

    @property
    def table_count(self) -> int:
        return len(self.rows_by_table)

    def _fk_total(self, detail: str) -> int:
        return sum(int(r.details.get(detail, 0)) for r in self.results
                   if r.rule_name.startswith('fk_'))

    @property
    def orphan_rows(self) -> int:
        """Fact rows whose key is absent from its dimension."""
        return self._fk_total('orphan_rows')

    @property
    def sentinel_rows(self) -> int:
        """Fact keys holding a reserved marker (-1 unresolved, 0 no date)."""
        return self._fk_total('sentinel_rows')

    def result_for(self, rule_name: str) -> Optional[RuleResult]:
        return next((r for r in self.results if r.rule_name == rule_name), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'passed': self.passed,
            'tables': dict(self.rows_by_table),
            'foreign_keys': {
                'orphan_rows': self.orphan_rows,
                'sentinel_rows': self.sentinel_rows,
            },
            'rules': {
                r.rule_name: {'status': r.severity, **r.details}
                for r in self.results
            },
        }

    def log(self, logger: logging.Logger) -> None:
        """Log the outcome: one info line on success, a warning per failed rule."""
        if self.passed:
            logger.info(
                f"Integrity checks passed: {self.total_rules} rules over "
                f"{self.row_count:,} rows in {self.table_count} tables"
            )
            return
        for r in self.failures:
            logger.warning(f"Integrity check failed: {r.rule_name} {r.details}")

    def print_summary(self) -> None:
        """Print per-table sizes and the rule outcome to stdout."""
        print(f"\n{'=' * 60}")
        print(f"  Integrity: {self.name} -> {'PASSED' if self.passed else 'FAILED'}")
        print(f"  Rules:     {self.pass_count}/{self.total_rules} passed")
        for table, rows in self.rows_by_table.items():
            print(f"    {table:<22} {rows:>10,} rows")
        print(f"  FK orphans: {self.orphan_rows:,}   sentinel keys: {self.sentinel_rows:,}")
        print(f"{'=' * 60}")

    def print_failures(self) -> None:
        if not self.failures:
            print("  No failures.")
            return
        print(f"\n  Failures ({self.fail_count}):")
        for r in self.failures:
            where = f" [{r.column}]" if r.column else ''
            print(f"  FAIL  {r.rule_name}{where}")
            for key, val in r.details.items():
                print(f"        {key}: {val}")
