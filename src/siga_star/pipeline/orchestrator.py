"""
Two-pass star schema pipeline orchestrator.

Runs dimension discovery, calendar generation and fact generation in
order, validates the resulting tables, and reports a run summary.
"""

import csv
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

from ..config import EtlConfig
from ..extractors.record_parser import SourceFormatError, SourceReader
from ..quality.report import ValidationReport
from ..quality.validator import star_schema_validator
from ..transformers.calendar import CalendarGenerator
from ..transformers.dimensions import DimensionEmitter, DimensionPassResult
from ..transformers.facts import FactEmitter, FactPassResult
from ..transformers.star_schema import DIM_CALENDAR


@dataclass
class PipelineResult:
    """Outcome of a full ETL run."""
    success: bool
    rows_by_table: Dict[str, int] = field(default_factory=dict)
    output_paths: Dict[str, str] = field(default_factory=dict)
    rows_scanned: int = 0
    rows_skipped: int = 0
    unresolved: Dict[str, int] = field(default_factory=dict)
    date_range: Optional[tuple] = None
    validation: Optional[ValidationReport] = None
    error: Optional[str] = None
    duration_sec: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dictionary."""
        return {
            'success': self.success,
            'rows_by_table': self.rows_by_table,
            'output_paths': self.output_paths,
            'rows_scanned': self.rows_scanned,
            'rows_skipped': self.rows_skipped,
            'unresolved': self.unresolved,
            'date_range': [d.isoformat() for d in self.date_range] if self.date_range else None,
            'validation_passed': self.validation.passed if self.validation else None,
            'error': self.error,
            'duration_sec': self.duration_sec,
        }


class StarSchemaPipeline:
    """
    Build the SIGA star schema from the source extract.

    The fact pass only starts after the dimension pass has completed and
    its registries are frozen. Any I/O failure aborts the run with a failed
    result; nothing is resumed.

    Usage::

        pipeline = StarSchemaPipeline(EtlConfig(output_dir='./output'))
        result = pipeline.run()
        print(result.rows_by_table)
    """

    def __init__(self, config: Optional[EtlConfig] = None, validate: bool = True):
        self.config = config or EtlConfig()
        self.validate = validate
        self.logger = logging.getLogger('StarSchemaPipeline')
        self.tables: Dict[str, pd.DataFrame] = {}

    def run(self) -> PipelineResult:
        start = time.time()
        result = PipelineResult(success=False)

        try:
            dimensions = self._run_dimensions(result)
            self._run_calendar(dimensions, result)
            self._run_facts(dimensions, result)
        except (OSError, SourceFormatError, csv.Error, UnicodeError) as exc:
            result.error = f"{type(exc).__name__}: {exc}"
            result.duration_sec = time.time() - start
            self.logger.error(f"ETL aborted: {result.error}")
            return result

        if self.validate:
            report = star_schema_validator(
                include_calendar=dimensions.date_range is not None,
            ).validate(self.tables)
            result.validation = report
            report.log(self.logger)

        result.success = True
        result.duration_sec = time.time() - start
        self.logger.info(
            f"ETL complete: {sum(result.rows_by_table.values()):,} rows "
            f"in {len(result.rows_by_table)} tables ({result.duration_sec:.2f}s)"
        )
        return result

    def _collect(self, stage, stage_result, result: PipelineResult) -> None:
        result.rows_by_table.update(stage_result.rows_by_table)
        result.output_paths.update(stage_result.output_paths)
        self.tables.update(stage.get_all_tables())

    def _run_dimensions(self, result: PipelineResult) -> DimensionPassResult:
        emitter = DimensionEmitter(self.config)
        dimensions = emitter.run(SourceReader(self.config))
        dimensions.registries.freeze()
        self._collect(emitter, dimensions, result)
        result.rows_scanned = dimensions.rows_scanned
        result.rows_skipped = dimensions.rows_skipped
        result.date_range = dimensions.date_range
        return dimensions

    def _run_calendar(self, dimensions: DimensionPassResult, result: PipelineResult) -> None:
        generator = CalendarGenerator(self.config)
        if dimensions.date_range is None:
            self.logger.warning("Skipping dim_tempo: no valid commissioning dates in source")
            for path in generator.remove_table(DIM_CALENDAR):
                self.logger.warning(f"Removed stale calendar from an earlier run: {path}")
            return
        self._collect(generator, generator.run(*dimensions.date_range), result)

    def _run_facts(self, dimensions: DimensionPassResult, result: PipelineResult) -> FactPassResult:
        emitter = FactEmitter(dimensions.registries, self.config)
        facts = emitter.run(SourceReader(self.config))
        self._collect(emitter, facts, result)
        result.unresolved = facts.unresolved
        return facts
