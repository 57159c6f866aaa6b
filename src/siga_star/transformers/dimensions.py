"""
Dimension discovery: the first pass over the source extract.

Scans the source once, assigns surrogate ids in first-seen order, writes
the four discovered dimension tables and captures the commissioning
date range used to generate the calendar.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from ..extractors.record_parser import Record, SourceReader
from . import keys
from .base_transformer import BaseTransformer, TransformationResult
from .parsers import parse_date
from .registry import DimensionRegistries, DimensionRegistry
from .star_schema import (
    DIM_FACILITY,
    DIM_GENERATION,
    DIM_LOCATION,
    DIM_STATUS,
    SchemaDefinition,
)


class EmitterState(Enum):
    INIT = 'init'
    SCANNING = 'scanning'
    DONE = 'done'


@dataclass
class DimensionPassResult(TransformationResult):
    """Outcome of the dimension pass, including what the fact pass needs."""
    registries: Optional[DimensionRegistries] = None
    date_range: Optional[Tuple[date, date]] = None
    rows_scanned: int = 0
    rows_skipped: int = 0


@dataclass
class _DimensionOutput:
    schema: SchemaDefinition
    registry: DimensionRegistry
    key_of: Callable[[Record], str]
    row_of: Callable[[int, Record], List[Any]]
    rows: List[List[Any]] = field(default_factory=list)


class DimensionEmitter(BaseTransformer):
    """
    Discover dimension rows and the operational date range.

    Registries are created fresh for every emitter, so no state leaks
    between runs. An emitter runs exactly once.
    """

    def __init__(self, config=None):
        super().__init__(config)
        self.state = EmitterState.INIT
        self.registries = DimensionRegistries()
        self.min_date = date.max
        self.max_date = date.min
        self.dates_parsed = 0
        self._outputs = [
            _DimensionOutput(
                DIM_GENERATION, self.registries.generation, keys.generation_key,
                lambda new_id, r: [new_id, r.get('SigTipoGeracao', ''),
                                   r.get('DscOrigemCombustivel', ''),
                                   r.get('DscFonteCombustivel', '')],
            ),
            _DimensionOutput(
                DIM_STATUS, self.registries.status, keys.status_key,
                lambda new_id, r: [new_id, r.get('DscFaseUsina', ''),
                                   r.get('DscTipoOutorga', ''), keys.qualification(r)],
            ),
            _DimensionOutput(
                DIM_LOCATION, self.registries.location, keys.location_key,
                lambda new_id, r: [new_id, r.get('SigUFPrincipal', ''),
                                   r.get('DscMuninicpios', '')],
            ),
            _DimensionOutput(
                DIM_FACILITY, self.registries.facility, keys.facility_key,
                lambda new_id, r: [keys.facility_key(r), r.get('NomEmpreendimento', ''),
                                   r.get('DscPropriRegimePariticipacao', '')],
            ),
        ]

    @property
    def date_range(self) -> Optional[Tuple[date, date]]:
        """Observed (min, max) commissioning dates, or None if none parsed."""
        if not self.dates_parsed:
            return None
        return self.min_date, self.max_date

    def observe(self, record: Record) -> None:
        """Register one record's dimension keys and commissioning date."""
        if self.state is not EmitterState.SCANNING:
            raise RuntimeError(f"observe() called in state {self.state.name}")

        for out in self._outputs:
            new_id, is_new = out.registry.register(out.key_of(record))
            if is_new:
                out.rows.append(out.row_of(new_id, record))

        commissioned = parse_date(record.get('DatEntradaOperacao'))
        if commissioned is not None:
            self.dates_parsed += 1
            if commissioned < self.min_date:
                self.min_date = commissioned
            if commissioned > self.max_date:
                self.max_date = commissioned

    def run(self, source: SourceReader) -> DimensionPassResult:
        """
        Scan the source and write the discovered dimension tables.

        I/O errors propagate: the fact pass depends on complete dimensions,
        so a failed scan aborts the run.
        """
        if self.state is not EmitterState.INIT:
            raise RuntimeError("DimensionEmitter has already run")

        start = time.time()
        self.state = EmitterState.SCANNING
        self.logger.info(f"Discovering dimensions from {source.path}")

        for record in source.records():
            self.observe(record)

        self.state = EmitterState.DONE
        result = DimensionPassResult(
            success=True,
            registries=self.registries,
            date_range=self.date_range,
            rows_scanned=source.rows_read,
            rows_skipped=source.rows_skipped,
        )
        for out in self._outputs:
            path = self.save_table(out.schema, out.rows)
            result.record_table(out.schema.name, len(out.rows), path)

        if result.date_range is not None:
            self.logger.info(
                f"Commissioning dates range from {self.min_date.isoformat()} "
                f"to {self.max_date.isoformat()}"
            )
        result.duration_sec = time.time() - start
        return result
