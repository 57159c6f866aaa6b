"""
Fact generation: the second pass over the source extract.

Re-reads the source from the beginning and projects every record onto
fato_geracao, substituting surrogate ids from the frozen registries.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..config import UNRESOLVED_KEY
from ..extractors.record_parser import Record, SourceReader
from . import keys
from .base_transformer import BaseTransformer, TransformationResult
from .parsers import format_decimal, parse_date_key, parse_decimal
from .registry import DimensionRegistries
from .star_schema import FACT_GENERATION

METRIC_FIELDS = ('MdaPotenciaOutorgadaKw', 'MdaPotenciaFiscalizadaKw', 'MdaGarantiaFisicaKw')


@dataclass
class FactPassResult(TransformationResult):
    rows_scanned: int = 0
    rows_skipped: int = 0
    rows_failed: int = 0
    unresolved: Dict[str, int] = field(default_factory=dict)


class FactEmitter(BaseTransformer):
    """
    Emit one fact row per source record.

    Lookups never raise: a key absent from its registry resolves to -1.
    """

    def __init__(self, registries: DimensionRegistries, config=None):
        super().__init__(config)
        self.registries = registries
        self.unresolved = {'generation': 0, 'status': 0, 'location': 0}

    def _resolve(self, registry_name: str, key: str) -> int:
        surrogate = getattr(self.registries, registry_name).lookup(key)
        if surrogate == UNRESOLVED_KEY:
            self.unresolved[registry_name] += 1
        return surrogate

    def fact_row(self, record: Record) -> List[Any]:
        """Project one source record onto the fact table columns."""
        return [
            self._resolve('generation', keys.generation_key(record)),
            self._resolve('status', keys.status_key(record)),
            self._resolve('location', keys.location_key(record)),
            keys.facility_key(record),
            parse_date_key(record.get('DatEntradaOperacao')),
            *(format_decimal(parse_decimal(record.get(f))) for f in METRIC_FIELDS),
            1,
        ]

    def run(self, source: SourceReader) -> FactPassResult:
        """
        Scan the source a second time and write fato_geracao.

        Raises:
            RuntimeError: If the registries are still open for writes.
        """
        if not self.registries.frozen:
            raise RuntimeError("Registries must be frozen before the fact pass")

        start = time.time()
        self.logger.info(f"Generating {FACT_GENERATION.name} from {source.path}")

        rows = []
        failed = 0
        for record in source.records():
            try:
                rows.append(self.fact_row(record))
            except Exception as exc:
                failed += 1
                self.logger.warning(
                    f"Skipping fact row for {record.get('CodCEG', '?')}: {exc}"
                )

        path = self.save_table(FACT_GENERATION, rows)
        for name, misses in self.unresolved.items():
            if misses:
                self.logger.warning(f"{misses:,} fact rows have unresolved {name} keys (-1)")

        result = FactPassResult(
            success=True,
            rows_scanned=source.rows_read,
            rows_skipped=source.rows_skipped,
            rows_failed=failed,
            unresolved=dict(self.unresolved),
            duration_sec=time.time() - start,
        )
        result.record_table(FACT_GENERATION.name, len(rows), path)
        return result
