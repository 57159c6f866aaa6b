"""
Base transformer for the SIGA star schema passes.

Provides table writing in the output CSV convention (semicolon, latin-1,
CRLF), an optional Parquet mirror, and the result container shared by
every pass.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..config import EtlConfig
from .star_schema import SchemaDefinition


@dataclass
class TransformationResult:
    """Result of a transformation operation."""
    success: bool
    tables_created: List[str] = field(default_factory=list)
    total_rows: int = 0
    rows_by_table: Dict[str, int] = field(default_factory=dict)
    output_paths: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    duration_sec: float = 0

    def record_table(self, name: str, rows: int, path: str) -> None:
        self.tables_created.append(name)
        self.rows_by_table[name] = rows
        self.output_paths[name] = path
        self.total_rows += rows


class BaseTransformer(ABC):
    """
    Abstract base for one stage of the star schema build.

    Subclasses implement run() and write their tables through save_table(),
    which keeps the column order of the SchemaDefinition and the row order
    it is given. Row order is part of the output contract: the dimension
    files list rows in surrogate id order.
    """

    def __init__(self, config: Optional[EtlConfig] = None):
        self.config = config or EtlConfig()
        self.logger = logging.getLogger(self.__class__.__name__)
        self._tables: Dict[str, pd.DataFrame] = {}

    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> TransformationResult:
        """Execute this stage and report the tables it wrote."""
        pass

    def output_path(self, schema: SchemaDefinition) -> str:
        return os.path.join(self.config.output_dir, schema.file_name(self.config))

    def save_table(self, schema: SchemaDefinition, rows: Sequence[Sequence[Any]]) -> str:
        """Write rows under the schema's headers, overwriting any previous output."""
        path = self.output_path(schema)
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        df = pd.DataFrame(list(rows), columns=schema.columns)
        df.to_csv(
            path,
            sep=self.config.delimiter,
            encoding=self.config.encoding,
            lineterminator=self.config.line_terminator,
            index=False,
        )
        if self.config.export_parquet:
            parquet_path = os.path.splitext(path)[0] + '.parquet'
            df.to_parquet(parquet_path, engine='pyarrow', compression='snappy', index=False)
        self._tables[schema.name] = df
        self.logger.info(f"Saved {schema.name}: {len(df):,} rows -> {path}")
        return path

    def remove_table(self, schema: SchemaDefinition) -> List[str]:
        """Delete a table's CSV and Parquet outputs left on disk; return removed paths."""
        path = self.output_path(schema)
        removed = []
        for candidate in (path, os.path.splitext(path)[0] + '.parquet'):
            if os.path.exists(candidate):
                os.remove(candidate)
                removed.append(candidate)
        return removed

    def get_all_tables(self) -> Dict[str, pd.DataFrame]:
        """Return all tables written by this stage."""
        return self._tables
