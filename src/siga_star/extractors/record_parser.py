"""
Source record parsing for the SIGA generation extract.

The extract is a semicolon-delimited, latin-1 text file with a header row.
Fields that contain the delimiter must be double-quoted. Every field is
trimmed. Rows whose field count does not match the header are reported
and skipped; they never abort a scan.
"""

import csv
import logging
import sys
from typing import Dict, Iterator, List, Optional, Sequence

from ..config import EtlConfig

Record = Dict[str, str]


class SourceFormatError(ValueError):
    """The source file has no usable header row."""


class MalformedRecordError(ValueError):
    """A data row has a different number of fields than the header."""

    def __init__(self, line_number: int, expected: int, found: int):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            f"line {line_number}: expected {expected} fields, found {found}"
        )


class RecordParser:
    """Map parsed rows onto the header's field names."""

    def __init__(self, header: Sequence[str]):
        self.fields = [name.strip() for name in header]
        if not any(self.fields):
            raise SourceFormatError("header row is empty")

    def parse(self, row: Sequence[str], line_number: int = 0) -> Record:
        if len(row) != len(self.fields):
            raise MalformedRecordError(line_number, len(self.fields), len(row))
        return {name: value.strip() for name, value in zip(self.fields, row)}


class SourceReader:
    """
    One full, independent scan of the source extract.

    Each call to records() reopens the file from the beginning, so the
    dimension and fact passes never share a cursor. Counters describe the
    most recent scan.

    Usage::

        reader = SourceReader(EtlConfig())
        for record in reader.records():
            print(record['CodCEG'])
    """

    def __init__(self, config: Optional[EtlConfig] = None, path: Optional[str] = None):
        self.config = config or EtlConfig()
        self.path = path or self.config.source_path
        self.rows_read = 0
        self.rows_skipped = 0
        self.skipped_lines: List[int] = []
        self._log = logging.getLogger('extractor.source')

    def records(self) -> Iterator[Record]:
        """Yield one trimmed, field-name-keyed record per valid data row.

        Raises:
            OSError: If the source cannot be opened or read.
            SourceFormatError: If the file has no header row.
        """
        self.rows_read = 0
        self.rows_skipped = 0
        self.skipped_lines = []

        # Facility names and municipality lists can exceed the 128 KiB default
        csv.field_size_limit(min(2147483647, sys.maxsize))

        with open(self.path, 'r', encoding=self.config.encoding, newline='') as handle:
            reader = csv.reader(handle, delimiter=self.config.delimiter, quotechar='"')
            header = next(reader, None)
            if header is None:
                raise SourceFormatError(f"{self.path}: file is empty, no header row")
            parser = RecordParser(header)

            for row in reader:
                if not row:
                    continue
                try:
                    record = parser.parse(row, reader.line_num)
                except MalformedRecordError as exc:
                    self.rows_skipped += 1
                    self.skipped_lines.append(exc.line_number)
                    self._log.warning(f"Skipping malformed row ({exc})")
                    continue
                self.rows_read += 1
                yield record
