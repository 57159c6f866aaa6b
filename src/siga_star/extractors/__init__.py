from .record_parser import (
    MalformedRecordError,
    Record,
    RecordParser,
    SourceFormatError,
    SourceReader,
)

__all__ = ['MalformedRecordError', 'Record', 'RecordParser', 'SourceFormatError', 'SourceReader']
