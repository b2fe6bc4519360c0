"""
Virtual RFID tag emulator

Models a population of virtual tags and packs their LLRP TagReportData
parameters into reports that fit a fixed PDU budget.

This package supports:
- Loading and saving tags as CSV records
- Encoding tags as LLRP TagReportData parameters
- Splitting encoded tags into PDU-sized reports
- Sending reports over serial (COM) and network (TCP) connections
- Managing the tag population through a web API
"""

from .tag import Tag, TagInString, get_index_of_tag
from .records import build_tag, load_tags_from_csv, load_tags_from_file, write_tags_to_csv
from .llrp import build_tag_report_data_parameter
from .report import (
    BatcherConfig, ReportBatcher, TagReportData, TagReportDataStack,
    build_tag_report_data_stack
)
from .exceptions import TagEmuError, RecordParseError, EncodingError

__version__ = "1.0.0"

__all__ = [
    'Tag',
    'TagInString',
    'get_index_of_tag',
    'build_tag',
    'load_tags_from_csv',
    'load_tags_from_file',
    'write_tags_to_csv',
    'build_tag_report_data_parameter',
    'BatcherConfig',
    'ReportBatcher',
    'TagReportData',
    'TagReportDataStack',
    'build_tag_report_data_stack',
    'TagEmuError',
    'RecordParseError',
    'EncodingError'
]
