"""
CSV interchange for virtual tags

Each record is ``pc_hex,length_dec,epc_length_bits_dec,epc_hex``.
"""

import csv
import io
import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence
from .tag import Tag
from .exceptions import RecordParseError, TagFileError

logger = logging.getLogger(__name__)

RECORD_FIELDS = 4
UINT16_MAX = 0xFFFF

_HEX_RE = re.compile(r'[0-9a-fA-F]+')
_DEC_RE = re.compile(r'[0-9]+')
_EPC_RE = re.compile(r'(?:[0-9a-fA-F]{2})*')

class ReadStatus(Enum):
    SUCCESS = 0
    PARSE_ERROR = 1
    END_OF_INPUT = 2

@dataclass
class ReadResult:
    """Outcome of reading one record"""
    status: ReadStatus
    tag: Optional[Tag] = None
    error: Optional[RecordParseError] = None
    line_num: int = 0

def _parse_uint16(value: str, base: int, name: str, record) -> int:
    pattern = _HEX_RE if base == 16 else _DEC_RE
    if not pattern.fullmatch(value):
        raise RecordParseError(f"{name} is not a base-{base} number: {value!r}", record)
    number = int(value, base)
    if number > UINT16_MAX:
        raise RecordParseError(f"{name} out of range: {value!r}", record)
    return number

def build_tag(record: Sequence[str]) -> Tag:
    """
    Construct a Tag from one CSV record

    Args:
        record: PC bits (hex), length (dec), EPC length bits (dec), EPC (hex)

    Returns:
        Parsed Tag

    Raises:
        RecordParseError: If the record is incomplete or a field is malformed
    """
    if len(record) != RECORD_FIELDS:
        raise RecordParseError(f"Expected {RECORD_FIELDS} fields, got {len(record)}", record)

    pc_bits = _parse_uint16(record[0], 16, "PCBits", record)
    length = _parse_uint16(record[1], 10, "Length", record)
    epc_length_bits = _parse_uint16(record[2], 10, "EPCLengthBits", record)
    if not _EPC_RE.fullmatch(record[3]):
        raise RecordParseError(f"EPC is not a hex string: {record[3]!r}", record)
    epc = bytes.fromhex(record[3])

    return Tag(pc_bits, length, epc_length_bits, epc)

class RecordReader:
    """Reads Tags one record at a time from CSV lines"""

    def __init__(self, lines: Iterable[str]):
        self._reader = csv.reader(lines)

    def read(self) -> ReadResult:
        try:
            record = next(self._reader)
        except StopIteration:
            return ReadResult(ReadStatus.END_OF_INPUT, line_num=self._reader.line_num)
        except csv.Error as e:
            # the reader drops the rest of the bad line and resumes on the next one
            return ReadResult(ReadStatus.PARSE_ERROR, error=RecordParseError(str(e)),
                              line_num=self._reader.line_num)

        try:
            tag = build_tag(record)
        except RecordParseError as e:
            return ReadResult(ReadStatus.PARSE_ERROR, error=e, line_num=self._reader.line_num)
        return ReadResult(ReadStatus.SUCCESS, tag=tag, line_num=self._reader.line_num)

def read_tags(lines: Iterable[str]) -> List[Tag]:
    """Read every well-formed record, skipping malformed ones"""
    reader = RecordReader(lines)
    tags = []
    while True:
        result = reader.read()
        if result.status == ReadStatus.END_OF_INPUT:
            break
        if result.status == ReadStatus.PARSE_ERROR:
            logger.warning(f"Skipping record on line {result.line_num}: {result.error}")
            continue
        tags.append(result.tag)
    return tags

def load_tags_from_csv(text: str) -> List[Tag]:
    """Read Tags from CSV text"""
    return read_tags(io.StringIO(text))

def load_tags_from_file(path: str) -> List[Tag]:
    """Read Tags from a CSV file"""
    try:
        with open(path, newline='') as f:
            tags = read_tags(f)
    except OSError as e:
        raise TagFileError(f"Cannot read tag file {path}: {e}") from e
    logger.info(f"Loaded {len(tags)} tags from {path}")
    return tags

def write_tags_to_csv(tags: Iterable[Tag], output: str) -> int:
    """
    Write Tags to a CSV file in the order given

    A failure on one record is logged and the remaining records are
    still written.

    Args:
        tags: Tags to persist
        output: Output file path

    Returns:
        Number of records that failed to be written
    """
    try:
        f = open(output, 'w', newline='')
    except OSError as e:
        raise TagFileError(f"Cannot create tag file {output}: {e}") from e

    failed = 0
    with f:
        w = csv.writer(f)
        for tag in tags:
            try:
                w.writerow(tag.in_string().as_record())
            except (csv.Error, OSError) as e:
                logger.critical(f"Writing record to csv: {e}")
                failed += 1
                continue
            try:
                f.flush()
            except OSError as e:
                logger.error(f"Flushing record to csv: {e}")
                failed += 1
    return failed
