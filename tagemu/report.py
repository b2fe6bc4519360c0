"""
Report batching: fold encoded tags into PDU-sized TagReportData stacks
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Sequence
from .tag import Tag
from .llrp import build_tag_report_data_parameter
from .exceptions import EncodingError, InvalidParameterError, ReportSealedError

logger = logging.getLogger(__name__)

DEFAULT_FRAMING_OVERHEAD = 100  # IP frame and ROAR headers

ENCODE_ERROR_POLICIES = ('skip', 'abort')

@dataclass(frozen=True)
class BatcherConfig:
    """
    Settings for a ReportBatcher

    Attributes:
        pdu_budget: Maximum size of one transmitted PDU in bytes
        framing_overhead: Bytes reserved per report for transport headers
        max_workers: Encoder threads, 1 encodes inline
        on_encode_error: 'skip' drops a tag that fails to encode, 'abort' raises
    """
    pdu_budget: int
    framing_overhead: int = DEFAULT_FRAMING_OVERHEAD
    max_workers: int = 1
    on_encode_error: str = 'skip'

    def __post_init__(self):
        if self.pdu_budget <= 0:
            raise InvalidParameterError(f"PDU budget must be positive: {self.pdu_budget}")
        if self.framing_overhead < 0:
            raise InvalidParameterError(f"Framing overhead must not be negative: {self.framing_overhead}")
        if self.max_workers < 1:
            raise InvalidParameterError(f"max_workers must be at least 1: {self.max_workers}")
        if self.on_encode_error not in ENCODE_ERROR_POLICIES:
            raise InvalidParameterError(f"Unknown encode error policy: {self.on_encode_error}")

    @classmethod
    def from_config(cls, config, pdu_budget: Optional[int] = None) -> "BatcherConfig":
        """Build from a configuration class, optionally overriding the budget"""
        return cls(
            pdu_budget=pdu_budget if pdu_budget is not None else config.PDU_BUDGET,
            framing_overhead=getattr(config, 'FRAMING_OVERHEAD', DEFAULT_FRAMING_OVERHEAD),
            max_workers=getattr(config, 'ENCODE_WORKERS', 1),
            on_encode_error=getattr(config, 'ON_ENCODE_ERROR', 'skip'),
        )

@dataclass
class TagReportData:
    """
    One report: concatenated TagReportData parameters and their tag count

    oversized is set when a single parameter alone exceeds the PDU budget.
    """
    _parameter: bytearray = field(default_factory=bytearray)
    tag_count: int = 0
    oversized: bool = False
    sealed: bool = False

    @property
    def parameter(self) -> bytes:
        return bytes(self._parameter)

    def __len__(self) -> int:
        return len(self._parameter)

    def append(self, param: bytes) -> None:
        if self.sealed:
            raise ReportSealedError("Cannot append to a sealed report")
        self._parameter.extend(param)
        self.tag_count += 1

class TagReportDataStack:
    """Ordered reports, in transmission order"""

    def __init__(self):
        self.stack: List[TagReportData] = []

    def __len__(self) -> int:
        return len(self.stack)

    def __iter__(self) -> Iterator[TagReportData]:
        return iter(self.stack)

    def __getitem__(self, index: int) -> TagReportData:
        return self.stack[index]

    @property
    def current(self) -> Optional[TagReportData]:
        """The report still being filled, None when the stack is empty"""
        if not self.stack:
            return None
        return self.stack[-1]

    def open(self, param: bytes, oversized: bool = False) -> TagReportData:
        """Seal the current report and start a new one holding param"""
        if self.stack:
            self.stack[-1].sealed = True
        trd = TagReportData(oversized=oversized)
        trd.append(param)
        self.stack.append(trd)
        return trd

    def total_tag_counts(self) -> int:
        """Return how many tags are included in the stack"""
        return sum(trd.tag_count for trd in self.stack)

    def parameters(self) -> List[bytes]:
        return [trd.parameter for trd in self.stack]

    def oversized_reports(self) -> List[TagReportData]:
        return [trd for trd in self.stack if trd.oversized]

class ReportBatcher:
    """
    Packs tags into TagReportData reports that fit the PDU budget

    Tags are placed greedily in input order: each parameter goes into the
    current report, or opens a new one when the current report plus the
    parameter plus framing overhead would exceed the budget. A parameter
    that is too large on its own still gets a report of its own, flagged
    as oversized.
    """

    def __init__(self, config: BatcherConfig,
                 encoder: Callable[[Tag], bytes] = build_tag_report_data_parameter):
        self.config = config
        self.encoder = encoder

    def _encode_one(self, tag: Tag):
        try:
            return self.encoder(tag), None
        except EncodingError as e:
            return None, e

    def encode(self, tags: Iterable[Tag]) -> List[bytes]:
        """
        Encode tags into parameters, preserving input order

        Raises:
            EncodingError: On the first failure when the policy is 'abort'
        """
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                outcomes = list(executor.map(self._encode_one, tags))
        else:
            outcomes = [self._encode_one(tag) for tag in tags]

        params = []
        for param, error in outcomes:
            if error is not None:
                if self.config.on_encode_error == 'abort':
                    raise error
                logger.error(f"Skipping tag: {error}")
                continue
            params.append(param)
        return params

    def overflows(self, trd: TagReportData, param: bytes) -> bool:
        return len(trd) + len(param) + self.config.framing_overhead > self.config.pdu_budget

    def fold(self, params: Iterable[bytes]) -> TagReportDataStack:
        """Fold encoded parameters into a stack of reports"""
        trds = TagReportDataStack()
        for param in params:
            current = trds.current
            if current is None or self.overflows(current, param):
                oversized = len(param) + self.config.framing_overhead > self.config.pdu_budget
                if oversized:
                    logger.warning(f"Parameter of {len(param)} bytes exceeds PDU budget "
                                   f"{self.config.pdu_budget}, reporting it alone")
                trds.open(param, oversized=oversized)
            else:
                current.append(param)
        logger.debug(f"Built {len(trds)} reports for {trds.total_tag_counts()} tags")
        return trds

    def build(self, tags: Sequence[Tag]) -> TagReportDataStack:
        """Encode tags and fold them into a stack of reports"""
        return self.fold(self.encode(tags))

def build_tag_report_data_stack(tags: Sequence[Tag], pdu_budget: int,
                                framing_overhead: int = DEFAULT_FRAMING_OVERHEAD) -> TagReportDataStack:
    """Build a report stack with default batcher settings"""
    config = BatcherConfig(pdu_budget=pdu_budget, framing_overhead=framing_overhead)
    return ReportBatcher(config).build(tags)
