"""
Sends report stacks as RO_ACCESS_REPORT messages over serial or TCP
"""

import socket
import logging
import serial
from typing import BinaryIO, Iterable
from .llrp import ro_access_report
from .report import TagReportData
from .exceptions import InvalidParameterError, OversizedReportError, TransportError

logger = logging.getLogger(__name__)

OVERSIZED_POLICIES = ('send', 'drop', 'reject')

def open_serial_stream(port: str, baudrate: int = 57600, timeout: float = 0.2) -> serial.Serial:
    """Open a serial port to write reports to"""
    try:
        return serial.Serial(
            port=port,
            baudrate=baudrate,
            timeout=timeout,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE
        )
    except serial.SerialException as e:
        raise TransportError(f"Serial connection error: {e}") from e

def open_tcp_stream(host: str, port: int, timeout: float = 2.0) -> BinaryIO:
    """Connect to an LLRP client and return a writable stream"""
    try:
        client = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise TransportError(f"Network connection error: {e}") from e
    stream = client.makefile('wb')
    # the stream keeps its own reference to the socket
    client.close()
    return stream

class ReportSender:
    """
    Writes TagReportData reports to a binary stream

    Args:
        stream: Anything with write() and flush(), e.g. serial.Serial
        oversized_policy: What to do with reports over the PDU budget:
            'send' them anyway, 'drop' them or 'reject' with an error
        first_message_id: LLRP message id of the first report
    """

    def __init__(self, stream, oversized_policy: str = 'send', first_message_id: int = 1):
        if oversized_policy not in OVERSIZED_POLICIES:
            raise InvalidParameterError(f"Unknown oversized policy: {oversized_policy}")
        self.stream = stream
        self.oversized_policy = oversized_policy
        self.message_id = first_message_id

    def send_report(self, trd: TagReportData) -> bool:
        """
        Send one report

        Returns:
            True if the report was written, False if it was dropped
        """
        if trd.oversized:
            if self.oversized_policy == 'reject':
                raise OversizedReportError(
                    f"Report of {len(trd)} bytes ({trd.tag_count} tags) exceeds the PDU budget")
            if self.oversized_policy == 'drop':
                logger.warning(f"Dropping oversized report of {len(trd)} bytes")
                return False
            logger.warning(f"Sending oversized report of {len(trd)} bytes")

        message = ro_access_report(trd.parameter, self.message_id)
        try:
            self.stream.write(message)
            self.stream.flush()
        except (OSError, serial.SerialException) as e:
            raise TransportError(f"Send data error: {e}") from e
        logger.debug(f"Sent report {self.message_id}: {trd.tag_count} tags, {len(message)} bytes")
        self.message_id += 1
        return True

    def send_stack(self, trds: Iterable[TagReportData]) -> int:
        """Send every report in order, returns how many were written"""
        sent = 0
        for trd in trds:
            if self.send_report(trd):
                sent += 1
        return sent
