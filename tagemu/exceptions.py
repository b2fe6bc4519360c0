"""
Custom exceptions for the virtual tag emulator
"""

class TagEmuError(Exception):
    """Base exception for tag emulator operations"""
    pass

class InvalidParameterError(TagEmuError):
    """Raised when invalid parameters are provided"""
    pass

class RecordParseError(TagEmuError):
    """Raised when a tag record cannot be parsed"""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record

class TagFileError(TagEmuError):
    """Raised when a tag file cannot be opened"""
    pass

class EncodingError(TagEmuError):
    """Raised when a tag cannot be encoded into an LLRP parameter"""
    pass

class ReportSealedError(TagEmuError):
    """Raised when appending to a report that is no longer the current one"""
    pass

class TransportError(TagEmuError):
    """Raised when a report cannot be written to the transport"""
    pass

class OversizedReportError(TransportError):
    """Raised when an oversized report is rejected by the sender"""
    pass
