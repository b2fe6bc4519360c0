"""
LLRP parameter encoders for tag reports

Only the parameters needed to report a tag inventory are built here:
EPCData / EPC-96, C1G2-PC, TagReportData and the RO_ACCESS_REPORT message
that carries them. All values are big endian as LLRP 1.0.1 requires.
"""

import struct
from .tag import Tag
from .exceptions import EncodingError

# Parameter types
PARAM_C1G2_PC = 12
PARAM_EPC_96 = 13
PARAM_TAG_REPORT_DATA = 240
PARAM_EPC_DATA = 241

# Message types
MSG_RO_ACCESS_REPORT = 61

LLRP_VERSION = 1
LLRP_HEADER_LENGTH = 10
TLV_HEADER_LENGTH = 4

def _tv_header(param_type: int) -> bytes:
    """TV parameters carry a single type byte with the high bit set"""
    return struct.pack('>B', 0x80 | param_type)

def epc_data(length: int, epc_length_bits: int, epc: bytes) -> bytes:
    """
    Build the EPC identity parameter
    
    A 96-bit EPC is encoded as the compact EPC-96 TV parameter, any other
    length as the EPCData TLV parameter.
    
    Args:
        length: Value for the TLV length field
        epc_length_bits: EPC length in bits
        epc: EPC bytes
        
    Returns:
        Encoded parameter bytes
    """
    if epc_length_bits == 96:
        return _tv_header(PARAM_EPC_96) + bytes(epc)
    return struct.pack('>HHH', PARAM_EPC_DATA, length, epc_length_bits) + bytes(epc)

def c1g2_pc(pc_bits: int) -> bytes:
    """Build the C1G2-PC air protocol parameter"""
    return _tv_header(PARAM_C1G2_PC) + struct.pack('>H', pc_bits)

def tag_report_data(*params: bytes) -> bytes:
    """Wrap sub-parameters into one TagReportData parameter"""
    body = b''.join(params)
    return struct.pack('>HH', PARAM_TAG_REPORT_DATA, len(body) + TLV_HEADER_LENGTH) + body

def build_tag_report_data_parameter(tag: Tag) -> bytes:
    """
    Encode one tag into its TagReportData parameter
    
    Raises:
        EncodingError: If a field does not fit its LLRP field width
    """
    try:
        epcd = epc_data(tag.length, tag.epc_length_bits, tag.epc)
        aptd = c1g2_pc(tag.pc_bits)
        return tag_report_data(epcd, aptd)
    except struct.error as e:
        raise EncodingError(f"Cannot encode tag {tag.epc.hex()}: {e}") from e

def ro_access_report(payload: bytes, message_id: int) -> bytes:
    """
    Build an RO_ACCESS_REPORT message around concatenated TagReportData
    
    Header: 3 reserved bits, 3 version bits, 10 type bits, 32-bit message
    length (header included), 32-bit message id.
    """
    try:
        header = struct.pack('>HII', (LLRP_VERSION << 10) | MSG_RO_ACCESS_REPORT,
                             len(payload) + LLRP_HEADER_LENGTH, message_id)
    except struct.error as e:
        raise EncodingError(f"Cannot frame report {message_id}: {e}") from e
    return header + bytes(payload)
