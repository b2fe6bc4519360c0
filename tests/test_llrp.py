"""
Tests for the LLRP parameter encoders
"""

import struct
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tagemu import Tag
from tagemu.llrp import (
    epc_data, c1g2_pc, tag_report_data, build_tag_report_data_parameter,
    ro_access_report, LLRP_HEADER_LENGTH
)
from tagemu.exceptions import EncodingError

EPC96 = bytes.fromhex("302db319a000004000000003")

class TestParameters(unittest.TestCase):
    """Test cases for single parameters"""
    
    def test_epc_96(self):
        self.assertEqual(epc_data(128, 96, EPC96), b"\x8d" + EPC96)
    
    def test_epc_data_tlv(self):
        epc = bytes.fromhex("0102030405060708")
        self.assertEqual(epc_data(18, 64, epc),
                         bytes.fromhex("00f1" "0012" "0040") + epc)
    
    def test_c1g2_pc(self):
        self.assertEqual(c1g2_pc(0x3000), bytes.fromhex("8c3000"))
    
    def test_tag_report_data_length(self):
        param = tag_report_data(b"\x8d" + EPC96, bytes.fromhex("8c3000"))
        self.assertEqual(len(param), 20)
        self.assertEqual(param[:4], bytes.fromhex("00f00014"))

class TestBuildParameter(unittest.TestCase):
    """Test cases for build_tag_report_data_parameter"""
    
    def test_96_bit_tag(self):
        param = build_tag_report_data_parameter(Tag(0x3000, 128, 96, EPC96))
        self.assertEqual(param, bytes.fromhex("00f00014") + b"\x8d" + EPC96 + bytes.fromhex("8c3000"))
    
    def test_deterministic(self):
        tag = Tag(0x3400, 20, 64, bytes(8))
        self.assertEqual(build_tag_report_data_parameter(tag), build_tag_report_data_parameter(tag))
        self.assertEqual(len(build_tag_report_data_parameter(tag)), 4 + 6 + 8 + 3)
    
    def test_out_of_range_field(self):
        with self.assertRaises(EncodingError):
            build_tag_report_data_parameter(Tag(0x10000, 128, 96, EPC96))
        with self.assertRaises(EncodingError):
            build_tag_report_data_parameter(Tag(0x3000, -1, 64, bytes(8)))
    
    def test_parameter_too_long(self):
        with self.assertRaises(EncodingError):
            build_tag_report_data_parameter(Tag(0x3000, 0, 0, bytes(70000)))

class TestROAccessReport(unittest.TestCase):
    """Test cases for RO_ACCESS_REPORT framing"""
    
    def test_header(self):
        payload = bytes(20)
        message = ro_access_report(payload, 7)
        ver_type, length, message_id = struct.unpack(">HII", message[:LLRP_HEADER_LENGTH])
        self.assertEqual(ver_type >> 10, 1)
        self.assertEqual(ver_type & 0x3FF, 61)
        self.assertEqual(length, 30)
        self.assertEqual(message_id, 7)
        self.assertEqual(message[LLRP_HEADER_LENGTH:], payload)

if __name__ == "__main__":
    unittest.main()
