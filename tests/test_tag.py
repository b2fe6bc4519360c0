"""
Tests for the Tag entity and the tag index query
"""

import unittest
import sys
from pathlib import Path

# Add the parent directory to the path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from tagemu import Tag, TagInString, get_index_of_tag

EPC = bytes.fromhex("302db319a000004000000003")

class TestTag(unittest.TestCase):
    """Test cases for Tag equality and display form"""
    
    def setUp(self):
        self.tag = Tag(0x3000, 128, 96, EPC)
    
    def test_is_equal(self):
        """Identical fields are equal"""
        other = Tag(0x3000, 128, 96, bytes(EPC))
        self.assertTrue(self.tag.is_equal(other))
        self.assertEqual(self.tag, other)
    
    def test_is_equal_compares_every_field(self):
        self.assertFalse(self.tag.is_equal(Tag(0x3400, 128, 96, EPC)))
        self.assertFalse(self.tag.is_equal(Tag(0x3000, 130, 96, EPC)))
        self.assertFalse(self.tag.is_equal(Tag(0x3000, 128, 64, EPC)))
        self.assertFalse(self.tag.is_equal(Tag(0x3000, 128, 96, EPC[:-1] + b"\x04")))
    
    def test_is_duplicate_ignores_non_epc_fields(self):
        """Tags differing only in length are duplicates, not equal"""
        other = Tag(0x3000, 130, 96, EPC)
        self.assertTrue(self.tag.is_duplicate(other))
        self.assertTrue(other.is_duplicate(self.tag))
        self.assertFalse(self.tag.is_equal(other))
    
    def test_is_duplicate_reflexive(self):
        self.assertTrue(self.tag.is_duplicate(self.tag))
    
    def test_is_duplicate_different_epc(self):
        self.assertFalse(self.tag.is_duplicate(Tag(0x3000, 128, 96, b"\x01\x02")))
    
    def test_in_string(self):
        """Display form uses hex PC bits, decimal lengths and lowercase hex EPC"""
        s = Tag(0x3A00, 128, 96, bytes.fromhex("ABCDEF")).in_string()
        self.assertEqual(s, TagInString("3a00", "128", "96", "abcdef"))
        self.assertEqual(s.as_record(), ["3a00", "128", "96", "abcdef"])
        self.assertEqual(s.as_dict(), {
            "PCBits": "3a00", "Length": "128", "EPCLengthBits": "96", "EPC": "abcdef"
        })
    
    def test_epc_length_mismatch_is_allowed(self):
        """EPC length is not checked against epc_length_bits"""
        tag = Tag(0x3000, 128, 96, b"\x01")
        self.assertEqual(tag.in_string().EPC, "01")
    
    def test_tag_is_immutable(self):
        with self.assertRaises(AttributeError):
            self.tag.length = 10

    def test_epc_is_copied(self):
        """A bytearray EPC is copied, so later changes do not reach the tag"""
        epc = bytearray(EPC)
        tag = Tag(0x3000, 128, 96, epc)
        epc[0] = 0xFF
        self.assertEqual(tag.epc, EPC)
        self.assertIsInstance(tag.epc, bytes)
        self.assertEqual(hash(tag), hash(Tag(0x3000, 128, 96, EPC)))

class TestGetIndexOfTag(unittest.TestCase):
    """Test cases for get_index_of_tag"""
    
    def setUp(self):
        self.tags = [
            Tag(0x3000, 128, 96, b"\x01"),
            Tag(0x3000, 128, 96, b"\x02"),
            Tag(0x3000, 128, 96, b"\x03"),
        ]
    
    def test_found(self):
        self.assertEqual(get_index_of_tag(self.tags, Tag(0, 0, 0, b"\x02")), 1)
    
    def test_first_match_wins(self):
        tags = self.tags + [Tag(0x3400, 1, 8, b"\x01")]
        self.assertEqual(get_index_of_tag(tags, Tag(0x3400, 1, 8, b"\x01")), 0)
    
    def test_not_found(self):
        self.assertEqual(get_index_of_tag(self.tags, Tag(0, 0, 0, b"\x09")), -1)
        self.assertEqual(get_index_of_tag([], self.tags[0]), -1)
    
    def test_does_not_mutate(self):
        before = list(self.tags)
        get_index_of_tag(self.tags, self.tags[2])
        self.assertEqual(self.tags, before)

if __name__ == "__main__":
    unittest.main()
