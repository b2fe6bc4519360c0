"""
Virtual tag data structure
"""

from dataclasses import dataclass, asdict
from typing import Dict, Sequence

@dataclass(frozen=True)
class TagInString:
    """
    Display form of a Tag, all fields as strings
    
    Attributes:
        PCBits: Protocol control bits in base-16
        Length: Declared EPCData length in base-10
        EPCLengthBits: EPC length in bits in base-10
        EPC: EPC bytes as lowercase hex
    """
    PCBits: str
    Length: str
    EPCLengthBits: str
    EPC: str
    
    def as_record(self) -> list:
        """Return the fields in CSV column order"""
        return [self.PCBits, self.Length, self.EPCLengthBits, self.EPC]
    
    def as_dict(self) -> Dict[str, str]:
        return asdict(self)

@dataclass(frozen=True)
class Tag:
    """
    Represents a single virtual tag
    
    Attributes:
        pc_bits: Protocol control bits of the C1G2 air protocol header
        length: Declared length of the EPCData parameter
        epc_length_bits: Length of the EPC in bits
        epc: EPC (Electronic Product Code) bytes
    
    The EPC byte length is not checked against epc_length_bits.
    """
    pc_bits: int
    length: int
    epc_length_bits: int
    epc: bytes

    def __post_init__(self):
        # keep a private copy so a caller's bytearray cannot change the tag
        object.__setattr__(self, 'epc', bytes(self.epc))

    def is_equal(self, other: "Tag") -> bool:
        """Return True if every field of both tags is the same"""
        return (self.pc_bits == other.pc_bits and
                self.length == other.length and
                self.epc_length_bits == other.epc_length_bits and
                self.epc == other.epc)
    
    def is_duplicate(self, other: "Tag") -> bool:
        """Return True if both tags carry the same EPC"""
        return self.epc == other.epc
    
    def in_string(self) -> TagInString:
        return TagInString(
            PCBits=format(self.pc_bits, 'x'),
            Length=str(self.length),
            EPCLengthBits=str(self.epc_length_bits),
            EPC=self.epc.hex()
        )
    
    def __str__(self) -> str:
        return f"Tag(EPC={self.epc.hex()}, PC={self.pc_bits:04x})"

def get_index_of_tag(tags: Sequence[Tag], target: Tag) -> int:
    """
    Find the first tag carrying the same EPC as target
    
    Args:
        tags: Tags to search
        target: Tag to look for
        
    Returns:
        Index of the first duplicate, -1 if there is none
    """
    for index, tag in enumerate(tags):
        if tag.is_duplicate(target):
            return index
    return -1
