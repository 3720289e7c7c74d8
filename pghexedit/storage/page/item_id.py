from enum import IntEnum
from dataclasses import dataclass

from pghexedit.primitives import Block
from pghexedit.storage.layout import PageLayout


class LinePointerStatus(IntEnum):
    """The two lp_flags bits of an item pointer."""
    LP_UNUSED = 0
    LP_NORMAL = 1
    LP_REDIRECT = 2
    LP_DEAD = 3


@dataclass(frozen=True)
class ItemPointer:
    """
    One 4-byte ItemIdData entry of the item directory.

    Bit layout of the little-endian word:
    ┌──────────────────┬──────────┬──────────────────┐
    │ lp_len (15 bits) │ lp_flags │ lp_off (15 bits) │
    │  bits 17..31     │ 15..16   │  bits 0..14      │
    └──────────────────┴──────────┴──────────────────┘
    """
    slot: int
    offset: int
    status: LinePointerStatus
    length: int

    @classmethod
    def from_word(cls, slot: int, word: int) -> 'ItemPointer':
        return cls(slot=slot,
                   offset=word & 0x7FFF,
                   status=LinePointerStatus((word >> 15) & 0x03),
                   length=(word >> 17) & 0x7FFF)

    @classmethod
    def read(cls, block: Block, slot: int) -> 'ItemPointer':
        """Read the item pointer of a 1-based slot number."""
        return cls.from_word(slot, block.read_uint32(directory_offset(slot)))

    @property
    def has_storage(self) -> bool:
        return self.length > 0

    @property
    def end(self) -> int:
        """Page offset just past the item's bytes."""
        return self.offset + self.length


def directory_offset(slot: int) -> int:
    """Page offset of a 1-based slot's item pointer."""
    if slot < 1:
        raise ValueError(f"Slot numbers start at 1, got {slot}")
    return PageLayout.SIZE_OF_PAGE_HEADER + PageLayout.ITEM_ID_SIZE * (slot - 1)
