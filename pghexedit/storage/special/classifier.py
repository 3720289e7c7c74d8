"""
Special section classification.

The kind of a page's special section is not stored on disk. It has to be
guessed from the section's size and, when the whole page was read, from the
last two bytes of the page (the "page id" most index access methods keep
there) or a magic number at the start of the section.

Several access methods share a special-section size:

    size 8   sequence (magic 0x1717), SP-GiST (page id 0xFF82), GIN
    size 16  B-Tree (cycle id <= 0xFF7F), hash (0xFF80), GiST (0xFF81)

so the checks below run in a fixed order, and every check that looks at
page contents first makes sure the bytes were actually read.
"""

import struct
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from pghexedit.primitives import Block
from pghexedit.storage.layout import BTreeLayout, PageLayout, SpecialLayout


class SpecialSectionKind(Enum):
    NONE = "none"
    SEQUENCE = "sequence"
    BTREE = "btree"
    HASH = "hash"
    GIST = "gist"
    GIN = "gin"
    SPGIST = "spgist"
    ERROR_UNKNOWN = "unknown_error"
    ERROR_BOUNDARY = "boundary_error"

    @property
    def is_error(self) -> bool:
        return self in (SpecialSectionKind.ERROR_UNKNOWN,
                        SpecialSectionKind.ERROR_BOUNDARY)

    @property
    def is_index(self) -> bool:
        return self in (SpecialSectionKind.BTREE, SpecialSectionKind.HASH,
                        SpecialSectionKind.GIST, SpecialSectionKind.GIN,
                        SpecialSectionKind.SPGIST)


@dataclass(frozen=True)
class SpecialSectionInfo:
    """Classifier verdict for one page."""
    kind: SpecialSectionKind
    offset: int = 0
    size: int = 0


def classify_special_section(special_offset: Optional[int],
                             page_size: int,
                             available: int,
                             page: Optional[bytes] = None) -> SpecialSectionInfo:
    """
    Decide which structure owns the trailing region of a page.

    Args:
        special_offset: pd_special, or None when it could not be read
        page_size: Run-wide page size
        available: Number of bytes actually read for the page
        page: The page contents; only consulted when available == page_size

    Returns:
        SpecialSectionInfo with the kind, the offset and the computed size
    """
    if available <= PageLayout.PAGE_HEADER_STRUCT_SIZE or special_offset is None:
        return SpecialSectionInfo(SpecialSectionKind.ERROR_UNKNOWN)

    if special_offset == 0 or special_offset > page_size or special_offset > available:
        return SpecialSectionInfo(SpecialSectionKind.ERROR_BOUNDARY, special_offset)

    size = page_size - special_offset
    full_page = available == page_size and page is not None and len(page) == page_size

    def verdict(kind: SpecialSectionKind) -> SpecialSectionInfo:
        return SpecialSectionInfo(kind, special_offset, size)

    if size == 0:
        return verdict(SpecialSectionKind.NONE)

    page_id = _trailing_page_id(page) if full_page else None

    if size == PageLayout.maxalign(4):
        if not full_page:
            return verdict(SpecialSectionKind.ERROR_UNKNOWN)
        magic = struct.unpack_from("<I", page, special_offset)[0]
        if magic == SpecialLayout.SEQUENCE_MAGIC:
            return verdict(SpecialSectionKind.SEQUENCE)
        if size == SpecialLayout.SPGIST_OPAQUE_SIZE and page_id == SpecialLayout.SPGIST_PAGE_ID:
            return verdict(SpecialSectionKind.SPGIST)
        if size == SpecialLayout.GIN_OPAQUE_SIZE:
            return verdict(SpecialSectionKind.GIN)
        return verdict(SpecialSectionKind.ERROR_UNKNOWN)

    if size > SpecialLayout.PAGE_ID_SIZE and full_page:
        # B-Tree, hash and GiST share a size; the last two bytes tell them apart
        if page_id <= BTreeLayout.MAX_BT_CYCLE_ID and size == BTreeLayout.OPAQUE_SIZE:
            return verdict(SpecialSectionKind.BTREE)
        if page_id == SpecialLayout.HASHO_PAGE_ID and size == SpecialLayout.HASH_OPAQUE_SIZE:
            return verdict(SpecialSectionKind.HASH)
        if page_id == SpecialLayout.GIST_PAGE_ID and size == SpecialLayout.GIST_OPAQUE_SIZE:
            return verdict(SpecialSectionKind.GIST)

    return verdict(SpecialSectionKind.ERROR_UNKNOWN)


def classify_block(block: Block) -> SpecialSectionInfo:
    """Classify the special section of a block read from disk."""
    special_offset = None
    if block.has_bytes(PageLayout.PD_SPECIAL, 2):
        special_offset = block.read_uint16(PageLayout.PD_SPECIAL)
    return classify_special_section(special_offset,
                                    block.page_size,
                                    block.available,
                                    block.data if block.is_complete else None)


def _trailing_page_id(page: bytes) -> int:
    return struct.unpack_from("<H", page, len(page) - SpecialLayout.PAGE_ID_SIZE)[0]
