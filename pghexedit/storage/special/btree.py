from dataclasses import dataclass
from typing import Optional

from pghexedit.primitives import Block
from pghexedit.storage.flags import BTreePageFlag
from pghexedit.storage.layout import BTreeLayout, PageLayout


@dataclass(frozen=True)
class BTreeOpaque:
    """BTPageOpaqueData, the 16-byte special section of a B-Tree page."""
    prev: int
    next: int
    level: int
    flags: int
    cycle_id: int

    @classmethod
    def read(cls, block: Block, special_offset: int) -> 'BTreeOpaque':
        return cls(prev=block.read_uint32(special_offset + BTreeLayout.BTPO_PREV),
                   next=block.read_uint32(special_offset + BTreeLayout.BTPO_NEXT),
                   level=block.read_uint32(special_offset + BTreeLayout.BTPO_LEVEL),
                   flags=block.read_uint16(special_offset + BTreeLayout.BTPO_FLAGS),
                   cycle_id=block.read_uint16(special_offset + BTreeLayout.BTPO_CYCLEID))

    @property
    def is_leaf(self) -> bool:
        return bool(self.flags & BTreePageFlag.BTP_LEAF)

    @property
    def is_root(self) -> bool:
        return bool(self.flags & BTreePageFlag.BTP_ROOT)

    @property
    def is_meta(self) -> bool:
        return bool(self.flags & BTreePageFlag.BTP_META)

    @property
    def has_valid_cycle_id(self) -> bool:
        return self.cycle_id <= BTreeLayout.MAX_BT_CYCLE_ID


@dataclass(frozen=True)
class BTreeMetaData:
    """BTMetaPageData, stored where the item directory would otherwise be."""
    magic: int
    version: int
    root: int
    level: int
    fastroot: int
    fastlevel: int

    @classmethod
    def read(cls, block: Block) -> 'BTreeMetaData':
        values = [block.read_uint32(BTreeLayout.META_START + i * BTreeLayout.META_FIELD_SIZE)
                  for i in range(len(BTreeLayout.META_FIELDS))]
        return cls(*values)


def read_btree_opaque(block: Block) -> Optional[BTreeOpaque]:
    """
    Read the B-Tree special section of a fully read page.

    Returns None when the page is partial or its special section does not
    have the B-Tree size.
    """
    if not block.is_complete or not block.has_bytes(PageLayout.PD_SPECIAL, 2):
        return None
    special = block.read_uint16(PageLayout.PD_SPECIAL)
    if block.page_size - special != BTreeLayout.OPAQUE_SIZE:
        return None
    return BTreeOpaque.read(block, special)


def is_btree_meta_page(block: Block) -> bool:
    """
    Check whether a block is a B-Tree meta page.

    The cycle id must be checked too, to be sure the special section
    really belongs to a B-Tree.
    """
    opaque = read_btree_opaque(block)
    return opaque is not None and opaque.has_valid_cycle_id and opaque.is_meta
