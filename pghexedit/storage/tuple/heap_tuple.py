from dataclasses import dataclass

from pghexedit.primitives import Block
from pghexedit.storage.flags import HEAP_MOVED, InfomaskFlag
from pghexedit.storage.layout import HeapTupleLayout, PageLayout


@dataclass(frozen=True)
class HeapTupleHeader:
    """
    HeapTupleHeaderData of a stored row.

    Layout (offsets from the start of the tuple):
    ┌────────┬────────┬─────────────┬──────────────────────┬─────────────┬────────────┬────────┬────────┐
    │ t_xmin │ t_xmax │ t_cid/t_xvac│ t_ctid (hi, lo, pos) │ t_infomask2 │ t_infomask │ t_hoff │ t_bits │
    │ 0      │ 4      │ 8           │ 12, 14, 16           │ 18          │ 20         │ 22     │ 23 ... │
    └────────┴────────┴─────────────┴──────────────────────┴─────────────┴────────────┴────────┴────────┘
    """
    xmin: int
    xmax: int
    field3: int
    ctid_block_hi: int
    ctid_block_lo: int
    ctid_offset: int
    infomask2: int
    infomask: int
    hoff: int

    @classmethod
    def read(cls, block: Block, offset: int) -> 'HeapTupleHeader':
        return cls(xmin=block.read_uint32(offset + HeapTupleLayout.T_XMIN),
                   xmax=block.read_uint32(offset + HeapTupleLayout.T_XMAX),
                   field3=block.read_uint32(offset + HeapTupleLayout.T_FIELD3),
                   ctid_block_hi=block.read_uint16(offset + HeapTupleLayout.T_CTID),
                   ctid_block_lo=block.read_uint16(offset + HeapTupleLayout.T_CTID + 2),
                   ctid_offset=block.read_uint16(offset + HeapTupleLayout.T_CTID + 4),
                   infomask2=block.read_uint16(offset + HeapTupleLayout.T_INFOMASK2),
                   infomask=block.read_uint16(offset + HeapTupleLayout.T_INFOMASK),
                   hoff=block.read_uint8(offset + HeapTupleLayout.T_HOFF))

    @property
    def natts(self) -> int:
        return self.infomask2 & HeapTupleLayout.NATTS_MASK

    @property
    def is_moved(self) -> bool:
        """True when the third field is a pre-9.0 VACUUM FULL t_xvac, not t_cid."""
        return bool(self.infomask & HEAP_MOVED)

    @property
    def computed_header_length(self) -> int:
        """
        Header length implied by the infomask bits.

        The null bitmap only exists with HEAP_HASNULL; an Oid hides in the last
        four bytes of t_bits with HEAP_HASOID.
        """
        bitmap_length = 0
        if self.infomask & InfomaskFlag.HEAP_HASNULL:
            bitmap_length = HeapTupleLayout.bitmap_length(self.natts)
        oid_length = HeapTupleLayout.OID_SIZE if self.infomask & InfomaskFlag.HEAP_HASOID else 0
        return PageLayout.maxalign(HeapTupleLayout.T_BITS + bitmap_length + oid_length)
